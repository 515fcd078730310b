"""An editable animated GIF: frames, timing, colors, load and save."""

from __future__ import annotations

import os
from typing import BinaryIO, Union

from PIL import Image

from objview.gifcodec import GifDocument, GifFrame, decode_gif, encode_gif

Source = Union[str, "os.PathLike[str]", BinaryIO]


class GifImage:
    """A sequence of frames with the settings a GIF file stores.

    Colors are ``0xAARRGGBB`` integers and offsets are ``(x, y)`` tuples.
    Lookups past the end of the frame list return an empty value, and
    setters given such an index leave the image unchanged.
    """

    def __init__(self, canvas_size: tuple[int, int] | None = None) -> None:
        self._doc = GifDocument(size=canvas_size)

    @property
    def canvas_size(self) -> tuple[int, int]:
        """The set canvas size, or the size that holds every frame."""
        return self._doc.canvas_size()

    @property
    def global_color_table(self) -> list[int]:
        return list(self._doc.global_color_table)

    @property
    def background_color(self) -> int | None:
        """Canvas background; meaningful only with a global color table."""
        return self._doc.background_color

    def set_global_color_table(self, colors: list[int], background: int | None = None) -> None:
        """Set the shared palette and the background color taken from it."""
        self._doc.global_color_table = list(colors)
        self._doc.background_color = background

    @property
    def default_delay(self) -> int:
        """Delay in milliseconds for frames that have none of their own."""
        return self._doc.default_delay

    @default_delay.setter
    def default_delay(self, delay: int) -> None:
        self._doc.default_delay = delay

    @property
    def default_transparent_color(self) -> int | None:
        return self._doc.default_transparent_color

    @default_transparent_color.setter
    def default_transparent_color(self, color: int | None) -> None:
        self._doc.default_transparent_color = color

    @property
    def loop_count(self) -> int:
        """Number of repetitions; zero loops forever."""
        return self._doc.loop_count

    @loop_count.setter
    def loop_count(self, loop: int) -> None:
        self._doc.loop_count = loop

    def _frame_at(self, index: int) -> GifFrame | None:
        if 0 <= index < len(self._doc.frames):
            return self._doc.frames[index]
        return None

    @staticmethod
    def _make_frame(image: Image.Image, offset: tuple[int, int] | None, delay: int) -> GifFrame:
        return GifFrame(image=image, offset=offset if offset is not None else (0, 0), delay=delay)

    def add_frame(
        self, image: Image.Image, offset: tuple[int, int] | None = None, delay: int = -1
    ) -> None:
        """Append a frame; a delay of -1 uses the default delay."""
        self._doc.frames.append(self._make_frame(image, offset, delay))

    def insert_frame(
        self,
        index: int,
        image: Image.Image,
        offset: tuple[int, int] | None = None,
        delay: int = -1,
    ) -> None:
        """Insert a frame before position ``index``."""
        self._doc.frames.insert(index, self._make_frame(image, offset, delay))

    def frame_count(self) -> int:
        return len(self._doc.frames)

    def frame(self, index: int) -> Image.Image | None:
        """The image of a frame, or None if there is no such frame."""
        found = self._frame_at(index)
        return found.image if found else None

    def frame_offset(self, index: int) -> tuple[int, int]:
        found = self._frame_at(index)
        return found.offset if found else (0, 0)

    def set_frame_offset(self, index: int, offset: tuple[int, int]) -> None:
        found = self._frame_at(index)
        if found:
            found.offset = offset

    def frame_delay(self, index: int) -> int:
        """Delay of a frame in milliseconds, or -1."""
        found = self._frame_at(index)
        return found.delay if found else -1

    def set_frame_delay(self, index: int, delay: int) -> None:
        found = self._frame_at(index)
        if found:
            found.delay = delay

    def frame_transparent_color(self, index: int) -> int | None:
        found = self._frame_at(index)
        return found.transparent_color if found else None

    def set_frame_transparent_color(self, index: int, color: int | None) -> None:
        found = self._frame_at(index)
        if found:
            found.transparent_color = color

    def save(self, target: Source) -> None:
        """Write the animation to a path or a binary stream."""
        if hasattr(target, "write"):
            encode_gif(self._doc, target)  # type: ignore[arg-type]
            return
        with open(target, "wb") as handle:  # type: ignore[arg-type]
            encode_gif(self._doc, handle)

    def load(self, source: Source) -> None:
        """Read a GIF from a path or a binary stream, appending its frames.

        Raises OSError if the file cannot be opened and GifError if the
        data is not a valid GIF.
        """
        if hasattr(source, "read"):
            loaded = decode_gif(source)  # type: ignore[arg-type]
        else:
            with open(source, "rb") as handle:  # type: ignore[arg-type]
                loaded = decode_gif(handle)
        self._doc.size = loaded.size
        if loaded.global_color_table:
            self._doc.global_color_table = loaded.global_color_table
            if loaded.background_color is not None:
                self._doc.background_color = loaded.background_color
        self._doc.loop_count = loaded.loop_count
        self._doc.frames.extend(loaded.frames)