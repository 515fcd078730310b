"""The viewer: load a model, transform it, render it and remember settings."""

from __future__ import annotations

import argparse
import configparser
import enum
import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from objview.gifimage import GifImage
from objview.model import ObjModel, load_obj
from objview.scene import Projection, Scene
from objview.transform import (
    ZeroScaleError,
    move_x,
    move_y,
    move_z,
    turn_x,
    turn_y,
    turn_z,
    scale_x,
    scale_y,
    scale_z,
)

SETTINGS_FILE = "objview.conf"
SETTINGS_SECTION = "Main_Settings"
TITLE_PREFIX = "3D Viewer ~ "
GIF_FRAME_DELAY = 10
# One frame is captured on every timer tick, ticks 0 through 50.
GIF_FRAMES = 51
IMAGE_QUALITY = 80

_T = TypeVar("_T")
Triple = tuple[float, float, float]
Percent = tuple[int, int, int]


class PointStyle(enum.Enum):
    """How vertices are marked on top of the wireframe."""

    NONE = "none"
    SQUARE = "square"
    ROUND = "round"


@dataclass
class Settings:
    """Display options and last used transformation values.

    Colors are percentages, 0 to 100 for each channel.
    """

    path: str = ""
    projection: Projection = Projection.PERSPECTIVE
    dashed: bool = False
    point_style: PointStyle = PointStyle.SQUARE
    move: Triple = (0.0, 0.0, 0.0)
    scale: Triple = (1.0, 1.0, 1.0)
    rotate: Triple = (0.0, 0.0, 0.0)
    background: Percent = (30, 30, 30)
    line_color: Percent = (0, 0, 0)
    line_width: int = 1
    dot_color: Percent = (0, 0, 0)
    dot_width: int = 1

    @classmethod
    def load(cls, path: str | os.PathLike[str]) -> Settings:
        """Read settings from an INI file; missing or bad values keep defaults."""
        parser = configparser.ConfigParser(interpolation=None)
        parser.read(path, encoding="utf-8")
        if not parser.has_section(SETTINGS_SECTION):
            return cls()
        section = parser[SETTINGS_SECTION]
        defaults = cls()

        def value(key: str, convert: Callable[[str], _T], default: _T) -> _T:
            raw = section.get(key)
            if raw is None:
                return default
            try:
                return convert(raw)
            except (ValueError, KeyError):
                return default

        return cls(
            path=section.get("path", defaults.path),
            projection=value("projection", Projection, defaults.projection),
            dashed=value("dashed", _parse_bool, defaults.dashed),
            point_style=value("point_style", PointStyle, defaults.point_style),
            move=value("move", _parse_floats, defaults.move),
            scale=value("scale", _parse_floats, defaults.scale),
            rotate=value("rotate", _parse_floats, defaults.rotate),
            background=value("background", _parse_ints, defaults.background),
            line_color=value("line_color", _parse_ints, defaults.line_color),
            line_width=value("line_width", int, defaults.line_width),
            dot_color=value("dot_color", _parse_ints, defaults.dot_color),
            dot_width=value("dot_width", int, defaults.dot_width),
        )

    def save(self, path: str | os.PathLike[str]) -> None:
        """Write the settings to an INI file."""
        parser = configparser.ConfigParser(interpolation=None)
        parser[SETTINGS_SECTION] = {
            "path": self.path,
            "projection": self.projection.value,
            "dashed": "true" if self.dashed else "false",
            "point_style": self.point_style.value,
            "move": _join(self.move),
            "scale": _join(self.scale),
            "rotate": _join(self.rotate),
            "background": _join(self.background),
            "line_color": _join(self.line_color),
            "line_width": str(self.line_width),
            "dot_color": _join(self.dot_color),
            "dot_width": str(self.dot_width),
        }
        with open(path, "w", encoding="utf-8") as handle:
            parser.write(handle)


def _join(values: tuple[float, ...] | tuple[int, ...]) -> str:
    return ", ".join(str(v) for v in values)


def _split(text: str) -> list[str]:
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 3:
        raise ValueError(f"expected three values, got {text!r}")
    return parts


def _parse_floats(text: str) -> Triple:
    a, b, c = (float(p) for p in _split(text))
    return a, b, c


def _parse_ints(text: str) -> Percent:
    a, b, c = (int(p) for p in _split(text))
    return a, b, c


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _unit(color: Percent) -> tuple[float, float, float]:
    r, g, b = (channel / 100.0 for channel in color)
    return r, g, b


class Viewer:
    """Holds the loaded model and the scene that displays it."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings if settings is not None else Settings()
        self.scene = Scene()
        self.model = ObjModel()
        self.path: str | None = None
        self._configure_scene()

    def _configure_scene(self) -> None:
        s = self.settings
        self.scene.projection = s.projection
        self.scene.stipple = s.dashed
        self.scene.points = s.point_style is not PointStyle.NONE
        self.scene.smooth = s.point_style is PointStyle.ROUND
        self.scene.background = _unit(s.background)
        self.scene.line_color = _unit(s.line_color)
        self.scene.dot_color = _unit(s.dot_color)
        self.scene.line_width = float(s.line_width)
        self.scene.dot_width = float(s.dot_width)

    @property
    def title(self) -> str:
        """Window title naming the open file."""
        return TITLE_PREFIX + self.path if self.path else TITLE_PREFIX.rstrip(" ~")

    def open_file(self, path: str | os.PathLike[str]) -> ObjModel:
        """Load a model and fit it to the view; raises OSError on failure.

        Every coordinate is divided by the largest of the first
        ``vertex_count`` values of the flat coordinate list, if it is positive.
        """
        model = load_obj(path)
        flat = [c for vertex in model.vertices for c in vertex]
        peak = max([0.0, *flat[: model.vertex_count()]])
        if peak > 0.0:
            model.vertices = [(x / peak, y / peak, z / peak) for x, y, z in model.vertices]
        self.model = model
        self.path = os.fspath(path)
        self.settings.path = self.path
        self.scene.set_model(model)
        return model

    def reload(self) -> ObjModel:
        """Load the current file again, dropping every transformation."""
        if self.path is None:
            raise ValueError("no file has been opened")
        return self.open_file(self.path)

    def move(self, dx: float, dy: float, dz: float) -> None:
        """Shift the model along each axis."""
        move_x(self.model, dx)
        move_y(self.model, dy)
        move_z(self.model, dz)
        self.settings.move = (dx, dy, dz)

    def scale(self, kx: float, ky: float, kz: float) -> None:
        """Scale each axis; no factor may be zero."""
        if kx == 0.0 or ky == 0.0 or kz == 0.0:
            raise ZeroScaleError("scale factor must not be zero")
        scale_x(self.model, kx)
        scale_y(self.model, ky)
        scale_z(self.model, kz)
        self.settings.scale = (kx, ky, kz)

    def rotate(self, ax: float, ay: float, az: float) -> None:
        """Rotate around x, then y, then z, by angles in degrees."""
        turn_x(self.model, ax)
        turn_y(self.model, ay)
        turn_z(self.model, az)
        self.settings.rotate = (ax, ay, az)

    def save_image(self, path: str | os.PathLike[str], width: int, height: int) -> None:
        """Render the scene and save it; the format follows the file name."""
        self.scene.render(width, height).save(path, quality=IMAGE_QUALITY)

    def record_gif(
        self, path: str | os.PathLike[str], width: int, height: int, frames: int = GIF_FRAMES
    ) -> None:
        """Save an animation of ``frames`` renders of the scene."""
        if frames < 1:
            raise ValueError("a GIF needs at least one frame")
        gif = GifImage()
        gif.default_delay = GIF_FRAME_DELAY
        for _ in range(frames):
            gif.add_frame(self.scene.render(width, height))
        gif.save(path)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="objview", description="Render a wireframe OBJ model.")
    parser.add_argument("file", nargs="?", help="OBJ file; defaults to the last one opened")
    parser.add_argument("-o", "--output", help="save a still image (JPEG or BMP by extension)")
    parser.add_argument("--gif", help="save an animated GIF")
    parser.add_argument("--size", nargs=2, type=int, default=(640, 640), metavar=("W", "H"))
    parser.add_argument("--move", nargs=3, type=float, metavar=("DX", "DY", "DZ"))
    parser.add_argument("--scale", nargs=3, type=float, metavar=("KX", "KY", "KZ"))
    parser.add_argument("--rotate", nargs=3, type=float, metavar=("AX", "AY", "AZ"))
    view = parser.add_mutually_exclusive_group()
    view.add_argument("--orthographic", action="store_true")
    view.add_argument("--perspective", action="store_true")
    parser.add_argument("--settings", default=SETTINGS_FILE, help="settings file")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    settings = Settings.load(args.settings)
    if args.orthographic:
        settings.projection = Projection.ORTHOGRAPHIC
    elif args.perspective:
        settings.projection = Projection.PERSPECTIVE
    viewer = Viewer(settings)
    target = args.file or settings.path
    if not target:
        print("objview: no file given", file=sys.stderr)
        return 1
    width, height = args.size
    try:
        model = viewer.open_file(target)
        if args.scale:
            viewer.scale(*args.scale)
        if args.rotate:
            viewer.rotate(*args.rotate)
        if args.move:
            viewer.move(*args.move)
        if args.output:
            viewer.save_image(args.output, width, height)
        if args.gif:
            viewer.record_gif(args.gif, width, height)
        settings.save(args.settings)
    except (OSError, ValueError) as exc:
        print(f"objview: {exc}", file=sys.stderr)
        return 1
    print(viewer.title)
    print(f"vertices: {model.vertex_count()}")
    print(f"edges: {model.facet_count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())