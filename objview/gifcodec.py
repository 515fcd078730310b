"""Reading and writing animated GIF documents.

Colors are 32-bit ``0xAARRGGBB`` integers. Frames hold Pillow images.
Frames are written as 8-bit palette images.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import BinaryIO

from PIL import Image

_INTERLACE_PASSES = ((0, 8), (4, 8), (2, 4), (1, 2))
_MAX_CODES = 4096
_RGB_MASK = 0xFFFFFF


class GifError(ValueError):
    """Raised when a GIF stream cannot be decoded."""


@dataclass
class GifFrame:
    """One frame of an animation with its placement and timing."""

    image: Image.Image
    offset: tuple[int, int] = (0, 0)
    delay: int = -1
    interlace: bool = False
    transparent_color: int | None = None


@dataclass
class GifDocument:
    """An animation: frames plus the settings shared by all of them."""

    size: tuple[int, int] | None = None
    loop_count: int = 0
    default_delay: int = 1000
    default_transparent_color: int | None = None
    global_color_table: list[int] = field(default_factory=list)
    background_color: int | None = None
    frames: list[GifFrame] = field(default_factory=list)

    def canvas_size(self) -> tuple[int, int]:
        """The set size, or the smallest size that holds every frame."""
        if self.size is not None and self.size[0] >= 0 and self.size[1] >= 0:
            return self.size
        width = height = -1
        for frame in self.frames:
            width = max(width, frame.image.width + frame.offset[0])
            height = max(height, frame.image.height + frame.offset[1])
        return width, height

    def frame_transparent_index(self, frame: GifFrame) -> int:
        """Palette index of the frame's transparent color, or -1."""
        color = (
            frame.transparent_color
            if frame.transparent_color is not None
            else self.default_transparent_color
        )
        if color is None:
            return -1
        table = _image_color_table(frame.image) or self.global_color_table
        return _index_of(table, color)


def color_table_from_palette(palette: Sequence[int] | None, transparent_index: int = -1) -> list[int]:
    """Turn a flat RGB byte list into colors; only the transparent one lacks alpha."""
    if not palette:
        return []
    table = []
    for idx in range(len(palette) // 3):
        red, green, blue = palette[3 * idx : 3 * idx + 3]
        color = blue | (green << 8) | (red << 16)
        if idx != transparent_index:
            color |= 0xFF << 24
        table.append(color)
    return table


def _index_of(table: Sequence[int], color: int) -> int:
    target = color & _RGB_MASK
    for idx, entry in enumerate(table):
        if entry & _RGB_MASK == target:
            return idx
    return -1


def _image_color_table(image: Image.Image) -> list[int]:
    if image.mode != "P":
        return []
    return color_table_from_palette(image.getpalette())


def _bit_size(count: int) -> int:
    bits = 1
    while (1 << bits) < count and bits < 8:
        bits += 1
    return bits


def _table_bytes(table: Sequence[int], bits: int) -> bytes:
    out = bytearray()
    for color in table:
        out += bytes(((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF))
    out += bytes(3 * ((1 << bits) - len(table)))
    return bytes(out)


def _palette_image(table: Sequence[int]) -> Image.Image:
    flat: list[int] = []
    for color in table:
        flat += [(color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF]
    flat += flat[:3] * (256 - len(table))
    pal = Image.new("P", (1, 1))
    pal.putpalette(flat)
    return pal


def _indexed(image: Image.Image, global_table: Sequence[int]) -> Image.Image:
    if image.mode == "P":
        return image
    rgb = image.convert("RGB")
    if global_table:
        return rgb.quantize(palette=_palette_image(global_table), dither=0)
    return rgb.quantize(colors=256)


def _sub_blocks(data: bytes) -> bytes:
    out = bytearray()
    for start in range(0, len(data), 255):
        chunk = data[start : start + 255]
        out.append(len(chunk))
        out += chunk
    out.append(0)
    return bytes(out)


def _lzw_encode(pixels: bytes, min_size: int) -> bytes:
    clear = 1 << min_size
    eoi = clear + 1
    out = bytearray()
    acc = 0
    nbits = 0

    def width(next_code: int) -> int:
        size = min_size + 1
        while next_code > (1 << size) and size < 12:
            size += 1
        return size

    def emit(code: int, size: int) -> None:
        nonlocal acc, nbits
        acc |= code << nbits
        nbits += size
        while nbits >= 8:
            out.append(acc & 0xFF)
            acc >>= 8
            nbits -= 8

    def fresh() -> dict[bytes, int]:
        return {bytes((i,)): i for i in range(clear)}

    table = fresh()
    next_code = eoi + 1
    emit(clear, width(next_code))
    current = b""
    for value in pixels:
        candidate = current + bytes((value,))
        if not current or candidate in table:
            current = candidate
            continue
        emit(table[current], width(next_code))
        if next_code < _MAX_CODES:
            table[candidate] = next_code
            next_code += 1
        else:
            emit(clear, width(next_code))
            table = fresh()
            next_code = eoi + 1
        current = bytes((value,))
    if current:
        emit(table[current], width(next_code))
        emit(eoi, width(min(next_code + 1, _MAX_CODES)))
    else:
        emit(eoi, width(next_code))
    if nbits:
        out.append(acc & 0xFF)
    return bytes(out)


def _interlaced_rows(height: int) -> list[int]:
    return [row for start, step in _INTERLACE_PASSES for row in range(start, height, step)]


def encode_gif(document: GifDocument, stream: BinaryIO) -> None:
    """Write ``document`` to a binary stream as GIF89a."""
    width, height = document.canvas_size()
    out = bytearray(b"GIF89a")
    out += max(width, 0).to_bytes(2, "little") + max(height, 0).to_bytes(2, "little")
    global_table = list(document.global_color_table)
    if global_table:
        gbits = _bit_size(len(global_table))
        bg = -1 if document.background_color is None else _index_of(global_table, document.background_color)
        out += bytes((0x80 | (7 << 4) | (gbits - 1), max(bg, 0), 0))
        out += _table_bytes(global_table, gbits)
    else:
        out += bytes((7 << 4, 0, 0))

    for idx, frame in enumerate(document.frames):
        image = _indexed(frame.image, global_table)
        if idx == 0:
            out += b"\x21\xff\x0bNETSCAPE2.0"
            loop = document.loop_count
            out += bytes((3, 1, loop & 0xFF, (loop >> 8) & 0xFF, 0))
        trans = document.frame_transparent_index(
            GifFrame(image, frame.offset, frame.delay, frame.interlace, frame.transparent_color)
        )
        delay = (frame.delay if frame.delay != -1 else document.default_delay) // 10
        out += b"\x21\xf9\x04"
        out += bytes((1 if trans != -1 else 0,))
        out += (delay & 0xFFFF).to_bytes(2, "little")
        out += bytes((trans if trans != -1 else 0, 0))

        table = _image_color_table(image)
        masked = [c & _RGB_MASK for c in table]
        local = bool(table) and masked != [c & _RGB_MASK for c in global_table]
        pixels = image.tobytes()
        used_table = table if local else global_table
        bits = _bit_size(len(used_table)) if used_table else 1
        top = max(pixels, default=0)
        while (1 << bits) <= top and bits < 8:
            bits += 1

        left, top_off = frame.offset
        out += b"\x2c"
        out += left.to_bytes(2, "little") + top_off.to_bytes(2, "little")
        out += image.width.to_bytes(2, "little") + image.height.to_bytes(2, "little")
        packed = (0x40 if frame.interlace else 0) | ((0x80 | (bits - 1)) if local else 0)
        out.append(packed)
        if local:
            out += _table_bytes(table, bits)
        if frame.interlace:
            w = image.width
            pixels = b"".join(pixels[r * w : (r + 1) * w] for r in _interlaced_rows(image.height))
        min_size = max(2, bits)
        out.append(min_size)
        out += _sub_blocks(_lzw_encode(pixels, min_size))
    out += b";"
    stream.write(bytes(out))


class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def take(self, count: int) -> bytes:
        if self.pos + count > len(self.data):
            raise GifError("unexpected end of GIF data")
        chunk = self.data[self.pos : self.pos + count]
        self.pos += count
        return chunk

    def byte(self) -> int:
        return self.take(1)[0]

    def word(self) -> int:
        return int.from_bytes(self.take(2), "little")

    def blocks(self) -> list[bytes]:
        result = []
        while True:
            size = self.byte()
            if size == 0:
                return result
            result.append(self.take(size))


def _lzw_decode(data: bytes, min_size: int) -> bytes:
    if not 1 <= min_size <= 11:
        raise GifError("invalid LZW code size")
    clear = 1 << min_size
    eoi = clear + 1

    def fresh() -> list[bytes]:
        return [bytes((i,)) for i in range(clear)] + [b"", b""]

    table = fresh()
    size = min_size + 1
    prev: bytes | None = None
    out = bytearray()
    acc = 0
    nbits = 0
    for value in data:
        acc |= value << nbits
        nbits += 8
        while nbits >= size:
            code = acc & ((1 << size) - 1)
            acc >>= size
            nbits -= size
            if code == clear:
                table = fresh()
                size = min_size + 1
                prev = None
                continue
            if code == eoi:
                return bytes(out)
            if prev is None:
                if code >= len(table):
                    raise GifError("invalid LZW code")
                entry = table[code]
            elif code < len(table):
                entry = table[code]
            elif code == len(table):
                entry = prev + prev[:1]
            else:
                raise GifError("invalid LZW code")
            out += entry
            if prev is not None and len(table) < _MAX_CODES:
                table.append(prev + entry[:1])
                if len(table) == (1 << size) and size < 12:
                    size += 1
            prev = entry
    return bytes(out)


def _read_table(reader: _Reader, packed: int) -> list[int]:
    count = 1 << ((packed & 0x07) + 1)
    return list(reader.take(3 * count))


def decode_gif(stream: BinaryIO) -> GifDocument:
    """Read a GIF from a binary stream; raises GifError if it is malformed."""
    reader = _Reader(stream.read())
    if reader.take(6) not in (b"GIF87a", b"GIF89a"):
        raise GifError("not a GIF stream")
    document = GifDocument()
    document.size = (reader.word(), reader.word())
    packed = reader.byte()
    bg_index = reader.byte()
    reader.byte()
    global_palette: list[int] = []
    if packed & 0x80:
        global_palette = _read_table(reader, packed)
        document.global_color_table = color_table_from_palette(global_palette)
        if bg_index < len(document.global_color_table):
            document.background_color = document.global_color_table[bg_index]

    trans_index = -1
    delay_cs = 0
    while True:
        marker = reader.byte()
        if marker == 0x3B:
            break
        if marker == 0x21:
            label = reader.byte()
            blocks = reader.blocks()
            if label == 0xF9 and blocks and len(blocks[0]) >= 4:
                gcb = blocks[0]
                delay_cs = gcb[1] | (gcb[2] << 8)
                trans_index = gcb[3] if gcb[0] & 1 else -1
            elif (
                label == 0xFF
                and not document.frames
                and len(blocks) >= 2
                and blocks[0] == b"NETSCAPE2.0"
                and len(blocks[1]) == 3
            ):
                document.loop_count = blocks[1][1] | (blocks[1][2] << 8)
            continue
        if marker != 0x2C:
            raise GifError(f"unexpected block 0x{marker:02x}")
        left, top, width, height = reader.word(), reader.word(), reader.word(), reader.word()
        packed = reader.byte()
        if packed & 0x80:
            palette = _read_table(reader, packed)
            table = color_table_from_palette(palette, trans_index)
        elif trans_index != -1:
            palette = global_palette
            table = color_table_from_palette(global_palette, trans_index)
        else:
            palette = global_palette
            table = list(document.global_color_table)
        min_size = reader.byte()
        raster = _lzw_decode(b"".join(reader.blocks()), min_size)
        total = width * height
        raster = (raster + bytes(max(0, total - len(raster))))[:total]
        interlace = bool(packed & 0x40)
        if interlace:
            rows = [b""] * height
            for line, row in enumerate(_interlaced_rows(height)):
                rows[row] = raster[line * width : (line + 1) * width]
            raster = b"".join(rows)
        image = Image.frombytes("P", (width, height), raster)
        if palette:
            image.putpalette(palette)
        frame = GifFrame(
            image=image,
            offset=(left, top),
            delay=delay_cs * 10,
            interlace=interlace,
            transparent_color=table[trans_index] if 0 <= trans_index < len(table) else None,
        )
        document.frames.append(frame)
        trans_index = -1
        delay_cs = 0
    return document