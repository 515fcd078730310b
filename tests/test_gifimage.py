import io

import pytest
from PIL import Image

from objview.gifcodec import GifError
from objview.gifimage import GifImage

PALETTE = [255, 0, 0, 0, 255, 0, 0, 0, 255, 255, 255, 255]


def _indexed_image(width=6, height=5):
    img = Image.new("P", (width, height))
    img.putpalette(PALETTE)
    img.putdata([(x + y) % 4 for y in range(height) for x in range(width)])
    return img


def _round_trip(gif):
    buffer = io.BytesIO()
    gif.save(buffer)
    buffer.seek(0)
    loaded = GifImage()
    loaded.load(buffer)
    return loaded


def test_default_delay_is_one_second():
    assert GifImage().default_delay == 1000


def test_add_and_insert_frames():
    gif = GifImage()
    first, second = _indexed_image(), _indexed_image(3, 3)
    gif.add_frame(first)
    gif.insert_frame(0, second, delay=50)
    assert gif.frame_count() == 2
    assert gif.frame(0) is second
    assert gif.frame(1) is first
    assert gif.frame_delay(0) == 50
    assert gif.frame_delay(1) == -1


def test_out_of_range_lookups():
    gif = GifImage()
    gif.add_frame(_indexed_image(), delay=30)
    assert gif.frame(5) is None
    assert gif.frame(-1) is None
    assert gif.frame_delay(5) == -1
    assert gif.frame_offset(5) == (0, 0)
    assert gif.frame_transparent_color(5) is None


def test_out_of_range_setters_are_ignored():
    gif = GifImage()
    gif.add_frame(_indexed_image(), offset=(1, 2), delay=30)
    gif.set_frame_delay(3, 100)
    gif.set_frame_offset(-1, (9, 9))
    assert gif.frame_count() == 1
    assert gif.frame_delay(0) == 30
    assert gif.frame_offset(0) == (1, 2)


def test_setters_change_frame():
    gif = GifImage()
    gif.add_frame(_indexed_image())
    gif.set_frame_delay(0, 70)
    gif.set_frame_offset(0, (4, 5))
    gif.set_frame_transparent_color(0, 0xFF00FF00)
    assert gif.frame_delay(0) == 70
    assert gif.frame_offset(0) == (4, 5)
    assert gif.frame_transparent_color(0) == 0xFF00FF00


def test_canvas_size_grows_with_offsets():
    gif = GifImage()
    gif.add_frame(_indexed_image(6, 5), offset=(3, 4))
    assert gif.canvas_size == (9, 9)


def test_explicit_canvas_size_survives_round_trip():
    gif = GifImage((40, 30))
    gif.add_frame(_indexed_image())
    assert _round_trip(gif).canvas_size == (40, 30)


def test_pixels_offsets_and_delays_round_trip():
    gif = GifImage()
    image = _indexed_image()
    gif.add_frame(image, offset=(2, 1), delay=200)
    gif.add_frame(_indexed_image(4, 4), delay=120)
    loaded = _round_trip(gif)
    assert loaded.frame_count() == 2
    assert loaded.frame(0).tobytes() == image.tobytes()
    assert loaded.frame(0).size == image.size
    assert loaded.frame_offset(0) == (2, 1)
    assert loaded.frame_delay(0) == 200
    assert loaded.frame_delay(1) == 120
    assert loaded.canvas_size == gif.canvas_size


def test_default_delay_applies_to_frames_without_delay():
    gif = GifImage()
    gif.default_delay = 300
    gif.add_frame(_indexed_image())
    assert _round_trip(gif).frame_delay(0) == 300


def test_loop_count_round_trip():
    gif = GifImage()
    gif.loop_count = 5
    gif.add_frame(_indexed_image())
    assert _round_trip(gif).loop_count == 5


def test_transparent_color_round_trip():
    gif = GifImage()
    gif.add_frame(_indexed_image())
    gif.set_frame_transparent_color(0, 0xFF0000FF)
    loaded = _round_trip(gif)
    assert loaded.frame_transparent_color(0) & 0xFFFFFF == 0xFF0000FF & 0xFFFFFF


def test_global_color_table_round_trip():
    gif = GifImage()
    gif.set_global_color_table([0xFFFF0000, 0xFF00FF00], 0xFF00FF00)
    gif.add_frame(Image.new("RGB", (4, 4), (0, 255, 0)))
    loaded = _round_trip(gif)
    assert [c & 0xFFFFFF for c in loaded.global_color_table[:2]] == [0xFF0000, 0x00FF00]
    assert loaded.background_color == 0xFF00FF00


def test_save_and_load_path(tmp_path):
    path = tmp_path / "anim.gif"
    gif = GifImage()
    image = _indexed_image()
    gif.add_frame(image)
    gif.save(path)
    loaded = GifImage()
    loaded.load(path)
    assert loaded.frame(0).tobytes() == image.tobytes()


def test_load_appends_frames(tmp_path):
    path = tmp_path / "anim.gif"
    gif = GifImage()
    gif.add_frame(_indexed_image())
    gif.save(path)
    loaded = GifImage()
    loaded.load(path)
    loaded.load(path)
    assert loaded.frame_count() == 2


def test_load_rejects_garbage():
    with pytest.raises(GifError):
        GifImage().load(io.BytesIO(b"not a gif at all"))


def test_load_missing_file(tmp_path):
    with pytest.raises(OSError):
        GifImage().load(tmp_path / "missing.gif")


def test_save_to_directory_fails(tmp_path):
    gif = GifImage()
    gif.add_frame(_indexed_image())
    with pytest.raises(OSError):
        gif.save(tmp_path)