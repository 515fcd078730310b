# objview

A small wireframe viewer for Wavefront OBJ models. It reads the vertex
(`v`) and face (`f`) records of an `.obj` file, lets you move, scale and
rotate the model, and renders it off-screen to still images or animated
GIFs.

## Installation

```
pip install .
```

## Command line

```
objview cube.obj -o cube.jpg
objview cube.obj --rotate 30 45 0 --gif cube.gif --size 320 320
objview --help
```

Options:

- `file`: the OBJ file. If left out, the path stored in the settings file
  is used.
- `-o`, `--output`: save a still image. The file extension picks the
  format (for example `.jpg` or `.bmp`).
- `--gif`: save an animated GIF of 51 rendered frames, 10 ms apart.
- `--size W H`: image size in pixels (default 640 × 640).
- `--scale KX KY KZ`, `--rotate AX AY AZ`, `--move DX DY DZ`: transforms,
  applied in that order. Angles are in degrees. A zero scale factor is
  rejected.
- `--orthographic` / `--perspective`: choose the projection.
- `--settings`: settings file (default `objview.conf`). It is read at
  start and written back after a successful run.

On success the command prints the title (`3D Viewer ~ <path>`), the number
of vertices and the number of face records (labelled `edges`), and exits
with status 0. A missing file, an unreadable file or a zero scale factor
prints a message to standard error and exits with status 1.

When a file is opened, every coordinate is divided by the largest of the
first `vertex_count` values of the flat coordinate list (x, y, z, x, …),
if that value is positive, to bring the model into view.

## Library use

```python
from objview.model import load_obj
from objview.transform import scale, move_x, turn_y, ZeroScaleError

model = load_obj("cube.obj")
print(model.vertex_count(), model.facet_count)

move_x(model, 0.5)
turn_y(model, 30)        # angles are in degrees
try:
    scale(model, 0)
except ZeroScaleError:
    print("a scale factor of zero is rejected")
```

- `objview.model`: `ObjModel` holds `vertices` (x, y, z tuples),
  `indices` (pairs of zero-based vertex indices; each face is stored as a
  closed loop of line segments) and `facet_count`. `parse_obj_lines`
  builds a model from lines of text and `load_obj` from a file.
- `objview.transform`: `scale`, `scale_x`, `scale_y`, `scale_z`,
  `move_x`, `move_y`, `move_z`, `turn_x`, `turn_y`, `turn_z`, all changing
  the model in place.
- `objview.scene`: `Scene` keeps colors (0.0–1.0 RGB), line and dot
  widths, dashed lines (`stipple`), vertex markers (`points`, round when
  `smooth`) and the `Projection` (`set_perspective()`,
  `set_orthographic()`). `press(x, y)` and `drag(x, y)` set the view
  rotation from a drag distance. `project(width, height)` returns window
  coordinates of each vertex and `render(width, height)` returns a Pillow
  RGB image.
- `objview.viewer`: `Viewer` ties model and scene together with
  `open_file`, `reload`, `move`, `scale`, `rotate`, `save_image` and
  `record_gif`. `Settings` stores display options and the last values
  used, with `Settings.load(path)` and `settings.save(path)` in INI format.
- `objview.gifimage`: `GifImage` builds animated GIFs. Use `add_frame` /
  `insert_frame`, per-frame delays, offsets and transparent colors,
  `loop_count`, `default_delay` and `set_global_color_table`, then
  `save` to a path or binary stream. `load` appends the frames of an
  existing GIF.
- `objview.gifcodec`: the lower-level `encode_gif` / `decode_gif` for a
  `GifDocument` of `GifFrame`s. Malformed data raises `GifError`.

Colors in the GIF modules are `0xAARRGGBB` integers.

## What it does not do

There is no interactive window. Models are rendered off-screen with
Pillow and written to files. Mouse rotation exists only as the
`Scene.press` / `Scene.drag` calls. Only `v` and `f` records of an OBJ file
are read; normals, texture coordinates and materials are ignored.

## Running the tests

```
pip install .[test]
pytest
```