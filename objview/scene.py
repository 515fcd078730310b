"""A wireframe scene: camera setup, projection and software rendering."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

from PIL import Image, ImageDraw

from objview.model import ObjModel

Color = tuple[float, float, float]
Matrix = tuple[tuple[float, float, float, float], ...]
ScreenPoint = tuple[float, float, float]

_NEAR_PERSPECTIVE = 1 / (2 * math.tan((60.0 * math.pi / 180) / 2))
_FAR_PERSPECTIVE = 6.0
_NEAR_ORTHO = 1.0
_FAR_ORTHO = 3.0
_CAMERA_DISTANCE = 2.0
# Line stipple pattern 0x3333 repeated with factor 2: 4 pixels on, 4 off.
_DASH_ON = 4
_DASH_PERIOD = 8


class Projection(enum.Enum):
    PERSPECTIVE = "perspective"
    ORTHOGRAPHIC = "orthographic"


def _matmul(a: Matrix, b: Matrix) -> Matrix:
    return tuple(
        tuple(sum(a[r][k] * b[k][c] for k in range(4)) for c in range(4)) for r in range(4)
    )


def _transform(m: Matrix, v: tuple[float, float, float, float]) -> tuple[float, ...]:
    return tuple(sum(row[k] * v[k] for k in range(4)) for row in m)


def _frustum(left: float, right: float, bottom: float, top: float, near: float, far: float) -> Matrix:
    return (
        (2 * near / (right - left), 0.0, (right + left) / (right - left), 0.0),
        (0.0, 2 * near / (top - bottom), (top + bottom) / (top - bottom), 0.0),
        (0.0, 0.0, -(far + near) / (far - near), -2 * far * near / (far - near)),
        (0.0, 0.0, -1.0, 0.0),
    )


def _ortho(left: float, right: float, bottom: float, top: float, near: float, far: float) -> Matrix:
    return (
        (2 / (right - left), 0.0, 0.0, -(right + left) / (right - left)),
        (0.0, 2 / (top - bottom), 0.0, -(top + bottom) / (top - bottom)),
        (0.0, 0.0, -2 / (far - near), -(far + near) / (far - near)),
        (0.0, 0.0, 0.0, 1.0),
    )


def _translation(x: float, y: float, z: float) -> Matrix:
    return ((1.0, 0.0, 0.0, x), (0.0, 1.0, 0.0, y), (0.0, 0.0, 1.0, z), (0.0, 0.0, 0.0, 1.0))


def _rotation_x(degrees: float) -> Matrix:
    c, s = math.cos(math.radians(degrees)), math.sin(math.radians(degrees))
    return ((1.0, 0.0, 0.0, 0.0), (0.0, c, -s, 0.0), (0.0, s, c, 0.0), (0.0, 0.0, 0.0, 1.0))


def _rotation_y(degrees: float) -> Matrix:
    c, s = math.cos(math.radians(degrees)), math.sin(math.radians(degrees))
    return ((c, 0.0, s, 0.0), (0.0, 1.0, 0.0, 0.0), (-s, 0.0, c, 0.0), (0.0, 0.0, 0.0, 1.0))


def _rgb(color: Color) -> tuple[int, int, int]:
    r, g, b = (round(max(0.0, min(1.0, c)) * 255) for c in color)
    return r, g, b


@dataclass
class Scene:
    """Display settings and camera state for drawing a model as wireframe."""

    background: Color = (0.30, 0.30, 0.30)
    line_color: Color = (0.0, 0.0, 0.0)
    dot_color: Color = (0.0, 0.0, 0.0)
    stipple: bool = False
    points: bool = True
    smooth: bool = False
    projection: Projection = Projection.PERSPECTIVE
    line_width: float = 1.0
    dot_width: float = 1.0
    x_rotation: float = 0.0
    y_rotation: float = 0.0
    model: ObjModel | None = None
    _press_at: tuple[float, float] = field(default=(0.0, 0.0), repr=False)

    def set_orthographic(self) -> None:
        self.projection = Projection.ORTHOGRAPHIC

    def set_perspective(self) -> None:
        self.projection = Projection.PERSPECTIVE

    def set_model(self, model: ObjModel) -> None:
        """Show ``model``; later changes to it are drawn as they happen."""
        self.model = model

    def press(self, x: float, y: float) -> None:
        """Remember where a drag started."""
        self._press_at = (x, y)

    def drag(self, x: float, y: float) -> None:
        """Set the view rotation from the distance dragged since ``press``."""
        px, py = self._press_at
        self.x_rotation = (y - py) / math.pi
        self.y_rotation = (x - px) / math.pi

    def projection_matrix(self) -> Matrix:
        if self.projection is Projection.PERSPECTIVE:
            return _frustum(-1, 1, -1, 1, _NEAR_PERSPECTIVE, _FAR_PERSPECTIVE)
        return _ortho(-1, 1, -1, 1, _NEAR_ORTHO, _FAR_ORTHO)

    def modelview_matrix(self) -> Matrix:
        view = _translation(0.0, 0.0, -_CAMERA_DISTANCE)
        view = _matmul(view, _rotation_x(self.x_rotation))
        return _matmul(view, _rotation_y(self.y_rotation))

    def project(self, width: int, height: int) -> list[ScreenPoint | None]:
        """Window coordinates and depth of each vertex; None behind the camera.

        The y axis points down, as in image coordinates.
        """
        if self.model is None:
            return []
        matrix = _matmul(self.projection_matrix(), self.modelview_matrix())
        result: list[ScreenPoint | None] = []
        for x, y, z in self.model.vertices:
            cx, cy, cz, cw = _transform(matrix, (x, y, z, 1.0))
            if cw <= 0.0:
                result.append(None)
                continue
            nx, ny, nz = cx / cw, cy / cw, cz / cw
            result.append(((nx + 1) * width / 2, (1 - ny) * height / 2, nz))
        return result

    def render(self, width: int, height: int) -> Image.Image:
        """Draw the scene into a new RGB image."""
        image = Image.new("RGB", (width, height), _rgb(self.background))
        if self.model is None:
            return image
        screen = self.project(width, height)
        visible = [p if p is not None and -1.0 <= p[2] <= 1.0 else None for p in screen]
        draw = ImageDraw.Draw(image)
        indices = self.model.indices

        def point(i: int) -> ScreenPoint | None:
            return visible[i] if 0 <= i < len(visible) else None

        line_fill = _rgb(self.line_color)
        line_px = max(1, round(self.line_width))
        for a, b in zip(indices[0::2], indices[1::2]):
            start, end = point(a), point(b)
            if start is None or end is None:
                continue
            self._draw_segment(draw, start, end, line_fill, line_px)

        if self.points:
            dot_fill = _rgb(self.dot_color)
            size = max(1, round(self.dot_width))
            for i in indices:
                p = point(i)
                if p is None:
                    continue
                x0 = round(p[0] - size / 2)
                y0 = round(p[1] - size / 2)
                box = [x0, y0, x0 + size - 1, y0 + size - 1]
                if self.smooth:
                    draw.ellipse(box, fill=dot_fill)
                else:
                    draw.rectangle(box, fill=dot_fill)
        return image

    def _draw_segment(
        self,
        draw: ImageDraw.ImageDraw,
        start: ScreenPoint,
        end: ScreenPoint,
        fill: tuple[int, int, int],
        width: int,
    ) -> None:
        (x0, y0, _), (x1, y1, _) = start, end
        if not self.stipple:
            draw.line([(x0, y0), (x1, y1)], fill=fill, width=width)
            return
        length = math.hypot(x1 - x0, y1 - y0)
        if length == 0:
            draw.point((x0, y0), fill=fill)
            return
        for dash in range(0, math.ceil(length), _DASH_PERIOD):
            t0 = dash / length
            t1 = min(dash + _DASH_ON, length) / length
            draw.line(
                [(x0 + (x1 - x0) * t0, y0 + (y1 - y0) * t0), (x0 + (x1 - x0) * t1, y0 + (y1 - y0) * t1)],
                fill=fill,
                width=width,
            )