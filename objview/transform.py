"""In-place affine transformations of a model's vertices."""

from __future__ import annotations

import math
from collections.abc import Callable

from objview.model import ObjModel, Vertex

DEGREES_TO_RADIANS = 0.01745329251994


class ZeroScaleError(ValueError):
    """Raised when a scale factor of zero is requested."""


def _apply(model: ObjModel, func: Callable[[float, float, float], Vertex]) -> None:
    model.vertices[:] = [func(x, y, z) for x, y, z in model.vertices]


def _check_factor(factor: float) -> None:
    if factor == 0.0:
        raise ZeroScaleError("scale factor must not be zero")


def scale(model: ObjModel, factor: float) -> None:
    """Scale all three coordinates by ``factor``."""
    _check_factor(factor)
    _apply(model, lambda x, y, z: (x * factor, y * factor, z * factor))


def scale_x(model: ObjModel, factor: float) -> None:
    """Scale the x coordinate by ``factor``."""
    _check_factor(factor)
    _apply(model, lambda x, y, z: (x * factor, y, z))


def scale_y(model: ObjModel, factor: float) -> None:
    """Scale the y coordinate by ``factor``."""
    _check_factor(factor)
    _apply(model, lambda x, y, z: (x, y * factor, z))


def scale_z(model: ObjModel, factor: float) -> None:
    """Scale the z coordinate by ``factor``."""
    _check_factor(factor)
    _apply(model, lambda x, y, z: (x, y, z * factor))


def move_x(model: ObjModel, offset: float) -> None:
    """Shift the model along the x axis."""
    if offset != 0.0:
        _apply(model, lambda x, y, z: (x + offset, y, z))


def move_y(model: ObjModel, offset: float) -> None:
    """Shift the model along the y axis."""
    if offset != 0.0:
        _apply(model, lambda x, y, z: (x, y + offset, z))


def move_z(model: ObjModel, offset: float) -> None:
    """Shift the model along the z axis."""
    if offset != 0.0:
        _apply(model, lambda x, y, z: (x, y, z + offset))


def turn_x(model: ObjModel, angle: float) -> None:
    """Rotate around the x axis by ``angle`` degrees."""
    if angle != 0.0:
        rad = angle * DEGREES_TO_RADIANS
        c, s = math.cos(rad), math.sin(rad)
        _apply(model, lambda x, y, z: (x, y * c + z * s, -y * s + z * c))


def turn_y(model: ObjModel, angle: float) -> None:
    """Rotate around the y axis by ``angle`` degrees."""
    if angle != 0.0:
        rad = -angle * DEGREES_TO_RADIANS
        c, s = math.cos(rad), math.sin(rad)
        _apply(model, lambda x, y, z: (x * c + z * s, y, -x * s + z * c))


def turn_z(model: ObjModel, angle: float) -> None:
    """Rotate around the z axis by ``angle`` degrees."""
    if angle != 0.0:
        rad = angle * DEGREES_TO_RADIANS
        c, s = math.cos(rad), math.sin(rad)
        _apply(model, lambda x, y, z: (x * c + y * s, -x * s + y * c, z))