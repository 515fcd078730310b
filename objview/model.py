"""Wavefront OBJ model loading.

Only ``v`` (vertex) and ``f`` (face) records are read. Each face becomes
a closed loop of line segments. It is stored as pairs of zero-based vertex
indices, ready to be drawn as a line list.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

Vertex = tuple[float, float, float]

_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INT = re.compile(r"\s*([+-]?\d+)")
_DIGITS = frozenset("0123456789")


@dataclass
class ObjModel:
    """Vertices and edge indices of a loaded model."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    facet_count: int = 0

    def vertex_count(self) -> int:
        """Number of vertices in the model."""
        return len(self.vertices)


def _parse_vertex(text: str) -> Vertex:
    """Read up to three leading numbers; missing ones are zero."""
    values: list[float] = []
    pos = 0
    while len(values) < 3:
        match = _FLOAT.match(text, pos)
        if match is None:
            break
        values.append(float(match.group(1)))
        pos = match.end()
    values.extend([0.0] * (3 - len(values)))
    return values[0], values[1], values[2]


def _leading_int(text: str) -> int:
    match = _INT.match(text)
    return int(match.group(1)) if match else 0


def parse_obj_lines(lines: Iterable[str]) -> ObjModel:
    """Build a model from the lines of an OBJ document."""
    model = ObjModel()
    # The loop start index deliberately survives from one face to the next,
    # so a face with no usable index closes on the previous face's start.
    first_index = 0
    for line in lines:
        if line.startswith("v "):
            model.vertices.append(_parse_vertex(line[2:]))
        elif line.startswith("f "):
            model.facet_count += 1
            tokens = [token for token in line[2:].split(" ") if token]
            for position, token in enumerate(tokens):
                if not _DIGITS.intersection(token):
                    break
                head = next(part for part in token.split("/") if part)
                index = _leading_int(head) - 1
                model.indices.append(index)
                if position == 0:
                    first_index = index
                else:
                    model.indices.append(index)
            model.indices.append(first_index)
    return model


def load_obj(path: str | os.PathLike[str]) -> ObjModel:
    """Load an OBJ file; raises OSError if it cannot be opened."""
    with open(path, encoding="utf-8", errors="replace") as handle:
        return parse_obj_lines(handle)