from __future__ import annotations

import collections
from typing import Iterable

import numpy as np

Vector = collections.namedtuple("Vector", ["x", "y", "z"], defaults=(0.0, 0.0, 0.0))

_origin = Vector()

# `normal` is the stored value and may disagree with the vertices. `attr_byte_count`
# only exists in binary files; some tools use it for color.
Triangle = collections.namedtuple(
    "Triangle",
    ["normal", "vertices", "attr_byte_count"],
    defaults=(_origin, (_origin, _origin, _origin), 0),
)

# One binary STL facet: 3 float32 (normal), 9 float32 (vertices), 1 uint16 (attribute
# byte count), 50 bytes in total, no padding.
stl_dtype = np.dtype(
    [
        ("normal", "<f4", (3,)),
        ("vertices", "<f4", (3, 3)),
        ("attr", "<u2"),
    ]
)


def to_array(triangles: Iterable[Triangle]) -> np.ndarray:
    """Pack triangles into a structured array of binary STL records.

    Coordinates are narrowed to single precision; values beyond the float32 range
    become infinite.
    """
    triangles = list(triangles)
    out = np.empty(len(triangles), dtype=stl_dtype)
    if len(triangles) == 0:
        return out

    # overflow to inf is the float32 behavior we want
    with np.errstate(over="ignore"):
        out["normal"] = [tuple(t.normal) for t in triangles]
        out["vertices"] = [[tuple(v) for v in t.vertices] for t in triangles]
    out["attr"] = [t.attr_byte_count for t in triangles]
    return out


def from_array(array: np.ndarray) -> list[Triangle]:
    """Unpack a structured array of binary STL records, widening to double precision."""
    normals = array["normal"].astype(np.float64).tolist()
    vertices = array["vertices"].astype(np.float64).tolist()
    attrs = array["attr"].tolist()
    return [
        Triangle(Vector(*n), tuple(Vector(*v) for v in verts), attr)
        for n, verts, attr in zip(normals, vertices, attrs)
    ]
