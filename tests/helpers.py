import math
import pathlib

import numpy as np

import stlio

MESHES_DIR = pathlib.Path(__file__).resolve().parent / "meshes" / "stl"

tetra_ascii_path = MESHES_DIR / "tetra_ascii.stl"

# Same mesh as tetra_ascii.stl. The attribute byte count is set the way Meshmixer
# does it.
tetra_header = b"stlio test tetra".ljust(80, b"-")
tetra_attr = 0xFFFF
tetra_records = [
    (
        (0.0, 0.0, -1.0),
        [(10.0, -4.0, 0.125), (10.0, -1.5, 0.125), (12.5, -4.0, 0.125)],
    ),
    (
        (0.0, -1.0, 0.0),
        [(10.0, -4.0, 0.125), (12.5, -4.0, 0.125), (10.0, -4.0, 2.625)],
    ),
    (
        (-1.0, 0.0, 0.0),
        [(10.0, -4.0, 0.125), (10.0, -4.0, 2.625), (10.0, -1.5, 0.125)],
    ),
    (
        (0.57735, 0.57735, 0.57735),
        [(12.5, -4.0, 0.125), (10.0, -1.5, 0.125), (10.0, -4.0, 2.625)],
    ),
]


def binary_stl(header, records, attr=0, num_triangles=None):
    """Raw binary STL bytes, assembled field by field."""
    if num_triangles is None:
        num_triangles = len(records)
    out = [header, np.array(num_triangles, dtype="<u4").tobytes()]
    for normal, vertices in records:
        out.append(np.array(normal, dtype="<f4").tobytes())
        out.append(np.array(vertices, dtype="<f4").tobytes())
        out.append(np.array(attr, dtype="<u2").tobytes())
    return b"".join(out)


tetra_binary = binary_stl(tetra_header, tetra_records, attr=tetra_attr)


def tetra_triangles():
    return [
        stlio.Triangle(stlio.Vector(*n), tuple(stlio.Vector(*v) for v in verts))
        for n, verts in tetra_records
    ]


def same_vector(a, b, tol):
    return all(same_float(x, y, tol) for x, y in zip(a, b))


def same_float(a, b, tol):
    return abs(a - b) <= tol or (math.isnan(a) and math.isnan(b))


def same_triangle(a, b, tol):
    return same_vector(a.normal, b.normal, tol) and all(
        same_vector(va, vb, tol) for va, vb in zip(a.vertices, b.vertices)
    )


def assert_valid_normals(triangles):
    for t in triangles:
        n = stlio.facet_normal(t)
        assert same_vector(n, t.normal, 1.0e-6), f"{n} != {t.normal}"
        assert abs(stlio.length(t.normal) - 1.0) < 1.0e-6
        assert abs(stlio.length(n) - 1.0) < 1.0e-14


class ChunkedReader:
    """Binary stream whose `read()` returns at most `chunk_size` bytes per call."""

    def __init__(self, data, chunk_size=7):
        self._data = data
        self._pos = 0
        self._chunk_size = chunk_size

    def read(self, size=-1):
        if size < 0:
            size = len(self._data) - self._pos
        size = min(size, self._chunk_size)
        out = self._data[self._pos : self._pos + size]
        self._pos += len(out)
        return out


class FailingWriter:
    """Collects written bytes, raising OSError on the `fail_at`-th call to `write()`."""

    def __init__(self, fail_at):
        self.data = bytearray()
        self._calls = 0
        self._fail_at = fail_at

    def write(self, b):
        self._calls += 1
        if self._calls == self._fail_at:
            raise OSError("disk full")
        self.data += b
        return len(b)
