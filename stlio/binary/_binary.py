"""
Streaming I/O for the binary variant of the STL format, cf.
<https://en.wikipedia.org/wiki/STL_(file_format)#Binary>.

The file starts with an 80-byte header and the number of triangles as uint32,
followed by one 50-byte record per triangle (see ``stl_dtype``). Everything is
little-endian.
"""
from __future__ import annotations

import numpy as np

from .._common import warn
from .._exceptions import CapacityError, UnexpectedEOFError, WriteError
from .._mesh import Triangle, from_array, stl_dtype, to_array

HEADER_SIZE = 80
RECORD_SIZE = stl_dtype.itemsize

_count_dtype = np.dtype("<u4")


def _read_exact(f, size: int, what: str) -> bytes:
    # `read()` may return less than asked for without being at EOF
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = f.read(remaining)
        if not chunk:
            raise UnexpectedEOFError(
                f"Expected {size} bytes of {what}, got {size - remaining}"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class BinaryDecoder:
    """Reads triangles one at a time from a binary STL stream.

    The header and the triangle count are read on construction. Decoding stops
    after :attr:`num_triangles` records even if the stream holds more data.
    """

    def __init__(self, f):
        self._f = f
        # The header is opaque; often ASCII text, possibly zero-padded.
        self.header = _read_exact(f, HEADER_SIZE, "header")
        data = _read_exact(f, _count_dtype.itemsize, "triangle count")
        self.num_triangles = int(np.frombuffer(data, dtype=_count_dtype)[0])
        self.num_read = 0

    def __iter__(self):
        return self

    def __next__(self) -> Triangle:
        triangle = self.decode()
        if triangle is None:
            raise StopIteration
        return triangle

    def decode(self) -> Triangle | None:
        """Returns the next triangle, or None once all declared triangles are read."""
        if self.num_read == self.num_triangles:
            return None

        data = _read_exact(self._f, RECORD_SIZE, f"triangle {self.num_read}")
        (triangle,) = from_array(np.frombuffer(data, dtype=stl_dtype))
        self.num_read += 1
        return triangle


class BinaryEncoder:
    """Writes triangles to a binary STL stream.

    The header (padded with zeros or truncated to 80 bytes) and ``num_triangles``
    are written on construction. At most ``num_triangles`` calls to :meth:`encode`
    are allowed; writing fewer leaves the stream inconsistent with its declared
    count.
    """

    def __init__(self, f, header: bytes | str = b"", num_triangles: int = 0):
        if not 0 <= num_triangles <= np.iinfo(_count_dtype).max:
            raise WriteError(
                f"Number of triangles must fit into uint32 (got {num_triangles})"
            )

        if isinstance(header, str):
            header = header.encode()
        if len(header) > HEADER_SIZE:
            warn(
                f"STL header is {len(header)} bytes long, "
                f"truncating to {HEADER_SIZE} bytes."
            )
        header = header[:HEADER_SIZE].ljust(HEADER_SIZE, b"\x00")

        self._f = f
        self.header = header
        self.num_triangles = num_triangles
        self.num_written = 0

        f.write(header)
        f.write(np.array(num_triangles, dtype=_count_dtype).tobytes())

    def encode(self, triangle: Triangle) -> None:
        if self.num_written == self.num_triangles:
            raise CapacityError(f"Already written {self.num_triangles} triangles")
        if not 0 <= triangle.attr_byte_count <= np.iinfo(np.uint16).max:
            raise WriteError(
                "Attribute byte count must fit into uint16 "
                f"(got {triangle.attr_byte_count})"
            )

        self._f.write(to_array([triangle]).tobytes())
        self.num_written += 1
