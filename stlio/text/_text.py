"""
Streaming I/O for the ASCII variant of the STL format, cf.
<https://en.wikipedia.org/wiki/STL_(file_format)#ASCII>.
"""
from __future__ import annotations

import enum

import numpy as np

from .._exceptions import ReadError, UnexpectedEOFError, WriteError
from .._mesh import Triangle, Vector


class _Expect(enum.Enum):
    FACET = "facet normal"
    OUTER_LOOP = "outer loop"
    VERTEX_0 = "vertex 0"
    VERTEX_1 = "vertex 1"
    VERTEX_2 = "vertex 2"
    ENDLOOP = "endloop"
    ENDFACET = "endfacet"


_successor = {
    _Expect.FACET: _Expect.OUTER_LOOP,
    _Expect.OUTER_LOOP: _Expect.VERTEX_0,
    _Expect.VERTEX_0: _Expect.VERTEX_1,
    _Expect.VERTEX_1: _Expect.VERTEX_2,
    _Expect.VERTEX_2: _Expect.ENDLOOP,
    _Expect.ENDLOOP: _Expect.ENDFACET,
    _Expect.ENDFACET: _Expect.FACET,
}

_vertex_index = {_Expect.VERTEX_0: 0, _Expect.VERTEX_1: 1, _Expect.VERTEX_2: 2}


def _strip_keyword(line: str, keyword: str) -> str | None:
    # `line` has its leading whitespace removed only, so a bare keyword followed by
    # the line break does not match.
    if line.startswith(keyword + " ") or line.startswith(keyword + "\t"):
        return line[len(keyword) + 1 :].strip()
    return None


def _parse_vector(text: str) -> Vector:
    items = text.split()
    if len(items) != 3:
        raise ReadError(f"Invalid vector text: {text!r}")
    try:
        return Vector(*(float(item) for item in items))
    except ValueError:
        raise ReadError(f"Invalid vector text: {text!r}")


class TextDecoder:
    """Reads triangles one at a time from an ASCII STL stream.

    ``f`` must be a readable binary stream. The ``solid`` line is consumed on
    construction and its name is stored in :attr:`name`.
    """

    def __init__(self, f):
        self._f = f
        self._done = False

        line = self._next_line()
        if line is None:
            raise ReadError('File does not begin with "solid "')
        name = _strip_keyword(line, "solid")
        if name is None:
            raise ReadError(f'File does not begin with "solid ": {line.strip()!r}')
        self.name = name

    def __iter__(self):
        return self

    def __next__(self) -> Triangle:
        triangle = self.decode()
        if triangle is None:
            raise StopIteration
        return triangle

    def _next_line(self) -> str | None:
        # fast forward to the next non-blank line, left-stripped; None at EOF
        while True:
            raw = self._f.readline()
            if not raw:
                return None
            try:
                line = raw.decode().lstrip()
            except UnicodeDecodeError:
                raise ReadError(f"Line is not valid UTF-8: {raw!r}")
            if line:
                return line

    def decode(self) -> Triangle | None:
        """Returns the next triangle, or None after ``endsolid``."""
        if self._done:
            return None

        normal = None
        vertices = [None, None, None]
        expect = _Expect.FACET
        while True:
            line = self._next_line()
            if line is None:
                if expect is _Expect.FACET:
                    raise UnexpectedEOFError('Missing "endsolid"')
                raise UnexpectedEOFError(f'Expected "{expect.value}", got EOF')

            text = line.strip()
            if expect is _Expect.FACET:
                rest = _strip_keyword(line, "facet normal")
                if rest is None:
                    name = _strip_keyword(line, "endsolid")
                    if name is None:
                        raise ReadError(
                            f'Facet does not begin with "facet normal ": {text!r}'
                        )
                    if name not in ("", self.name):
                        raise ReadError(f"Unexpected endsolid name: {name!r}")
                    self._done = True
                    return None
                normal = _parse_vector(rest)
            elif expect is _Expect.OUTER_LOOP:
                if text != "outer loop":
                    raise ReadError(f'Facet does not contain "outer loop": {text!r}')
            elif expect in _vertex_index:
                rest = _strip_keyword(line, "vertex")
                if rest is None:
                    raise ReadError(
                        f'Facet does not contain expected "vertex ": {text!r}'
                    )
                vertices[_vertex_index[expect]] = _parse_vector(rest)
            elif expect is _Expect.ENDLOOP:
                if text != "endloop":
                    raise ReadError(f'Facet does not contain "endloop": {text!r}')
            elif expect is _Expect.ENDFACET:
                if text != "endfacet":
                    raise ReadError(f'Facet does not contain "endfacet": {text!r}')
                return Triangle(normal, tuple(vertices))

            expect = _successor[expect]


def format_float(value: float) -> str:
    """Shortest representation of ``value`` that reads back to the same double.

    Laid out like C's ``%g``: positional notation for decimal exponents in [-4, 6),
    scientific notation otherwise, e.g., ``0.0001``, ``1e-05``, ``123456.5``,
    ``1.234567e+06``. Non-finite values are written as ``NaN``, ``+Inf``, ``-Inf``.
    """
    if np.isnan(value):
        return "NaN"
    if np.isinf(value):
        return "+Inf" if value > 0 else "-Inf"

    sci = np.format_float_scientific(value, unique=True, trim="-", exp_digits=2)
    exp = int(sci[sci.index("e") + 1 :])
    if -4 <= exp < 6:
        return np.format_float_positional(value, unique=True, trim="-")
    return sci


def _format_vector(v: Vector) -> str:
    return " ".join(format_float(c) for c in v)


class TextEncoder:
    """Writes triangles to an ASCII STL stream.

    ``solid <name>`` is written on construction. :meth:`close` must be called once
    after the last triangle to write the ``endsolid`` line; it does not close ``f``.
    """

    def __init__(self, f, name: str = "", indent: str = "  "):
        if "\n" in name or "\r" in name:
            raise WriteError(f"Solid name must be a single line: {name!r}")

        self._f = f
        self.name = name
        self._indent = [indent * k for k in range(4)]
        self._closed = False
        self._write(f"solid {name}\n")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None and not self._closed:
            self.close()

    def _write(self, text: str) -> None:
        self._f.write(text.encode())

    def encode(self, triangle: Triangle) -> None:
        if self._closed:
            raise WriteError("Encoder is closed")

        ind = self._indent
        v0, v1, v2 = triangle.vertices
        self._write(
            f"{ind[1]}facet normal {_format_vector(triangle.normal)}\n"
            f"{ind[2]}outer loop\n"
            f"{ind[3]}vertex {_format_vector(v0)}\n"
            f"{ind[3]}vertex {_format_vector(v1)}\n"
            f"{ind[3]}vertex {_format_vector(v2)}\n"
            f"{ind[2]}endloop\n"
            f"{ind[1]}endfacet\n"
        )

    def close(self) -> None:
        if self._closed:
            raise WriteError("Encoder is already closed")
        self._closed = True
        self._write(f"endsolid {self.name}\n")
