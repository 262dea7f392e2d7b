from . import binary, text
from .__about__ import __author__, __author_email__, __version__, __website__
from ._exceptions import CapacityError, ReadError, UnexpectedEOFError, WriteError
from ._geometry import cross, facet_normal, length, scale, sub
from ._mesh import Triangle, Vector, from_array, stl_dtype, to_array
from .binary import BinaryDecoder, BinaryEncoder
from .text import TextDecoder, TextEncoder

__all__ = [
    "binary",
    "text",
    "Vector",
    "Triangle",
    "stl_dtype",
    "to_array",
    "from_array",
    "sub",
    "cross",
    "length",
    "scale",
    "facet_normal",
    "TextDecoder",
    "TextEncoder",
    "BinaryDecoder",
    "BinaryEncoder",
    "ReadError",
    "UnexpectedEOFError",
    "WriteError",
    "CapacityError",
    "__version__",
    "__author__",
    "__author_email__",
    "__website__",
]
