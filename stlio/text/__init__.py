"""
I/O for ASCII STL.
"""
from ._text import TextDecoder, TextEncoder, format_float

__all__ = ["TextDecoder", "TextEncoder", "format_float"]
