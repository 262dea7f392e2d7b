"""
I/O for binary STL.
"""
from ._binary import HEADER_SIZE, RECORD_SIZE, BinaryDecoder, BinaryEncoder

__all__ = ["BinaryDecoder", "BinaryEncoder", "HEADER_SIZE", "RECORD_SIZE"]
