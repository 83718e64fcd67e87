"""
bmp-codec - BMP <-> RGBA codec

Decode uncompressed 24/32-bit BMP files into top-down RGBA buffers and
encode RGBA buffers back into 24-bit BMP files.
"""

__version__ = "0.1.0"

from bmp_codec.errors import BmpError, BmpErrorKind
from bmp_codec.header import BmpDibHeader, BmpFileHeader, BmpLayout, parse_headers
from bmp_codec.image import RawImage
from bmp_codec.decoder import decode, decode_pixels
from bmp_codec.encoder import EncodeOptions, encode, encode_animated

__all__ = [
    # Errors
    "BmpError",
    "BmpErrorKind",
    # Headers
    "BmpFileHeader",
    "BmpDibHeader",
    "BmpLayout",
    "parse_headers",
    # Codec
    "RawImage",
    "decode",
    "decode_pixels",
    "encode",
    "encode_animated",
    "EncodeOptions",
    "__version__",
]
