"""
Error taxonomy for the BMP codec.

Every failure the codec can report has a stable kind so callers can branch
on it instead of matching message text.
"""

from enum import Enum
from typing import Dict, Optional


class BmpErrorKind(Enum):
    """Stable error kinds for known failure conditions."""
    # Header / layout (decode)
    TOO_SMALL = "TooSmall"
    BAD_MAGIC = "BadMagic"
    UNSUPPORTED_HEADER = "UnsupportedHeader"
    UNSUPPORTED_COMPRESSION = "UnsupportedCompression"
    UNSUPPORTED_BIT_DEPTH = "UnsupportedBitDepth"
    INVALID_DIMENSIONS = "InvalidDimensions"
    TRUNCATED_PIXEL_DATA = "TruncatedPixelData"

    # Encode
    BUFFER_TOO_SMALL = "BufferTooSmall"
    ALLOCATION_FAILURE = "AllocationFailure"
    UNSUPPORTED_OPERATION = "UnsupportedOperation"


# Default human-readable message for each kind
ERROR_MESSAGES: Dict[BmpErrorKind, str] = {
    BmpErrorKind.TOO_SMALL:
        "Invalid BMP: file too small",
    BmpErrorKind.BAD_MAGIC:
        "Invalid BMP: wrong magic number",
    BmpErrorKind.UNSUPPORTED_HEADER:
        "Unsupported BMP: only BITMAPINFOHEADER supported",
    BmpErrorKind.UNSUPPORTED_COMPRESSION:
        "Unsupported BMP: only uncompressed format supported",
    BmpErrorKind.UNSUPPORTED_BIT_DEPTH:
        "Unsupported BMP: only 24-bit and 32-bit formats supported",
    BmpErrorKind.INVALID_DIMENSIONS:
        "Invalid BMP: width must be positive and height non-zero",
    BmpErrorKind.TRUNCATED_PIXEL_DATA:
        "Invalid BMP: pixel data exceeds file size",
    BmpErrorKind.BUFFER_TOO_SMALL:
        "Invalid RGBA: data buffer too small",
    BmpErrorKind.ALLOCATION_FAILURE:
        "Memory allocation failed",
    BmpErrorKind.UNSUPPORTED_OPERATION:
        "BMP format does not support animation",
}


class BmpError(ValueError):
    """
    Raised for any BMP decode/encode failure.

    Attributes:
        kind: The BmpErrorKind identifying the violated check
        message: Human-readable description
    """

    def __init__(self, kind: BmpErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or ERROR_MESSAGES[kind]
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"BmpError({self.kind.value}: {self.message})"
