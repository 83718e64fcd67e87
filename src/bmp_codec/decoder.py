"""
BMP pixel decoder.

Turns a validated BMP buffer into tightly packed, top-down RGBA:
- rows are un-flipped when the file is stored bottom-up
- row padding is skipped
- BGR(A) is reordered to RGBA; 24-bit input gets opaque alpha (0xFF)
"""

import logging

from .errors import BmpError, BmpErrorKind
from .header import BmpLayout, BytesLike, parse_headers
from .image import CHANNELS, RawImage

logger = logging.getLogger(__name__)

OPAQUE = 0xFF


def decode_pixels(data: BytesLike, layout: BmpLayout) -> bytes:
    """
    Transcode the stored pixel rows described by layout into RGBA.

    The input buffer is only read. Bounds must already have been checked
    by parse_headers().

    Args:
        data: Complete BMP file contents
        layout: Result of parse_headers(data)

    Returns:
        width * height * 4 bytes of RGBA, top row first.
    """
    bpp = layout.bytes_per_pixel
    row_bytes = layout.width * bpp
    pixel_count = layout.width * layout.height
    src = memoryview(data)

    try:
        # Unpadded BGR(A) rows in output order
        packed = bytearray(pixel_count * bpp)
        rgba = bytearray(pixel_count * CHANNELS)

        for y in range(layout.height):
            src_row = y if layout.top_down else layout.height - 1 - y
            base = layout.data_offset + src_row * layout.row_size
            packed[y * row_bytes:(y + 1) * row_bytes] = src[base:base + row_bytes]

        rgba[0::CHANNELS] = packed[2::bpp]
        rgba[1::CHANNELS] = packed[1::bpp]
        rgba[2::CHANNELS] = packed[0::bpp]
        if layout.bits_per_pixel == 32:
            rgba[3::CHANNELS] = packed[3::bpp]
        else:
            rgba[3::CHANNELS] = bytes([OPAQUE]) * pixel_count

        return bytes(rgba)
    except MemoryError:
        raise BmpError(BmpErrorKind.ALLOCATION_FAILURE)


def decode(data: BytesLike) -> RawImage:
    """
    Decode a BMP file into an RGBA RawImage.

    Args:
        data: Complete BMP file contents (bytes, bytearray or memoryview)

    Returns:
        RawImage with height as a positive row count.

    Raises:
        BmpError: If the headers are invalid or unsupported.
    """
    layout = parse_headers(data)
    pixels = decode_pixels(data, layout)
    logger.debug(f"Decoded {layout.width}x{layout.height} into {len(pixels)} RGBA bytes")
    return RawImage(width=layout.width, height=layout.height, data=pixels)
