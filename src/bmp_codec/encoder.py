"""
BMP encoder.

Always writes uncompressed 24-bit, bottom-up BMP with a BITMAPINFOHEADER.
Alpha is dropped. Header fields are packed explicitly as little-endian.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union
import logging

from .errors import BmpError, BmpErrorKind
from .header import (
    BI_RGB,
    BMP_MAGIC,
    DIB_HEADER_SIZE,
    HEADERS_SIZE,
    BmpDibHeader,
    BmpFileHeader,
    row_size,
)
from .image import CHANNELS, RawImage, check_buffer, validate_dimensions

logger = logging.getLogger(__name__)

OUTPUT_BPP = 24
OUTPUT_BYTES_PER_PIXEL = OUTPUT_BPP // 8
DEFAULT_PIXELS_PER_METER = 2835  # ~72 DPI
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1


@dataclass(frozen=True)
class EncodeOptions:
    """
    Encoder configuration.

    Attributes:
        pixels_per_meter: Written to both resolution fields
    """
    pixels_per_meter: int = DEFAULT_PIXELS_PER_METER


ImageLike = Union[RawImage, Mapping[str, Any]]


def _unpack_image(image: ImageLike) -> Tuple[int, int, Any]:
    if isinstance(image, RawImage):
        return image.width, image.height, image.data
    try:
        return image["width"], image["height"], image["data"]
    except (KeyError, TypeError):
        raise TypeError("image must be a RawImage or a mapping with width, height and data")


def encode(image: ImageLike, options: Optional[EncodeOptions] = None) -> bytes:
    """
    Encode RGBA pixels as a 24-bit BMP file.

    Args:
        image: RawImage or {"width", "height", "data"} mapping; data is
            top-down RGBA, at least width * height * 4 bytes
        options: Optional EncodeOptions

    Returns:
        Complete BMP file bytes.

    Raises:
        BmpError: INVALID_DIMENSIONS, BUFFER_TOO_SMALL or ALLOCATION_FAILURE.
    """
    options = options or EncodeOptions()
    width, height, data = _unpack_image(image)
    width, height = validate_dimensions(width, height)

    stride = row_size(width, OUTPUT_BYTES_PER_PIXEL)
    pixel_data_size = stride * height
    file_size = HEADERS_SIZE + pixel_data_size
    row_bytes = width * OUTPUT_BYTES_PER_PIXEL

    # Header fields are signed 32-bit dimensions and unsigned 32-bit sizes
    if width > INT32_MAX or height > INT32_MAX or file_size > UINT32_MAX:
        raise BmpError(
            BmpErrorKind.INVALID_DIMENSIONS,
            f"Invalid RGBA: {width}x{height} exceeds BMP size limits",
        )

    if not isinstance(data, (bytes, bytearray, memoryview)):
        data = bytes(data)
    needed = check_buffer(width, height, data)

    try:
        # Zero-filled, so row padding needs no separate pass
        out = bytearray(file_size)
        bgr = bytearray(width * height * OUTPUT_BYTES_PER_PIXEL)

        BmpFileHeader(
            magic=BMP_MAGIC,
            file_size=file_size,
            reserved1=0,
            reserved2=0,
            data_offset=HEADERS_SIZE,
        ).pack_into(out)
        BmpDibHeader(
            header_size=DIB_HEADER_SIZE,
            width=width,
            height=height,
            planes=1,
            bpp=OUTPUT_BPP,
            compression=BI_RGB,
            image_size=pixel_data_size,
            x_pixels_per_m=options.pixels_per_meter,
            y_pixels_per_m=options.pixels_per_meter,
            colors_used=0,
            colors_important=0,
        ).pack_into(out)

        rgba = bytes(data[:needed])
        bgr[0::3] = rgba[2::CHANNELS]
        bgr[1::3] = rgba[1::CHANNELS]
        bgr[2::3] = rgba[0::CHANNELS]

        for y in range(height):
            base = HEADERS_SIZE + (height - 1 - y) * stride
            out[base:base + row_bytes] = bgr[y * row_bytes:(y + 1) * row_bytes]

        result = bytes(out)
    except MemoryError:
        raise BmpError(BmpErrorKind.ALLOCATION_FAILURE)

    logger.debug(f"Encoded {width}x{height} RGBA into {file_size}-byte 24-bit BMP")
    return result


def encode_animated(*args: Any, **kwargs: Any) -> bytes:
    """BMP has no animation concept; always raises UNSUPPORTED_OPERATION."""
    raise BmpError(BmpErrorKind.UNSUPPORTED_OPERATION)
