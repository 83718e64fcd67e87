"""
BMP header model and validation.

Parses the 14-byte file header and the 40-byte BITMAPINFOHEADER that
follows it, and rejects anything outside the supported subset:
uncompressed, 24-bit or 32-bit, either row orientation.

All fields are little-endian and read with explicit struct formats, so
parsing never depends on host byte order.
"""

from dataclasses import dataclass
from typing import Union
import logging
import struct

from .errors import BmpError, BmpErrorKind

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]

BMP_MAGIC = b"BM"
FILE_HEADER_SIZE = 14
DIB_HEADER_SIZE = 40
HEADERS_SIZE = FILE_HEADER_SIZE + DIB_HEADER_SIZE
SUPPORTED_BIT_DEPTHS = (24, 32)
BI_RGB = 0

_FILE_HEADER_FMT = "<2sIHHI"
_DIB_HEADER_FMT = "<IiiHHIIiiII"


def row_size(width: int, bytes_per_pixel: int) -> int:
    """Byte length of one stored pixel row, padded to a 4-byte boundary."""
    return ((width * bytes_per_pixel + 3) // 4) * 4


@dataclass(frozen=True)
class BmpFileHeader:
    magic: bytes
    file_size: int
    reserved1: int
    reserved2: int
    data_offset: int

    @classmethod
    def unpack(cls, data: BytesLike, offset: int = 0) -> "BmpFileHeader":
        return cls(*struct.unpack_from(_FILE_HEADER_FMT, data, offset))

    def pack_into(self, buf: bytearray, offset: int = 0) -> None:
        struct.pack_into(
            _FILE_HEADER_FMT,
            buf,
            offset,
            self.magic,
            self.file_size,
            self.reserved1,
            self.reserved2,
            self.data_offset,
        )


@dataclass(frozen=True)
class BmpDibHeader:
    """BITMAPINFOHEADER fields. A negative height means top-down rows."""
    header_size: int
    width: int
    height: int
    planes: int
    bpp: int
    compression: int
    image_size: int
    x_pixels_per_m: int
    y_pixels_per_m: int
    colors_used: int
    colors_important: int

    @classmethod
    def unpack(cls, data: BytesLike, offset: int = FILE_HEADER_SIZE) -> "BmpDibHeader":
        return cls(*struct.unpack_from(_DIB_HEADER_FMT, data, offset))

    def pack_into(self, buf: bytearray, offset: int = FILE_HEADER_SIZE) -> None:
        struct.pack_into(
            _DIB_HEADER_FMT,
            buf,
            offset,
            self.header_size,
            self.width,
            self.height,
            self.planes,
            self.bpp,
            self.compression,
            self.image_size,
            self.x_pixels_per_m,
            self.y_pixels_per_m,
            self.colors_used,
            self.colors_important,
        )


@dataclass(frozen=True)
class BmpLayout:
    """
    Validated headers plus the geometry derived from them.

    Attributes:
        file_header: Parsed 14-byte file header
        dib_header: Parsed BITMAPINFOHEADER
        width: Pixel columns
        height: Pixel rows (magnitude of the header's signed height)
        bytes_per_pixel: 3 or 4
        top_down: True when rows are stored first-row-first
        row_size: Stored row stride including padding
    """
    file_header: BmpFileHeader
    dib_header: BmpDibHeader
    width: int
    height: int
    bytes_per_pixel: int
    top_down: bool
    row_size: int

    @property
    def data_offset(self) -> int:
        return self.file_header.data_offset

    @property
    def bits_per_pixel(self) -> int:
        return self.dib_header.bpp

    @property
    def pixel_data_size(self) -> int:
        return self.row_size * self.height

    @property
    def padding(self) -> int:
        return self.row_size - self.width * self.bytes_per_pixel


def parse_headers(data: BytesLike) -> BmpLayout:
    """
    Parse and validate BMP headers.

    Checks run in a fixed order and the first failure wins. The pixel
    region bounds are verified here, before any pixel is touched.

    Args:
        data: Complete BMP file contents

    Returns:
        BmpLayout describing where and how pixels are stored.

    Raises:
        BmpError: TOO_SMALL, BAD_MAGIC, UNSUPPORTED_HEADER,
            UNSUPPORTED_COMPRESSION, UNSUPPORTED_BIT_DEPTH,
            INVALID_DIMENSIONS or TRUNCATED_PIXEL_DATA.
    """
    if len(data) < HEADERS_SIZE:
        raise BmpError(
            BmpErrorKind.TOO_SMALL,
            f"Invalid BMP: file too small ({len(data)} bytes, need at least {HEADERS_SIZE})",
        )

    file_header = BmpFileHeader.unpack(data)
    if file_header.magic != BMP_MAGIC:
        raise BmpError(BmpErrorKind.BAD_MAGIC)

    dib_header = BmpDibHeader.unpack(data)
    if dib_header.header_size != DIB_HEADER_SIZE:
        raise BmpError(
            BmpErrorKind.UNSUPPORTED_HEADER,
            f"Unsupported BMP: only BITMAPINFOHEADER supported "
            f"(header size {dib_header.header_size})",
        )

    if dib_header.compression != BI_RGB:
        raise BmpError(
            BmpErrorKind.UNSUPPORTED_COMPRESSION,
            f"Unsupported BMP: only uncompressed format supported "
            f"(compression {dib_header.compression})",
        )

    if dib_header.bpp not in SUPPORTED_BIT_DEPTHS:
        raise BmpError(
            BmpErrorKind.UNSUPPORTED_BIT_DEPTH,
            f"Unsupported BMP: only 24-bit and 32-bit formats supported "
            f"({dib_header.bpp}-bit)",
        )

    if dib_header.width <= 0 or dib_header.height == 0:
        raise BmpError(
            BmpErrorKind.INVALID_DIMENSIONS,
            f"Invalid BMP dimensions {dib_header.width}x{dib_header.height}",
        )

    bytes_per_pixel = dib_header.bpp // 8
    height = abs(dib_header.height)
    stride = row_size(dib_header.width, bytes_per_pixel)

    end = file_header.data_offset + stride * height
    if end > len(data):
        raise BmpError(
            BmpErrorKind.TRUNCATED_PIXEL_DATA,
            f"Invalid BMP: pixel data exceeds file size "
            f"(needs {end} bytes, have {len(data)})",
        )

    layout = BmpLayout(
        file_header=file_header,
        dib_header=dib_header,
        width=dib_header.width,
        height=height,
        bytes_per_pixel=bytes_per_pixel,
        top_down=dib_header.height < 0,
        row_size=stride,
    )
    logger.debug(
        f"BMP {layout.width}x{layout.height} {layout.bits_per_pixel}-bit "
        f"{'top-down' if layout.top_down else 'bottom-up'}, "
        f"row {layout.row_size} bytes at offset {layout.data_offset}"
    )
    return layout
