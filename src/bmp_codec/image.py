"""In-memory RGBA image and Pillow interop."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple
import logging
import operator

from PIL import Image

from .errors import BmpError, BmpErrorKind

logger = logging.getLogger(__name__)

CHANNELS = 4


def validate_dimensions(width: Any, height: Any) -> Tuple[int, int]:
    """
    Check that width and height are positive integral values.

    Any type implementing __index__ is accepted; bool is not.

    Returns:
        (width, height) as plain ints

    Raises:
        BmpError: INVALID_DIMENSIONS
    """
    result = []
    for label, value in (("width", width), ("height", height)):
        number = 0
        if not isinstance(value, bool):
            try:
                number = operator.index(value)
            except TypeError:
                pass
        if number <= 0:
            raise BmpError(
                BmpErrorKind.INVALID_DIMENSIONS,
                f"Invalid RGBA: {label} must be a positive integer, got {value!r}",
            )
        result.append(number)
    return result[0], result[1]


def check_buffer(width: int, height: int, data: Any) -> int:
    """Raise BUFFER_TOO_SMALL unless data holds width * height * 4 bytes; return that size."""
    needed = width * height * CHANNELS
    if len(data) < needed:
        raise BmpError(
            BmpErrorKind.BUFFER_TOO_SMALL,
            f"Invalid RGBA: data buffer too small ({len(data)} bytes, need {needed})",
        )
    return needed


@dataclass(frozen=True)
class RawImage:
    """
    Tightly packed RGBA pixels, row-major, top row first.

    Attributes:
        width: Pixel columns
        height: Pixel rows
        data: width * height * 4 bytes, R, G, B, A per pixel
    """
    width: int
    height: int
    data: bytes

    def __post_init__(self):
        width, height = validate_dimensions(self.width, self.height)
        check_buffer(width, height, self.data)
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    @property
    def stride(self) -> int:
        return self.width * CHANNELS

    def row(self, y: int) -> bytes:
        """Return the RGBA bytes of row y (0 = top)."""
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} out of range for height {self.height}")
        start = y * self.stride
        return bytes(self.data[start:start + self.stride])

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Return the (R, G, B, A) tuple at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) out of range for {self.width}x{self.height}")
        start = y * self.stride + x * CHANNELS
        r, g, b, a = self.data[start:start + CHANNELS]
        return (r, g, b, a)

    def as_dict(self) -> Dict[str, Any]:
        """Return the {width, height, data} mapping accepted by encode()."""
        return {"width": self.width, "height": self.height, "data": self.data}

    def to_pil(self) -> Image.Image:
        """Build a Pillow RGBA image from the pixel buffer."""
        return Image.frombytes("RGBA", self.size, bytes(self.data))

    @classmethod
    def from_pil(cls, img: Image.Image) -> "RawImage":
        """Convert any Pillow image to a RawImage (RGBA)."""
        if img.mode != "RGBA":
            logger.debug(f"Converting image from {img.mode} to RGBA")
            img = img.convert("RGBA")
        width, height = img.size
        return cls(width=width, height=height, data=img.tobytes())
