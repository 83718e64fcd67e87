"""Shared fixtures for building BMP files by hand."""

import struct

import pytest


def build_bmp(rows, bpp=24, top_down=False, data_offset=54, pad_byte=0,
              header_size=40, compression=0, trailing=b""):
    """
    Build a BMP file from top-down rows of (r, g, b[, a]) tuples.

    Pixels are written in file order (BGR/BGRA); row padding is filled
    with pad_byte so tests can tell padding from pixel data.
    """
    height = len(rows)
    width = len(rows[0]) if rows else 0
    bytes_per_pixel = bpp // 8
    row_size = ((width * bytes_per_pixel + 3) // 4) * 4

    stored = rows if top_down else list(reversed(rows))
    pixels = bytearray()
    for row in stored:
        line = bytearray()
        for px in row:
            r, g, b = px[0], px[1], px[2]
            line += bytes([b, g, r])
            if bytes_per_pixel == 4:
                line.append(px[3] if len(px) > 3 else 0xFF)
        line += bytes([pad_byte]) * (row_size - len(line))
        pixels += line

    file_size = data_offset + len(pixels) + len(trailing)
    header = struct.pack("<2sIHHI", b"BM", file_size, 0, 0, data_offset)
    header += struct.pack(
        "<IiiHHIIiiII",
        header_size,
        width,
        -height if top_down else height,
        1,
        bpp,
        compression,
        len(pixels),
        2835,
        2835,
        0,
        0,
    )
    gap = bytes(data_offset - len(header))
    return header + gap + bytes(pixels) + trailing


@pytest.fixture
def make_bmp():
    return build_bmp


@pytest.fixture
def sample_rows():
    """3x2 image with distinct channel values in every pixel."""
    return [
        [(255, 0, 0, 10), (0, 255, 0, 20), (0, 0, 255, 30)],
        [(1, 2, 3, 40), (250, 251, 252, 50), (128, 64, 32, 60)],
    ]
