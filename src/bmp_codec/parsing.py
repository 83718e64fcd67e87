"""
Parsing helpers for CLI values.
"""

from typing import Tuple


def parse_size(value: str) -> Tuple[int, int]:
    """
    Parse size string in WxH format.

    Args:
        value: Size string like "128x64" or "160x128"

    Returns:
        Tuple of (width, height)

    Raises:
        ValueError: If format is invalid or a dimension is not positive
    """
    try:
        parts = value.lower().strip().split('x')
        if len(parts) != 2:
            raise ValueError()
        width, height = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(
            f"Invalid size format '{value}'. Use WxH format like '128x64'."
        )
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid size '{value}'. Width and height must be positive.")
    return (width, height)
