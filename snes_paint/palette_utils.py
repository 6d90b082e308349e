#!/usr/bin/env python3
"""
SNES palette utilities
BGR555 conversion and CGRAM byte encoding
"""

import struct

from .constants import (
    BGR555_BLUE_MASK,
    BGR555_BLUE_SHIFT,
    BGR555_CHANNEL_SHIFT,
    BGR555_GREEN_MASK,
    BGR555_GREEN_SHIFT,
    BGR555_RED_MASK,
    BGR555_RED_SHIFT,
    BYTES_PER_COLOR,
)


def rgb888_to_bgr555(r: int, g: int, b: int) -> int:
    """
    Convert RGB888 color to BGR555.

    Keeps the top 5 bits of each channel; the low 3 bits are dropped.

    Args:
        r: Red component (0-255)
        g: Green component (0-255)
        b: Blue component (0-255)

    Returns:
        15-bit BGR555 color value
    """
    r5 = r >> BGR555_CHANNEL_SHIFT
    g5 = g >> BGR555_CHANNEL_SHIFT
    b5 = b >> BGR555_CHANNEL_SHIFT

    return (
        (b5 << BGR555_BLUE_SHIFT)
        | (g5 << BGR555_GREEN_SHIFT)
        | (r5 << BGR555_RED_SHIFT)
    )


def bgr555_to_rgb555_channels(bgr555: int) -> tuple[int, int, int]:
    """
    Split a BGR555 value into its 5-bit channels.

    Returns:
        Tuple of (r, g, b) values in 0-31 range
    """
    b = (bgr555 & BGR555_BLUE_MASK) >> BGR555_BLUE_SHIFT
    g = (bgr555 & BGR555_GREEN_MASK) >> BGR555_GREEN_SHIFT
    r = (bgr555 & BGR555_RED_MASK) >> BGR555_RED_SHIFT
    return r, g, b


def bgr555_to_rgb888(bgr555: int) -> tuple[int, int, int]:
    """
    Convert BGR555 color to RGB888.

    The inverse of rgb888_to_bgr555 up to the 3 dropped low bits,
    which come back as zero.
    """
    r, g, b = bgr555_to_rgb555_channels(bgr555)
    return (
        r << BGR555_CHANNEL_SHIFT,
        g << BGR555_CHANNEL_SHIFT,
        b << BGR555_CHANNEL_SHIFT,
    )


def encode_palette(colors: list[tuple[int, int, int]]) -> bytes:
    """
    Convert a list of RGB colors to CGRAM bytes.

    Args:
        colors: RGB tuples in palette index order

    Returns:
        Two little-endian bytes per color
    """
    cgram_data = bytearray()

    for r, g, b in colors:
        bgr555 = rgb888_to_bgr555(r, g, b)
        cgram_data.extend(struct.pack("<H", bgr555))

    return bytes(cgram_data)


def decode_palette_bytes(data: bytes) -> list[int]:
    """
    Read BGR555 words back out of CGRAM bytes.

    Raises:
        ValueError: If data is not a whole number of colors
    """
    if len(data) % BYTES_PER_COLOR != 0:
        raise ValueError(
            f"Palette data length {len(data)} is not a multiple of {BYTES_PER_COLOR}"
        )

    count = len(data) // BYTES_PER_COLOR
    return list(struct.unpack(f"<{count}H", data))
