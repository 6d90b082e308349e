#!/usr/bin/env python3
"""
Indexed palette model
Holds the 2^bpp color table every canvas index refers to
"""

from typing import Optional, Sequence

import numpy as np

from .constants import COLOR_BLACK, DEFAULT_BPP, DEFAULT_PALETTE_2BPP, SUPPORTED_BPP
from .exceptions import IndexOutOfRangeError, PaletteError, UnsupportedBitDepthError
from .logging_config import get_logger
from .palette_utils import encode_palette

Color = tuple[int, int, int]

logger = get_logger("palette")


def validate_rgb_color(color: Sequence[int]) -> Color:
    """Check and normalize an RGB color

    Args:
        color: RGB color as tuple or list

    Returns:
        RGB tuple of ints

    Raises:
        PaletteError: If the color is not three channels in 0-255
    """
    if not isinstance(color, (tuple, list)) or len(color) != 3:
        raise PaletteError(f"Expected an (r, g, b) color, got {color!r}")

    if any(isinstance(c, bool) or not isinstance(c, (int, np.integer)) for c in color):
        raise PaletteError(f"Color channels must be integers, got {color!r}")

    channels = tuple(int(c) for c in color)
    if any(not 0 <= c <= 255 for c in channels):
        raise PaletteError(f"Color channels must be in 0-255, got {channels}")

    return channels


class IndexedPalette:
    """
    Ordered color table for indexed images.

    The table always holds exactly 2 ** bpp colors. Index 0 is the
    background color by convention only.
    """

    def __init__(self, bpp: int = DEFAULT_BPP,
                 colors: Optional[Sequence[Sequence[int]]] = None):
        if bpp not in SUPPORTED_BPP:
            raise UnsupportedBitDepthError(bpp)

        count = 1 << bpp
        if colors is None:
            colors = DEFAULT_PALETTE_2BPP if bpp == DEFAULT_BPP else []

        table = [validate_rgb_color(c) for c in colors[:count]]
        table.extend([COLOR_BLACK] * (count - len(table)))

        self._bpp = bpp
        self._colors: list[Color] = table

    def __str__(self) -> str:
        return f"{self._bpp} BPP ({self.color_count} colors)"

    def __repr__(self) -> str:
        return f"IndexedPalette(bpp={self._bpp}, colors={self._colors!r})"

    def __len__(self) -> int:
        return len(self._colors)

    def __getitem__(self, idx: int) -> Color:
        return self.get_color(idx)

    def __eq__(self, other) -> bool:
        if not isinstance(other, IndexedPalette):
            return NotImplemented
        return self._bpp == other._bpp and self._colors == other._colors

    @property
    def bpp(self) -> int:
        return self._bpp

    @property
    def color_count(self) -> int:
        return 1 << self._bpp

    @property
    def colors(self) -> list[Color]:
        """Copy of the color table in index order"""
        return list(self._colors)

    def _check_index(self, idx: int) -> None:
        if (isinstance(idx, bool) or not isinstance(idx, (int, np.integer))
                or not 0 <= idx < len(self._colors)):
            raise IndexOutOfRangeError(
                f"Palette index {idx} out of range for {self}"
            )

    def get_color(self, idx: int) -> Color:
        self._check_index(idx)
        return self._colors[idx]

    def set_color(self, idx: int, color: Sequence[int]) -> None:
        self._check_index(idx)
        self._colors[idx] = validate_rgb_color(color)

    def set_bpp(self, new_bpp: int) -> None:
        """
        Rebuild the color table for a new bit depth.

        Colors below min(old_count, new_count) keep their index; slots the
        new depth adds are black. Unsupported depths leave the table as is.

        Raises:
            UnsupportedBitDepthError: If new_bpp is not 1, 2, 3, 4 or 8
        """
        if new_bpp not in SUPPORTED_BPP:
            raise UnsupportedBitDepthError(new_bpp)

        if new_bpp == self._bpp:
            return

        new_count = 1 << new_bpp
        keep = min(len(self._colors), new_count)
        table = self._colors[:keep] + [COLOR_BLACK] * (new_count - keep)

        logger.debug(f"Palette depth {self._bpp} -> {new_bpp} bpp, kept {keep} colors")
        self._bpp = new_bpp
        self._colors = table

    def to_bytes(self) -> bytes:
        """CGRAM encoding of the whole table"""
        return encode_palette(self._colors)

    def to_flat_list(self) -> list[int]:
        """Convert to flat list for PIL"""
        flat = []
        for r, g, b in self._colors:
            flat.extend([r, g, b])
        # PIL expects 256 colors for mode P
        flat.extend([0] * (768 - len(flat)))
        return flat

    @classmethod
    def from_flat_list(cls, data: Sequence[int], bpp: int = DEFAULT_BPP) -> "IndexedPalette":
        """Build a palette from a flat [r, g, b, ...] PIL palette

        Colors past 2 ** bpp are dropped; missing slots are black.
        """
        colors = [tuple(data[i:i + 3]) for i in range(0, len(data) - 2, 3)]
        return cls(bpp, colors)
