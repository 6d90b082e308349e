"""
SNES Paint
Indexed pixel canvas and palette editor core with SNES tile export
"""

from .grid import Grid, GridView, PixelGrid
from .palette import IndexedPalette
from .tile_utils import encode

__version__ = "0.1.0"
__all__ = [
    "Grid",
    "GridView",
    "IndexedPalette",
    "PixelGrid",
    "encode",
]
