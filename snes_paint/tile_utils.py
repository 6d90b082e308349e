#!/usr/bin/env python3
"""
SNES tile encoding/decoding utilities
Turns a canvas and its palette into VRAM and CGRAM byte streams
"""

from typing import Iterator

from .constants import (
    BYTES_PER_TILE_2BPP,
    ENCODABLE_BPP,
    PIXELS_PER_ROW_GROUP,
    PIXELS_PER_TILE,
    TILE_HEIGHT,
    TILE_PADDING_BYTES,
    TILE_WIDTH,
)
from .exceptions import UnsupportedBitDepthError
from .grid import Grid
from .palette import IndexedPalette


def iter_tiles(grid: Grid) -> Iterator[Grid]:
    """
    Slice a grid into 8x8 tile views.

    Tiles come column by column: every tile in a tile-column, top to
    bottom, before moving one tile to the right.

    Raises:
        ValueError: If the grid is not a whole number of tiles
    """
    if grid.width % TILE_WIDTH or grid.height % TILE_HEIGHT:
        raise ValueError(
            f"Grid {grid.width}x{grid.height} is not a multiple of "
            f"{TILE_WIDTH}x{TILE_HEIGHT} tiles"
        )

    for tile_x in range(0, grid.width, TILE_WIDTH):
        for tile_y in range(0, grid.height, TILE_HEIGHT):
            yield grid.subview(
                range(tile_x, tile_x + TILE_WIDTH),
                range(tile_y, tile_y + TILE_HEIGHT),
            )


def encode_2bpp_tile(tile: Grid) -> bytes:
    """
    Encode an 8x8 tile to SNES 2bpp format.

    Each group of 8 pixels in linear order becomes one byte per bitplane.
    Pixels are shifted in from the right, so the first pixel of a group
    lands in bit 7 and the last in bit 0.

    Args:
        tile: 8x8 grid or view

    Returns:
        16 bytes: bitplane 0 then bitplane 1 for each group

    Raises:
        ValueError: If tile is not 8x8
    """
    if tile.width * tile.height != PIXELS_PER_TILE:
        raise ValueError(f"Expected {PIXELS_PER_TILE} pixels, got {tile.width * tile.height}")

    output = bytearray()

    for group in range(0, PIXELS_PER_TILE, PIXELS_PER_ROW_GROUP):
        bp1 = 0
        bp2 = 0
        for i in range(group, group + PIXELS_PER_ROW_GROUP):
            v = tile.linear_index(i)
            bp1 = ((bp1 << 1) | (v & 1)) & 0xFF
            bp2 = ((bp2 << 1) | ((v & 2) >> 1)) & 0xFF
        output.append(bp1)
        output.append(bp2)

    return bytes(output)


def decode_2bpp_tile(data: bytes, offset: int = 0) -> list[int]:
    """
    Decode a single 8x8 2bpp SNES tile.

    Args:
        data: Raw tile data bytes
        offset: Starting offset in the data

    Returns:
        List of 64 pixel values (0-3) in linear order

    Raises:
        IndexError: If offset + BYTES_PER_TILE_2BPP exceeds data length
    """
    if offset < 0 or offset + BYTES_PER_TILE_2BPP > len(data):
        raise IndexError(f"Tile data out of bounds at offset {offset}")

    pixels = []
    for group in range(PIXELS_PER_TILE // PIXELS_PER_ROW_GROUP):
        bp1 = data[offset + group * 2]
        bp2 = data[offset + group * 2 + 1]
        for bit in range(PIXELS_PER_ROW_GROUP - 1, -1, -1):
            pixels.append(((bp1 >> bit) & 1) | (((bp2 >> bit) & 1) << 1))

    return pixels


def encode_vram(grid: Grid, bpp: int, pad_tiles: bool = False) -> bytes:
    """
    Encode every tile of a grid.

    Args:
        grid: Canvas whose sides are multiples of 8
        bpp: Bit depth of the accompanying palette
        pad_tiles: Append TILE_PADDING_BYTES zero bytes after each tile

    Returns:
        Encoded tile data

    Raises:
        UnsupportedBitDepthError: If no pixel encoding exists for bpp
    """
    if bpp not in ENCODABLE_BPP:
        raise UnsupportedBitDepthError(bpp, "pixel encoding")

    output = bytearray()
    for tile in iter_tiles(grid):
        output.extend(encode_2bpp_tile(tile))
        if pad_tiles:
            output.extend(bytes(TILE_PADDING_BYTES))

    return bytes(output)


def encode(grid: Grid, palette: IndexedPalette,
           pad_tiles: bool = False) -> tuple[bytes, bytes]:
    """
    Encode a canvas for the SNES video chip.

    Returns:
        (vram_data, palette_data). Colors are stored little-endian
        BGR555, two bytes each, in palette order.

    Raises:
        UnsupportedBitDepthError: If the palette depth has no pixel encoding
    """
    vram = encode_vram(grid, palette.bpp, pad_tiles=pad_tiles)
    return vram, palette.to_bytes()
