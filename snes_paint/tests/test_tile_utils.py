#!/usr/bin/env python3
"""
Tests for tile_utils.py
Covers 2bpp bitplane packing, tile ordering, padding and unsupported depths
"""

import pytest

from snes_paint.constants import BYTES_PER_TILE_2BPP, TILE_PADDING_BYTES
from snes_paint.exceptions import UnsupportedBitDepthError
from snes_paint.grid import PixelGrid
from snes_paint.palette import IndexedPalette
from snes_paint.tile_utils import (decode_2bpp_tile, encode, encode_2bpp_tile,
                                   encode_vram, iter_tiles)


def tile_filled(value):
    grid = PixelGrid(8)
    grid.data[:, :] = value
    return grid


class TestTileEncoding:
    """Test single-tile 2bpp encoding"""

    def test_all_zero_tile(self):
        """A blank tile is 16 zero bytes"""
        encoded = encode_2bpp_tile(tile_filled(0))

        assert encoded == bytes(16)

    def test_all_three_tile(self):
        """Index 3 sets both planes: every pair is FF FF"""
        encoded = encode_2bpp_tile(tile_filled(3))

        assert encoded == b"\xff" * 16

    def test_index_one_and_two_split_planes(self):
        """Index 1 only fills plane 0, index 2 only plane 1"""
        assert encode_2bpp_tile(tile_filled(1)) == b"\xff\x00" * 8
        assert encode_2bpp_tile(tile_filled(2)) == b"\x00\xff" * 8

    def test_first_pixel_is_most_significant_bit(self):
        """Pixel (0, 0) ends up in bit 7, pixel (7, 0) in bit 0"""
        grid = PixelGrid(8)
        grid.set(0, 0, 1)
        grid.set(7, 0, 2)

        encoded = encode_2bpp_tile(grid)

        assert encoded[0] == 0b10000000
        assert encoded[1] == 0b00000001
        assert encoded[2:] == bytes(14)

    def test_groups_follow_rows(self):
        """Group n holds row n of the tile"""
        grid = PixelGrid(8)
        for x in range(8):
            grid.set(x, 3, 3)

        encoded = encode_2bpp_tile(grid)

        assert encoded[6:8] == b"\xff\xff"
        assert encoded.count(0) == 14

    def test_mixed_row_pattern(self):
        """Row 0,1,2,3,0,1,2,3 packs to 0x55 / 0x33"""
        grid = PixelGrid(8)
        for x in range(8):
            grid.set(x, 0, x % 4)

        encoded = encode_2bpp_tile(grid)

        assert encoded[0] == 0b01010101
        assert encoded[1] == 0b00110011

    def test_high_bits_masked(self):
        """Only the low two bits of an index are encoded"""
        assert encode_2bpp_tile(tile_filled(7)) == encode_2bpp_tile(tile_filled(3))
        assert encode_2bpp_tile(tile_filled(4)) == bytes(16)

    def test_wrong_size_tile(self):
        """Tiles must hold 64 pixels"""
        grid = PixelGrid(16)
        with pytest.raises(ValueError, match="Expected 64 pixels, got 256"):
            encode_2bpp_tile(grid)

    def test_decode_matches_encoded_tile(self, patterned_grid_16):
        """Decoding a tile gives back its pixels in linear order"""
        tile = patterned_grid_16.subview(range(8, 16), range(0, 8))

        decoded = decode_2bpp_tile(encode_2bpp_tile(tile))

        assert decoded == [tile.linear_index(i) for i in range(64)]

    def test_decode_bounds(self):
        with pytest.raises(IndexError, match="Tile data out of bounds at offset 4"):
            decode_2bpp_tile(bytes(16), 4)


class TestTileOrder:
    """Test multi-tile iteration"""

    def test_tile_columns_first(self):
        """Tiles go down a tile-column before moving right"""
        grid = PixelGrid(16)
        origins = [(t.x_range.start, t.y_range.start) for t in iter_tiles(grid)]

        assert origins == [(0, 0), (0, 8), (8, 0), (8, 8)]

    def test_tile_count(self):
        assert len(list(iter_tiles(PixelGrid(64)))) == 64

    def test_vram_follows_tile_order(self):
        """Each tile's bytes appear in tile-column order"""
        grid = PixelGrid(16)
        grid.subview(range(0, 8), range(8, 16)).set(0, 0, 1)  # bottom-left tile
        grid.subview(range(8, 16), range(0, 8)).set(0, 0, 2)  # top-right tile

        vram = encode_vram(grid, 2)

        assert len(vram) == 4 * BYTES_PER_TILE_2BPP
        assert vram[0:16] == bytes(16)
        assert vram[16:18] == b"\x80\x00"
        assert vram[32:34] == b"\x00\x80"
        assert vram[48:64] == bytes(16)


class TestVramEncoding:
    """Test full canvas encoding"""

    def test_blank_8x8_is_16_bytes(self, grid_8):
        """An 8x8 all-zero canvas encodes to exactly 16 zero bytes"""
        vram = encode_vram(grid_8, 2)

        assert vram == bytes(16)

    @pytest.mark.parametrize("size", [8, 16, 32, 64])
    def test_vram_size(self, size):
        tiles = (size // 8) ** 2
        assert len(encode_vram(PixelGrid(size), 2)) == tiles * BYTES_PER_TILE_2BPP

    def test_padding(self):
        """With padding every tile is followed by 16 zero bytes"""
        grid = PixelGrid(16)
        grid.data[:, :] = 3

        vram = encode_vram(grid, 2, pad_tiles=True)

        stride = BYTES_PER_TILE_2BPP + TILE_PADDING_BYTES
        assert len(vram) == 4 * stride
        for tile in range(4):
            chunk = vram[tile * stride:(tile + 1) * stride]
            assert chunk[:16] == b"\xff" * 16
            assert chunk[16:] == bytes(TILE_PADDING_BYTES)

    @pytest.mark.parametrize("bpp", [1, 3, 4, 8])
    def test_unimplemented_depths_fail(self, grid_8, bpp):
        """Depths without a pixel encoding raise instead of emitting bytes"""
        with pytest.raises(UnsupportedBitDepthError) as exc_info:
            encode_vram(grid_8, bpp)

        assert exc_info.value.bpp == bpp

    @pytest.mark.parametrize("bpp", [0, 5, 16])
    def test_unknown_depths_fail(self, grid_8, bpp):
        with pytest.raises(UnsupportedBitDepthError):
            encode_vram(grid_8, bpp)

    def test_grid_not_whole_tiles(self, grid_8):
        view = grid_8.subview(range(0, 4), range(0, 8))
        with pytest.raises(ValueError):
            list(iter_tiles(view))


class TestEncode:
    """Test the combined encoder"""

    def test_encode_returns_both_buffers(self, grid_8, palette_2bpp):
        vram, palette_data = encode(grid_8, palette_2bpp)

        assert vram == bytes(16)
        assert palette_data == palette_2bpp.to_bytes()
        assert len(palette_data) == 8

    def test_encode_all_threes(self, palette_2bpp):
        grid = tile_filled(3)

        vram, _ = encode(grid, palette_2bpp)

        assert [vram[i:i + 2] for i in range(0, 16, 2)] == [b"\xff\xff"] * 8

    @pytest.mark.parametrize("bpp", [4, 8])
    def test_encode_rejects_palette_depth(self, grid_8, bpp):
        """The palette's depth selects the pixel encoding"""
        with pytest.raises(UnsupportedBitDepthError):
            encode(grid_8, IndexedPalette(bpp))

    def test_encode_is_deterministic(self, patterned_grid_16, palette_2bpp):
        first = encode(patterned_grid_16, palette_2bpp)
        second = encode(patterned_grid_16, palette_2bpp)

        assert first == second
        assert isinstance(first[0], bytes)
        assert isinstance(first[1], bytes)
