#!/usr/bin/env python3
"""
Constants for SNES Paint
All tile, canvas and color format numbers in one place
"""

# SNES Tile specifications
TILE_WIDTH = 8  # pixels
TILE_HEIGHT = 8  # pixels
PIXELS_PER_TILE = 64  # 8x8
PIXELS_PER_ROW_GROUP = 8  # pixels packed into one byte per bitplane
BYTES_PER_TILE_2BPP = 16  # 2 bitplanes * 8 rows
TILE_PADDING_BYTES = 16  # zero bytes appended per tile when padding is on

# Canvas sizes (square, width == height)
CANVAS_SIZES = (8, 16, 32, 64)
DEFAULT_CANVAS_SIZE = 8

# Bit depths
SUPPORTED_BPP = (1, 2, 3, 4, 8)
ENCODABLE_BPP = (2,)  # pixel encodings implemented by tile_utils
DEFAULT_BPP = 2
MAX_COLOR_INDEX = 255  # largest index a cell can hold (8bpp)
MIN_COLOR_INDEX = 0

# Palette specifications
BYTES_PER_COLOR = 2  # BGR555 format

# Color conversion
BGR555_CHANNEL_SHIFT = 3  # 8-bit channel -> top 5 bits

# BGR555 color masks
BGR555_BLUE_MASK = 0x7C00   # Bits 14-10 for blue
BGR555_GREEN_MASK = 0x03E0  # Bits 9-5 for green
BGR555_RED_MASK = 0x001F    # Bits 4-0 for red

# Bit shifts for BGR555
BGR555_BLUE_SHIFT = 10
BGR555_GREEN_SHIFT = 5
BGR555_RED_SHIFT = 0

# Default colors
COLOR_BLACK = (0, 0, 0)
COLOR_WHITE = (255, 255, 255)
DEFAULT_PALETTE_2BPP = [
    COLOR_WHITE,  # 0 - background
    COLOR_BLACK,  # 1
    (0x71, 0x01, 0x93),  # 2 - purple
    (0x01, 0x47, 0xAB),  # 3 - blue
]

# Editor view
DEFAULT_PIXEL_WIDTH = 20  # on-screen size of one canvas cell
STATUS_MESSAGE_TIMEOUT = 3000  # milliseconds

# Export file naming
VRAM_EXTENSION = ".vram"
PALETTE_EXTENSION = ".pal"
