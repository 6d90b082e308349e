#!/usr/bin/env python3
"""
Controller for the paint canvas
Owns the grid, palette, cursor and selected color, and hands encoding
off to the tile encoder when the canvas is exported
"""

import os
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
from PIL import Image
from PyQt6.QtCore import QObject, pyqtSignal

from ..constants import (
    DEFAULT_BPP,
    DEFAULT_CANVAS_SIZE,
    DEFAULT_PIXEL_WIDTH,
    PALETTE_EXTENSION,
    STATUS_MESSAGE_TIMEOUT,
    VRAM_EXTENSION,
)
from ..exceptions import (
    FileOperationError,
    InvalidCanvasSizeError,
    PaletteError,
    UnsupportedBitDepthError,
    ValidationError,
    format_error_message,
)
from ..grid import PixelGrid
from ..logging_config import get_logger
from ..palette import Color, IndexedPalette
from ..security_utils import SecurityError, validate_output_path
from ..settings_manager import SettingsManager, get_settings
from ..tile_utils import encode

logger = get_logger("controller")


class CanvasController(QObject):
    """Controller coordinating canvas edits and export"""

    # Signals
    canvasChanged = pyqtSignal()
    paletteChanged = pyqtSignal()
    cursorMoved = pyqtSignal(int, int)  # x, y
    colorSelected = pyqtSignal(int)  # palette index
    statusMessage = pyqtSignal(str, int)  # message, timeout
    error = pyqtSignal(str)

    def __init__(self, settings: Optional[SettingsManager] = None, parent=None):
        super().__init__(parent)

        self.settings = settings if settings is not None else get_settings()

        self.grid = self._create_grid()
        self.palette = self._create_palette()
        self.cursor = (0, 0)
        self.color_idx = 0
        self.pixel_width = self._read_pixel_width()

    def _read_pixel_width(self) -> int:
        width = self.settings.get("view.pixel_width", DEFAULT_PIXEL_WIDTH)
        try:
            width = int(width)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring configured pixel width: {width!r}")
            return DEFAULT_PIXEL_WIDTH
        if width < 1:
            logger.warning(f"Ignoring configured pixel width: {width}")
            return DEFAULT_PIXEL_WIDTH
        return width

    def _create_grid(self) -> PixelGrid:
        size = self.settings.get("canvas.default_size", DEFAULT_CANVAS_SIZE)
        try:
            return PixelGrid(size)
        except InvalidCanvasSizeError as e:
            logger.warning(f"Ignoring configured canvas size: {e}")
            return PixelGrid(DEFAULT_CANVAS_SIZE)

    def _create_palette(self) -> IndexedPalette:
        palette = IndexedPalette()
        bpp = self.settings.get("palette.default_bpp", DEFAULT_BPP)
        try:
            palette.set_bpp(bpp)
        except UnsupportedBitDepthError as e:
            logger.warning(f"Ignoring configured bit depth: {e}")
        return palette

    def _report(self, operation: str, error: Exception) -> None:
        message = format_error_message(operation, error)
        logger.error(message)
        self.error.emit(message)

    # Canvas operations
    def new_canvas(self, size: Optional[int] = None):
        """Start over with a blank canvas and the default palette"""
        if size is not None:
            try:
                self.grid = PixelGrid(size)
            except InvalidCanvasSizeError as e:
                self._report("create canvas", e)
                return False
        else:
            self.grid = self._create_grid()

        self.palette = self._create_palette()
        self.cursor = (0, 0)
        self.color_idx = 0

        self.canvasChanged.emit()
        self.paletteChanged.emit()
        self.colorSelected.emit(self.color_idx)
        logger.info(f"Created new {self.grid.width}x{self.grid.height} canvas")
        return True

    def load_image(self, file_path: Union[str, Path]) -> bool:
        """
        Replace the canvas and palette with an indexed image.

        The palette keeps its current bit depth and takes its colors from
        the image's palette. Returns False and emits error on failure.
        """
        try:
            with Image.open(file_path) as image:
                grid = PixelGrid.from_pil_image(image)
                palette_data = image.getpalette()
        except (OSError, ValidationError) as e:
            self._report("load image", e)
            return False

        bpp = self.palette.bpp
        self.grid = grid
        self.palette = (
            IndexedPalette.from_flat_list(palette_data, bpp) if palette_data
            else IndexedPalette(bpp)
        )
        self.cursor = (0, 0)
        if self.color_idx >= self.palette.color_count:
            self.color_idx = 0

        self.canvasChanged.emit()
        self.paletteChanged.emit()
        self.cursorMoved.emit(*self.cursor)
        logger.info(f"Loaded {grid.width}x{grid.height} image from {file_path}")
        return True

    def set_size(self, width: int, height: int) -> bool:
        """
        Resize the canvas, keeping the overlapping top-left pixels.

        Returns False and emits error when the size is rejected; the
        canvas is unchanged in that case.
        """
        old_size = (self.grid.width, self.grid.height)
        try:
            self.grid.resize(width, height)
        except InvalidCanvasSizeError as e:
            self._report("resize canvas", e)
            return False

        if (width, height) == old_size:
            return True

        x, y = self.cursor
        self.cursor = (min(x, width - 1), min(y, height - 1))

        self.canvasChanged.emit()
        self.cursorMoved.emit(*self.cursor)
        self.statusMessage.emit(f"Canvas resized to {width}x{height}", STATUS_MESSAGE_TIMEOUT)
        logger.info(f"Canvas resized {old_size[0]}x{old_size[1]} -> {width}x{height}")
        return True

    def apply_size_text(self, width_text: str, height_text: str) -> bool:
        """Resize from the contents of the size text fields"""
        try:
            width = int(width_text.strip(), 10)
            height = int(height_text.strip(), 10)
        except ValueError:
            self._report(
                "resize canvas",
                ValidationError(f"Canvas size must be whole numbers, got {width_text!r} x {height_text!r}"),
            )
            return False

        return self.set_size(width, height)

    def paint(self, x: int, y: int) -> bool:
        """
        Paint one cell with the selected color.

        Points outside the canvas are ignored. Returns True if the cell
        changed.
        """
        if not self.grid.in_bounds(x, y):
            return False

        if self.grid.get(x, y) == self.color_idx:
            return False

        self.grid.set(x, y, self.color_idx)
        self.canvasChanged.emit()
        return True

    def paint_at_cursor(self) -> bool:
        return self.paint(*self.cursor)

    def get_pixel_color(self, x: int, y: int) -> Color:
        """Color shown at (x, y) under the current palette"""
        return self.palette.get_color(self.grid.get(x, y))

    # Cursor operations
    def move_cursor(self, dx: int, dy: int):
        """Move the cursor, wrapping around the canvas edges"""
        x, y = self.cursor
        self.cursor = ((x + dx) % self.grid.width, (y + dy) % self.grid.height)
        self.cursorMoved.emit(*self.cursor)

    def cursor_left(self):
        self.move_cursor(-1, 0)

    def cursor_right(self):
        self.move_cursor(1, 0)

    def cursor_up(self):
        self.move_cursor(0, -1)

    def cursor_down(self):
        self.move_cursor(0, 1)

    # Palette operations
    def select_color(self, idx: int):
        """Select the drawing color by palette index"""
        self.palette.get_color(idx)
        self.color_idx = idx
        self.colorSelected.emit(idx)

    def pick_swatch(self, slot: int) -> bool:
        """Select a swatch clicked in the palette column, ignoring misses"""
        if not 0 <= slot < self.palette.color_count:
            return False
        self.select_color(slot)
        return True

    def next_color(self):
        self.select_color((self.color_idx + 1) % self.palette.color_count)

    def previous_color(self):
        self.select_color((self.color_idx - 1) % self.palette.color_count)

    def selected_color(self) -> Color:
        return self.palette.get_color(self.color_idx)

    def set_palette_color(self, idx: int, color: Sequence[int]) -> bool:
        """Overwrite one palette slot from the color picker"""
        try:
            self.palette.set_color(idx, color)
        except PaletteError as e:
            self._report("set color", e)
            return False

        self.paletteChanged.emit()
        return True

    def set_bpp(self, bpp: int) -> bool:
        """
        Change the palette bit depth.

        Returns False and emits error for unsupported depths.
        """
        old_bpp = self.palette.bpp
        try:
            self.palette.set_bpp(bpp)
        except UnsupportedBitDepthError as e:
            self._report("change bit depth", e)
            return False

        if self.color_idx >= self.palette.color_count:
            self.color_idx = 0
            self.colorSelected.emit(self.color_idx)

        self.paletteChanged.emit()
        self.statusMessage.emit(f"Palette set to {self.palette}", STATUS_MESSAGE_TIMEOUT)
        logger.info(f"Palette depth {old_bpp} -> {bpp} bpp")
        return True

    # Export operations
    def count_cells_outside_palette(self) -> int:
        """Number of cells whose index has no color in the current palette"""
        return int(np.count_nonzero(self.grid.data.astype(np.uint16) >= self.palette.color_count))

    def serialize(self, pad_tiles: Optional[bool] = None) -> tuple[bytes, bytes]:
        """
        Encode the canvas.

        Args:
            pad_tiles: Pad each tile; None uses the export.pad_tiles setting

        Returns:
            (vram_data, palette_data)

        Raises:
            UnsupportedBitDepthError: After reporting it, if the palette
                depth has no pixel encoding
        """
        stray = self.count_cells_outside_palette()
        if stray:
            logger.warning(
                f"{stray} cells use indices outside the {self.palette.color_count}-color palette"
            )

        if pad_tiles is None:
            pad_tiles = bool(self.settings.get("export.pad_tiles", False))
        try:
            return encode(self.grid, self.palette, pad_tiles=pad_tiles)
        except UnsupportedBitDepthError as e:
            self._report("encode canvas", e)
            raise

    def export_to_files(self, vram_path: Union[str, Path],
                        palette_path: Union[str, Path],
                        pad_tiles: Optional[bool] = None) -> bool:
        """
        Encode the canvas and write both buffers verbatim.

        Returns True on success; failures are reported through error.
        """
        try:
            vram, palette_data = self.serialize(pad_tiles)
        except UnsupportedBitDepthError:
            return False

        try:
            vram_out = validate_output_path(vram_path)
            palette_out = validate_output_path(palette_path)
        except SecurityError as e:
            self._report("export canvas", e)
            return False

        try:
            self._write_export([(vram_out, vram), (palette_out, palette_data)])
        except FileOperationError as e:
            self._report("export canvas", e)
            return False

        self.settings.update_last_export(vram_out, palette_out)
        self.statusMessage.emit(
            f"Exported {len(vram)} VRAM bytes and {len(palette_data)} palette bytes",
            STATUS_MESSAGE_TIMEOUT,
        )
        logger.info(f"Exported canvas to {vram_out} and {palette_out}")
        return True

    def _write_export(self, outputs: list[tuple[str, bytes]]) -> None:
        """
        Write every (path, data) pair, or none of them.

        Each buffer goes to a temporary file first; the files are moved
        into place only once all writes have succeeded.

        Raises:
            FileOperationError: If any write or move fails
        """
        staged = []
        placed = []
        current = None
        try:
            for path, data in outputs:
                current = Path(path)
                temp_path = Path(f"{path}.tmp")
                staged.append(temp_path)
                temp_path.write_bytes(data)
            for temp_path, (path, _) in zip(staged, outputs):
                current = Path(path)
                os.replace(temp_path, path)
                placed.append(current)
        except OSError as e:
            for leftover in staged + placed:
                leftover.unlink(missing_ok=True)
            raise FileOperationError(format_error_message(f"writing {current.name}", e)) from e

    def export_to_base(self, base_path: Union[str, Path],
                       pad_tiles: Optional[bool] = None) -> bool:
        """Export next to base_path using the .vram and .pal extensions"""
        base = Path(base_path)
        return self.export_to_files(
            base.with_suffix(VRAM_EXTENSION), base.with_suffix(PALETTE_EXTENSION), pad_tiles
        )
