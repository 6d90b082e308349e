#!/usr/bin/env python3
"""
Pixel grid models
Square canvases of palette indices and rectangular views into them
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np
from PIL import Image

from .constants import CANVAS_SIZES, DEFAULT_CANVAS_SIZE, MAX_COLOR_INDEX, MIN_COLOR_INDEX
from .exceptions import IndexOutOfRangeError, InvalidCanvasSizeError, ValidationError
from .logging_config import get_logger
from .palette import IndexedPalette

RangeLike = Union[range, tuple[int, int]]

logger = get_logger("grid")


def _is_index(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def _as_range(span: RangeLike) -> range:
    if isinstance(span, range):
        if span.step != 1:
            raise ValueError(f"View ranges must be contiguous, got step {span.step}")
        return span
    start, stop = span
    return range(start, stop)


class Grid(ABC):
    """
    Two-dimensional grid of palette indices.

    Coordinates are (x, y): x is the horizontal position, y the vertical.
    """

    @abstractmethod
    def get(self, x: int, y: int) -> int:
        """Palette index stored at (x, y)"""

    @abstractmethod
    def set(self, x: int, y: int, value: int) -> None:
        """Store a palette index at (x, y)"""

    @property
    @abstractmethod
    def width(self) -> int:
        """Number of columns"""

    @property
    @abstractmethod
    def height(self) -> int:
        """Number of rows"""

    def in_bounds(self, x: int, y: int) -> bool:
        """True for integer coordinates inside the grid"""
        return (
            _is_index(x) and _is_index(y)
            and 0 <= x < self.width and 0 <= y < self.height
        )

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise IndexOutOfRangeError(
                f"Pixel ({x}, {y}) out of bounds for {self.width}x{self.height} grid"
            )

    def linear_index(self, i: int) -> int:
        """
        Read the i-th cell in row order, x varying fastest.

        The tile encoder packs bits in exactly this order.
        """
        if not 0 <= i < self.width * self.height:
            raise IndexOutOfRangeError(
                f"Linear index {i} out of range for {self.width}x{self.height} grid"
            )
        return self.get(i % self.width, i // self.width)

    def subview(self, x_range: RangeLike, y_range: RangeLike) -> "GridView":
        """View whose (0, 0) is (x_range.start, y_range.start) of this grid"""
        return GridView(self, x_range, y_range)


class PixelGrid(Grid):
    """
    Square canvas of palette indices.

    Sizes are limited to CANVAS_SIZES. Cells are not checked against any
    palette: an index past the palette's end only shows up when the cell
    is looked up in that palette.
    """

    def __init__(self, size: int = DEFAULT_CANVAS_SIZE):
        if size not in CANVAS_SIZES:
            raise InvalidCanvasSizeError(size, size)
        self._size = size
        self.data = np.zeros((size, size), dtype=np.uint8)

    def __repr__(self) -> str:
        return f"PixelGrid({self._size}x{self._size})"

    @classmethod
    def from_array(cls, array) -> "PixelGrid":
        """Build a grid from a (height, width) array of indices"""
        array = np.asarray(array)
        if array.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {array.shape}")
        height, width = array.shape
        if width != height or width not in CANVAS_SIZES:
            raise InvalidCanvasSizeError(width, height)
        if array.size and (array.min() < MIN_COLOR_INDEX or array.max() > MAX_COLOR_INDEX):
            raise IndexOutOfRangeError(
                f"Cell values must be in {MIN_COLOR_INDEX}-{MAX_COLOR_INDEX}"
            )

        grid = cls(width)
        grid.data[:, :] = array
        return grid

    @classmethod
    def from_pil_image(cls, image: Image.Image) -> "PixelGrid":
        """
        Build a grid from an indexed PIL image.

        Raises:
            ValidationError: If the image is not in mode "P"
            InvalidCanvasSizeError: If the image is not a supported canvas size
        """
        if image.mode != "P":
            raise ValidationError(
                f"Expected indexed image (mode 'P'), got mode '{image.mode}'"
            )
        return cls.from_array(np.array(image, dtype=np.uint8))

    @property
    def width(self) -> int:
        return self._size

    @property
    def height(self) -> int:
        return self._size

    def get(self, x: int, y: int) -> int:
        self._check_bounds(x, y)
        return int(self.data[y, x])

    def set(self, x: int, y: int, value: int) -> None:
        self._check_bounds(x, y)
        if not _is_index(value) or not MIN_COLOR_INDEX <= value <= MAX_COLOR_INDEX:
            raise IndexOutOfRangeError(
                f"Color index {value} outside {MIN_COLOR_INDEX}-{MAX_COLOR_INDEX}"
            )
        self.data[y, x] = value

    def resize(self, new_width: int, new_height: int) -> None:
        """
        Change the canvas size, keeping the overlapping top-left square.

        Cells outside the copied square are 0. The grid is left untouched
        when the size is rejected.

        Raises:
            InvalidCanvasSizeError: If the size is not square or not in CANVAS_SIZES
        """
        if new_width == self.width and new_height == self.height:
            return

        if new_width != new_height or new_width not in CANVAS_SIZES:
            raise InvalidCanvasSizeError(new_width, new_height)

        copy = min(self._size, new_width)
        data = np.zeros((new_height, new_width), dtype=np.uint8)
        data[:copy, :copy] = self.data[:copy, :copy]

        logger.debug(f"Resized canvas {self._size}x{self._size} -> {new_width}x{new_height}")
        self._size = new_width
        self.data = data

    def to_array(self) -> np.ndarray:
        """Copy of the cells as a (height, width) array"""
        return self.data.copy()

    def to_pil_image(self, palette: Optional[IndexedPalette] = None) -> Image.Image:
        """Convert to an indexed PIL image with optional palette"""
        img = Image.frombytes("P", (self.width, self.height), self.data.tobytes())

        if palette is not None:
            img.putpalette(palette.to_flat_list())

        return img


class GridView(Grid):
    """
    Rectangular window into another grid.

    The view owns no cells; reads and writes go to the parent.
    """

    def __init__(self, parent: Grid, x_range: RangeLike, y_range: RangeLike):
        x_range = _as_range(x_range)
        y_range = _as_range(y_range)

        for span, limit, axis in ((x_range, parent.width, "x"), (y_range, parent.height, "y")):
            if span.start < 0 or span.stop > limit or span.start > span.stop:
                raise IndexOutOfRangeError(
                    f"View {axis} range {span.start}..{span.stop} outside 0..{limit}"
                )

        self.parent = parent
        self.x_range = x_range
        self.y_range = y_range

    def __repr__(self) -> str:
        return (
            f"GridView(x={self.x_range.start}..{self.x_range.stop}, "
            f"y={self.y_range.start}..{self.y_range.stop})"
        )

    @property
    def width(self) -> int:
        return len(self.x_range)

    @property
    def height(self) -> int:
        return len(self.y_range)

    def get(self, x: int, y: int) -> int:
        self._check_bounds(x, y)
        return self.parent.get(self.x_range.start + x, self.y_range.start + y)

    def set(self, x: int, y: int, value: int) -> None:
        self._check_bounds(x, y)
        self.parent.set(self.x_range.start + x, self.y_range.start + y, value)
