"""
Shared pytest fixtures and configuration for SNES Paint tests
"""

import os

import pytest

from snes_paint.grid import PixelGrid
from snes_paint.palette import IndexedPalette
from snes_paint.settings_manager import SettingsManager

# Qt has to run headless before any QObject is created
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("QT_LOGGING_RULES", "*.debug=false")


@pytest.fixture
def settings(tmp_path):
    """Settings stored in a temporary directory"""
    return SettingsManager(settings_dir=tmp_path / "settings")


@pytest.fixture
def grid_8():
    """Blank 8x8 canvas"""
    return PixelGrid(8)


@pytest.fixture
def patterned_grid_16():
    """16x16 canvas where each cell holds (x + 2 * y) % 4"""
    grid = PixelGrid(16)
    for y in range(16):
        for x in range(16):
            grid.set(x, y, (x + 2 * y) % 4)
    return grid


@pytest.fixture
def palette_2bpp():
    """Default 4-color palette"""
    return IndexedPalette()


@pytest.fixture
def export_dir(tmp_path):
    """Directory for exported binaries"""
    path = tmp_path / "export"
    path.mkdir()
    return path
