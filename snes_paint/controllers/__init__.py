"""
Controllers package for SNES Paint
Provides the controller the UI layer drives
"""

from .canvas_controller import CanvasController

__all__ = ["CanvasController"]
