#!/usr/bin/env python3
"""
Custom exceptions and error handling utilities for SNES Paint.

This module defines domain-specific exceptions and provides utilities
for consistent error reporting between the editor core and the UI layer.
"""


class SnesPaintError(Exception):
    """Base exception for all SNES Paint errors"""
    pass


class FileOperationError(SnesPaintError):
    """Raised when export file operations fail"""
    pass


class PaletteError(SnesPaintError):
    """Raised when palette operations fail"""
    pass


class ValidationError(SnesPaintError):
    """Raised when input validation fails"""
    pass


class InvalidCanvasSizeError(ValidationError):
    """Raised when a canvas is resized to a size outside the supported set"""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        super().__init__(f"Invalid canvas size {width}x{height}")


class UnsupportedBitDepthError(ValidationError):
    """Raised when a bit depth is not supported for the requested operation"""

    def __init__(self, bpp: int, operation: str = "palette"):
        self.bpp = bpp
        self.operation = operation
        super().__init__(f"Unsupported bit depth for {operation}: {bpp} bpp")


class IndexOutOfRangeError(SnesPaintError, IndexError):
    """Raised when a grid cell or palette slot is addressed out of bounds"""
    pass


def format_error_message(operation: str, error: Exception) -> str:
    """
    Format an error message for user display.

    Args:
        operation: Description of the operation that failed
        error: The exception that was raised

    Returns:
        User-friendly error message
    """
    if isinstance(error, FileNotFoundError):
        return f"File not found during {operation}"
    elif isinstance(error, PermissionError):
        return f"Permission denied during {operation}"
    elif isinstance(error, OSError) and error.errno == 28:  # No space left
        return f"Disk full - cannot complete {operation}"
    elif isinstance(error, FileOperationError):
        return f"Cannot {operation}: {error}"
    elif isinstance(error, InvalidCanvasSizeError):
        return f"Cannot {operation}: {error.width}x{error.height} is not a supported canvas size"
    elif isinstance(error, UnsupportedBitDepthError):
        return f"Cannot {operation}: {error.bpp} bpp is not supported"
    elif isinstance(error, PaletteError):
        return f"Palette error: {error}"
    elif isinstance(error, ValidationError):
        return f"Invalid input: {error}"
    else:
        return f"Failed to {operation}: {error}"
