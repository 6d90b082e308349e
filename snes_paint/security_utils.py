#!/usr/bin/env python3
"""
Security utilities for safe export file writes
"""

import pathlib


class SecurityError(Exception):
    """Raised when a security violation is detected"""
    pass


def _check_path_format(file_path_str):
    """Path format checks for output paths"""
    if any(file_path_str.startswith(scheme) for scheme in ["file:", "http:", "https:", "ftp:", "sftp:"]):
        raise SecurityError(f"URI schemes not allowed: {file_path_str}")

    if file_path_str.startswith("\\\\") or "\\\\?\\" in file_path_str:
        raise SecurityError(f"UNC paths not allowed: {file_path_str}")

    if ".." in pathlib.PurePath(file_path_str).parts or file_path_str.startswith("~"):
        raise SecurityError("Path traversal attempt detected")


def validate_output_path(file_path, base_dir=None):
    """
    Validate an output file path for security issues

    Args:
        file_path: Path to validate
        base_dir: Optional base directory to restrict access to

    Returns:
        Absolute path if valid

    Raises:
        SecurityError: If path is invalid or unsafe
    """
    file_path_str = str(file_path)
    if not file_path_str:
        raise SecurityError("Empty output path")
    _check_path_format(file_path_str)

    try:
        path = pathlib.Path(file_path).resolve()
    except (ValueError, RuntimeError) as e:
        raise SecurityError(f"Invalid path: {e}")

    if base_dir:
        base = pathlib.Path(base_dir).resolve()
        try:
            path.relative_to(base)
        except ValueError:
            raise SecurityError(f"Path outside allowed directory: {path}")

    if not path.parent.exists():
        raise SecurityError(f"Parent directory does not exist: {path.parent}")

    if path.is_dir():
        raise SecurityError(f"Path is a directory: {path}")

    if path.exists():
        protected_patterns = [
            "/etc/", "/usr/", "/bin/", "/sbin/", "/lib/",
            "/System/", "C:\\Windows\\", "C:\\Program Files\\"
        ]
        path_str = str(path).replace("\\", "/")
        for pattern in protected_patterns:
            if pattern in path_str:
                raise SecurityError(f"Cannot overwrite system file: {path}")

    return str(path)
