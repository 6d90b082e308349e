"""
Settings manager for SNES Paint
Handles saving and loading user preferences
"""

import json
import os
from pathlib import Path
from typing import Any, Optional, Union

from .constants import DEFAULT_BPP, DEFAULT_CANVAS_SIZE, DEFAULT_PIXEL_WIDTH
from .logging_config import get_logger

logger = get_logger("settings")


class SettingsManager:
    """Manages application settings with persistence"""

    def __init__(self, app_name="snes_paint",
                 settings_dir: Optional[Union[str, Path]] = None):
        self.app_name = app_name
        self.settings_file = self._get_settings_path(settings_dir)
        self.settings = self._load_settings()

    def _get_settings_path(self, settings_dir=None) -> Path:
        """Get the appropriate settings directory for the platform"""
        if settings_dir is not None:
            settings_dir = Path(settings_dir)
        elif os.name == "nt":  # Windows
            base = Path(os.environ.get("APPDATA", os.path.expanduser("~")))
            settings_dir = base / self.app_name
        else:  # Linux/Mac
            base = Path(os.path.expanduser("~"))
            settings_dir = base / f".{self.app_name}"

        settings_dir.mkdir(parents=True, exist_ok=True)
        return settings_dir / "settings.json"

    def _load_settings(self) -> dict[str, Any]:
        """Load settings from file"""
        if self.settings_file.exists():
            try:
                with open(self.settings_file) as f:
                    settings = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Ignoring unreadable settings file {self.settings_file}: {e}")
                return self._get_default_settings()
            if not isinstance(settings, dict):
                logger.warning(
                    f"Ignoring settings file {self.settings_file}: "
                    f"expected an object, got {type(settings).__name__}"
                )
                return self._get_default_settings()
            return settings
        return self._get_default_settings()

    def _get_default_settings(self) -> dict[str, Any]:
        """Get default settings"""
        return {
            "canvas": {"default_size": DEFAULT_CANVAS_SIZE},
            "palette": {"default_bpp": DEFAULT_BPP},
            "export": {"pad_tiles": False, "last_dir": ""},
            "view": {"pixel_width": DEFAULT_PIXEL_WIDTH},
            "recent_files": {"vram": [], "palette": []},
            "preferences": {"max_recent_files": 10},
        }

    def save_settings(self):
        """Save current settings to file"""
        try:
            with open(self.settings_file, "w") as f:
                json.dump(self.settings, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not save settings to {self.settings_file}: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value"""
        keys = key.split(".")
        value = self.settings
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any):
        """Set a setting value"""
        keys = key.split(".")
        target = self.settings
        for k in keys[:-1]:
            if not isinstance(target.get(k), dict):
                target[k] = {}
            target = target[k]
        target[keys[-1]] = value
        self.save_settings()

    def add_recent_file(self, file_type: str, file_path: str):
        """Add a file to recent files list"""
        # Paths are stored as strings for JSON serialization
        file_path = str(file_path)

        if not isinstance(self.settings.get("recent_files"), dict):
            self.settings["recent_files"] = {}
        recent_files = self.settings["recent_files"]

        recent_list = [p for p in self.get_recent_files(file_type) if p != file_path]
        recent_list.insert(0, file_path)

        max_recent = self.get("preferences.max_recent_files", 10)
        if not isinstance(max_recent, int) or isinstance(max_recent, bool) or max_recent < 1:
            max_recent = 10
        recent_files[file_type] = recent_list[:max_recent]

        self.save_settings()

    def get_recent_files(self, file_type: str) -> list:
        """Get recent files for a specific type"""
        recent = self.get(f"recent_files.{file_type}", [])
        return list(recent) if isinstance(recent, list) else []

    def update_last_export(self, vram_path: str, palette_path: str):
        """Remember the files of the latest export"""
        self.add_recent_file("vram", vram_path)
        self.add_recent_file("palette", palette_path)
        self.set("export.last_dir", str(Path(vram_path).parent))

    def reset_settings(self):
        """Reset all settings to defaults"""
        self.settings = self._get_default_settings()
        self.save_settings()


# Singleton instance
_settings_instance = None


def get_settings() -> SettingsManager:
    """Get the singleton settings instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = SettingsManager()
    return _settings_instance
