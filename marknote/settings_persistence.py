"""Per-note settings that survive between editing sessions.

Settings live in a JSON file in the user's config directory and are keyed
by the absolute path of the note. Today the only setting is the cursor
offset, so reopening a note puts the cursor back where it was.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

logger = logging.getLogger(__name__)


class SettingsPersistence:
    """Reads and writes the per-note settings file."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir) if config_dir else Path(platformdirs.user_config_dir("marknote"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        """Load the whole settings file, caching the result.

        A missing, unreadable or malformed file yields an empty mapping.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        self._settings_cache = {}
        if not self._settings_file.exists():
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return self._settings_cache

        if isinstance(data, dict):
            self._settings_cache = data
        else:
            logger.warning("Settings file is not a JSON object, ignoring")
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        temp_file = self._settings_file.with_suffix('.tmp')
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            if temp_file.exists():
                try:
                    temp_file.unlink()
                except OSError as unlink_error:
                    logger.debug(f"Could not remove {temp_file}: {unlink_error}")
            return False

        self._settings_cache = settings
        return True

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Return a copy of the settings stored for a note, or {}."""
        if document_path is None:
            return {}
        abs_path = os.path.abspath(document_path)
        doc_settings = self._load_all_settings().get(abs_path, {})
        if not isinstance(doc_settings, dict):
            logger.warning(f"Settings for {abs_path} are not an object, ignoring")
            return {}
        return doc_settings.copy()

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Merge settings for a note into the file.

        Returns:
            True if the file was written.
        """
        if document_path is None:
            return False
        abs_path = os.path.abspath(document_path)
        all_settings = dict(self._load_all_settings())
        merged = dict(all_settings.get(abs_path) or {})
        merged.update(settings)
        all_settings[abs_path] = merged
        return self._save_all_settings(all_settings)

    def validate_setting(self, key: str, value: Any) -> bool:
        if value is None:
            return True
        if key == 'cursor_offset':
            # bool is an int subclass
            return isinstance(value, int) and not isinstance(value, bool) and value >= 0
        # Unknown settings pass so older versions can read newer files
        return True

    def clear_cache(self) -> None:
        self._settings_cache = None


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the process-wide SettingsPersistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
