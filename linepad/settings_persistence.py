"""Per-document settings that survive between editing sessions.

Settings live in a JSON file in the user's config directory, indexed by the
absolute path of the document. Today that is the last cursor location, so
reopening a file puts the cursor back where it was.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import EditorConstants
from .location import Location

logger = logging.getLogger(__name__)

CURSOR_LINE = "cursor_line"
CURSOR_GRAPHEME = "cursor_grapheme"


class SettingsPersistence:
    """Reads and writes the per-document settings file.

    Failures are logged and otherwise ignored: losing a remembered cursor
    position must never get in the way of editing.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = Path(config_dir or platformdirs.user_config_dir(EditorConstants.NAME))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        if self._settings_cache is not None:
            return self._settings_cache
        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache
        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load settings from %s: %s", self._settings_file, e)
            data = {}
        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        temp_file = self._settings_file.with_suffix(EditorConstants.ATOMIC_SAVE_SUFFIX)
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self._settings_file, e)
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                logger.debug("Could not remove %s", temp_file)
            return False
        self._settings_cache = settings
        return True

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        if document_path is None:
            return {}
        key = os.path.abspath(document_path)
        return dict(self._load_all_settings().get(key, {}))

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Merge ``settings`` into the stored settings for a document."""
        if document_path is None:
            return False
        key = os.path.abspath(document_path)
        all_settings = dict(self._load_all_settings())
        merged = dict(all_settings.get(key, {}))
        merged.update(settings)
        all_settings[key] = merged
        return self._save_all_settings(all_settings)

    def load_location(self, document_path: Optional[str]) -> Optional[Location]:
        settings = self.load_settings(document_path)
        line_index = settings.get(CURSOR_LINE)
        grapheme_index = settings.get(CURSOR_GRAPHEME)
        if not isinstance(line_index, int) or not isinstance(grapheme_index, int):
            return None
        return Location(line_index, grapheme_index)

    def save_location(self, document_path: Optional[str], location: Location) -> bool:
        return self.save_settings(document_path, {
            CURSOR_LINE: location.line_index,
            CURSOR_GRAPHEME: location.grapheme_index,
        })
