"""Persistent user defaults for the page layout.

Settings are stored as JSON in the OS-appropriate user config directory and
survive between runs. Command-line flags take precedence over them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

from .constants import PaginatorConstants
from .model import PageLayout

logger = logging.getLogger(__name__)


class SettingsKeys:
    """Keys stored in the settings file."""

    MAX_CHARS_PER_LINE = "max_chars_per_line"
    MAX_LINES_PER_PAGE = "max_lines_per_page"
    LEGACY_OVERFLOW = "legacy_overflow"


class SettingsStore:
    """Loads and saves user settings from a JSON file.

    Args:
        config_dir: Directory holding ``settings.json``. Defaults to the
            platform's per-user config directory.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir("pageflow", "pageflow"))
        self._config_dir = Path(config_dir)
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Any]] = None

    @property
    def settings_file(self) -> Path:
        return self._settings_file

    def load(self) -> Dict[str, Any]:
        """Load all settings from disk.

        Returns:
            A copy of the stored settings. Empty if the file doesn't exist
            or can't be read.
        """
        if self._settings_cache is None:
            self._settings_cache = self._read_file()
        return dict(self._settings_cache)

    def _read_file(self) -> Dict[str, Any]:
        if not self._settings_file.exists():
            return {}

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            return {}
        return data

    def save(self, settings: Dict[str, Any]) -> bool:
        """Save settings to disk atomically, replacing what was stored.

        Returns:
            True if save was successful, False otherwise.
        """
        temp_file = self._settings_file.with_suffix(PaginatorConstants.ATOMIC_SAVE_SUFFIX)
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                logger.warning(f"Could not remove temporary file {temp_file}")
            return False

        self._settings_cache = dict(settings)
        return True

    def validate_setting(self, key: str, value: Any) -> bool:
        """Return whether ``value`` is acceptable for setting ``key``.

        Unknown keys are accepted so newer settings files still load.
        """
        if key in (SettingsKeys.MAX_CHARS_PER_LINE, SettingsKeys.MAX_LINES_PER_PAGE):
            if isinstance(value, bool) or not isinstance(value, int):
                return False
            return 1 <= value <= PaginatorConstants.MAX_LAYOUT_LIMIT

        if key == SettingsKeys.LEGACY_OVERFLOW:
            return isinstance(value, bool)

        return True

    def load_layout(self) -> PageLayout:
        """Build a layout from the stored settings, using defaults for the rest."""
        settings = self.load()
        values: Dict[str, Any] = {}
        for key in (SettingsKeys.MAX_CHARS_PER_LINE,
                    SettingsKeys.MAX_LINES_PER_PAGE,
                    SettingsKeys.LEGACY_OVERFLOW):
            if key not in settings:
                continue
            if self.validate_setting(key, settings[key]):
                values[key] = settings[key]
            else:
                logger.warning(f"Ignoring invalid setting {key}={settings[key]!r}")
        return PageLayout(**values)

    def _layout_settings(self, layout: PageLayout) -> Dict[str, Any]:
        return {
            SettingsKeys.MAX_CHARS_PER_LINE: layout.max_chars_per_line,
            SettingsKeys.MAX_LINES_PER_PAGE: layout.max_lines_per_page,
            SettingsKeys.LEGACY_OVERFLOW: layout.legacy_overflow,
        }

    def can_store_layout(self, layout: PageLayout) -> bool:
        """Return whether ``layout`` would load back unchanged once saved."""
        return all(self.validate_setting(key, value)
                   for key, value in self._layout_settings(layout).items())

    def save_layout(self, layout: PageLayout) -> bool:
        """Store ``layout`` as the default, keeping any other settings.

        Returns:
            True if saved. False if the save failed or the layout is outside
            the range ``load_layout`` accepts.
        """
        if not self.can_store_layout(layout):
            logger.warning(f"Not saving layout {layout}: limits must be between 1 "
                           f"and {PaginatorConstants.MAX_LAYOUT_LIMIT}")
            return False
        settings = self.load()
        settings.update(self._layout_settings(layout))
        return self.save(settings)

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_store: Optional[SettingsStore] = None


def get_settings_store() -> SettingsStore:
    """Get the global settings store instance."""
    global _store
    if _store is None:
        _store = SettingsStore()
    return _store
