"""Per-page reading state that survives restarts.

The reading position and contents panel visibility of every opened page are
stored in a JSON file in the user's config directory, keyed by the absolute
path of the page file.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

logger = logging.getLogger(__name__)

# Setting keys
SCROLL_Y = "scroll_y"
SHOW_CONTENTS = "show_contents"

PageSettings = Dict[str, Any]


class SettingsPersistence:
    """Reads and writes the per-page settings file."""

    def __init__(self, config_dir: Optional[Path] = None):
        self._config_dir = config_dir or Path(platformdirs.user_config_dir("wikiview"))
        self._settings_file = self._config_dir / "pages.json"
        self._pages: Optional[Dict[str, PageSettings]] = None

    @staticmethod
    def _page_key(page_path: str) -> str:
        return os.path.abspath(page_path)

    def _stored_pages(self) -> Dict[str, PageSettings]:
        """Settings of all pages, read from disk on first use."""
        if self._pages is None:
            self._pages = self._read_file()
        return self._pages

    def _read_file(self) -> Dict[str, PageSettings]:
        try:
            text = self._settings_file.read_text(encoding='utf-8')
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning(f"Cannot read page settings {self._settings_file}: {e}")
            return {}

        try:
            pages = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning(f"Page settings file {self._settings_file} is corrupt: {e}")
            return {}

        if not isinstance(pages, dict):
            logger.warning(f"Page settings file {self._settings_file} does not hold an object, ignoring")
            return {}
        return pages

    def _write_file(self, pages: Dict[str, PageSettings]) -> bool:
        """Replace the settings file; a partial write never becomes visible."""
        staging = self._settings_file.with_name(self._settings_file.name + '.tmp')
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            staging.write_text(json.dumps(pages, indent=2), encoding='utf-8')
            os.replace(staging, self._settings_file)
        except OSError as e:
            logger.warning(f"Cannot write page settings {self._settings_file}: {e}")
            staging.unlink(missing_ok=True)
            return False

        self._pages = pages
        return True

    def load_settings(self, page_path: Optional[str]) -> PageSettings:
        """Valid settings stored for a page; unknown or malformed entries are dropped."""
        if page_path is None:
            return {}

        entry = self._stored_pages().get(self._page_key(page_path))
        if entry is None:
            return {}
        if not isinstance(entry, dict):
            logger.warning(f"Settings for {page_path} are not an object, ignoring")
            return {}

        return {key: value for key, value in entry.items() if self.validate_setting(key, value)}

    def save_settings(self, page_path: Optional[str], settings: PageSettings) -> bool:
        if page_path is None:
            return False

        rejected = sorted(key for key, value in settings.items() if not self.validate_setting(key, value))
        if rejected:
            logger.warning(f"Not saving settings for {page_path}, invalid keys: {', '.join(rejected)}")
            return False

        pages = dict(self._stored_pages())
        pages[self._page_key(page_path)] = dict(settings)
        return self._write_file(pages)

    @staticmethod
    def validate_setting(key: str, value: Any) -> bool:
        if key == SCROLL_Y:
            # bool is an int subclass
            return type(value) is int and value >= 0
        if key == SHOW_CONTENTS:
            return type(value) is bool
        return False

    def clear_cache(self) -> None:
        """Forget what was read so the next lookup goes back to disk."""
        self._pages = None


_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """The process-wide SettingsPersistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
