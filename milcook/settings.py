"""
Settings store.

Keeps UserSettings and persists them as a JSON file.
"""

import json
import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Optional, Union

from .config import UserSettings

logger = logging.getLogger(__name__)

_FIELD_NAMES = {f.name for f in fields(UserSettings)}


class SettingsStore:

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else None
        self.settings = UserSettings()
        self.load_settings()

    def load_settings(self):
        """Stored values override the defaults. Unknown keys are ignored."""
        if self.path is None or not self.path.exists():
            return

        try:
            stored = json.loads(self.path.read_text(encoding="utf-8"))
            known = {k: v for k, v in stored.items() if k in _FIELD_NAMES}
            self.settings = replace(UserSettings(), **known)
        except (OSError, ValueError, AttributeError) as e:
            logger.error("Failed to load settings from %s: %s", self.path, e)
            self.settings = UserSettings()

    def save_settings(self):
        if self.path is None:
            return

        try:
            self.path.write_text(json.dumps(self.settings.to_dict(), allow_nan=False), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save settings to %s: %s", self.path, e)

    def update_settings(self, **changes: Any):
        unknown = set(changes) - _FIELD_NAMES
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(sorted(unknown))}")
        self.settings = replace(self.settings, **changes)
        self.save_settings()

    def reset_settings(self):
        self.settings = UserSettings()
        self.save_settings()

    def _toggle(self, name: str):
        setattr(self.settings, name, not getattr(self.settings, name))
        self.save_settings()

    def toggle_night_mode(self):
        self._toggle("night_mode")

    def toggle_sound(self):
        self._toggle("sound_enabled")

    def toggle_vibration(self):
        self._toggle("vibration_enabled")

    def toggle_alert(self):
        self._toggle("alert_enabled")
