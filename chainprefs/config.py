"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/config.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Manages application configuration using QSettings. Resolves
                the configuration directory and preferences state file and
                holds logging settings.
------------------------------------------------------------------------------
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

from PyQt6.QtCore import QSettings, QStandardPaths

from chainprefs.logger import setup_logging


class AppConfig:
    """
    Manages application configuration using QSettings.
    One instance per profile; profiles isolate settings and state files.
    """

    KEY_LOG_LEVEL: str = "log_level"
    KEY_LOG_COMPONENTS: str = "log_components"
    KEY_LOG_FILE: str = "log_file"
    KEY_STATE_FILE: str = "state_file"

    DEFAULT_LOG_LEVEL: str = "WARNING"
    DEFAULT_STATE_FILENAME: str = "preferences.ini"

    APP_ID: str = "chainprefs"

    def __init__(self, profile: Optional[str] = None, settings: Optional[QSettings] = None) -> None:
        """
        Initializes the configuration manager.

        Args:
            profile: Optional profile name (e.g. 'dev', 'test'). Isolates all
                     settings and paths (e.g. chainprefs-dev).
            settings: Explicit QSettings instance, mainly for tests.
        """
        self.profile = profile
        self.active_id = self.APP_ID
        if profile:
            self.active_id = f"{self.APP_ID}-{profile}"

        self.settings = settings if settings is not None else QSettings(self.active_id, self.active_id)

    def get_config_dir(self) -> Path:
        """
        Returns the path to the application configuration directory:
        ~/.config/chainprefs[-profile]/
        """
        base_path = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.ConfigLocation)
        config_dir = Path(base_path) / self.active_id
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir

    def _get_setting(self, group: str, key: str, default: Any = None) -> Any:
        """
        Helper to retrieve a setting value from a specific group.
        """
        if group:
            self.settings.beginGroup(group)
        val = self.settings.value(key, default)
        if group:
            self.settings.endGroup()
        return val

    def _set_setting(self, group: str, key: str, value: Any) -> None:
        """
        Helper to save a setting value into a specific group.
        """
        if isinstance(value, str):
            value = value.strip()

        if group:
            self.settings.beginGroup(group)
        self.settings.setValue(key, value)
        if group:
            self.settings.endGroup()

    def get_state_file(self) -> Path:
        """
        Location of the persisted preferences. Defaults to
        <config dir>/preferences.ini.
        """
        val = self._get_setting("Storage", self.KEY_STATE_FILE, "")
        if val:
            return Path(str(val))
        return self.get_config_dir() / self.DEFAULT_STATE_FILENAME

    def set_state_file(self, path: str) -> None:
        self._set_setting("Storage", self.KEY_STATE_FILE, str(path))

    def get_log_level(self) -> str:
        """
        Retrieves the global log level.

        Returns:
            Level name, e.g. "WARNING".
        """
        return str(self._get_setting("Logging", self.KEY_LOG_LEVEL, self.DEFAULT_LOG_LEVEL)).upper()

    def set_log_level(self, level: str) -> None:
        self._set_setting("Logging", self.KEY_LOG_LEVEL, level.upper())

    def get_log_components(self) -> Dict[str, str]:
        """
        Retrieves component-specific log levels.
        Stored as a JSON string; unreadable values yield an empty mapping.
        """
        raw = self._get_setting("Logging", self.KEY_LOG_COMPONENTS, "{}")
        try:
            data = json.loads(str(raw))
        except json.JSONDecodeError:
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def set_log_components(self, components: Dict[str, str]) -> None:
        self._set_setting("Logging", self.KEY_LOG_COMPONENTS, json.dumps(components))

    def get_log_file(self) -> Optional[str]:
        val = self._get_setting("Logging", self.KEY_LOG_FILE, "")
        return str(val) if val else None

    def set_log_file(self, path: str) -> None:
        self._set_setting("Logging", self.KEY_LOG_FILE, str(path))

    def apply_logging(self) -> None:
        """Configures the chainprefs loggers from the stored settings."""
        setup_logging(
            level=self.get_log_level(),
            log_file=self.get_log_file(),
            component_levels=self.get_log_components(),
        )
