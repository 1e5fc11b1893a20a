"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/storage.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    QSettings-backed persistence of the preferences record.
                Each top-level record key is stored as a JSON string in the
                "Preferences" group.
------------------------------------------------------------------------------
"""

import json
from typing import Any, Callable, Dict, List, Optional, Set, TYPE_CHECKING

from pydantic import ValidationError as ModelValidationError
from PyQt6.QtCore import QSettings

from chainprefs.logger import get_logger
from chainprefs.models.state import PreferencesState

if TYPE_CHECKING:
    from chainprefs.config import AppConfig
    from chainprefs.preferences import PreferencesController

logger = get_logger("storage")


class PreferencesStorage:
    """
    Key/value store for PreferencesState snapshots.

    Usage:
        storage = PreferencesStorage.from_config(AppConfig())
        controller = PreferencesController(network, migrator, storage.load())
        storage.bind(controller)  # save after every mutation
    """

    GROUP: str = "Preferences"

    def __init__(self, settings: QSettings) -> None:
        self.settings = settings

    @classmethod
    def from_config(cls, config: "AppConfig") -> "PreferencesStorage":
        """Opens the INI state file of the given configuration profile."""
        path = config.get_state_file()
        return cls(QSettings(str(path), QSettings.Format.IniFormat))

    def load_record(self) -> Dict[str, Any]:
        """
        Reads the raw record. Keys whose value is not valid JSON are skipped.
        """
        record: Dict[str, Any] = {}
        self.settings.beginGroup(self.GROUP)
        try:
            for key in self.settings.childKeys():
                raw = self.settings.value(key, "", type=str)
                try:
                    record[key] = json.loads(raw)
                except json.JSONDecodeError:
                    logger.warning(f"Ignoring unreadable preference '{key}'")
        finally:
            self.settings.endGroup()
        return record

    def load(self) -> Optional[PreferencesState]:
        """
        Restores the stored snapshot.

        Invalid entries are dropped one by one: a bad identity or endpoint
        loses only that entry, a bad scalar falls back to its default.

        Returns:
            The snapshot, or None when nothing is stored or the record is
            still invalid after dropping the bad entries.
        """
        record = self.load_record()
        if not record:
            return None
        try:
            return PreferencesState.from_record(record)
        except ModelValidationError as exc:
            dropped = self._drop_invalid(record, exc)
            logger.warning(f"Dropped invalid stored preferences: {', '.join(dropped)}")

        try:
            return PreferencesState.from_record(record)
        except ModelValidationError as exc:
            logger.warning(f"Stored preferences are invalid, falling back to defaults: {exc}")
            return None

    @staticmethod
    def _drop_invalid(record: Dict[str, Any], exc: ModelValidationError) -> List[str]:
        """
        Removes the entries named by the error locations from record.

        Returns:
            Dotted locations of the removed entries.
        """
        dict_entries: Dict[str, Set[Any]] = {}
        list_entries: Dict[str, Set[int]] = {}
        top_level: Set[str] = set()

        for error in exc.errors():
            loc = error.get("loc", ())
            if not loc:
                continue
            key = loc[0]
            container = record.get(key)
            if len(loc) > 1 and isinstance(container, dict) and loc[1] in container:
                dict_entries.setdefault(key, set()).add(loc[1])
            elif len(loc) > 1 and isinstance(container, list) and isinstance(loc[1], int):
                list_entries.setdefault(key, set()).add(loc[1])
            else:
                top_level.add(key)

        dropped: List[str] = []
        for key in top_level:
            if key in record:
                del record[key]
                dropped.append(key)
            dict_entries.pop(key, None)
            list_entries.pop(key, None)
        for key, entries in dict_entries.items():
            for entry in entries:
                del record[key][entry]
                dropped.append(f"{key}.{entry}")
        for key, indexes in list_entries.items():
            for index in sorted(indexes, reverse=True):
                del record[key][index]
                dropped.append(f"{key}.{index}")
        return sorted(dropped)

    def save(self, state: PreferencesState) -> None:
        """Writes every record key and flushes to the backend."""
        self.settings.beginGroup(self.GROUP)
        try:
            for key, value in state.to_record().items():
                self.settings.setValue(key, json.dumps(value))
        finally:
            self.settings.endGroup()
        self.settings.sync()
        logger.debug(f"Saved preferences to {self.settings.fileName()}")

    def clear(self) -> None:
        self.settings.beginGroup(self.GROUP)
        self.settings.remove("")
        self.settings.endGroup()
        self.settings.sync()

    def bind(self, controller: "PreferencesController") -> Callable[[], bool]:
        """
        Saves the current snapshot and every future one.

        Returns:
            Function detaching the storage from the controller.
        """
        self.save(controller.state)
        return controller.subscribe(self.save)
