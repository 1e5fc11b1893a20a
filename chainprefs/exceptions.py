"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/exceptions.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Error kinds raised by the preferences controller. Removing
                something that is absent is not an error; those operations
                report the no-op through their return value.
------------------------------------------------------------------------------
"""

from typing import Any, Optional


class PreferencesError(Exception):
    """Base class for all controller errors."""


class ValidationError(PreferencesError, ValueError):
    """
    Raised when a value fails validation (malformed chain id, wrong flag type).
    Always raised before any state is touched.

    Attributes:
        value: The offending input.
        field: Name of the field that was validated.
    """

    def __init__(self, message: str, value: Any = None, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.value = value
        self.field = field

    @classmethod
    def from_model_error(cls, exc: Any) -> "ValidationError":
        """
        Converts a pydantic ValidationError into this type, keeping the first
        failing field and its input.
        """
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        return cls(f"Invalid {field or 'value'}: {first.get('msg')}", value=first.get("input"), field=field or None)


class NotFoundError(PreferencesError, KeyError):
    """Raised when an operation requires an identity that does not exist."""

    def __init__(self, key: str) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"No identity found for address {self.key!r}"


class MigrationError(PreferencesError):
    """
    Raised when the address book migration collaborator fails.
    The endpoint update that triggered it stays committed.
    """

    def __init__(self, old_chain_id: str, new_chain_id: str) -> None:
        super().__init__(f"Address book migration {old_chain_id} -> {new_chain_id} failed")
        self.old_chain_id = old_chain_id
        self.new_chain_id = new_chain_id
