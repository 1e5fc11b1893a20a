"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/models/identity.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Defines the Identity data model: the display record of one
                selectable wallet account.
------------------------------------------------------------------------------
"""

from pydantic import BaseModel, ConfigDict

# Prefix of generated account names ("Account 1", "Account 2", ...)
DEFAULT_NAME_PREFIX = "Account"


def default_account_name(position: int) -> str:
    """Builds the default label for a 1-based account position."""
    return f"{DEFAULT_NAME_PREFIX} {position}"


class Identity(BaseModel):
    """
    Address plus display name. The address is an opaque key and is never
    validated against a checksum.
    """
    model_config = ConfigDict(frozen=True)

    address: str
    name: str

    def with_name(self, name: str) -> "Identity":
        """Returns a validated copy carrying a new label."""
        return Identity.model_validate({**self.model_dump(), "name": name})
