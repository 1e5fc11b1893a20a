"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/validators.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Pure validation helpers: hex-prefixed chain identifiers,
                address formatting, boolean flag and text checks.
------------------------------------------------------------------------------
"""

import re
from typing import Any

from chainprefs.exceptions import ValidationError

# "0x" followed by at least one hex digit, digits case-insensitive
CHAIN_ID_PATTERN = re.compile(r"^0x[0-9a-fA-F]+$")


def is_valid_chain_id(chain_id: Any) -> bool:
    """
    Checks whether a value is a hex-prefixed chain identifier.

    Args:
        chain_id: Candidate value, usually a string like "0x1".

    Returns:
        True if the value is a string matching CHAIN_ID_PATTERN.
    """
    return isinstance(chain_id, str) and CHAIN_ID_PATTERN.match(chain_id) is not None


def validate_chain_id(chain_id: Any) -> str:
    """
    Returns the chain id unchanged or raises ValidationError carrying it.
    """
    if not is_valid_chain_id(chain_id):
        raise ValidationError(f'Invalid chainId: "{chain_id}"', value=chain_id, field="chainId")
    return chain_id


def format_address(address: Any) -> str:
    """
    Normalizes an account address into a registry key.
    Addresses are opaque: no checksum or case handling, surrounding
    whitespace is dropped.
    """
    if address is None:
        return ""
    return str(address).strip()


def validate_flag(name: str, value: Any) -> bool:
    """
    Ensures a feature flag value is a real bool (ints are rejected).
    """
    if not isinstance(value, bool):
        raise ValidationError(f"{name} expects a boolean, got {type(value).__name__}", value=value, field=name)
    return value


def validate_text(name: str, value: Any) -> str:
    """
    Ensures a label, locale or key is a string. Nothing is coerced.
    """
    if not isinstance(value, str):
        raise ValidationError(f"{name} expects a string, got {type(value).__name__}", value=value, field=name)
    return value
