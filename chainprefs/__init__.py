"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Preferences and network configuration state controller for
                a wallet. Owns account identities, user-added RPC endpoints
                and validated feature flags.
------------------------------------------------------------------------------
"""

from .exceptions import MigrationError, NotFoundError, PreferencesError, ValidationError
from .models import EndpointUpdate, Identity, PreferencesState, RpcEndpoint
from .preferences import PreferencesController

__all__ = [
    "EndpointUpdate",
    "Identity",
    "MigrationError",
    "NotFoundError",
    "PreferencesController",
    "PreferencesError",
    "PreferencesState",
    "RpcEndpoint",
    "ValidationError",
]
