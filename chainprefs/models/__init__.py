"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/models/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Package initializer for data models. Exports Identity,
                RpcEndpoint, EndpointUpdate and the PreferencesState snapshot.
------------------------------------------------------------------------------
"""

from .identity import Identity
from .endpoint import EndpointUpdate, RpcEndpoint
from .state import PreferencesState
