"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/repositories/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Package initializer for the in-memory registries. Exports
                IdentityRegistry and RpcEndpointRegistry.
------------------------------------------------------------------------------
"""

from .identity_repo import IdentityRegistry
from .endpoint_repo import RpcEndpointRegistry
