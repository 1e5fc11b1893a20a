"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/network.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Interfaces of the collaborators injected into the
                preferences controller: the read-only network status
                provider and the address book migration callback.
------------------------------------------------------------------------------
"""

from typing import Any, Awaitable, Dict, Optional, Protocol

# Provider type reported for user-added endpoints
CUSTOM_RPC_TYPE = "rpc"


class NetworkStatusProvider(Protocol):
    """
    Read-only view of the network connectivity component.
    The controller never mutates it.
    """

    def get_current_chain_identifier(self) -> str:
        """Hex-prefixed chain id of the active network."""
        ...

    def get_provider_config(self) -> Dict[str, Any]:
        """Provider description; at least {"type": "mainnet" | "rpc" | ...}."""
        ...

    async def get_latest_block(self) -> Dict[str, Any]:
        """Latest block of the active network, fetched over the wire."""
        ...


class AddressBookMigrator(Protocol):
    """
    Moves chain-scoped address book entries from one chain id to another.
    May return an awaitable.
    """

    def __call__(self, old_chain_id: str, new_chain_id: str) -> Optional[Awaitable[None]]:
        ...


def is_custom_provider(network: NetworkStatusProvider) -> bool:
    """True when the network runs on a user-added RPC endpoint."""
    config = network.get_provider_config() or {}
    return config.get("type") == CUSTOM_RPC_TYPE
