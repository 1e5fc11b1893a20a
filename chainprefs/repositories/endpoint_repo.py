"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/repositories/endpoint_repo.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Ordered registry of user-added RPC endpoints, unique by URL.
                Insertion order drives the network list in the UI, so
                overwrites keep the original position.
------------------------------------------------------------------------------
"""

import threading
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError as ModelValidationError

from chainprefs.exceptions import ValidationError
from chainprefs.logger import get_logger
from chainprefs.models.endpoint import DEFAULT_TICKER, EndpointUpdate, RpcEndpoint
from chainprefs.validators import validate_chain_id

from .base import BaseRepository

logger = get_logger("endpoints")


class RpcEndpointRegistry(BaseRepository):
    """
    Manages the frequent RPC list. No size bound is enforced.
    """

    def __init__(
        self,
        lock: Optional[threading.RLock] = None,
        endpoints: Optional[Iterable[RpcEndpoint]] = None,
    ) -> None:
        super().__init__(lock)
        self._endpoints: List[RpcEndpoint] = []
        for endpoint in endpoints or []:
            self._upsert(endpoint)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add(
        self,
        rpc_url: str,
        chain_id: str,
        ticker: Optional[str] = DEFAULT_TICKER,
        nickname: Optional[str] = "",
        rpc_prefs: Optional[Dict[str, Any]] = None,
    ) -> RpcEndpoint:
        """
        Adds an endpoint or overwrites the one with the same URL in place.

        Args:
            rpc_url: Endpoint URL, the registry key.
            chain_id: Hex-prefixed chain id, e.g. "0x1".
            ticker: Currency symbol, "ETH" when omitted.
            nickname: Free-form label.
            rpc_prefs: Display preferences (block explorer URL, ...).

        Returns:
            A detached copy of the stored endpoint.

        Raises:
            ValidationError: If chain_id or any other field is malformed.
                             Nothing is stored.
        """
        validate_chain_id(chain_id)
        try:
            endpoint = RpcEndpoint(
                rpc_url=rpc_url,
                chain_id=chain_id,
                ticker=ticker,
                nickname=nickname,
                rpc_prefs=rpc_prefs,
            )
        except ModelValidationError as exc:
            raise ValidationError.from_model_error(exc) from exc
        with self._lock:
            self._upsert(endpoint)
        return endpoint.model_copy(deep=True)

    def update(self, rpc_url: str, update: EndpointUpdate) -> Optional[Tuple[RpcEndpoint, RpcEndpoint]]:
        """
        Applies a partial update to an existing endpoint, keeping its position.

        Returns:
            (previous, updated) or None if no endpoint has this URL.
        """
        with self._lock:
            index = self._index_of(rpc_url)
            if index is None:
                return None
            previous = self._endpoints[index]
            updated = update.apply(previous)
            self._endpoints[index] = updated
            return previous, updated

    def remove(self, rpc_url: str) -> bool:
        """
        Removes the endpoint with this URL.

        Returns:
            True if removed, False if no such endpoint existed.
        """
        with self._lock:
            index = self._index_of(rpc_url)
            if index is None:
                return False
            del self._endpoints[index]
            return True

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, rpc_url: str) -> Optional[RpcEndpoint]:
        with self._lock:
            index = self._index_of(rpc_url)
            return None if index is None else self._endpoints[index].model_copy(deep=True)

    def find_by_chain_id(self, chain_id: str) -> Optional[RpcEndpoint]:
        """First endpoint with this chain id. Hex digits compare case-insensitively."""
        wanted = chain_id.lower()
        with self._lock:
            for endpoint in self._endpoints:
                if endpoint.chain_id.lower() == wanted:
                    return endpoint.model_copy(deep=True)
        return None

    def list(self) -> List[RpcEndpoint]:
        """Detached copies in registry order."""
        with self._lock:
            return [e.model_copy(deep=True) for e in self._endpoints]

    def __len__(self) -> int:
        with self._lock:
            return len(self._endpoints)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, rpc_url: str) -> Optional[int]:
        for index, endpoint in enumerate(self._endpoints):
            if endpoint.rpc_url == rpc_url:
                return index
        return None

    def _upsert(self, endpoint: RpcEndpoint) -> None:
        index = self._index_of(endpoint.rpc_url)
        if index is None:
            self._endpoints.append(endpoint)
        else:
            logger.debug(f"Overwriting endpoint {endpoint.rpc_url} at position {index}")
            self._endpoints[index] = endpoint
