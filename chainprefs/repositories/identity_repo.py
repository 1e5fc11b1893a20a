"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/repositories/identity_repo.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Ordered address -> Identity registry. Handles full
                replacement, incremental additions, keyring sync with lost
                identity tracking, removal and relabeling.
------------------------------------------------------------------------------
"""

import threading
from typing import Dict, Iterable, List, Optional

from chainprefs.exceptions import NotFoundError
from chainprefs.logger import get_logger
from chainprefs.models.identity import Identity, default_account_name
from chainprefs.validators import format_address, validate_text

from .base import BaseRepository

logger = get_logger("identities")


class IdentityRegistry(BaseRepository):
    """
    Manages the address -> Identity mapping. Dict insertion order is the
    account order shown to the user.
    """

    def __init__(
        self,
        lock: Optional[threading.RLock] = None,
        identities: Optional[Dict[str, Identity]] = None,
        lost_identities: Optional[Dict[str, Identity]] = None,
    ) -> None:
        super().__init__(lock)
        self._identities: Dict[str, Identity] = dict(identities or {})
        self._lost: Dict[str, Identity] = dict(lost_identities or {})

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def replace_all(self, addresses: Iterable[str]) -> None:
        """
        Discards the current mapping and creates one identity per address.
        Names follow position: "Account 1", "Account 2", ... Prior custom
        labels are not kept. Duplicate addresses keep their first position.
        """
        fresh: Dict[str, Identity] = {}
        for address in (format_address(a) for a in addresses):
            if address in fresh:
                continue
            fresh[address] = Identity(address=address, name=default_account_name(len(fresh) + 1))
        with self._lock:
            self._identities = fresh
        logger.debug(f"Replaced identities with {len(fresh)} address(es)")

    def add_many(self, addresses: Iterable[str]) -> List[str]:
        """
        Adds identities for addresses not yet known.

        Returns:
            The addresses that were actually added, in order.
        """
        added: List[str] = []
        with self._lock:
            for address in (format_address(a) for a in addresses):
                if address in self._identities:
                    continue
                name = default_account_name(len(self._identities) + 1)
                self._identities[address] = Identity(address=address, name=name)
                added.append(address)
        return added

    def sync(self, addresses: List[str]) -> Dict[str, Identity]:
        """
        Reconciles the registry with an authoritative address list.
        Identities missing from the list move to the lost mapping, new
        addresses are added.

        Returns:
            The identities newly moved to the lost mapping.
        """
        wanted = [format_address(a) for a in addresses]
        with self._lock:
            newly_lost = {a: i for a, i in self._identities.items() if a not in wanted}
            for address in newly_lost:
                del self._identities[address]
            self._lost.update(newly_lost)
            self.add_many(wanted)
        if newly_lost:
            logger.info(f"Lost {len(newly_lost)} identity(ies) during sync: {list(newly_lost)}")
        return newly_lost

    def remove(self, address: str) -> bool:
        """
        Removes an identity.

        Returns:
            True if it existed, False if there was nothing to remove.
        """
        with self._lock:
            return self._identities.pop(format_address(address), None) is not None

    def rename(self, address: str, label: str) -> Identity:
        """
        Overwrites the display name of an existing identity.

        Raises:
            ValidationError: If label is not a string.
            NotFoundError: If the address is not registered.
        """
        validate_text("name", label)
        key = format_address(address)
        with self._lock:
            identity = self._identities.get(key)
            if identity is None:
                raise NotFoundError(key)
            renamed = identity.with_name(label)
            self._identities[key] = renamed
            return renamed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, address: str) -> Optional[Identity]:
        with self._lock:
            return self._identities.get(format_address(address))

    def __contains__(self, address: object) -> bool:
        with self._lock:
            return format_address(address) in self._identities

    def __len__(self) -> int:
        with self._lock:
            return len(self._identities)

    def addresses(self) -> List[str]:
        with self._lock:
            return list(self._identities)

    def first_address(self) -> str:
        """First address in iteration order, or "" when empty."""
        with self._lock:
            return next(iter(self._identities), "")

    def list(self) -> List[Identity]:
        with self._lock:
            return list(self._identities.values())

    def snapshot(self) -> Dict[str, Identity]:
        with self._lock:
            return dict(self._identities)

    def lost_snapshot(self) -> Dict[str, Identity]:
        with self._lock:
            return dict(self._lost)
