"""
------------------------------------------------------------------------------
Project:        ChainPrefs
File:           chainprefs/repositories/base.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Base class for registry implementations. Provides the lock
                shared with the owning controller so that operations spanning
                several registries stay atomic.
------------------------------------------------------------------------------
"""

import threading
from typing import Optional


class BaseRepository:
    """
    Abstract-style base registry providing shared lock access.
    """

    def __init__(self, lock: Optional[threading.RLock] = None) -> None:
        """
        Initializes the registry with a lock.

        Args:
            lock: Re-entrant lock owned by the controller. A private one is
                  created when the registry is used standalone.
        """
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """The lock guarding every read and write of this registry."""
        return self._lock
