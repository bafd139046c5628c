"""
client/registry.py - In-memory registry of balance managers.

Maps caller-chosen keys to on-chain balance manager references.
Lives as long as the client; nothing is persisted, so callers
re-register on every start.
"""

import threading
from typing import Dict, List, Optional

from core.constants import ErrorCode
from core.exceptions import NotFoundError
from core.logging import get_logger
from core.models import BalanceManager
from core.validators import normalize_sui_address

logger = get_logger(__name__)


class BalanceManagerRegistry:
    """
    Key -> BalanceManager mapping.

    Registration overwrites an existing key. All access goes through
    one lock, so registering while queries run is safe.
    """

    def __init__(self):
        self._managers: Dict[str, BalanceManager] = {}
        self._lock = threading.Lock()

    def register(self, key: str, manager: BalanceManager) -> None:
        """Register (or replace) a balance manager under key."""
        with self._lock:
            replaced = key in self._managers
            self._managers[key] = manager

        logger.debug(
            f"Registered balance manager {key}",
            extra={"context": {"key": key, "address": manager.address, "replaced": replaced}},
        )

    def add(self, key: str, address: str, trade_cap: Optional[str] = None) -> BalanceManager:
        """Build a BalanceManager from ids and register it."""
        manager = BalanceManager(
            address=normalize_sui_address(address),
            trade_cap=normalize_sui_address(trade_cap) if trade_cap else None,
        )
        self.register(key, manager)
        return manager

    def lookup(self, key: str) -> BalanceManager:
        """
        Get the balance manager registered under key.

        Raises:
            NotFoundError: if key was never registered
        """
        with self._lock:
            manager = self._managers.get(key)

        if manager is None:
            raise NotFoundError(
                f"Balance manager with key {key} not found.",
                code=ErrorCode.MANAGER_NOT_FOUND,
                details={"manager_key": key},
            )
        return manager

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._managers)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._managers

    def __len__(self) -> int:
        with self._lock:
            return len(self._managers)
