from __future__ import annotations

import time
from typing import Callable, Dict, Iterator, Optional

from apps.common import get_logger

from .store import CartStore

logger = get_logger(__name__).bind(component="carts", layer="registry")


class CartSessionRegistry:
    """
    Owns one CartStore per client session.

    A store is created empty the first time its session is opened and lives
    until ``teardown`` is called at logout or session end, or until it has
    been idle for longer than ``idle_timeout`` seconds. Idle stores are swept
    whenever a session is opened. Nothing is persisted: a new process starts
    every session with an empty cart.
    """

    def __init__(
        self,
        idle_timeout: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._stores: Dict[str, CartStore] = {}
        self._touched: Dict[str, float] = {}
        self.idle_timeout = idle_timeout
        self._clock = clock
        self.logger = logger.bind(registry="CartSessionRegistry")

    def open(self, session_id: str) -> CartStore:
        now = self._clock()
        self.evict_idle(now)
        store = self._stores.get(session_id)
        if store is None:
            store = CartStore()
            self._stores[session_id] = store
            self.logger.info("Cart session opened", session_id=session_id)
        self._touched[session_id] = now
        return store

    def get(self, session_id: str) -> Optional[CartStore]:
        """Return the live store for ``session_id`` without creating one."""
        store = self._stores.get(session_id)
        if store is None:
            return None
        now = self._clock()
        if self._is_idle(session_id, now):
            self._discard(session_id)
            self.logger.info("Idle cart session expired", session_id=session_id)
            return None
        self._touched[session_id] = now
        return store

    def teardown(self, session_id: str) -> bool:
        store = self._discard(session_id)
        if store is None:
            self.logger.debug("Teardown ignored for unknown session", session_id=session_id)
            return False
        self.logger.info(
            "Cart session closed",
            session_id=session_id,
            discarded_items=len(store),
        )
        return True

    def evict_idle(self, now: Optional[float] = None) -> int:
        if not self.idle_timeout:
            return 0
        now = self._clock() if now is None else now
        expired = [sid for sid in self._touched if self._is_idle(sid, now)]
        for session_id in expired:
            self._discard(session_id)
        if expired:
            self.logger.info("Idle cart sessions evicted", evicted=len(expired), remaining=len(self))
        return len(expired)

    def _is_idle(self, session_id: str, now: float) -> bool:
        if not self.idle_timeout:
            return False
        return now - self._touched.get(session_id, now) > self.idle_timeout

    def _discard(self, session_id: str) -> Optional[CartStore]:
        self._touched.pop(session_id, None)
        return self._stores.pop(session_id, None)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._stores

    def __len__(self) -> int:
        return len(self._stores)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._stores))
