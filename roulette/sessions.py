"""In-memory session store keyed by player id.

Sessions are created lazily on first access and live until they are reset or
the process exits.  Creation and reset are serialised behind a store-wide
:class:`asyncio.Lock` so two near-simultaneous first actions cannot produce
two divergent sessions, and each player additionally owns an action lock that
:meth:`SessionStore.acquire` holds for the duration of a turn.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

from .models.session import ProgressionSession

log = logging.getLogger(__name__)


class SessionStore:
    def __init__(self) -> None:
        self._sessions: Dict[int, ProgressionSession] = {}
        self._action_locks: Dict[int, asyncio.Lock] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._sessions

    def peek(self, player_id: int) -> Optional[ProgressionSession]:
        return self._sessions.get(player_id)

    async def get(self, player_id: int) -> ProgressionSession:
        session = self._sessions.get(player_id)
        if session is not None:
            return session
        async with self._lock:
            session = self._sessions.get(player_id)
            if session is None:
                session = ProgressionSession(player_id=player_id)
                self._sessions[player_id] = session
                log.debug("Created session for player %s", player_id)
            return session

    async def reset(self, player_id: int) -> ProgressionSession:
        async with self._action_lock(player_id):
            async with self._lock:
                session = ProgressionSession(player_id=player_id)
                self._sessions[player_id] = session
        log.info("Reset session for player %s", player_id)
        return session

    @asynccontextmanager
    async def acquire(self, player_id: int) -> AsyncIterator[ProgressionSession]:
        """Yield the player's session while holding their action lock."""

        async with self._action_lock(player_id):
            yield await self.get(player_id)

    def _action_lock(self, player_id: int) -> asyncio.Lock:
        lock = self._action_locks.get(player_id)
        if lock is None:
            lock = self._action_locks.setdefault(player_id, asyncio.Lock())
        return lock


__all__ = ["SessionStore"]
