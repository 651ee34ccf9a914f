"""Registry of per-browser application sessions."""

import asyncio
import logging
from typing import Awaitable, Callable
from uuid import uuid4

from ..clients.base import BackendClient
from ..services.app_session import AppSession

logger = logging.getLogger(__name__)

BackendFactory = Callable[[], Awaitable[BackendClient]]


class SessionRegistry:
    """Maps session cookies to live application sessions.

    Every browser gets its own backend client so auth state never leaks
    between visitors. The least recently seen sessions are disposed once the
    registry grows past ``max_sessions``.
    """

    def __init__(self, backend_factory: BackendFactory, max_sessions: int = 500):
        self._backend_factory = backend_factory
        self._max_sessions = max_sessions
        self._sessions: dict[str, AppSession] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions

    async def get_or_create(self, session_id: str | None) -> tuple[str, AppSession, bool]:
        """Return ``(session_id, session, created)`` for a cookie value.

        A new session is built and started outside the lock, so a slow backend
        only delays its own browser.
        """
        async with self._lock:
            if session_id and session_id in self._sessions:
                return session_id, self._sessions[session_id], False

        session_id = uuid4().hex
        app_session = AppSession(await self._backend_factory())
        await app_session.start()

        app_session.touch()
        async with self._lock:
            self._sessions[session_id] = app_session
            evicted = self._evict_stale()

        for stale in evicted:
            await stale.dispose()
        logger.debug("Started application session %s", session_id[:8])
        return session_id, app_session, True

    async def dispose_all(self) -> None:
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for app_session in sessions:
            await app_session.dispose()

    def _evict_stale(self) -> list[AppSession]:
        """Drop the oldest sessions if over the limit."""
        overflow = len(self._sessions) - self._max_sessions
        if overflow <= 0:
            return []
        oldest = sorted(self._sessions.items(), key=lambda item: item[1].last_seen)
        evicted = []
        for session_id, app_session in oldest[:overflow]:
            del self._sessions[session_id]
            evicted.append(app_session)
        return evicted
