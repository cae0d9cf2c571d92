"""Session registry - name to live session, owned by one executor.

PUBLIC API:
  - SessionRegistry: Acquire-or-create sessions by display name
"""

import asyncio
import logging

from .host import SessionHost
from .types import Session

__all__ = ["SessionRegistry"]

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Tracks the sessions an executor has used, by display name.

    Entries are dropped when the host reports the session closed. The match is
    on session identity, so a same-named replacement registered since is
    kept. The registry never closes sessions itself.
    """

    def __init__(self, host: SessionHost):
        self._host = host
        self._sessions: dict[str, Session] = {}
        self._lock = asyncio.Lock()
        self._unsubscribe = host.on_close(self._on_close)

    def __contains__(self, name: str) -> bool:
        return name in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, name: str) -> Session | None:
        return self._sessions.get(name)

    def snapshot(self) -> dict[str, Session]:
        """Copy of the current name -> session mapping."""
        return dict(self._sessions)

    async def acquire(self, name: str, cwd: str | None = None) -> Session:
        """Return the session called name, creating it if needed.

        Looks in the registry, then among the host's open sessions (adopting
        a match), then creates a new session. cwd is only used on creation.

        Args:
            name: Display name of the session.
            cwd: Working directory for a newly created session.

        Returns:
            The live session.
        """
        async with self._lock:
            session = self._sessions.get(name)
            if session is not None:
                return session

            for candidate in await self._host.list_sessions():
                if candidate.name == name:
                    logger.debug(f"Adopting existing session '{name}' ({candidate.pane_id})")
                    self._sessions[name] = candidate
                    return candidate

            session = await self._host.create(name, cwd)
            self._sessions[name] = session
            return session

    async def register(self, name: str, session: Session) -> None:
        """Track session under name, replacing any previous entry."""
        async with self._lock:
            self._sessions[name] = session

    def _on_close(self, closed: Session) -> None:
        for name, session in list(self._sessions.items()):
            if session == closed:
                del self._sessions[name]
                logger.debug(f"Dropped closed session '{name}' ({closed.pane_id})")

    def clear(self) -> None:
        """Stop listening for closes and forget every session without closing it."""
        self._unsubscribe()
        self._sessions.clear()
