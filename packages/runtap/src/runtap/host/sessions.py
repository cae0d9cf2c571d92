"""Tmux-backed session host.

Each session is a tmux pane labelled with its display name. Standalone
sessions get their own tmux session; sessions created with a parent are
split from the parent's pane.

PUBLIC API:
  - TmuxSessionHost: SessionHost implementation over tmux
"""

import asyncio
import logging
from typing import Callable

from ..tmux import create_session, list_panes, select_pane, send_keys, set_pane_name, split_pane
from ..tmux.exceptions import PaneNotFoundError
from ..types import Session

__all__ = ["TmuxSessionHost"]

logger = logging.getLogger(__name__)


class TmuxSessionHost:
    """SessionHost over tmux panes.

    Tmux has no close callback, so closed panes are found by diffing the live
    pane list against every pane this host has seen. That happens on each
    list_sessions() and prune_closed() call.
    """

    def __init__(self, layout: str = "tiled"):
        """Initialize host.

        Args:
            layout: Layout applied to a window after each split.
        """
        self.layout = layout
        self._seen: dict[str, Session] = {}
        self._listeners: list[Callable[[Session], None]] = []

    async def create(self, name: str, cwd: str | None = None, parent: Session | None = None) -> Session:
        if parent is None:
            pane_id = await asyncio.to_thread(create_session, name, cwd)
        else:
            pane_id = await asyncio.to_thread(split_pane, parent.pane_id, cwd, self.layout)

        await asyncio.to_thread(set_pane_name, pane_id, name)
        session = Session(pane_id=pane_id, name=name)
        self._seen[pane_id] = session
        logger.info(f"Created session '{name}' in pane {pane_id}")
        return session

    async def list_sessions(self) -> list[Session]:
        panes = await asyncio.to_thread(list_panes)
        sessions = [Session(pane_id=p.pane_id, name=p.name) for p in panes if not p.is_current]
        self._notify_closed({p.pane_id for p in panes})
        for session in sessions:
            self._seen.setdefault(session.pane_id, session)
        return sessions

    async def send_text(self, session: Session, text: str) -> None:
        await asyncio.to_thread(send_keys, session.pane_id, text)

    async def focus(self, session: Session) -> None:
        if not await asyncio.to_thread(select_pane, session.pane_id):
            raise PaneNotFoundError(f"Pane {session.pane_id} ({session.name}) no longer exists")

    def on_close(self, callback: Callable[[Session], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def prune_closed(self) -> list[Session]:
        panes = await asyncio.to_thread(list_panes)
        return self._notify_closed({p.pane_id for p in panes})

    def _notify_closed(self, live: set[str]) -> list[Session]:
        closed = [s for pane_id, s in self._seen.items() if pane_id not in live]
        for session in closed:
            del self._seen[session.pane_id]
            logger.debug(f"Session '{session.name}' ({session.pane_id}) closed")
            for callback in list(self._listeners):
                callback(session)
        return closed
