"""Task catalog backed by the [tasks] table of runtap.toml.

PUBLIC API:
  - ConfigTaskCatalog: TaskCatalog over configured tasks
"""

import logging
from typing import Callable, Mapping

from ..types import Session, Task, TaskConfig
from . import SessionHost

__all__ = ["ConfigTaskCatalog"]

logger = logging.getLogger(__name__)


class ConfigTaskCatalog:
    """Lists configured tasks and runs them in their own session.

    A task runs in the session named by its ``session`` key, or in
    ``task:<name>`` when it has none. An open session with that name is
    reused.
    """

    def __init__(self, tasks: Callable[[], Mapping[str, TaskConfig]], sessions: SessionHost):
        """Initialize catalog.

        Args:
            tasks: Returns the current task table (re-read on every fetch).
            sessions: Host the tasks run in.
        """
        self._tasks = tasks
        self._sessions = sessions

    async def fetch_all(self) -> list[Task]:
        return [
            Task(name=name, command=task.command, session=task.session, cwd=task.cwd)
            for name, task in self._tasks().items()
        ]

    async def run(self, task: Task) -> None:
        if not task.command:
            raise RuntimeError(f"Task '{task.name}' has no command")

        name = task.session or f"task:{task.name}"
        session = await self._find_or_create(name, task.cwd)
        await self._sessions.focus(session)
        await self._sessions.send_text(session, task.command)
        logger.info(f"Started task '{task.name}' in {session.pane_id}")

    async def _find_or_create(self, name: str, cwd: str | None) -> Session:
        for session in await self._sessions.list_sessions():
            if session.name == name:
                return session
        return await self._sessions.create(name, cwd)
