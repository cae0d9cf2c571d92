"""Shared test fixtures: an in-memory host standing in for tmux and the editor."""

import asyncio
from typing import Any, Callable, Sequence

import pytest

from runtap.executor import ActionExecutor
from runtap.host import Host
from runtap.types import Session, Task


class FakeSessionHost:
    """Records every call; sessions live in a dict keyed by pane ID."""

    def __init__(self):
        self.open: dict[str, Session] = {}
        self.created: list[tuple[str, str | None, Session | None]] = []
        self.sent: list[tuple[str, str]] = []
        self.focused: list[str] = []
        self.list_calls = 0
        self.prune_calls = 0
        self.create_delay = 0.0
        self.fail_send: str | None = None
        self._next = 0
        self._listeners: list[Callable[[Session], None]] = []

    def add_existing(self, name: str) -> Session:
        self._next += 1
        session = Session(pane_id=f"%{self._next}", name=name)
        self.open[session.pane_id] = session
        return session

    def close(self, session: Session) -> None:
        del self.open[session.pane_id]
        for callback in list(self._listeners):
            callback(session)

    async def create(self, name: str, cwd: str | None = None, parent: Session | None = None) -> Session:
        if self.create_delay:
            await asyncio.sleep(self.create_delay)
        session = self.add_existing(name)
        self.created.append((name, cwd, parent))
        return session

    async def list_sessions(self) -> list[Session]:
        self.list_calls += 1
        return list(self.open.values())

    async def send_text(self, session: Session, text: str) -> None:
        if self.fail_send is not None and self.fail_send in text:
            raise RuntimeError(f"pane {session.pane_id} is dead")
        self.sent.append((session.name, text))

    async def focus(self, session: Session) -> None:
        self.focused.append(session.name)

    def on_close(self, callback: Callable[[Session], None]) -> Callable[[], None]:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    async def prune_closed(self) -> list[Session]:
        self.prune_calls += 1
        return []


class FakeDispatcher:
    def __init__(self):
        self.calls: list[tuple[str, list[Any]]] = []
        self.fail_with: Exception | None = None

    async def dispatch(self, name: str, args: Sequence[Any]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.calls.append((name, list(args)))


class FakeTaskCatalog:
    def __init__(self, tasks: list[Task] | None = None):
        self.tasks = tasks or []
        self.ran: list[Task] = []

    async def fetch_all(self) -> list[Task]:
        return list(self.tasks)

    async def run(self, task: Task) -> None:
        self.ran.append(task)


class FakeOpener:
    def __init__(self):
        self.local: list[str] = []
        self.remote: list[tuple[str, str]] = []
        self.fail_with: Exception | None = None

    async def open_local(self, path: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.local.append(path)

    async def open_remote(self, host: str, path: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.remote.append((host, path))


@pytest.fixture
def sessions() -> FakeSessionHost:
    return FakeSessionHost()


@pytest.fixture
def host(sessions: FakeSessionHost) -> Host:
    return Host(sessions=sessions, commands=FakeDispatcher(), tasks=FakeTaskCatalog(), opener=FakeOpener())


@pytest.fixture
def executor(host: Host) -> ActionExecutor:
    """Provide an executor over the fake host, disposed after use."""
    executor = ActionExecutor(host)
    yield executor  # type: ignore[misc]
    executor.dispose()
