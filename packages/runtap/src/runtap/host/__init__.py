"""Host interfaces the executor drives, and the default tmux-backed host.

PUBLIC API:
  - SessionHost: Creates, lists, focuses and types into shell sessions
  - CommandDispatcher: Runs named host commands
  - TaskCatalog: Lists and runs named tasks
  - PathOpener: Opens folders in a dev container or over SSH
  - Host: Bundle of the four
  - default_host: Build the tmux-backed host from configuration
"""

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence, TYPE_CHECKING

from ..types import Session, Task

if TYPE_CHECKING:
    from ..config import ConfigManager

__all__ = ["SessionHost", "CommandDispatcher", "TaskCatalog", "PathOpener", "Host", "default_host"]


class SessionHost(Protocol):
    """Owner of interactive shell sessions."""

    async def create(self, name: str, cwd: str | None = None, parent: Session | None = None) -> Session:
        """Create a session; split it from parent when one is given."""
        ...

    async def list_sessions(self) -> list[Session]:
        """Currently open sessions with their display names."""
        ...

    async def send_text(self, session: Session, text: str) -> None: ...

    async def focus(self, session: Session) -> None: ...

    def on_close(self, callback: Callable[[Session], None]) -> Callable[[], None]:
        """Call callback for every session that closes; returns an unsubscribe function."""
        ...

    async def prune_closed(self) -> list[Session]:
        """Detect sessions closed since the last check and notify listeners."""
        ...


class CommandDispatcher(Protocol):
    async def dispatch(self, name: str, args: Sequence[Any]) -> None: ...


class TaskCatalog(Protocol):
    async def fetch_all(self) -> list[Task]: ...

    async def run(self, task: Task) -> None: ...


class PathOpener(Protocol):
    async def open_local(self, path: str) -> None:
        """Open a local folder inside its isolated (dev container) environment."""
        ...

    async def open_remote(self, host: str, path: str) -> None:
        """Open a folder on host over SSH."""
        ...


@dataclass
class Host:
    """Everything the executor talks to."""

    sessions: SessionHost
    commands: CommandDispatcher
    tasks: TaskCatalog
    opener: PathOpener


def default_host(config: "ConfigManager") -> Host:
    """Build the tmux-backed host.

    Args:
        config: Source of the task table and editor binary.

    Returns:
        Host using tmux panes for sessions, the command registry (with
        runtap built-ins) for editor commands, config tasks, and the
        configured editor for container/SSH targets.
    """
    from ..tmux import kill_session
    from .commands import CommandRegistry
    from .opener import EditorPathOpener
    from .sessions import TmuxSessionHost
    from .tasks import ConfigTaskCatalog

    sessions = TmuxSessionHost()

    registry = CommandRegistry()
    registry.register("runtap.reload", config.reload)
    registry.register("runtap.kill-session", kill_session)

    return Host(
        sessions=sessions,
        commands=registry,
        tasks=ConfigTaskCatalog(lambda: config.tasks, sessions),
        opener=EditorPathOpener(config.editor),
    )
