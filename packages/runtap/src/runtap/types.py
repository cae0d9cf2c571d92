"""Type definitions for runtap.

Resolved actions are a closed set of frozen dataclasses, one per action kind.
Menu entries and action definitions mirror the runtap.toml schema.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Literal, Protocol

# Session used when a shell action names none
DEFAULT_SESSION = "runtap"

type PaneID = str  # e.g., "%42" - tmux native pane ID


class ActionKind(str, Enum):
    """Every kind of action runtap can execute."""

    SHELL = "shell"
    EDITOR = "editor"
    TASK = "task"
    CONTAINER = "container"
    SSH = "ssh"

    @classmethod
    def parse(cls, value: Any) -> "ActionKind | None":
        """Return the kind named by value, or None if unrecognised."""
        try:
            return cls(value)
        except ValueError:
            return None


# Resolved actions
@dataclass(frozen=True)
class ShellCommand:
    """Send a command line to a named shell session."""

    kind: ClassVar[ActionKind] = ActionKind.SHELL
    command: str
    session: str | None = None
    cwd: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class EditorCommand:
    """Invoke a named host command with verbatim arguments."""

    kind: ClassVar[ActionKind] = ActionKind.EDITOR
    command: str
    args: tuple[Any, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class BuildTask:
    """Run a task from the task catalog by its display name."""

    kind: ClassVar[ActionKind] = ActionKind.TASK
    command: str
    description: str | None = None


@dataclass(frozen=True)
class OpenInContainer:
    """Open a local folder inside its dev container."""

    kind: ClassVar[ActionKind] = ActionKind.CONTAINER
    path: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class OpenOverSSH:
    """Open a folder on a remote host over SSH."""

    kind: ClassVar[ActionKind] = ActionKind.SSH
    path: str | None = None
    host: str | None = None
    description: str | None = None


type ResolvedAction = ShellCommand | EditorCommand | BuildTask | OpenInContainer | OpenOverSSH


def describe_action(action: ResolvedAction) -> str:
    """Short human label for progress and error messages."""
    if action.description:
        return action.description
    match action:
        case ShellCommand(command=command) | EditorCommand(command=command) | BuildTask(command=command):
            return command
        case OpenOverSSH(path=path, host=host):
            return f"{host}:{path}"
        case OpenInContainer(path=path):
            return f"container:{path}"
    return repr(action)


# Configuration types
@dataclass
class ActionDefinition:
    """One element of an entry's actions or parallel list, or a command definition."""

    ref: str | None = None
    type: str | None = None
    command: str | None = None
    session: str | None = None
    args: list[Any] | None = None
    cwd: str | None = None
    path: str | None = None
    host: str | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActionDefinition":
        return cls(
            ref=data.get("ref"),
            type=data.get("type"),
            command=data.get("command"),
            session=data.get("session"),
            args=data.get("args"),
            cwd=data.get("cwd"),
            path=data.get("path"),
            host=data.get("host"),
            description=data.get("description"),
        )


@dataclass
class MenuEntry:
    """A menu item: a category with children or a runnable leaf."""

    label: str
    icon: str | None = None
    description: str | None = None
    children: list["MenuEntry"] = field(default_factory=list)
    ref: str | None = None
    type: str | None = None
    command: str | None = None
    session: str | None = None
    args: list[Any] | None = None
    cwd: str | None = None
    path: str | None = None
    host: str | None = None
    actions: list[ActionDefinition] = field(default_factory=list)
    parallel: list[ActionDefinition] = field(default_factory=list)
    continue_on_error: bool = False

    @property
    def is_category(self) -> bool:
        return bool(self.children)

    def inline_action(self) -> ActionDefinition:
        """The entry's own fields viewed as a single action definition."""
        return ActionDefinition(
            ref=self.ref,
            type=self.type,
            command=self.command,
            session=self.session,
            args=self.args,
            cwd=self.cwd,
            path=self.path,
            host=self.host,
            description=self.description,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MenuEntry":
        return cls(
            label=data["label"],
            icon=data.get("icon"),
            description=data.get("description"),
            children=[cls.from_dict(child) for child in data.get("children", [])],
            ref=data.get("ref"),
            type=data.get("type"),
            command=data.get("command"),
            session=data.get("session"),
            args=data.get("args"),
            cwd=data.get("cwd"),
            path=data.get("path"),
            host=data.get("host"),
            actions=[ActionDefinition.from_dict(a) for a in data.get("actions", [])],
            parallel=[ActionDefinition.from_dict(a) for a in data.get("parallel", [])],
            continue_on_error=data.get("continue_on_error", False),
        )


@dataclass
class TaskConfig:
    """A task from the [tasks] table."""

    name: str
    command: str
    session: str | None = None
    cwd: str | None = None


# Host-side handles
@dataclass(frozen=True)
class Session:
    """Handle to a live interactive shell (a tmux pane).

    Attributes:
        pane_id: Tmux pane ID; the session's identity.
        name: Display name the session was created or found under.
    """

    pane_id: PaneID
    name: str = field(compare=False)


@dataclass(frozen=True)
class Task:
    """Entry returned by a task catalog."""

    name: str
    command: str | None = None
    session: str | None = None
    cwd: str | None = None


# Executor types
@dataclass(frozen=True)
class Single:
    """Execution unit holding one action."""

    action: ResolvedAction
    index: int

    @property
    def actions(self) -> tuple[ResolvedAction, ...]:
        return (self.action,)


@dataclass(frozen=True)
class TerminalGroup:
    """Two or more contiguous shell actions sent to one session as one line."""

    actions: tuple[ShellCommand, ...]
    session: str
    index: int


type ActionGroup = Single | TerminalGroup


@dataclass
class ActionError:
    """Failure of one execution unit under continue-on-error."""

    index: int
    action: ResolvedAction
    error: Exception


@dataclass
class ExecutionResult:
    """Outcome of a sequential run."""

    success: bool
    completed_count: int
    total_count: int
    cancelled: bool = False
    error: Exception | None = None
    failed_index: int | None = None
    errors: list[ActionError] | None = None

    @property
    def failed_step(self) -> int | None:
        """1-based step number of the failing unit, for user messages."""
        return None if self.failed_index is None else self.failed_index + 1

    @property
    def status(self) -> Literal["completed", "cancelled", "failed", "partial"]:
        if self.cancelled:
            return "cancelled"
        if self.error is not None:
            return "failed"
        if self.errors:
            return "partial"
        return "completed"


class CancelSignal(Protocol):
    """Anything exposing is_set(), e.g. asyncio.Event or threading.Event."""

    def is_set(self) -> bool: ...


type ProgressCallback = Callable[[int, int, ResolvedAction], None]
