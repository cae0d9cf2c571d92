"""Action executor - run resolved actions against a host.

PUBLIC API:
  - ActionExecutor: Runs single actions, sequences and parallel fan-outs
"""

import asyncio
import logging
from collections import defaultdict

from .errors import (
    HostDispatchError,
    MissingCommandError,
    MissingRequiredFieldError,
    TaskNotFoundError,
    UnknownActionTypeError,
)
from .grouping import group_actions
from .host import Host
from .registry import SessionRegistry
from .types import (
    DEFAULT_SESSION,
    ActionError,
    ActionGroup,
    BuildTask,
    CancelSignal,
    EditorCommand,
    ExecutionResult,
    OpenInContainer,
    OpenOverSSH,
    ProgressCallback,
    ResolvedAction,
    Session,
    ShellCommand,
    Single,
    TerminalGroup,
)

__all__ = ["ActionExecutor"]

logger = logging.getLogger(__name__)

# Joins grouped shell commands so each runs only if the previous succeeded
AND_OPERATOR = " && "


class ActionExecutor:
    """Runs resolved actions against a host.

    One executor owns one SessionRegistry. Concurrent calls are allowed: the
    registry serializes acquire/create, and text sent to the same session is
    serialized per session name.

    A terminal group succeeds when its combined line has been delivered to
    the session. Whether the commands themselves succeed inside the shell is
    not observed.
    """

    def __init__(self, host: Host):
        self.host = host
        self.registry = SessionRegistry(host.sessions)
        self._send_locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    async def execute(self, action: ResolvedAction) -> None:
        """Run one action.

        Raises:
            MissingCommandError: Shell, editor or task action without a command.
            MissingRequiredFieldError: Open action without path (or host).
            HostDispatchError: Host rejected an editor command or open request.
            TaskNotFoundError: No task with the requested name.
            UnknownActionTypeError: Not a runtap action.
        """
        await self.host.sessions.prune_closed()
        await self._dispatch(action)

    async def _dispatch(self, action: ResolvedAction) -> None:
        match action:
            case ShellCommand():
                await self._run_shell(action)
            case EditorCommand():
                await self._run_editor_command(action)
            case BuildTask():
                await self._run_task(action)
            case OpenInContainer():
                await self._open_container(action)
            case OpenOverSSH():
                await self._open_ssh(action)
            case _:
                raise UnknownActionTypeError(getattr(action, "kind", type(action).__name__))

    async def _send(self, name: str, cwd: str | None, text: str) -> Session:
        async with self._send_locks[name]:
            session = await self.registry.acquire(name, cwd)
            await self.host.sessions.focus(session)
            await self.host.sessions.send_text(session, text)
            return session

    async def _run_shell(self, action: ShellCommand) -> None:
        if not action.command:
            raise MissingCommandError(action.kind.value)

        name = action.session or DEFAULT_SESSION
        session = await self._send(name, action.cwd, action.command)
        logger.info(f"Sent to '{name}' ({session.pane_id}): {action.command}")

    async def _run_editor_command(self, action: EditorCommand) -> None:
        if not action.command:
            raise MissingCommandError(action.kind.value)

        try:
            await self.host.commands.dispatch(action.command, list(action.args))
        except HostDispatchError:
            raise
        except Exception as e:
            raise HostDispatchError(action.command, str(e)) from e

    async def _run_task(self, action: BuildTask) -> None:
        if not action.command:
            raise MissingCommandError(action.kind.value)

        tasks = await self.host.tasks.fetch_all()
        task = next((t for t in tasks if t.name == action.command), None)
        if task is None:
            raise TaskNotFoundError(action.command, [t.name for t in tasks])

        await self.host.tasks.run(task)

    async def _open_container(self, action: OpenInContainer) -> None:
        if not action.path:
            raise MissingRequiredFieldError("path", action.kind.value)

        try:
            await self.host.opener.open_local(action.path)
        except Exception as e:
            raise HostDispatchError(f"open {action.path} in container", str(e)) from e

    async def _open_ssh(self, action: OpenOverSSH) -> None:
        if not action.path:
            raise MissingRequiredFieldError("path", action.kind.value)
        if not action.host:
            raise MissingRequiredFieldError("host", action.kind.value)

        try:
            await self.host.opener.open_remote(action.host, action.path)
        except Exception as e:
            raise HostDispatchError(f"open {action.host}:{action.path}", str(e)) from e

    async def _run_group(self, group: TerminalGroup) -> None:
        for action in group.actions:
            if not action.command:
                raise MissingCommandError(action.kind.value)

        line = AND_OPERATOR.join(a.command for a in group.actions)
        session = await self._send(group.session, group.actions[0].cwd, line)
        logger.info(f"Sent {len(group.actions)} commands to '{group.session}' ({session.pane_id})")

    async def execute_multiple(
        self,
        actions: list[ResolvedAction],
        continue_on_error: bool = False,
        cancel: CancelSignal | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> ExecutionResult:
        """Run actions in order.

        Consecutive shell actions for the same session are sent as one
        ``&&``-joined line. Cancellation is checked between units only.

        Args:
            actions: Resolved actions in execution order.
            continue_on_error: Collect failures and keep going instead of
                stopping at the first one.
            cancel: Checked before each unit; stops the run when set.
            on_progress: Called with (completed, total, action) for every
                completed action.

        Returns:
            ExecutionResult describing how far the run got.
        """
        total = len(actions)
        if total == 0:
            return ExecutionResult(success=True, completed_count=0, total_count=0)

        await self.host.sessions.prune_closed()

        completed = 0
        errors: list[ActionError] = []

        for group in group_actions(actions):
            if cancel is not None and cancel.is_set():
                logger.info(f"Run cancelled after {completed}/{total} actions")
                return ExecutionResult(success=False, completed_count=completed, total_count=total, cancelled=True)

            try:
                await self._run_unit(group)
            except Exception as e:
                fatal = isinstance(e, UnknownActionTypeError)
                logger.warning(f"Step {group.index + 1} failed: {e}")

                if not continue_on_error or fatal:
                    return ExecutionResult(
                        success=False,
                        completed_count=completed,
                        total_count=total,
                        error=e,
                        failed_index=group.index,
                    )

                errors.append(ActionError(index=group.index, action=group.actions[0], error=e))
                if isinstance(group, TerminalGroup):
                    completed += len(group.actions)
                continue

            for action in group.actions:
                completed += 1
                if on_progress is not None:
                    on_progress(completed, total, action)

        return ExecutionResult(
            success=not errors,
            completed_count=completed,
            total_count=total,
            errors=errors or None,
        )

    async def _run_unit(self, group: ActionGroup) -> None:
        if isinstance(group, Single):
            await self._dispatch(group.action)
        else:
            await self._run_group(group)

    async def execute_parallel(self, actions: list[ResolvedAction]) -> list[Session]:
        """Start every action in its own session, side by side.

        The first session is created standalone and every later one is split
        from it. Only shell actions have their command sent; other kinds get a
        session so the layout stays uniform.

        Args:
            actions: Resolved actions; order only decides creation order.

        Returns:
            Created sessions in input order.
        """
        if not actions:
            return []

        sessions: list[Session] = []
        parent: Session | None = None

        for i, action in enumerate(actions):
            shell = action if isinstance(action, ShellCommand) else None
            name = (shell.session if shell else None) or f"parallel-{i + 1}"
            cwd = shell.cwd if shell else None

            session = await self.host.sessions.create(name, cwd, parent=parent)
            await self.registry.register(name, session)
            sessions.append(session)
            if parent is None:
                parent = session

            if shell is not None and shell.command:
                async with self._send_locks[name]:
                    await self.host.sessions.send_text(session, shell.command)

        await self.host.sessions.focus(sessions[0])
        logger.info(f"Started {len(sessions)} parallel session(s)")
        return sessions

    def dispose(self) -> None:
        """Forget tracked sessions without closing them."""
        self.registry.clear()
        self._send_locks.clear()
