"""Action resolution - turn menu entries into resolved actions.

Resolution is a pure function of (entry, command dictionary). Problems are
passed to a report callback and the offending element is skipped; nothing here
raises.

PUBLIC API:
  - resolve_actions: Resolve an entry's single action or sequential actions
  - resolve_parallel: Resolve an entry's parallel actions
  - resolve_definition: Resolve one action definition
  - is_actionable: Check whether an entry can be run
"""

import logging
from typing import Callable, Mapping

from .errors import MissingRequiredFieldError, RuntapError, UnknownActionTypeError, UnknownReferenceError
from .types import (
    DEFAULT_SESSION,
    ActionDefinition,
    ActionKind,
    BuildTask,
    EditorCommand,
    MenuEntry,
    OpenInContainer,
    OpenOverSSH,
    ResolvedAction,
    ShellCommand,
)

__all__ = ["resolve_actions", "resolve_parallel", "resolve_definition", "is_actionable"]

logger = logging.getLogger(__name__)

type Report = Callable[[RuntapError], None]
type CommandDict = Mapping[str, ActionDefinition]


def _log_report(error: RuntapError) -> None:
    logger.warning(f"Skipping action: {error}")


def is_actionable(entry: MenuEntry) -> bool:
    """Check whether an entry runs something when selected.

    Categories never run. Leaves run if they declare actions, parallel
    actions, a ref, or an inline type.
    """
    if entry.is_category:
        return False
    return bool(entry.actions or entry.parallel or entry.ref or entry.type)


def _build(definition: ActionDefinition, kind: ActionKind) -> ResolvedAction:
    """Build the resolved variant for kind from a definition's fields."""
    match kind:
        case ActionKind.SHELL:
            return ShellCommand(
                command=definition.command or "",
                session=definition.session,
                cwd=definition.cwd,
                description=definition.description,
            )
        case ActionKind.EDITOR:
            return EditorCommand(
                command=definition.command or "",
                args=tuple(definition.args or ()),
                description=definition.description,
            )
        case ActionKind.TASK:
            return BuildTask(command=definition.command or "", description=definition.description)
        case ActionKind.CONTAINER:
            return OpenInContainer(path=definition.path, description=definition.description)
        case ActionKind.SSH:
            return OpenOverSSH(path=definition.path, host=definition.host, description=definition.description)


def resolve_definition(
    definition: ActionDefinition, commands: CommandDict, report: Report | None = None
) -> ResolvedAction | None:
    """Resolve one action definition, following its ref if it has one.

    Args:
        definition: Inline action or ref.
        commands: Named command definitions.
        report: Receives the reason when the definition cannot be resolved.

    Returns:
        The resolved action, or None if it was skipped.
    """
    report = report or _log_report

    if definition.ref is not None:
        target = commands.get(definition.ref)
        if target is None:
            report(UnknownReferenceError(definition.ref))
            return None
        definition = target

    if definition.type is None:
        report(MissingRequiredFieldError("type"))
        return None

    kind = ActionKind.parse(definition.type)
    if kind is None:
        report(UnknownActionTypeError(definition.type))
        return None

    return _build(definition, kind)


def _resolve_list(definitions: list[ActionDefinition], commands: CommandDict, report: Report) -> list[ResolvedAction]:
    resolved = []
    for definition in definitions:
        action = resolve_definition(definition, commands, report)
        if action is not None:
            resolved.append(action)
    return resolved


def _unify_sessions(actions: list[ResolvedAction], entry_session: str | None) -> list[ResolvedAction]:
    """Point every shell action at one session.

    The entry's own session wins, then the first shell action that names one,
    then the default.
    """
    unified = entry_session
    if unified is None:
        unified = next(
            (a.session for a in actions if isinstance(a, ShellCommand) and a.session),
            DEFAULT_SESSION,
        )

    result: list[ResolvedAction] = []
    for action in actions:
        if isinstance(action, ShellCommand):
            action = ShellCommand(
                command=action.command, session=unified, cwd=action.cwd, description=action.description
            )
        result.append(action)
    return result


def resolve_actions(entry: MenuEntry, commands: CommandDict, report: Report | None = None) -> list[ResolvedAction]:
    """Resolve an entry's sequential actions.

    Args:
        entry: Menu entry to resolve.
        commands: Named command definitions.
        report: Receives each skipped element's error. Defaults to logging.

    Returns:
        Resolved actions in declaration order; empty for categories and for
        entries that resolve to nothing.
    """
    report = report or _log_report

    if entry.is_category:
        return []

    if entry.actions:
        resolved = _resolve_list(entry.actions, commands, report)
        return _unify_sessions(resolved, entry.session)

    action = resolve_definition(entry.inline_action(), commands, report)
    return [action] if action is not None else []


def resolve_parallel(entry: MenuEntry, commands: CommandDict, report: Report | None = None) -> list[ResolvedAction]:
    """Resolve an entry's parallel actions.

    Each action keeps its own session name; no unification is applied.
    """
    if entry.is_category or not entry.parallel:
        return []
    return _resolve_list(entry.parallel, commands, report or _log_report)
