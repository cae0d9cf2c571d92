"""Action grouping - batch contiguous shell actions bound for one session.

PUBLIC API:
  - group_actions: Partition actions into execution units
  - flatten_groups: Expand execution units back into actions
"""

from .types import DEFAULT_SESSION, ActionGroup, ResolvedAction, ShellCommand, Single, TerminalGroup

__all__ = ["group_actions", "flatten_groups"]


def _session_of(action: ResolvedAction) -> str | None:
    if isinstance(action, ShellCommand):
        return action.session or DEFAULT_SESSION
    return None


def _close_run(run: list[ShellCommand], start: int) -> ActionGroup:
    if len(run) > 1:
        return TerminalGroup(actions=tuple(run), session=run[0].session or DEFAULT_SESSION, index=start)
    return Single(action=run[0], index=start)


def group_actions(actions: list[ResolvedAction]) -> list[ActionGroup]:
    """Partition actions into execution units in one left-to-right pass.

    Two or more consecutive shell actions targeting the same session become a
    TerminalGroup; everything else is a Single. Each unit records the index of
    its first member in the input.

    Args:
        actions: Ordered resolved actions.

    Returns:
        Ordered execution units covering every input action exactly once.
    """
    groups: list[ActionGroup] = []
    run: list[ShellCommand] = []
    start = 0

    for i, action in enumerate(actions):
        session = _session_of(action)

        if run and session == _session_of(run[0]):
            run.append(action)  # type: ignore[arg-type]
            continue

        if run:
            groups.append(_close_run(run, start))
            run = []

        if isinstance(action, ShellCommand):
            run = [action]
            start = i
        else:
            groups.append(Single(action=action, index=i))

    if run:
        groups.append(_close_run(run, start))

    return groups


def flatten_groups(groups: list[ActionGroup]) -> list[ResolvedAction]:
    """Expand execution units back into the flat action list."""
    return [action for group in groups for action in group.actions]
