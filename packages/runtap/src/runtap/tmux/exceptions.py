"""Errors raised by tmux operations.

PUBLIC API:
  - TmuxError: tmux rejected a command or is not running
  - CurrentPaneError: Refused to type into the pane runtap runs in
  - PaneNotFoundError: Pane closed or never existed
"""

from ..errors import RuntapError


class TmuxError(RuntapError):
    """Raised when tmux rejects a command."""

    pass


class CurrentPaneError(TmuxError):
    """Raised when text would be sent to runtap's own pane."""

    pass


class PaneNotFoundError(TmuxError):
    """Raised when a pane to name or focus is gone."""

    pass
