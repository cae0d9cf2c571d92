"""Pure tmux operations used by the runtap session host.

PUBLIC API:
  - run_tmux: Run tmux command and return result
  - arun_tmux: Run tmux command from async code
  - PaneInfo: Pane details including runtap display name
  - list_panes: List panes
  - set_pane_name: Label a pane with a display name
  - split_pane: Split a pane
  - send_keys: Type text into a pane
  - select_pane: Focus a pane
  - session_exists: Check if session exists
  - create_session: Create new tmux session
  - kill_session: Kill tmux session
"""

from .core import run_tmux, arun_tmux

from .pane import (
    PaneInfo,
    list_panes,
    set_pane_name,
    split_pane,
    send_keys,
    select_pane,
)

from .session import (
    session_exists,
    create_session,
    kill_session,
)

from .exceptions import TmuxError, CurrentPaneError, PaneNotFoundError

__all__ = [
    "run_tmux",
    "arun_tmux",
    "PaneInfo",
    "list_panes",
    "set_pane_name",
    "split_pane",
    "send_keys",
    "select_pane",
    "session_exists",
    "create_session",
    "kill_session",
    "TmuxError",
    "CurrentPaneError",
    "PaneNotFoundError",
]
