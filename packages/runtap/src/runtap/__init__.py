"""Menu-driven action runner for tmux with MCP support.

Resolves menu entries from runtap.toml into shell commands, host commands,
tasks and remote-open requests, and runs them in tmux panes one at a time,
as an ordered sequence, or side by side.

PUBLIC API:
  - ActionExecutor: Runs resolved actions against a host
  - resolve_actions: Resolve an entry's sequential actions
  - resolve_parallel: Resolve an entry's parallel actions
  - group_actions: Batch contiguous same-session shell actions
  - ExecutionResult: Outcome of a sequential run
"""

from .executor import ActionExecutor
from .grouping import group_actions
from .resolver import resolve_actions, resolve_parallel
from .types import ExecutionResult

__version__ = "0.1.0"
__all__ = ["ActionExecutor", "resolve_actions", "resolve_parallel", "group_actions", "ExecutionResult"]
