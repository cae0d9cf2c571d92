"""Core tmux operations - shared utilities for all tmux modules.

PUBLIC API:
  - run_tmux: Execute tmux command and return result
  - arun_tmux: Execute tmux command without blocking the event loop
  - get_current_pane: Get the pane runtap itself runs in
  - is_current_pane: Check if a pane is the current one
"""

import asyncio
import os
import subprocess
from typing import Optional, Tuple, List


def run_tmux(args: List[str]) -> Tuple[int, str, str]:
    """Run tmux command, return (returncode, stdout, stderr)."""
    cmd = ["tmux"] + args
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except FileNotFoundError:
        return 127, "", "tmux not found on PATH"
    return result.returncode, result.stdout, result.stderr


async def arun_tmux(args: List[str]) -> Tuple[int, str, str]:
    """Run tmux command in a worker thread, return (returncode, stdout, stderr)."""
    return await asyncio.to_thread(run_tmux, args)


def get_current_pane() -> Optional[str]:
    """Get current tmux pane ID if inside tmux."""
    if not os.environ.get("TMUX"):
        return None

    code, stdout, _ = run_tmux(["display", "-p", "#{pane_id}"])
    if code == 0:
        return stdout.strip()
    return None


def is_current_pane(pane_id: str) -> bool:
    """Check if given pane ID is the current pane.

    Args:
        pane_id: Pane ID to check (e.g., "%42")

    Returns:
        True if pane_id matches current pane
    """
    current = get_current_pane()
    return current == pane_id if current else False
