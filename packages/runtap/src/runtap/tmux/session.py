"""Session management for tmux.

PUBLIC API:
  - session_exists: Check if session exists
  - sanitize_session_name: Make a display name usable as a tmux session name
  - create_session: Create a detached session (or a window in an existing one)
  - kill_session: Kill a tmux session
"""

from typing import Optional

from .core import run_tmux
from .exceptions import TmuxError


def sanitize_session_name(name: str) -> str:
    """Replace characters tmux does not allow in session names."""
    cleaned = name.replace(":", "_").replace(".", "_").strip()
    return cleaned or "runtap"


def session_exists(name: str) -> bool:
    """Check if session exists.

    Args:
        name: Session name to check.

    Returns:
        True if session exists, False otherwise.
    """
    code, _, _ = run_tmux(["has-session", "-t", f"={name}"])
    return code == 0


def create_session(name: str, start_dir: Optional[str] = None) -> str:
    """Create a detached pane for name and return its pane ID.

    A new tmux session is created when none is called name; otherwise a new
    window is opened in the existing session so an unrelated pane is never
    taken over.

    Args:
        name: Session name (sanitized before use).
        start_dir: Starting directory for the new pane.

    Returns:
        Pane ID of the new pane (e.g. "%42").

    Raises:
        TmuxError: If tmux refuses to create the pane.
    """
    session = sanitize_session_name(name)
    if session_exists(session):
        args = ["new-window", "-d", "-t", f"={session}:", "-P", "-F", "#{pane_id}"]
    else:
        args = ["new-session", "-d", "-s", session, "-P", "-F", "#{pane_id}"]
    if start_dir:
        args.extend(["-c", start_dir])

    code, stdout, stderr = run_tmux(args)
    if code != 0:
        raise TmuxError(f"Failed to create session {session}: {stderr.strip()}")
    return stdout.strip()


def kill_session(name: str) -> bool:
    """Kill a tmux session.

    Args:
        name: Session name to kill.

    Returns:
        True if session was killed successfully, False otherwise.
    """
    code, _, _ = run_tmux(["kill-session", "-t", f"={sanitize_session_name(name)}"])
    return code == 0
