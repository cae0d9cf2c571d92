"""Pane operations - listing, naming, splitting and sending to panes."""

from typing import List, Optional
from dataclasses import dataclass
import json

from .core import run_tmux, is_current_pane, get_current_pane
from .exceptions import CurrentPaneError, PaneNotFoundError, TmuxError

# Pane user option holding the runtap display name
NAME_OPTION = "@runtap_name"


@dataclass
class PaneInfo:
    """Information about a tmux pane."""

    pane_id: str  # %42
    session: str
    window_index: int
    pane_index: int
    label: str  # value of @runtap_name, empty when unset
    is_current: bool

    @property
    def name(self) -> str:
        """Display name: the runtap label, or the tmux session name."""
        return self.label or self.session


def list_panes() -> List[PaneInfo]:
    """List panes of every tmux session with their runtap display names."""
    cmd = ["list-panes", "-a"]

    # Build JSON-like format for reliable parsing
    fields = {
        "pane_id": "#{pane_id}",
        "session_name": "#{session_name}",
        "window_index": "#{window_index}",
        "pane_index": "#{pane_index}",
        "label": f"#{{{NAME_OPTION}}}",
    }
    format_parts = [f'"{k}":"{v}"' for k, v in fields.items()]
    format_str = "{" + ",".join(format_parts) + "}"

    cmd.extend(["-F", format_str])

    code, stdout, _ = run_tmux(cmd)
    if code != 0:
        return []

    panes = []
    current_pane_id = get_current_pane()

    for line in stdout.strip().split("\n"):
        if not line:
            continue

        try:
            data = json.loads(line)
            panes.append(
                PaneInfo(
                    pane_id=data["pane_id"],
                    session=data["session_name"],
                    window_index=int(data["window_index"]),
                    pane_index=int(data["pane_index"]),
                    label=data["label"],
                    is_current=data["pane_id"] == current_pane_id,
                )
            )
        except (json.JSONDecodeError, KeyError, ValueError):
            continue

    # Sort by session, window, pane
    panes.sort(key=lambda p: (p.session, p.window_index, p.pane_index))
    return panes


def set_pane_name(pane_id: str, name: str) -> None:
    """Store name as the pane's runtap display name.

    Raises:
        PaneNotFoundError: If the pane does not exist.
    """
    code, _, stderr = run_tmux(["set-option", "-p", "-t", pane_id, NAME_OPTION, name])
    if code != 0:
        raise PaneNotFoundError(f"Failed to name pane {pane_id}: {stderr.strip()}")


def split_pane(parent_id: str, start_dir: Optional[str] = None, layout: str | None = "tiled") -> str:
    """Split parent_id and return the new pane's ID.

    Args:
        parent_id: Pane to split.
        start_dir: Starting directory for the new pane.
        layout: Layout re-applied to the window after splitting, or None.

    Raises:
        TmuxError: If the split fails.
    """
    args = ["split-window", "-d", "-t", parent_id, "-P", "-F", "#{pane_id}"]
    if start_dir:
        args.extend(["-c", start_dir])

    code, stdout, stderr = run_tmux(args)
    if code != 0:
        raise TmuxError(f"Failed to split pane {parent_id}: {stderr.strip()}")

    if layout:
        apply_layout(parent_id, layout)
    return stdout.strip()


def apply_layout(target: str, layout: str) -> bool:
    """Apply layout to the window containing target."""
    code, _, _ = run_tmux(["select-layout", "-t", target, layout])
    return code == 0


def send_keys(pane_id: str, text: str, enter: bool = True) -> None:
    """Type text literally into a pane, optionally followed by Enter.

    Raises:
        CurrentPaneError: If attempting to send to current pane
        TmuxError: If tmux rejects the keys
    """
    if is_current_pane(pane_id):
        raise CurrentPaneError(f"Cannot send commands to current pane ({pane_id})")

    code, _, stderr = run_tmux(["send-keys", "-t", pane_id, "-l", text])
    if code != 0:
        raise TmuxError(f"Failed to send keys to {pane_id}: {stderr.strip()}")

    if enter:
        code, _, stderr = run_tmux(["send-keys", "-t", pane_id, "Enter"])
        if code != 0:
            raise TmuxError(f"Failed to send Enter to {pane_id}: {stderr.strip()}")


def select_pane(pane_id: str) -> bool:
    """Make pane_id the active pane of the active window."""
    code, _, _ = run_tmux(["select-window", "-t", pane_id])
    if code != 0:
        return False
    code, _, _ = run_tmux(["select-pane", "-t", pane_id])
    return code == 0
