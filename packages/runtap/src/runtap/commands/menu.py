"""Menu command - list runnable menu entries."""

from typing import Optional

from ..app import app
from ..config import get_config_manager
from ..errors import ConfigError, table_error_response
from ..resolver import is_actionable
from ..types import MenuEntry


def _kind(entry: MenuEntry) -> str:
    if entry.is_category:
        return "category"
    if entry.parallel:
        return "parallel"
    if entry.actions:
        return "sequence"
    if entry.ref:
        return "ref"
    return entry.type or "-"


def _detail(entry: MenuEntry) -> str:
    if entry.is_category:
        return f"{len(entry.children)} item(s)"
    if entry.parallel:
        return f"{len(entry.parallel)} action(s)"
    if entry.actions:
        suffix = ", continue on error" if entry.continue_on_error else ""
        return f"{len(entry.actions)} step(s){suffix}"
    if entry.ref:
        return entry.ref
    if entry.host:
        return f"{entry.host}:{entry.path}"
    return entry.command or entry.path or "-"


@app.command(
    display="table",
    headers=["Entry", "Kind", "Detail"],
    fastmcp={"type": "tool", "description": "List menu entries from runtap.toml"},
)
def menu(state, filter: Optional[str] = None, all: bool = False):
    """List menu entries.

    Args:
        state: Application state (unused).
        filter: Only show entries whose path contains this text.
        all: Include categories and entries that cannot run.
    """
    try:
        config = get_config_manager()
    except ConfigError as e:
        return table_error_response(str(e))

    rows = []
    for crumbs, entry in config.walk():
        if not all and not is_actionable(entry):
            continue

        path = " > ".join(crumbs)
        if filter and filter.lower() not in path.lower():
            continue

        rows.append({"Entry": path, "Kind": _kind(entry), "Detail": _detail(entry)})

    return rows
