"""Tasks command - list the task catalog."""

from ..app import app
from ..errors import ConfigError, table_error_response


@app.command(
    display="table",
    headers=["Task", "Command", "Session"],
    fastmcp={"type": "tool", "description": "List tasks runnable by name"},
)
def tasks(state):
    """List tasks defined in runtap.toml."""
    try:
        executor = state.get_executor()
        catalog = state.run(executor.host.tasks.fetch_all())
    except ConfigError as e:
        return table_error_response(str(e))

    return [{"Task": t.name, "Command": t.command or "-", "Session": t.session or f"task:{t.name}"} for t in catalog]
