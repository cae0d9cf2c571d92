"""Sessions command - show sessions tracked by the executor."""

from ..app import app


@app.command(
    display="table",
    headers=["Name", "Pane"],
    fastmcp={"type": "tool", "description": "List tmux sessions runtap is tracking"},
)
def sessions(state):
    """List sessions runtap has created or adopted."""
    if state.executor is None:
        return []

    state.run(state.executor.host.sessions.prune_closed())
    return [
        {"Name": name, "Pane": session.pane_id} for name, session in sorted(state.executor.registry.snapshot().items())
    ]
