"""Utility commands."""

from ..app import app


@app.command(fastmcp={"enabled": False})
def reload(state) -> str:
    """Reload configuration from runtap.toml."""
    from .. import config

    config._config_manager = None
    if state.executor is not None:
        state.executor.dispose()
        state.executor = None
    return "Configuration reloaded"
