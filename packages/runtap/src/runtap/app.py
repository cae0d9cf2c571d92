"""runtap ReplKit2 application.

Main application entry point providing dual REPL/MCP access to the runtap
menu: list entries, run them in tmux, and inspect tracked sessions and
tasks.
"""

import asyncio
import threading
from dataclasses import dataclass, field
from typing import Any, Coroutine, TypeVar

from replkit2 import App

from .config import get_config_manager
from .executor import ActionExecutor
from .host import default_host

T = TypeVar("T")


@dataclass
class RuntapState:
    """Application state for runtap.

    Holds one executor (and so one session registry) for the life of the app,
    plus one event loop running on a background thread. Every command submits
    its coroutines to that loop, so the registry's locks stay bound to it
    whether the caller is the REPL or the MCP server's own loop.
    """

    executor: ActionExecutor | None = None
    loop: asyncio.AbstractEventLoop | None = field(default=None, repr=False)
    loop_thread: threading.Thread | None = field(default=None, repr=False)

    def get_executor(self) -> ActionExecutor:
        """Get or create the executor for the current configuration."""
        if self.executor is None:
            self.executor = ActionExecutor(default_host(get_config_manager()))
        return self.executor

    def run(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run coro on the app's loop thread and wait for its result.

        Safe to call from plain synchronous code and from inside another
        running event loop. Must not be called from the app's loop thread.
        """
        if self.loop is None:
            self.loop = asyncio.new_event_loop()
            self.loop_thread = threading.Thread(target=self.loop.run_forever, name="runtap-loop", daemon=True)
            self.loop_thread.start()
        return asyncio.run_coroutine_threadsafe(coro, self.loop).result()

    def shutdown(self) -> None:
        """Forget tracked sessions and stop the loop thread."""
        if self.executor is not None:
            self.executor.dispose()
            self.executor = None
        if self.loop is not None:
            self.loop.call_soon_threadsafe(self.loop.stop)
            if self.loop_thread is not None:
                self.loop_thread.join(timeout=5)
            self.loop.close()
            self.loop = None
            self.loop_thread = None


# Must be created before command imports for decorator registration
app = App(
    "runtap",
    RuntapState,
    uri_scheme="runtap",
    fastmcp={
        "description": "Menu-driven action runner for tmux",
        "tags": {"terminal", "automation", "tmux"},
    },
)


# Command imports trigger @app.command decorator registration
from .commands import menu  # noqa: E402, F401
from .commands import run  # noqa: E402, F401
from .commands import sessions  # noqa: E402, F401
from .commands import tasks  # noqa: E402, F401
from .commands import reload  # noqa: E402, F401


if __name__ == "__main__":
    import sys

    if "--mcp" in sys.argv:
        app.mcp.run()
    else:
        app.run(title="runtap")
