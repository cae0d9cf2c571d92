"""Command registry - the host's editor command dispatcher.

Names registered in-process take precedence; any other name is run as a tmux
command, so ``command = "select-layout"`` with ``args = ["tiled"]`` works out
of the box.

PUBLIC API:
  - CommandRegistry: Dispatcher for editor commands
"""

import inspect
import logging
from typing import Any, Callable, Sequence

from ..tmux import arun_tmux
from ..tmux.exceptions import TmuxError

__all__ = ["CommandRegistry"]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Named command dispatcher with tmux fallback."""

    def __init__(self, tmux_fallback: bool = True):
        self.tmux_fallback = tmux_fallback
        self._commands: dict[str, Callable[..., Any]] = {}

    def register(self, name: str, func: Callable[..., Any]) -> None:
        self._commands[name] = func

    def command(self, name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator form of register()."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.register(name, func)
            return func

        return decorator

    def names(self) -> list[str]:
        return sorted(self._commands)

    async def dispatch(self, name: str, args: Sequence[Any]) -> None:
        """Run name with args.

        Raises:
            LookupError: If name is unknown and tmux fallback is off.
            TmuxError: If the tmux fallback command fails.
        """
        func = self._commands.get(name)
        if func is not None:
            logger.info(f"Dispatching {name} with {len(args)} arg(s)")
            result = func(*args)
            if inspect.isawaitable(result):
                await result
            return

        if not self.tmux_fallback:
            raise LookupError(f"command '{name}' not found")

        code, _, stderr = await arun_tmux([name, *(str(a) for a in args)])
        if code != 0:
            raise TmuxError(stderr.strip() or f"tmux exited with status {code}")
