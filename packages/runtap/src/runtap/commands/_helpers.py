"""Shared helper functions for commands.

PUBLIC API:
  - result_elements: Build markdown elements describing an ExecutionResult
  - diagnostic_elements: Build markdown elements for skipped actions
  - interrupt_cancels: Turn Ctrl-C into a cancel request for the duration of a run
"""

import logging
import signal
import threading
from contextlib import contextmanager
from typing import Any, Iterator

from replkit2.textkit.icons import ICONS

from ..errors import RuntapError
from ..types import ExecutionResult, describe_action

__all__ = ["result_elements", "diagnostic_elements", "interrupt_cancels"]

logger = logging.getLogger(__name__)


def result_elements(result: ExecutionResult) -> list[dict[str, Any]]:
    """Build summary elements for a sequential run.

    Args:
        result: Outcome returned by execute_multiple.

    Returns:
        Markdown elements: one summary line, plus a list of errors when the
        run continued past failures.
    """
    counts = f"{result.completed_count}/{result.total_count}"

    if result.cancelled:
        return [{"type": "text", "content": f"{ICONS['info']} Execution cancelled ({counts} completed)"}]

    if result.error is not None:
        return [{"type": "text", "content": f"{ICONS['error']} {result.error} (at step {result.failed_step})"}]

    if result.errors:
        items = [f"Step {e.index + 1} ({describe_action(e.action)}): {e.error}" for e in result.errors]
        return [
            {"type": "text", "content": f"{ICONS['error']} Completed with {len(result.errors)} error(s) ({counts})"},
            {"type": "list", "items": items, "ordered": False},
        ]

    return [{"type": "text", "content": f"{ICONS['success']} All {result.total_count} actions completed"}]


def diagnostic_elements(diagnostics: list[RuntapError]) -> list[dict[str, Any]]:
    """Build a blockquote listing actions skipped during resolution."""
    if not diagnostics:
        return []
    lines = "\n".join(f"Skipped: {d}" for d in diagnostics)
    return [{"type": "blockquote", "content": lines}]


@contextmanager
def interrupt_cancels() -> Iterator[threading.Event]:
    """Yield an event that Ctrl-C sets instead of raising KeyboardInterrupt.

    The run stops at the next step boundary rather than inside a host call.
    Signal handlers can only be installed from the main thread; elsewhere the
    event is yielded without a handler.
    """
    cancel = threading.Event()
    if threading.current_thread() is not threading.main_thread():
        yield cancel
        return

    def _handler(signum, frame):
        logger.info("Interrupt received; stopping after the current step")
        cancel.set()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield cancel
    finally:
        signal.signal(signal.SIGINT, previous)
