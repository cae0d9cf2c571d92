"""Run command - execute a menu entry in tmux.

PUBLIC API:
  - run: Run a menu entry by label or label path
"""

import logging
from typing import Any, Optional

from replkit2.textkit.icons import ICONS

from ..app import app
from ..config import get_config_manager
from ..errors import ConfigError, RuntapError, markdown_error_response
from ..resolver import is_actionable, resolve_actions, resolve_parallel
from ..types import ResolvedAction, describe_action
from ._helpers import diagnostic_elements, interrupt_cancels, result_elements

logger = logging.getLogger(__name__)


@app.command(
    display="markdown",
    fastmcp={"type": "tool", "description": "Run a menu entry from runtap.toml"},
)
def run(state, entry: str, continue_on_error: Optional[bool] = None) -> dict[str, Any]:
    """Run a menu entry.

    Parallel entries open one pane per action, falling back to the entry's
    actions when no parallel action resolves. Other entries run their actions
    in order, batching consecutive shell commands for one session. Ctrl-C
    during a sequence stops it at the next step.

    Args:
        state: Application state.
        entry: Entry label, or label path joined with ">" (e.g. "Git > Pull").
        continue_on_error: Override the entry's continue_on_error setting.

    Returns:
        Markdown formatted result with progress and outcome.
    """
    try:
        config = get_config_manager()
        executor = state.get_executor()
    except ConfigError as e:
        return markdown_error_response(f"Failed to load configuration: {e}")

    item = config.find_entry(entry)
    if item is None:
        return markdown_error_response(f"Menu entry '{entry}' not found")
    if not is_actionable(item):
        return markdown_error_response(f"'{item.label}' has no action to run")

    diagnostics: list[RuntapError] = []
    elements: list[dict[str, Any]] = [{"type": "heading", "content": item.label, "level": 2}]

    if item.parallel:
        actions = resolve_parallel(item, config.commands, diagnostics.append)
        if actions:
            try:
                started = state.run(executor.execute_parallel(actions))
            except Exception as e:
                logger.error(f"Parallel start of '{item.label}' failed: {e}")
                return markdown_error_response(str(e))

            items = [f"`{s.name}` {ICONS['arrow']} `{s.pane_id}`" for s in started]
            elements.append({"type": "text", "content": f"Started {len(started)} parallel session(s)"})
            elements.append({"type": "list", "items": items, "ordered": False})
            elements.extend(diagnostic_elements(diagnostics))
            return {
                "elements": elements,
                "frontmatter": {"status": "started", "entry": item.label, "sessions": len(started)},
            }

        # Nothing parallel survived resolution; run the entry's own actions instead
        if not (item.actions or item.ref or item.type):
            response = markdown_error_response(f"'{item.label}' resolved to no actions")
            response["elements"].extend(diagnostic_elements(diagnostics))
            return response
        logger.info(f"'{item.label}' has no runnable parallel actions; falling back to its actions")

    actions = resolve_actions(item, config.commands, diagnostics.append)
    if not actions:
        response = markdown_error_response(f"'{item.label}' resolved to no actions")
        response["elements"].extend(diagnostic_elements(diagnostics))
        return response

    if len(actions) == 1:
        try:
            state.run(executor.execute(actions[0]))
        except Exception as e:
            return markdown_error_response(str(e))

        elements.append({"type": "text", "content": f"{ICONS['success']} {describe_action(actions[0])}"})
        elements.extend(diagnostic_elements(diagnostics))
        return {"elements": elements, "frontmatter": {"status": "completed", "entry": item.label}}

    progress: list[str] = []

    def on_progress(current: int, total: int, action: ResolvedAction) -> None:
        line = f"({current}/{total}) {describe_action(action)}"
        logger.info(line)
        progress.append(line)

    flag = item.continue_on_error if continue_on_error is None else continue_on_error
    try:
        with interrupt_cancels() as cancel:
            result = state.run(
                executor.execute_multiple(actions, continue_on_error=flag, cancel=cancel, on_progress=on_progress)
            )
    except Exception as e:
        logger.error(f"Run of '{item.label}' failed: {e}")
        return markdown_error_response(str(e))

    if progress:
        elements.append({"type": "list", "items": progress, "ordered": False})
    elements.extend(result_elements(result))
    elements.extend(diagnostic_elements(diagnostics))

    return {
        "elements": elements,
        "frontmatter": {
            "status": result.status,
            "entry": item.label,
            "completed": result.completed_count,
            "total": result.total_count,
            "failed_step": result.failed_step,
        },
    }
