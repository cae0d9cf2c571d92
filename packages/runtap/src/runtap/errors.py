"""Error types and shared error responses for runtap.

Resolution-time problems (unknown references, malformed action definitions)
are reported through a callback and never raised. Execution-time problems are
raised by the executor and collected or propagated according to the caller's
continue-on-error choice.

PUBLIC API:
  - RuntapError: Base exception for all runtap errors
  - ConfigError: Configuration file failed to load or validate
  - MissingCommandError: Action requires a command but has none
  - UnknownActionTypeError: Action kind is not recognised
  - UnknownReferenceError: ref names no command definition
  - MissingRequiredFieldError: Required action field is absent
  - TaskNotFoundError: Named task is not in the task catalog
  - HostDispatchError: Host rejected a dispatched command
  - markdown_error_response: Create error response for markdown display
  - table_error_response: Create error response for table display
"""

from typing import Any


class RuntapError(Exception):
    """Base exception for all runtap errors."""

    pass


class ConfigError(RuntapError):
    """Raised when runtap.toml cannot be parsed or fails validation.

    Attributes:
        problems: Individual validation messages, each prefixed with the
            offending path (e.g. ``menu[2].actions[0].type``).
    """

    def __init__(self, message: str, problems: list[str] | None = None):
        self.problems = problems or []
        if self.problems:
            message = f"{message}:\n" + "\n".join(self.problems)
        super().__init__(message)


class MissingCommandError(RuntapError):
    """Raised when a shell, editor or task action has an empty command."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Action of type '{kind}' requires a command")


class UnknownActionTypeError(RuntapError):
    """Raised when an action kind is not one runtap knows how to run."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unknown action type: {kind}")


class UnknownReferenceError(RuntapError):
    """Reported when a ref names no entry in the command dictionary."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f'Unknown command reference "{ref}"')


class MissingRequiredFieldError(RuntapError):
    """Raised when an action lacks a field its kind requires (path, host)."""

    def __init__(self, field: str, kind: str | None = None):
        self.field = field
        self.kind = kind
        where = f" for '{kind}' action" if kind else ""
        super().__init__(f'Missing required field "{field}"{where}')


class TaskNotFoundError(RuntapError):
    """Raised when no task in the catalog has the requested name."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = available or []
        super().__init__(f'Task "{name}" not found. Available tasks: {", ".join(self.available) or "none"}')


class HostDispatchError(RuntapError):
    """Raised when the host rejects a dispatched command."""

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f'Failed to execute command "{command}": {reason}')


def markdown_error_response(message: str) -> dict[str, Any]:
    """Create error response for markdown display commands.

    Args:
        message: The error message to display

    Returns:
        Markdown display dict with error element
    """
    return {"elements": [{"type": "text", "content": f"Error: {message}"}], "frontmatter": {"status": "error"}}


def table_error_response(message: str) -> list[dict[str, Any]]:
    """Create error response for table display commands.

    Args:
        message: The error message (will be logged)

    Returns:
        Empty list (tables show nothing on error)
    """
    from logging import getLogger

    logger = getLogger(__name__)
    logger.warning(f"Command failed: {message}")
    return []
