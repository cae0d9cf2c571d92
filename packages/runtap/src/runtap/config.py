"""Configuration management for runtap.

Loads the menu, command definitions, tasks and defaults from runtap.toml.
"""

from pathlib import Path
from typing import Any, Optional, Dict
import logging
import tomllib

from .errors import ConfigError
from .types import ActionDefinition, ActionKind, MenuEntry, TaskConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "runtap.toml"

# Kinds that carry a command string, and the fields the others need
_COMMAND_KINDS = {ActionKind.SHELL, ActionKind.EDITOR, ActionKind.TASK}
_PATH_FIELDS = {ActionKind.CONTAINER: ["path"], ActionKind.SSH: ["path", "host"]}
_KINDS = ", ".join(k.value for k in ActionKind)


def _find_config_file() -> Optional[Path]:
    """Find runtap.toml in current or parent directories."""
    current = Path.cwd()

    for parent in [current] + list(current.parents):
        config_file = parent / CONFIG_FILENAME
        if config_file.exists():
            return config_file

    return None


def _load_config(path: Optional[Path] = None) -> dict:
    """Load raw configuration from file."""
    if path is None:
        path = _find_config_file()

    if path is None or not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def _check_action(item: dict, path: str, problems: list[str]) -> None:
    """Validate a ref or inline action definition."""
    if "ref" in item:
        if not isinstance(item["ref"], str):
            problems.append(f'{path}.ref: "ref" must be a string')
        return

    if "type" not in item:
        problems.append(f'{path}.type: Missing "type" or "ref"')
        return

    kind = ActionKind.parse(item["type"])
    if kind is None:
        problems.append(f'{path}.type: "type" must be one of: {_KINDS}')
        return

    _check_fields(item, kind, path, problems)


def _check_fields(item: dict, kind: ActionKind, path: str, problems: list[str]) -> None:
    if kind in _COMMAND_KINDS and not isinstance(item.get("command"), str):
        problems.append(f'{path}.command: Missing or invalid "command" field')

    for name in _PATH_FIELDS.get(kind, []):
        if not isinstance(item.get(name), str):
            problems.append(f'{path}.{name}: Missing or invalid "{name}" field')

    for name in ("session", "cwd", "description"):
        if name in item and not isinstance(item[name], str):
            problems.append(f'{path}.{name}: "{name}" must be a string')

    if "args" in item and not isinstance(item["args"], list):
        problems.append(f'{path}.args: "args" must be an array')


def _check_action_list(items: Any, path: str, problems: list[str]) -> None:
    if not isinstance(items, list):
        problems.append(f'{path}: must be an array')
        return
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            problems.append(f"{path}[{i}]: Action must be a table")
            continue
        _check_action(item, f"{path}[{i}]", problems)


def _check_menu(items: Any, path: str, problems: list[str]) -> None:
    if not isinstance(items, list):
        problems.append(f'{path}: must be an array')
        return

    for i, item in enumerate(items):
        item_path = f"{path}[{i}]"
        if not isinstance(item, dict):
            problems.append(f"{item_path}: Menu item must be a table")
            continue

        if not isinstance(item.get("label"), str) or not item["label"]:
            problems.append(f'{item_path}.label: Missing or invalid "label" field')

        for name in ("icon", "description", "session"):
            if name in item and not isinstance(item[name], str):
                problems.append(f'{item_path}.{name}: "{name}" must be a string')

        if "children" in item:
            _check_menu(item["children"], f"{item_path}.children", problems)
            continue

        # An entry may declare both lists; run falls back from parallel to actions
        if "actions" in item:
            _check_action_list(item["actions"], f"{item_path}.actions", problems)
            if "continue_on_error" in item and not isinstance(item["continue_on_error"], bool):
                problems.append(f'{item_path}.continue_on_error: "continue_on_error" must be a boolean')
        if "parallel" in item:
            _check_action_list(item["parallel"], f"{item_path}.parallel", problems)
        if "actions" not in item and ("parallel" not in item or "type" in item or "ref" in item):
            _check_action(item, item_path, problems)


def validate_config(data: dict) -> list[str]:
    """Validate raw configuration data.

    Args:
        data: Parsed runtap.toml contents.

    Returns:
        List of problems, each prefixed with its path (empty if valid).
    """
    problems: list[str] = []

    if not isinstance(data.get("version"), str):
        problems.append('version: Missing or invalid "version" field')

    if "menu" not in data:
        problems.append('menu: Missing "menu" field')
    else:
        _check_menu(data["menu"], "menu", problems)

    commands = data.get("commands", {})
    if not isinstance(commands, dict):
        problems.append('commands: "commands" must be a table')
    else:
        for name, command in commands.items():
            if not isinstance(command, dict):
                problems.append(f"commands.{name}: Command definition must be a table")
                continue
            kind = ActionKind.parse(command.get("type"))
            if kind is None:
                problems.append(f'commands.{name}.type: "type" must be one of: {_KINDS}')
                continue
            _check_fields(command, kind, f"commands.{name}", problems)

    tasks = data.get("tasks", {})
    if not isinstance(tasks, dict):
        problems.append('tasks: "tasks" must be a table')
    else:
        for name, task in tasks.items():
            if not isinstance(task, dict) or not isinstance(task.get("command"), str):
                problems.append(f'tasks.{name}.command: Missing or invalid "command" field')

    return problems


class ConfigManager:
    """Manages configuration for runtap."""

    def __init__(self, path: Optional[Path] = None):
        self._config_file = path if path is not None else _find_config_file()
        self.reload()

    def reload(self) -> None:
        """Re-read the configuration file.

        Raises:
            ConfigError: If the file is not valid TOML or fails validation.
        """
        data = _load_config(self._config_file)
        self.menu: list[MenuEntry] = []
        self.commands: Dict[str, ActionDefinition] = {}
        self.tasks: Dict[str, TaskConfig] = {}
        self._default_config = data.get("default", {})

        if not data:
            logger.info("No runtap.toml found; starting with an empty menu")
            return

        problems = validate_config(data)
        if problems:
            raise ConfigError(f"Configuration validation failed in {self._config_file}", problems)

        self.menu = [MenuEntry.from_dict(item) for item in data["menu"]]
        self.commands = {name: ActionDefinition.from_dict(cmd) for name, cmd in data.get("commands", {}).items()}
        self.tasks = {
            name: TaskConfig(name=name, command=task["command"], session=task.get("session"), cwd=task.get("cwd"))
            for name, task in data.get("tasks", {}).items()
        }
        logger.debug(f"Loaded {len(self.menu)} menu entries and {len(self.commands)} commands")

    @property
    def config_file(self) -> Optional[Path]:
        return self._config_file

    @property
    def config_dir(self) -> Path:
        """Directory containing the config file (cwd when there is none)."""
        return self._config_file.parent if self._config_file else Path.cwd()

    def find_entry(self, path: str) -> Optional[MenuEntry]:
        """Find a menu entry by label path.

        Args:
            path: Labels joined with ">" (e.g. "Git > Sync > Pull"). A bare
                label matches the first entry with that label at any depth.

        Returns:
            The entry, or None if no entry matches.
        """
        labels = [part.strip() for part in path.split(">")]

        if len(labels) == 1:
            for _, entry in self.walk():
                if entry.label == labels[0]:
                    return entry
            return None

        entries = self.menu
        found = None
        for label in labels:
            found = next((e for e in entries if e.label == label), None)
            if found is None:
                return None
            entries = found.children
        return found

    def walk(self, entries: Optional[list[MenuEntry]] = None, trail: tuple[str, ...] = ()):
        """Yield (label path, entry) for every entry, depth first."""
        for entry in self.menu if entries is None else entries:
            crumbs = trail + (entry.label,)
            yield crumbs, entry
            if entry.children:
                yield from self.walk(entry.children, crumbs)

    @property
    def editor(self) -> str:
        """Editor binary used to open container and SSH targets."""
        return self._default_config.get("editor", "code")


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get or create the global config manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
