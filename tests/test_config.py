"""Tests for loading and validating runtap.toml."""

import pytest

from runtap.config import ConfigManager, validate_config
from runtap.errors import ConfigError

VALID = """
version = "1"

[default]
editor = "code-insiders"

[commands.lint]
type = "shell"
command = "npm run lint"

[tasks.build]
command = "make"
session = "builds"

[[menu]]
label = "Git"

[[menu.children]]
label = "Pull"
type = "shell"
command = "git pull"

[[menu]]
label = "CI"
continue_on_error = true
actions = [{ ref = "lint" }, { type = "shell", command = "npm test" }]

[[menu]]
label = "Dev"
parallel = [{ type = "shell", command = "npm run api", session = "api" }]
"""


def write(tmp_path, text):
    path = tmp_path / "runtap.toml"
    path.write_text(text)
    return path


class TestConfigManager:
    def test_loads_menu_commands_and_tasks(self, tmp_path):
        config = ConfigManager(write(tmp_path, VALID))
        assert [e.label for e in config.menu] == ["Git", "CI", "Dev"]
        assert config.commands["lint"].command == "npm run lint"
        assert config.tasks["build"].session == "builds"
        assert config.editor == "code-insiders"
        assert config.config_dir == tmp_path

    def test_sequence_entry(self, tmp_path):
        ci = ConfigManager(write(tmp_path, VALID)).find_entry("CI")
        assert ci.continue_on_error
        assert [a.ref for a in ci.actions] == ["lint", None]

    def test_find_entry_by_path_and_bare_label(self, tmp_path):
        config = ConfigManager(write(tmp_path, VALID))
        assert config.find_entry("Git > Pull").command == "git pull"
        assert config.find_entry("Pull").command == "git pull"
        assert config.find_entry("Git > Push") is None
        assert config.find_entry("Nope") is None

    def test_walk_yields_crumbs(self, tmp_path):
        crumbs = [c for c, _ in ConfigManager(write(tmp_path, VALID)).walk()]
        assert crumbs == [("Git",), ("Git", "Pull"), ("CI",), ("Dev",)]

    def test_missing_file_gives_empty_menu(self, tmp_path):
        config = ConfigManager(tmp_path / "runtap.toml")
        assert config.menu == []
        assert config.editor == "code"

    def test_invalid_toml(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid TOML"):
            ConfigManager(write(tmp_path, "version = "))

    def test_validation_failure_lists_problems(self, tmp_path):
        with pytest.raises(ConfigError) as exc:
            ConfigManager(write(tmp_path, '[[menu]]\nlabel = "x"\ntype = "teleport"\n'))
        assert 'version: Missing or invalid "version" field' in exc.value.problems
        assert any(p.startswith("menu[0].type:") for p in exc.value.problems)

    def test_reload_picks_up_changes(self, tmp_path):
        path = write(tmp_path, VALID)
        config = ConfigManager(path)
        path.write_text('version = "1"\nmenu = []\n')
        config.reload()
        assert config.menu == []


class TestValidateConfig:
    def test_valid(self):
        data = {"version": "1", "menu": [{"label": "a", "type": "shell", "command": "ls"}]}
        assert validate_config(data) == []

    def test_missing_menu(self):
        assert validate_config({"version": "1"}) == ['menu: Missing "menu" field']

    def test_action_paths(self):
        data = {
            "version": "1",
            "menu": [{"label": "CI", "actions": [{"type": "shell"}, {"command": "x"}, "nope"]}],
        }
        assert validate_config(data) == [
            'menu[0].actions[0].command: Missing or invalid "command" field',
            'menu[0].actions[1].type: Missing "type" or "ref"',
            "menu[0].actions[2]: Action must be a table",
        ]

    def test_ssh_needs_path_and_host(self):
        data = {"version": "1", "menu": [{"label": "Box", "type": "ssh"}]}
        assert validate_config(data) == [
            'menu[0].path: Missing or invalid "path" field',
            'menu[0].host: Missing or invalid "host" field',
        ]

    def test_nested_children(self):
        data = {"version": "1", "menu": [{"label": "Git", "children": [{"type": "shell", "command": "ls"}]}]}
        assert validate_config(data) == ['menu[0].children[0].label: Missing or invalid "label" field']

    def test_bad_command_definition(self):
        data = {"version": "1", "menu": [], "commands": {"x": {"type": "nope"}}}
        assert validate_config(data)[0].startswith("commands.x.type:")

    def test_task_needs_command(self):
        data = {"version": "1", "menu": [], "tasks": {"build": {}}}
        assert validate_config(data) == ['tasks.build.command: Missing or invalid "command" field']

    def test_both_lists_validated(self):
        data = {
            "version": "1",
            "menu": [{"label": "Dev", "actions": [{"ref": "lint"}], "parallel": ["api", {"type": "shell"}]}],
        }
        assert validate_config(data) == [
            "menu[0].parallel[0]: Action must be a table",
            'menu[0].parallel[1].command: Missing or invalid "command" field',
        ]

    def test_parallel_with_inline_action_checks_inline(self):
        data = {"version": "1", "menu": [{"label": "Dev", "parallel": [], "type": "ssh", "path": "/srv"}]}
        assert validate_config(data) == ['menu[0].host: Missing or invalid "host" field']


class TestBadParallelEntry:
    def test_non_table_parallel_element_is_config_error(self, tmp_path):
        text = (
            'version = "1"\n[[menu]]\nlabel = "Dev"\n'
            'actions = [{ type = "shell", command = "ls" }]\nparallel = ["api"]\n'
        )
        with pytest.raises(ConfigError) as exc:
            ConfigManager(write(tmp_path, text))
        assert exc.value.problems == ["menu[0].parallel[0]: Action must be a table"]
