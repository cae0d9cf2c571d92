"""Tests for the run command against the in-memory host."""

import importlib
import signal
import threading
from contextlib import contextmanager

import pytest

from runtap import config as config_module
from runtap.app import RuntapState
from runtap.commands import run
from runtap.commands._helpers import interrupt_cancels
from runtap.config import ConfigManager

run_module = importlib.import_module("runtap.commands.run")

MENU = """
version = "1"

[commands.lint]
type = "shell"
command = "npm run lint"

[commands.test]
type = "shell"
command = "npm test"

[commands.build]
type = "shell"
command = "npm run build"

[[menu]]
label = "CI"
actions = [{ ref = "lint" }, { ref = "test" }, { ref = "build" }]

[[menu]]
label = "Deploy"
actions = [{ type = "task", command = "deploy" }, { type = "editor", command = "save" }]

[[menu]]
label = "Dev"
parallel = [
    { type = "shell", command = "npm run api", session = "api" },
    { type = "shell", command = "npm run web" },
]

[[menu]]
label = "Fallback"
parallel = [{ ref = "missing" }]
actions = [{ ref = "lint" }, { ref = "test" }]

[[menu]]
label = "Pull"
type = "shell"
command = "git pull"
"""


def texts(response):
    return "\n".join(str(e.get("content", "")) + " ".join(e.get("items", [])) for e in response["elements"])


@pytest.fixture
def state(executor, tmp_path, monkeypatch):
    path = tmp_path / "runtap.toml"
    path.write_text(MENU)
    monkeypatch.setattr(config_module, "_config_manager", ConfigManager(path))
    state = RuntapState(executor=executor)
    yield state
    state.shutdown()


class TestRunSequence:
    def test_ci_sends_one_combined_line(self, state, sessions):
        response = run(state, "CI")
        assert response["frontmatter"]["status"] == "completed"
        assert response["frontmatter"]["completed"] == 3
        assert sessions.sent == [("runtap", "npm run lint && npm test && npm run build")]

    async def test_runs_inside_a_running_loop(self, state, sessions):
        response = run(state, "CI")
        assert response["frontmatter"]["status"] == "completed"
        assert len(sessions.sent) == 1

    def test_failed_step_rendered(self, state, host):
        response = run(state, "Deploy")
        assert response["frontmatter"]["status"] == "failed"
        assert response["frontmatter"]["failed_step"] == 1
        assert 'Task "deploy" not found' in texts(response)
        assert host.commands.calls == []

    def test_continue_on_error_override(self, state, host):
        response = run(state, "Deploy", continue_on_error=True)
        assert response["frontmatter"]["status"] == "partial"
        assert response["frontmatter"]["completed"] == 1
        assert host.commands.calls == [("save", [])]

    def test_interrupt_cancels_before_next_step(self, state, sessions, monkeypatch):
        @contextmanager
        def already_interrupted():
            cancel = threading.Event()
            cancel.set()
            yield cancel

        monkeypatch.setattr(run_module, "interrupt_cancels", already_interrupted)
        response = run(state, "CI")
        assert response["frontmatter"]["status"] == "cancelled"
        assert response["frontmatter"]["completed"] == 0
        assert "cancelled" in texts(response)
        assert sessions.sent == []


class TestRunOtherShapes:
    def test_single_action(self, state, sessions):
        response = run(state, "Pull")
        assert response["frontmatter"]["status"] == "completed"
        assert sessions.sent == [("runtap", "git pull")]

    def test_parallel_starts_sessions(self, state, sessions):
        response = run(state, "Dev")
        assert response["frontmatter"] == {"status": "started", "entry": "Dev", "sessions": 2}
        assert [name for name, _, _ in sessions.created] == ["api", "parallel-2"]

    def test_empty_parallel_falls_back_to_actions(self, state, sessions):
        response = run(state, "Fallback")
        assert response["frontmatter"]["status"] == "completed"
        assert sessions.sent == [("runtap", "npm run lint && npm test")]
        assert "missing" in texts(response)

    def test_unknown_entry(self, state):
        response = run(state, "Nope")
        assert response["frontmatter"]["status"] == "error"


class TestInterruptCancels:
    def test_sigint_sets_event_instead_of_raising(self):
        previous = signal.getsignal(signal.SIGINT)
        with interrupt_cancels() as cancel:
            signal.raise_signal(signal.SIGINT)
        assert cancel.is_set()
        assert signal.getsignal(signal.SIGINT) is previous

    def test_off_main_thread_yields_plain_event(self):
        seen = []

        def worker():
            with interrupt_cancels() as cancel:
                seen.append(cancel.is_set())

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()
        assert seen == [False]
