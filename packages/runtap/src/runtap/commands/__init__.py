"""runtap commands."""

from .menu import menu
from .run import run
from .sessions import sessions
from .tasks import tasks
from .reload import reload

__all__ = ["menu", "run", "sessions", "tasks", "reload"]
