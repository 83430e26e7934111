"""Core value types and messages shared across the editor."""

from termpad.core.geometry import Position, Size
from termpad.core.tasks import Task, TaskKind, PendingTask
from termpad.core.errors import InvalidStateError

__all__ = ["Position", "Size", "Task", "TaskKind", "PendingTask", "InvalidStateError"]
