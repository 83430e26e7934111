"""Tasks - messages produced by input handling and executed by the editor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TaskKind(Enum):
    """What the editor should do after an input event."""
    NONE = auto()
    SET_STATUS = auto()
    ASK_INPUT = auto()
    NEW_DOC = auto()
    OPEN_DOC = auto()
    NEXT_TAB = auto()
    PREV_TAB = auto()
    CLOSE_CURRENT_TAB = auto()


class PendingTask(Enum):
    """Why a document asked for text input."""
    NONE = auto()
    SAVE_PATH = auto()
    OPEN_PATH = auto()


@dataclass(frozen=True)
class Task:
    """A task with its optional text payload.

    ``text`` carries the status message, the input prompt or the path to
    open, depending on ``kind``.
    """
    kind: TaskKind = TaskKind.NONE
    text: str = ""

    @classmethod
    def none(cls) -> Task:
        return cls(TaskKind.NONE)

    @classmethod
    def set_status(cls, text: str) -> Task:
        return cls(TaskKind.SET_STATUS, text)

    @classmethod
    def ask_input(cls, prompt: str) -> Task:
        return cls(TaskKind.ASK_INPUT, prompt)

    @classmethod
    def new_doc(cls) -> Task:
        return cls(TaskKind.NEW_DOC)

    @classmethod
    def open_doc(cls, path: str) -> Task:
        return cls(TaskKind.OPEN_DOC, path)

    @classmethod
    def next_tab(cls) -> Task:
        return cls(TaskKind.NEXT_TAB)

    @classmethod
    def prev_tab(cls) -> Task:
        return cls(TaskKind.PREV_TAB)

    @classmethod
    def close_current_tab(cls) -> Task:
        return cls(TaskKind.CLOSE_CURRENT_TAB)
