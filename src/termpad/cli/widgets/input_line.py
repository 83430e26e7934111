"""Input line widget - shows status messages and collects typed answers.

The widget is modal: in Display mode it shows a message; after
``begin(prefix)`` it collects text until Enter or Escape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from termpad.cli.core.ansi_text import printable, truncate
from termpad.cli.core.input import Key, KeyEvent
from termpad.cli.widgets.base import BaseWidget
from termpad.core.errors import InvalidStateError


class InputStatus(Enum):
    """Outcome of one key press while collecting."""
    PROCESSING = auto()
    CANCELLED = auto()
    DONE = auto()


@dataclass(frozen=True)
class InputResult:
    """Input status plus the collected text for DONE."""
    status: InputStatus
    text: str = ""


PROCESSING = InputResult(InputStatus.PROCESSING)
CANCELLED = InputResult(InputStatus.CANCELLED)


class InputLine(BaseWidget):
    """Bottom row of the editor: a message, or a prompt being answered."""

    def __init__(self, text: str = "") -> None:
        self._text = text
        self._prefix: str | None = None  # None while displaying
        self._buffer = ""
        self._cursor = 0

    @property
    def collecting(self) -> bool:
        return self._prefix is not None

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def edit_cursor(self) -> int:
        return self._cursor

    def set_status(self, text: str) -> None:
        """Show ``text``, abandoning any input being collected."""
        self._text = text
        self._prefix = None

    def begin(self, prefix: str) -> None:
        """Start collecting input after ``prefix``."""
        self._prefix = prefix
        self._buffer = ""
        self._cursor = 0

    def handle_key(self, event: KeyEvent) -> InputResult:
        """Feed one key press to the input being collected.

        Raises:
            InvalidStateError: if the line is not collecting input
        """
        self._require_collecting()

        if event.key == Key.ESCAPE:
            self._prefix = None
            return CANCELLED

        if event.key == Key.ENTER:
            text = self._buffer
            self._prefix = None
            return InputResult(InputStatus.DONE, text)

        if event.key == Key.BACKSPACE:
            if self._cursor > 0:
                self._buffer = self._buffer[:self._cursor - 1] + self._buffer[self._cursor:]
                self._cursor -= 1
        elif event.key == Key.DELETE:
            self._buffer = self._buffer[:self._cursor] + self._buffer[self._cursor + 1:]
        elif event.key == Key.LEFT:
            self._cursor = max(0, self._cursor - 1)
        elif event.key == Key.RIGHT:
            self._cursor = min(len(self._buffer), self._cursor + 1)
        elif event.key == Key.HOME:
            self._cursor = 0
        elif event.key == Key.END:
            self._cursor = len(self._buffer)
        elif event.is_char:
            self._buffer = self._buffer[:self._cursor] + event.char + self._buffer[self._cursor:]
            self._cursor += 1

        return PROCESSING

    def cursor_screen_column(self) -> int:
        """1-based terminal column of the edit cursor.

        Raises:
            InvalidStateError: if the line is not collecting input
        """
        self._require_collecting()
        return len(self._prefix) + 2 + self._cursor + 1

    def render(self, width: int | None = None) -> str:
        """Render ``"prefix: buffer"`` while collecting, else the message."""
        if self._prefix is not None:
            line = f"{self._prefix}: {self._buffer}"
        else:
            line = self._text
        line = printable(line)
        return line if width is None else truncate(line, width)

    def _require_collecting(self) -> None:
        if self._prefix is None:
            raise InvalidStateError("input line is not collecting input")
