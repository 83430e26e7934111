"""Shared fixtures: key event builders and a recording terminal."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import pytest

from termpad.cli.core.input import Key, KeyEvent
from termpad.core.geometry import Size


class FakeTerminal:
    """Terminal stand-in that records frames instead of writing escapes."""

    def __init__(self, size: Size = Size(12, 60)) -> None:
        self._size = size
        self.frames: list[list[str]] = []
        self.cursor: tuple[int, int] | None = None
        self.clears = 0
        self.managed = False

    def size(self) -> Size:
        return self._size

    def clear(self) -> None:
        self.clears += 1

    def paint(self, rows: list[str]) -> None:
        self.frames.append(list(rows))

    def move_to(self, row: int, col: int) -> None:
        self.cursor = (row, col)

    @contextmanager
    def managed_mode(self) -> Iterator[None]:
        self.managed = True
        try:
            yield
        finally:
            self.managed = False


class FakeReader:
    """Input source that replays a fixed list of events."""

    def __init__(self, events: list) -> None:
        self._events = list(events)

    def read_event(self):
        return self._events.pop(0)


@pytest.fixture
def fake_terminal() -> FakeTerminal:
    return FakeTerminal()


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    """A small file with DOS line endings."""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"first line\r\nsecond line\r\n")
    return path


@pytest.fixture
def press():
    """Build key events: press('a'), press('^s'), press(Key.ENTER)."""
    def build(pressed) -> KeyEvent:
        if isinstance(pressed, Key):
            return KeyEvent(key=pressed)
        if pressed.startswith('^') and len(pressed) == 2:
            letter = pressed[1].lower()
            return KeyEvent(char=letter, ctrl=True, raw=chr(ord(letter) - 96))
        return KeyEvent(char=pressed, raw=pressed)
    return build


@pytest.fixture
def replay():
    """Build an input reader from a list of events."""
    return FakeReader
