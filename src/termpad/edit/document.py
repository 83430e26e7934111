"""Document - line-oriented text buffer with a cursor and a scrolling viewport.

A Document owns its lines, the cursor, the viewport offset and the optional
backing file. It turns keyboard and mouse events into edits, and answers
with a Task whenever the editor has to act on its behalf (ask the user for
a path, open a tab, show a status message).

Columns index Python string characters (code points). Wide characters and
combining sequences are not measured, so they may misalign the cursor.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from termpad.cli.core.ansi_text import FAINT, RESET, printable
from termpad.cli.core.input import KeyEvent, MouseAction, MouseEvent
from termpad.cli.core.shortcuts import ShortcutContext, get_shortcut_registry
from termpad.config import EditorConfig
from termpad.core.errors import InvalidStateError
from termpad.core.geometry import Position, Size
from termpad.core.tasks import PendingTask, Task

logger = logging.getLogger(__name__)

# Lines on disk end with either DOS or Unix newlines
_LINE_BREAK = re.compile(r'\r\n|\n')

# Keeps undecodable bytes intact through a load/save cycle
_ENCODING = 'utf-8'
_ERRORS = 'surrogateescape'

SAVE_PROMPT = "File path"
OPEN_PROMPT = "Open file"


def split_lines(text: str) -> list[str]:
    """Split file content into lines.

    A single trailing newline ends the last line instead of starting a new
    empty one, so ``"a\\nb\\n"`` and ``"a\\nb"`` both give ``["a", "b"]``.
    The result always holds at least one line.
    """
    lines = _LINE_BREAK.split(text)
    if len(lines) > 1 and lines[-1] == "":
        lines.pop()
    return lines


class Document:
    """An editable text document.

    Attributes:
        lines: Text lines, never empty
        cursor: Cursor position, always inside ``lines``
        offset: Top-left visible cell, corrected on every render
        file_path: Backing file, or None for an untitled document
        pending_task: What a requested text input will be used for
        status_text: Last message to show for this document
        modified: Whether there are edits since the last load or save
        viewport: Size passed to the last render
        tab_width: Spaces inserted by the Tab key

    Example:
        doc = Document()
        for ch in "hi":
            doc.insert_char(ch)
        doc.save("hello.txt")
    """

    def __init__(self, lines: list[str] | None = None, file_path: Path | str | None = None) -> None:
        self.lines: list[str] = list(lines) if lines else [""]
        self.cursor = Position()
        self.offset = Position()
        self.file_path: Path | None = Path(file_path) if file_path is not None else None
        self.pending_task = PendingTask.NONE
        self.status_text = ""
        self.modified = False
        self.viewport = Size(1, 1)
        self.tab_width = 4

    # -------------------------------------------------------------------------
    # Files
    # -------------------------------------------------------------------------

    @classmethod
    def open(cls, path: Path | str) -> Document:
        """Load a document from disk.

        Raises:
            FileNotFoundError: if ``path`` does not exist
            OSError: if the file cannot be read
        """
        path = Path(path)
        with open(path, 'r', encoding=_ENCODING, errors=_ERRORS, newline='') as f:
            text = f.read()

        doc = cls(split_lines(text), file_path=path)
        doc.status_text = "File loaded successfully"
        logger.info("Opened %s (%d lines)", path, len(doc.lines))
        return doc

    def save(self, path: Path | str | None = None) -> Path:
        """Write the document to ``path`` (default: its own file path).

        Lines are joined with ``\\n`` and a trailing newline is always
        written. On success the document adopts ``path``.

        Raises:
            InvalidStateError: if neither ``path`` nor ``file_path`` is set
            OSError: if the file cannot be written
        """
        target = Path(path) if path is not None else self.file_path
        if target is None:
            raise InvalidStateError("document has no file path to save to")

        content = "\n".join(self.lines) + "\n"
        with open(target, 'w', encoding=_ENCODING, errors=_ERRORS, newline='') as f:
            f.write(content)

        self.file_path = target
        self.modified = False
        logger.info("Saved %s (%d lines)", target, len(self.lines))
        return target

    def can_close(self) -> bool:
        """Whether the tab holding this document may be closed."""
        return True

    @property
    def title(self) -> str:
        """Short name for the tab bar."""
        return self.file_path.name if self.file_path else "untitled"

    # -------------------------------------------------------------------------
    # Pending input
    # -------------------------------------------------------------------------

    def request_save(self) -> Task:
        """Save to the backing file, or ask for a path if there is none."""
        if self.file_path is None:
            self.pending_task = PendingTask.SAVE_PATH
            return Task.ask_input(SAVE_PROMPT)
        return self._save_with_status(self.file_path)

    def request_open(self) -> Task:
        """Ask for the path of a file to open in a new tab."""
        self.pending_task = PendingTask.OPEN_PATH
        return Task.ask_input(OPEN_PROMPT)

    def resolve_pending_input(self, text: str) -> Task:
        """Use text collected by the input line for the pending task.

        Raises:
            InvalidStateError: if no input was requested
        """
        pending = self.pending_task
        if pending == PendingTask.NONE:
            raise InvalidStateError("no pending task is waiting for input")
        self.pending_task = PendingTask.NONE

        path = text.strip()
        if not path:
            return self._set_status("No file path given")

        if pending == PendingTask.SAVE_PATH:
            return self._save_with_status(Path(path).expanduser())
        return Task.open_doc(path)

    def cancel_pending_input(self) -> None:
        """Forget a requested input after the user cancelled it."""
        self.pending_task = PendingTask.NONE

    def _save_with_status(self, path: Path) -> Task:
        try:
            saved = self.save(path)
        except OSError as e:
            logger.warning("Saving %s failed: %s", path, e)
            return self._set_status(f"Error saving: {e}")
        return self._set_status(f"Saved to {saved}")

    def _set_status(self, text: str) -> Task:
        self.status_text = text
        return Task.set_status(text)

    # -------------------------------------------------------------------------
    # Event handling
    # -------------------------------------------------------------------------

    def handle_key(self, event: KeyEvent) -> Task:
        """Apply a key press and return the task it produces."""
        shortcut = get_shortcut_registry().match(event, ShortcutContext.DOCUMENT)
        if shortcut is not None:
            if shortcut.task is not None:
                return Task(shortcut.task)
            result = getattr(self, shortcut.handler)()
            return result if isinstance(result, Task) else Task.none()

        if event.is_char:
            self.insert_char(event.char)
        return Task.none()

    def handle_mouse(self, event: MouseEvent, scroll_lines: int = 1) -> Task:
        """Scroll on wheel events; other mouse events are ignored."""
        if event.action == MouseAction.WHEEL_UP:
            for _ in range(scroll_lines):
                self.move_up()
        elif event.action == MouseAction.WHEEL_DOWN:
            for _ in range(scroll_lines):
                self.move_down()
        return Task.none()

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor.row]

    def insert_char(self, ch: str) -> None:
        """Insert a character at the cursor; ``'\\n'`` splits the line."""
        if ch == '\n':
            self.insert_newline()
            return

        row, col = self.cursor.row, self.cursor.col
        line = self.lines[row]
        self.lines[row] = line[:col] + ch + line[col:]
        self.modified = True
        self.move_right()

    def insert_newline(self) -> None:
        """Split the current line at the cursor."""
        row, col = self.cursor.row, self.cursor.col
        line = self.lines[row]
        self.lines[row] = line[:col]
        self.lines.insert(row + 1, line[col:])
        self.modified = True
        self.cursor = Position(row + 1, 0)

    def insert_tab(self) -> None:
        for _ in range(self.tab_width):
            self.insert_char(' ')

    def backspace(self) -> None:
        """Delete the character before the cursor, joining lines at column 0."""
        row, col = self.cursor.row, self.cursor.col
        if col == 0:
            if row == 0:
                return
            previous = self.lines[row - 1]
            self.lines[row - 1] = previous + self.lines.pop(row)
            self.cursor = Position(row - 1, len(previous))
        else:
            line = self.lines[row]
            self.lines[row] = line[:col - 1] + line[col:]
            self.cursor.col -= 1
        self.modified = True

    def delete(self) -> None:
        """Delete the character under the cursor, joining lines at line end."""
        row, col = self.cursor.row, self.cursor.col
        line = self.lines[row]
        if col < len(line):
            self.lines[row] = line[:col] + line[col + 1:]
        elif row < len(self.lines) - 1:
            self.lines[row] = line + self.lines.pop(row + 1)
        else:
            return
        self.modified = True

    # -------------------------------------------------------------------------
    # Cursor movement
    # -------------------------------------------------------------------------

    def move_left(self) -> None:
        if self.cursor.col > 0:
            self.cursor.col -= 1
        elif self.cursor.row > 0:
            self.cursor.row -= 1
            self.cursor.col = len(self.current_line)

    def move_right(self) -> None:
        if self.cursor.col < len(self.current_line):
            self.cursor.col += 1
        elif self.cursor.row < len(self.lines) - 1:
            self.cursor.row += 1
            self.cursor.col = 0

    def move_up(self) -> None:
        if self.cursor.row > 0:
            self.cursor.row -= 1
            self.cursor.col = min(self.cursor.col, len(self.current_line))

    def move_down(self) -> None:
        if self.cursor.row < len(self.lines) - 1:
            self.cursor.row += 1
            self.cursor.col = min(self.cursor.col, len(self.current_line))

    def move_home(self) -> None:
        self.cursor.col = 0

    def move_end(self) -> None:
        self.cursor.col = len(self.current_line)

    def page_up(self) -> None:
        self._move_rows(-self.viewport.height)

    def page_down(self) -> None:
        self._move_rows(self.viewport.height)

    def _move_rows(self, delta: int) -> None:
        row = min(max(0, self.cursor.row + delta), len(self.lines) - 1)
        self.cursor = Position(row, min(self.cursor.col, len(self.lines[row])))

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def gutter_width(self, config: EditorConfig) -> int:
        """Columns taken by left padding plus the widest line number."""
        return config.line_number_padding_left + len(str(len(self.lines)))

    def text_column_start(self, config: EditorConfig) -> int:
        """Columns before the first text character of a rendered row."""
        return self.gutter_width(config) + config.line_number_padding_right

    def scroll_to_cursor(self, viewport: Size, content_width: int) -> None:
        """Move the offset the least amount that makes the cursor visible."""
        rows_to_render = min(viewport.height, len(self.lines) - self.offset.row)
        cols_to_render = content_width
        last_row = self.offset.row + rows_to_render - 1
        last_col = self.offset.col + cols_to_render - 1

        if self.cursor.row > last_row:
            self.offset.row += self.cursor.row - last_row
        if self.cursor.col > last_col:
            self.offset.col += self.cursor.col - last_col

        if self.cursor.row < self.offset.row:
            self.offset.row = self.cursor.row
        if self.cursor.col < self.offset.col:
            self.offset.col = self.cursor.col

    def render(self, viewport: Size, config: EditorConfig) -> list[str]:
        """Render the visible part of the document, one string per row.

        The offset is corrected first, so the returned rows always contain
        the cursor. Rows are not padded to the viewport height. Characters
        the terminal cannot show as one cell are drawn as a stand-in; the
        lines themselves are left untouched.
        """
        viewport = Size(max(1, viewport.height), max(1, viewport.width))
        self.viewport = viewport

        number_width = len(str(len(self.lines)))
        content_width = max(1, viewport.width - self.text_column_start(config))
        self.scroll_to_cursor(viewport, content_width)

        left_pad = " " * config.line_number_padding_left
        right_pad = " " * config.line_number_padding_right
        start = self.offset.col
        end = start + content_width

        last = min(len(self.lines), self.offset.row + viewport.height)
        rows = []
        for index in range(self.offset.row, last):
            number = str(index + 1).rjust(number_width)
            text = printable(self.lines[index][start:end])
            rows.append(f"{left_pad}{FAINT}{number}{RESET}{right_pad}{text}")
        return rows
