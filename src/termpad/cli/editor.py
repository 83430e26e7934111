"""Interactive text editor application.

This module provides the EditorApp that ties together:
- Document: the open files, one per tab
- TabBarWidget / StatusBarWidget: the rows above and below the text
- InputLine: status messages and prompts on the bottom row

Every input event is turned into a Task, the Task is executed, and the
whole frame is painted again.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from termpad.cli.core.input import InputEvent, InputReader, KeyEvent, MouseEvent
from termpad.cli.core.layout import FrameLayout, Focus, View, calculate_layout, unsupported_view
from termpad.cli.core.shortcuts import ShortcutContext, get_shortcut_registry
from termpad.cli.core.terminal import Terminal
from termpad.cli.widgets.input_line import InputLine, InputStatus
from termpad.cli.widgets.status_bar import StatusBarWidget
from termpad.cli.widgets.tab_bar import Tab, TabBarWidget
from termpad.config import EditorConfig
from termpad.core.geometry import Position, Size
from termpad.core.tasks import Task, TaskKind
from termpad.edit.document import Document

logger = logging.getLogger(__name__)


class EditorApp:
    """Tabbed terminal text editor.

    Layout:
        +------------------------------------------+
        | tab1 | tab2+ |                           |  tab bar
        +------------------------------------------+
        |  1   first line                          |
        |  2   second line                         |  document body
        | ~                                        |
        +------------------------------------------+
        | notes.txt                       2/2 | 11 |  status line
        +------------------------------------------+
        | File path: /tmp/notes.txt                |  input line
        +------------------------------------------+

    Keyboard Controls:
        Ctrl+Q: Quit
        Ctrl+S: Save (asks for a path when the document has none)
        Ctrl+O: Open a file in a new tab
        Ctrl+N: New untitled tab
        Ctrl+K / Ctrl+L: Previous / next tab
        Ctrl+W: Close the current tab
        Arrows, Home, End, PgUp, PgDn: Move the cursor
        Mouse wheel: Move the cursor up/down

    While the input line is collecting text, Enter submits it and Escape
    cancels.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        config: Optional[EditorConfig] = None,
        terminal=Terminal,
        reader: Optional[InputReader] = None,
    ) -> None:
        """Initialize the editor.

        Args:
            path: Optional file to open; a missing file becomes the save
                target of a new document
            config: Layout settings (defaults if omitted)
            terminal: Terminal collaborator used by run()
            reader: Input source used by run() (stdin if omitted)
        """
        self.config = config or EditorConfig()
        self.terminal = terminal
        self._reader = reader
        self._shortcuts = get_shortcut_registry()
        self.running = False

        # Widgets
        self.tab_bar = TabBarWidget()
        self.status_bar = StatusBarWidget()
        self.input_line = InputLine()

        # View state
        self.view = View.DOC
        self.focus = Focus.DOC
        self.awaiting_input = False
        self.cursor_screen_pos = Position(1, 1)

        # Documents
        self.documents: list[Document] = []
        self.active_index = 0
        self._add_document(self._initial_document(path))

    def _initial_document(self, path: Optional[Path]) -> Document:
        if path is None:
            return Document()
        try:
            return Document.open(path)
        except FileNotFoundError:
            doc = Document(file_path=path)
            doc.status_text = "New named doc created"
            logger.info("Starting new document for %s", path)
            return doc

    @property
    def active_document(self) -> Document:
        return self.documents[self.active_index]

    # -------------------------------------------------------------------------
    # Main Loop
    # -------------------------------------------------------------------------

    def run(self) -> None:
        """Run the editor main loop until Ctrl+Q."""
        self.running = True
        with self.terminal.managed_mode():
            if self._reader is None:
                self._reader = InputReader()
            self.terminal.clear()
            self.update()
            while self.running:
                self.handle_event(self._reader.read_event())
                if self.running:
                    self.update()
        logger.info("Editor closed")

    def update(self) -> None:
        """Render a frame at the current terminal size and paint it."""
        rows = self.render(self.terminal.size())
        self.terminal.paint(rows)
        self.terminal.move_to(self.cursor_screen_pos.row, self.cursor_screen_pos.col)

    def quit(self) -> None:
        self.running = False

    # -------------------------------------------------------------------------
    # Input Handling
    # -------------------------------------------------------------------------

    def handle_event(self, event: InputEvent) -> None:
        """Process one input event to completion."""
        if isinstance(event, KeyEvent):
            if self._shortcuts.match(event, ShortcutContext.GLOBAL) is not None:
                self.quit()
                return
            task = self._process_key(event)
        elif isinstance(event, MouseEvent):
            task = self._process_mouse(event)
        else:
            task = Task.none()
        self.process_task(task)

    def _process_key(self, event: KeyEvent) -> Task:
        if self.awaiting_input:
            result = self.input_line.handle_key(event)
            if result.status == InputStatus.PROCESSING:
                return Task.none()

            self.awaiting_input = False
            if result.status == InputStatus.CANCELLED:
                self._focused_document().cancel_pending_input()
                return Task.set_status("Cancelled")
            return self._focused_document().resolve_pending_input(result.text)

        if not event.is_supported:
            logger.debug("Ignoring unsupported input %r", event.raw)
        return self._focused_document().handle_key(event)

    def _process_mouse(self, event: MouseEvent) -> Task:
        if self.awaiting_input:
            return Task.none()
        return self._focused_document().handle_mouse(event, self.config.scroll_lines)

    def _focused_document(self) -> Document:
        """The document receiving input.

        Raises:
            NotImplementedError: when the file tree has focus
        """
        if self.view == View.DOC or (self.view == View.BOTH and self.focus == Focus.DOC):
            return self.active_document
        raise unsupported_view(self.view)

    # -------------------------------------------------------------------------
    # Tasks
    # -------------------------------------------------------------------------

    def process_task(self, task: Task) -> None:
        """Execute a task against the tab set and the input line."""
        if task.kind != TaskKind.NONE:
            logger.debug("Task %s %r", task.kind.name, task.text)

        if task.kind == TaskKind.SET_STATUS:
            self._set_status(task.text)
        elif task.kind == TaskKind.ASK_INPUT:
            self.input_line.begin(task.text)
            self.awaiting_input = True
        elif task.kind == TaskKind.NEW_DOC:
            self._add_document(Document())
        elif task.kind == TaskKind.OPEN_DOC:
            self._open_document(task.text)
        elif task.kind == TaskKind.NEXT_TAB:
            self.active_index = (self.active_index + 1) % len(self.documents)
        elif task.kind == TaskKind.PREV_TAB:
            self.active_index = (self.active_index - 1) % len(self.documents)
        elif task.kind == TaskKind.CLOSE_CURRENT_TAB:
            self._close_current_tab()

    def _set_status(self, text: str) -> None:
        self.active_document.status_text = text
        self.input_line.set_status(text)

    def _add_document(self, doc: Document) -> None:
        doc.tab_width = self.config.tab_width
        self.documents.append(doc)
        self.active_index = len(self.documents) - 1
        # A new tab always gets document focus
        if self.view == View.FILE_TREE:
            self.view = View.DOC
        self.focus = Focus.DOC

    def _open_document(self, path: str) -> None:
        try:
            doc = Document.open(Path(path).expanduser())
        except FileNotFoundError:
            logger.warning("Open failed, no such file: %s", path)
            self._set_status(f"File not found: {path}")
        except OSError as e:
            logger.warning("Open failed for %s: %s", path, e)
            self._set_status(f"Error opening {path}: {e}")
        else:
            self._add_document(doc)

    def _close_current_tab(self) -> None:
        if len(self.documents) == 1:
            self._set_status("Can't close the last tab")
            return
        if not self.active_document.can_close():
            self._set_status("Can't close this tab")
            return
        closed = self.documents.pop(self.active_index)
        logger.debug("Closed tab %s", closed.title)
        self.active_index = max(0, self.active_index - 1)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self, size: Size) -> list[str]:
        """Compose a full frame, one string per terminal row.

        The order matters: the document body corrects its scroll offset,
        which the status line then uses to place the terminal cursor.

        Raises:
            NotImplementedError: for views other than View.DOC
        """
        layout = calculate_layout(size, self.view)

        rows = [self._render_header(layout)]
        rows.extend(self._render_body(layout))
        rows.append(self._render_status_line(layout))
        rows.append(self._render_input_line(layout))
        return rows

    def _render_header(self, layout: FrameLayout) -> str:
        tabs = [Tab(doc.title, doc.modified) for doc in self.documents]
        self.tab_bar.set_tabs(tabs, self.active_index)
        return self.tab_bar.render(layout.term_width)

    def _render_body(self, layout: FrameLayout) -> list[str]:
        rows = self.active_document.render(layout.doc_size, self.config)
        while len(rows) < layout.doc_height:
            rows.append(self.config.filler)
        return rows

    def _render_status_line(self, layout: FrameLayout) -> str:
        doc = self.active_document
        self._update_cursor_pos(layout)
        self.status_bar.set_left(str(doc.file_path) if doc.file_path else doc.title)
        self.status_bar.set_position(doc.cursor.row, len(doc.lines), doc.cursor.col)
        return self.status_bar.render(layout.term_width)

    def _render_input_line(self, layout: FrameLayout) -> str:
        if not self.input_line.collecting:
            self.input_line.set_status(self.active_document.status_text or self._hint_text())
        return self.input_line.render(layout.term_width)

    def _hint_text(self) -> str:
        hints = self._shortcuts.get_status_bar_hints(ShortcutContext.DOCUMENT)
        return "  ".join(f"{key} {label}" for key, label in hints)

    def _update_cursor_pos(self, layout: FrameLayout) -> None:
        """Recompute the 1-based terminal cursor cell."""
        if self.awaiting_input:
            self.cursor_screen_pos = Position(layout.input_row, self.input_line.cursor_screen_column())
            return

        doc = self._focused_document()
        self.cursor_screen_pos = Position(
            layout.doc_top + doc.cursor.row - doc.offset.row + 1,
            layout.doc_left + doc.text_column_start(self.config) + doc.cursor.col - doc.offset.col + 1,
        )


def run_editor(path: Optional[Path] = None, config: Optional[EditorConfig] = None) -> None:
    """Launch the editor application.

    Args:
        path: Optional file path to open
        config: Optional configuration
    """
    app = EditorApp(path, config)
    app.run()
