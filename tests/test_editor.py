"""Tests for the editor state machine and frame composition."""

import io
import sys
from pathlib import Path

import pytest

from termpad.cli.core.ansi_text import strip_ansi
from termpad.cli.core.input import Key, KeyEvent, MouseAction, MouseEvent
from termpad.cli.core.layout import Focus, View
from termpad.cli.core.terminal import Terminal
from termpad.cli.editor import EditorApp
from termpad.config import EditorConfig
from termpad.core.geometry import Position, Size
from termpad.core.tasks import PendingTask, Task


def send(editor: EditorApp, press, *keys) -> None:
    for key in keys:
        editor.handle_event(press(key))


def type_text(editor: EditorApp, press, text: str) -> None:
    send(editor, press, *text)


@pytest.fixture
def editor() -> EditorApp:
    return EditorApp()


class TestStartup:

    def test_without_path(self, editor: EditorApp) -> None:
        assert len(editor.documents) == 1
        assert editor.active_index == 0
        assert editor.active_document.lines == [""]
        assert editor.awaiting_input is False
        assert editor.view == View.DOC

    def test_existing_path_is_opened(self, text_file: Path) -> None:
        editor = EditorApp(text_file)
        assert editor.active_document.lines == ["first line", "second line"]
        assert editor.active_document.file_path == text_file

    def test_missing_path_becomes_save_target(self, tmp_path: Path) -> None:
        path = tmp_path / "later.txt"
        editor = EditorApp(path)
        doc = editor.active_document
        assert doc.lines == [""]
        assert doc.file_path == path
        assert doc.status_text == "New named doc created"
        assert not path.exists()

    def test_tab_width_comes_from_config(self, press) -> None:
        editor = EditorApp(config=EditorConfig(tab_width=2))
        send(editor, press, Key.TAB)
        assert editor.active_document.lines == ["  "]


class TestEditing:

    def test_typing(self, editor: EditorApp, press) -> None:
        type_text(editor, press, "hi")
        assert editor.active_document.lines == ["hi"]
        assert editor.active_document.cursor == Position(0, 2)

    def test_enter_and_backspace(self, editor: EditorApp, press) -> None:
        type_text(editor, press, "ab")
        send(editor, press, Key.ENTER, "c", Key.LEFT, Key.BACKSPACE)
        assert editor.active_document.lines == ["abc"]
        assert editor.active_document.cursor == Position(0, 2)

    def test_mouse_wheel_scrolls(self, text_file: Path) -> None:
        editor = EditorApp(text_file)
        editor.handle_event(MouseEvent(MouseAction.WHEEL_DOWN, 5, 5))
        assert editor.active_document.cursor.row == 1

    def test_quit(self, editor: EditorApp, press) -> None:
        editor.running = True
        send(editor, press, "^q")
        assert editor.running is False


class TestSaveFlow:

    def test_save_untitled_asks_then_saves(self, editor: EditorApp, press, tmp_path: Path) -> None:
        path = tmp_path / "x.txt"
        type_text(editor, press, "hello")
        send(editor, press, "^s")
        assert editor.awaiting_input is True
        assert editor.input_line.collecting is True
        assert editor.active_document.pending_task == PendingTask.SAVE_PATH

        type_text(editor, press, str(path))
        assert editor.active_document.lines == ["hello"]
        send(editor, press, Key.ENTER)

        doc = editor.active_document
        assert editor.awaiting_input is False
        assert doc.file_path == path
        assert str(path) in doc.status_text
        assert path.read_text() == "hello\n"

    def test_save_with_path_reports_status(self, tmp_path: Path, press) -> None:
        path = tmp_path / "y.txt"
        editor = EditorApp(path)
        type_text(editor, press, "y")
        send(editor, press, "^s")
        assert editor.awaiting_input is False
        assert editor.input_line.render() == f"Saved to {path}"
        assert path.read_text() == "y\n"

    def test_cancel(self, editor: EditorApp, press) -> None:
        send(editor, press, "^s", "a", Key.ESCAPE)
        assert editor.awaiting_input is False
        assert editor.active_document.pending_task == PendingTask.NONE
        assert editor.active_document.status_text == "Cancelled"
        assert editor.active_document.lines == [""]

    def test_failed_save_keeps_state(self, tmp_path: Path, press) -> None:
        editor = EditorApp(tmp_path / "no" / "such" / "dir.txt")
        type_text(editor, press, "data")
        send(editor, press, "^s")
        doc = editor.active_document
        assert doc.status_text.startswith("Error saving")
        assert doc.lines == ["data"]
        assert doc.cursor == Position(0, 4)
        assert len(editor.documents) == 1

    def test_mouse_is_ignored_while_collecting(self, text_file: Path, press) -> None:
        editor = EditorApp(text_file)
        send(editor, press, "^o")
        editor.handle_event(MouseEvent(MouseAction.WHEEL_DOWN, 5, 5))
        assert editor.active_document.cursor == Position(0, 0)

    def test_keys_go_to_input_line_while_collecting(self, editor: EditorApp, press) -> None:
        send(editor, press, "^s", "^n", "q")
        assert len(editor.documents) == 1
        assert editor.input_line.buffer == "q"
        assert editor.active_document.lines == [""]


class TestTabs:

    def test_new_document_gets_focus(self, editor: EditorApp, press) -> None:
        send(editor, press, "^n")
        assert len(editor.documents) == 2
        assert editor.active_index == 1

    def test_next_tab_wraps(self, editor: EditorApp, press) -> None:
        send(editor, press, "^n")
        editor.active_index = 0
        send(editor, press, "^l")
        assert editor.active_index == 1
        send(editor, press, "^l")
        assert editor.active_index == 0

    def test_prev_tab_wraps(self, editor: EditorApp, press) -> None:
        send(editor, press, "^n", "^n")
        editor.active_index = 0
        send(editor, press, "^k")
        assert editor.active_index == 2
        send(editor, press, "^k")
        assert editor.active_index == 1

    def test_edits_go_to_active_tab(self, editor: EditorApp, press) -> None:
        type_text(editor, press, "one")
        send(editor, press, "^n")
        type_text(editor, press, "two")
        assert [d.lines for d in editor.documents] == [["one"], ["two"]]

    def test_close_moves_focus_left(self, editor: EditorApp, press) -> None:
        send(editor, press, "^n", "^n")
        editor.active_index = 1
        send(editor, press, "^w")
        assert len(editor.documents) == 2
        assert editor.active_index == 0

    def test_close_first_tab(self, editor: EditorApp, press) -> None:
        type_text(editor, press, "first")
        send(editor, press, "^n")
        editor.active_index = 0
        send(editor, press, "^w")
        assert len(editor.documents) == 1
        assert editor.active_index == 0
        assert editor.active_document.lines == [""]

    def test_last_tab_cannot_be_closed(self, editor: EditorApp, press) -> None:
        send(editor, press, "^w")
        assert len(editor.documents) == 1
        assert editor.active_document.status_text == "Can't close the last tab"

    def test_open_existing_file(self, editor: EditorApp, press, text_file: Path) -> None:
        send(editor, press, "^o")
        type_text(editor, press, str(text_file))
        send(editor, press, Key.ENTER)
        assert len(editor.documents) == 2
        assert editor.active_index == 1
        assert editor.active_document.lines == ["first line", "second line"]

    def test_open_missing_file(self, editor: EditorApp, press, tmp_path: Path) -> None:
        missing = tmp_path / "missing.txt"
        send(editor, press, "^o")
        type_text(editor, press, str(missing))
        send(editor, press, Key.ENTER)
        assert len(editor.documents) == 1
        assert editor.active_document.status_text == f"File not found: {missing}"

    def test_open_directory(self, editor: EditorApp, tmp_path: Path) -> None:
        editor.process_task(Task.open_doc(str(tmp_path)))
        assert len(editor.documents) == 1
        assert editor.active_document.status_text.startswith("Error opening")


class TestRender:

    def test_frame_layout(self, editor: EditorApp, press) -> None:
        type_text(editor, press, "hello")
        rows = editor.render(Size(10, 40))
        plain = [strip_ansi(r) for r in rows]
        assert len(rows) == 10
        assert plain[0] == " untitled+ |"
        assert plain[1] == "  1   hello"
        assert plain[2:8] == ["~"] * 6
        assert plain[8].endswith("1/1 | 5 ")
        assert len(plain[8]) == 40

    def test_idle_input_line_shows_hints(self, editor: EditorApp) -> None:
        rows = editor.render(Size(10, 80))
        assert "^S Save" in rows[-1]
        assert "^Q Quit" in rows[-1]

    def test_inactive_tabs_are_faint(self, editor: EditorApp, press) -> None:
        send(editor, press, "^n")
        header = editor.render(Size(10, 40))[0]
        assert header == " \x1b[2muntitled\x1b[0m | untitled |"

    def test_cursor_position_in_document(self, editor: EditorApp, press) -> None:
        type_text(editor, press, "abc")
        editor.render(Size(10, 40))
        # header row, then the gutter "  1   " before the text
        assert editor.cursor_screen_pos == Position(2, 6 + 3 + 1)

    def test_cursor_position_while_collecting(self, editor: EditorApp, press) -> None:
        send(editor, press, "^s", "a")
        rows = editor.render(Size(10, 40))
        assert rows[-1] == "File path: a"
        assert editor.cursor_screen_pos == Position(10, len("File path") + 2 + 1 + 1)

    def test_viewport_follows_cursor(self, editor: EditorApp, press) -> None:
        send(editor, press, *([Key.ENTER] * 10))
        editor.render(Size(8, 40))
        doc = editor.active_document
        # 8 rows minus tab bar, status and input line
        assert doc.offset.row == 10 - 5 + 1
        assert editor.cursor_screen_pos.row == 1 + (10 - 6) + 1

    def test_status_after_task_is_shown(self, editor: EditorApp) -> None:
        editor.process_task(Task.set_status("hello there"))
        assert editor.render(Size(6, 40))[-1] == "hello there"

    def test_status_follows_active_tab(self, editor: EditorApp, press) -> None:
        send(editor, press, "^w")
        send(editor, press, "^n")
        assert editor.render(Size(6, 80))[-1] != "Can't close the last tab"
        send(editor, press, "^k")
        assert editor.render(Size(6, 80))[-1] == "Can't close the last tab"

    def test_tiny_terminal(self, editor: EditorApp) -> None:
        rows = editor.render(Size(2, 5))
        assert len(rows) == 4


class TestViews:

    def test_file_tree_render_fails_loudly(self, editor: EditorApp) -> None:
        editor.view = View.FILE_TREE
        with pytest.raises(NotImplementedError):
            editor.render(Size(10, 40))

    def test_file_tree_focus_rejects_keys(self, editor: EditorApp, press) -> None:
        editor.view = View.BOTH
        editor.focus = Focus.FILE_TREE
        with pytest.raises(NotImplementedError):
            send(editor, press, "a")

    def test_both_view_routes_keys_to_document(self, editor: EditorApp, press) -> None:
        editor.view = View.BOTH
        send(editor, press, "a")
        assert editor.active_document.lines == ["a"]

    def test_new_tab_leaves_file_tree_view(self, editor: EditorApp) -> None:
        editor.view = View.FILE_TREE
        editor.process_task(Task.new_doc())
        assert editor.view == View.DOC


class TestRunLoop:

    def test_run_paints_until_quit(self, fake_terminal, replay, press) -> None:
        reader = replay([press("a"), KeyEvent(raw="\x1b[99~"), press("b"), press("^q")])
        editor = EditorApp(terminal=fake_terminal, reader=reader)
        editor.run()
        assert editor.running is False
        assert editor.active_document.lines == ["ab"]
        # initial frame plus one per event before quitting
        assert len(fake_terminal.frames) == 4
        assert all(len(frame) == 12 for frame in fake_terminal.frames)
        assert fake_terminal.cursor == (2, 6 + 2 + 1)
        assert fake_terminal.clears == 1
        assert fake_terminal.managed is False


class TestPaintSafety:

    @pytest.fixture
    def strict_stdout(self, monkeypatch) -> io.BytesIO:
        raw = io.BytesIO()
        monkeypatch.setattr(sys, "stdout", io.TextIOWrapper(raw, encoding="utf-8", errors="strict"))
        return raw

    def test_undecodable_file_can_be_painted(self, tmp_path: Path, strict_stdout: io.BytesIO) -> None:
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"caf\xe9\n")
        editor = EditorApp(path)

        Terminal.paint(editor.render(Size(5, 40)))

        assert b"caf?" in strict_stdout.getvalue()
        assert editor.active_document.lines == ["caf\udce9"]

    def test_undecodable_file_name_can_be_painted(self, tmp_path: Path, strict_stdout: io.BytesIO) -> None:
        editor = EditorApp()
        editor.process_task(Task.set_status("Saved to caf\udce9.txt"))
        editor.active_document.file_path = Path("caf\udce9.txt")

        Terminal.paint(editor.render(Size(5, 40)))

        assert b"Saved to caf?.txt" in strict_stdout.getvalue()

    def test_escape_sequences_in_text_are_not_sent(self, tmp_path: Path, strict_stdout: io.BytesIO) -> None:
        path = tmp_path / "ctrl.txt"
        path.write_bytes(b"a\x1b[2Jb\n")
        editor = EditorApp(path)

        Terminal.paint(editor.render(Size(5, 40)))

        assert b"\x1b[2J" not in strict_stdout.getvalue()
