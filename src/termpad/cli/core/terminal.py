"""Low-level terminal operations - platform-independent abstraction."""

from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Iterator, Sequence

from termpad.core.geometry import Size


class Terminal:
    """Terminal I/O abstraction for the editor.

    The editor only ever asks the terminal to paint a full frame of
    pre-formatted rows, to place the cursor and to report its size.
    """

    @staticmethod
    def size() -> Size:
        """Get current terminal dimensions."""
        try:
            size = os.get_terminal_size()
            return Size(size.lines, size.columns)
        except OSError:
            return Size(24, 80)

    @staticmethod
    def is_interactive() -> bool:
        """Whether both stdin and stdout are attached to a terminal."""
        return sys.stdin.isatty() and sys.stdout.isatty()

    @staticmethod
    def clear() -> None:
        """Clear screen and move cursor to home."""
        sys.stdout.write('\x1b[2J\x1b[H')
        sys.stdout.flush()

    @staticmethod
    def reset() -> None:
        """Reset all terminal attributes."""
        sys.stdout.write('\x1b[0m')
        sys.stdout.flush()

    @staticmethod
    def show_cursor() -> None:
        """Show the cursor."""
        sys.stdout.write('\x1b[?25h')
        sys.stdout.flush()

    @staticmethod
    def move_to(row: int, col: int) -> None:
        """Move cursor to position (1-indexed)."""
        sys.stdout.write(f'\x1b[{row};{col}H')
        sys.stdout.flush()

    @staticmethod
    def paint(rows: Sequence[str]) -> None:
        """Draw a full frame in a single write.

        Every row is followed by an erase-to-end-of-line so shorter rows
        do not leave stale characters from the previous frame behind. The
        cursor is hidden while drawing to avoid flicker.
        """
        frame = '\r\n'.join(f'{row}\x1b[0m\x1b[K' for row in rows)
        sys.stdout.write('\x1b[?25l\x1b[H' + frame + '\x1b[J\x1b[?25h')
        sys.stdout.flush()

    @staticmethod
    @contextmanager
    def raw_mode() -> Iterator[None]:
        """Context manager for raw terminal mode (Unix only)."""
        try:
            import termios
            import tty
        except ImportError:
            # Windows or no termios - just yield
            yield
            return

        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    @contextmanager
    def alternate_screen() -> Iterator[None]:
        """Use alternate screen buffer (preserves scrollback)."""
        sys.stdout.write('\x1b[?1049h')
        sys.stdout.flush()
        try:
            yield
        finally:
            sys.stdout.write('\x1b[?1049l')
            sys.stdout.flush()

    @staticmethod
    @contextmanager
    def mouse_tracking() -> Iterator[None]:
        """Enable button and wheel reporting in SGR format."""
        sys.stdout.write('\x1b[?1000h\x1b[?1006h')
        sys.stdout.flush()
        try:
            yield
        finally:
            sys.stdout.write('\x1b[?1006l\x1b[?1000l')
            sys.stdout.flush()

    @staticmethod
    @contextmanager
    def managed_mode() -> Iterator[None]:
        """Full TUI mode: alternate screen, raw input, mouse reporting."""
        with Terminal.alternate_screen():
            try:
                with Terminal.raw_mode(), Terminal.mouse_tracking():
                    yield
            finally:
                Terminal.show_cursor()
                Terminal.reset()
