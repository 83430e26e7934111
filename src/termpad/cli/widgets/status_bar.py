"""Status bar widget - file name on the left, cursor position on the right."""

from __future__ import annotations

from termpad.cli.core.ansi_text import REVERSE, RESET, printable, truncate_and_pad, visible_len
from termpad.cli.widgets.base import BaseWidget


class StatusBarWidget(BaseWidget):
    """Row between the document body and the input line."""

    def __init__(self) -> None:
        self._left_text: str = ""
        self._right_text: str = ""

    def set_left(self, text: str) -> None:
        """Set left-aligned text."""
        self._left_text = printable(text)

    def set_position(self, row: int, total: int, col: int) -> None:
        """Show a zero-based cursor position as ``row/total | col``."""
        self._right_text = f"{row + 1}/{total} | {col}"

    def render(self, width: int) -> str:
        """Render the status bar, fitting within width.

        The position is right-aligned and always kept; the left text is
        truncated to whatever room remains.
        """
        right = f"{self._right_text} "
        available = width - visible_len(right) - 1
        left = truncate_and_pad(f" {self._left_text}", available) if available > 0 else ""
        line = f"{left} {right}" if left else right[max(0, len(right) - width):]
        return f"{REVERSE}{line}{RESET}"
