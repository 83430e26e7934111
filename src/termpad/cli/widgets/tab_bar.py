"""Tab bar widget - one entry per open document."""

from __future__ import annotations

from dataclasses import dataclass

from termpad.cli.core.ansi_text import FAINT, RESET, printable, truncate
from termpad.cli.widgets.base import BaseWidget


@dataclass
class Tab:
    """A tab title and whether its document has unsaved edits."""
    title: str
    modified: bool = False

    @property
    def label(self) -> str:
        title = printable(self.title)
        return f"{title}+" if self.modified else title


class TabBarWidget(BaseWidget):
    """Top row listing open documents, the active one at full brightness."""

    def __init__(self) -> None:
        self._tabs: list[Tab] = []
        self._active = 0

    def set_tabs(self, tabs: list[Tab], active: int) -> None:
        self._tabs = tabs
        self._active = active

    def render(self, width: int) -> str:
        parts = []
        for i, tab in enumerate(self._tabs):
            if i == self._active:
                parts.append(f" {tab.label} |")
            else:
                parts.append(f" {FAINT}{tab.label}{RESET} |")
        return truncate("".join(parts), width)
