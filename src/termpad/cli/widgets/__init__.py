"""Single-row widgets that frame the document body."""

from termpad.cli.widgets.base import BaseWidget
from termpad.cli.widgets.input_line import InputLine, InputResult, InputStatus
from termpad.cli.widgets.status_bar import StatusBarWidget
from termpad.cli.widgets.tab_bar import Tab, TabBarWidget

__all__ = [
    "BaseWidget",
    "InputLine",
    "InputResult",
    "InputStatus",
    "StatusBarWidget",
    "Tab",
    "TabBarWidget",
]
