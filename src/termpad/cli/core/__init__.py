"""Core TUI infrastructure - terminal I/O, input handling, layout."""

from termpad.cli.core.terminal import Terminal
from termpad.cli.core.input import InputReader, InputEvent, KeyEvent, Key, MouseEvent, MouseAction
from termpad.cli.core.layout import FrameLayout, View, Focus, calculate_layout

__all__ = [
    "Terminal",
    "InputReader",
    "InputEvent",
    "KeyEvent",
    "Key",
    "MouseEvent",
    "MouseAction",
    "FrameLayout",
    "View",
    "Focus",
    "calculate_layout",
]
