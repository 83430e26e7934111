"""Keyboard and mouse input handling with event abstraction."""

from __future__ import annotations

import codecs
import os
import re
import select
import sys
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union


class Key(Enum):
    """Named key constants."""
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    ESCAPE = auto()
    TAB = auto()
    BACKSPACE = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    DELETE = auto()


@dataclass(frozen=True)
class KeyEvent:
    """Represents a keyboard input event."""
    key: Optional[Key] = None  # Named key if recognized
    char: Optional[str] = None  # Character if printable, or the letter of a Ctrl chord
    ctrl: bool = False  # True for Ctrl+<letter>
    raw: str = ""  # Raw escape sequence

    @property
    def is_char(self) -> bool:
        """Check if this is a printable character."""
        return self.char is not None and self.key is None and not self.ctrl

    @property
    def is_supported(self) -> bool:
        """False for escape sequences the reader could not decode."""
        return self.key is not None or self.char is not None


class MouseAction(Enum):
    """Mouse event kinds reported by SGR mouse tracking."""
    PRESS = auto()
    RELEASE = auto()
    MOVE = auto()
    WHEEL_UP = auto()
    WHEEL_DOWN = auto()


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event at a 1-based terminal cell."""
    action: MouseAction
    row: int
    col: int
    button: int = 0
    raw: str = ""


InputEvent = Union[KeyEvent, MouseEvent]

# SGR extended mouse report (without the \x1b prefix): [<button;col;row(M|m)
_SGR_MOUSE = re.compile(r'\[<(\d+);(\d+);(\d+)([Mm])')

# Modifier bits in an SGR button code (shift, meta, ctrl)
_MOUSE_MODIFIERS = 4 | 8 | 16


def parse_mouse_sequence(seq: str) -> Optional[MouseEvent]:
    """Decode an SGR mouse report, or None if ``seq`` is not one."""
    match = _SGR_MOUSE.fullmatch(seq)
    if match is None:
        return None

    code, col, row, final = match.groups()
    button = int(code) & ~_MOUSE_MODIFIERS
    raw = '\x1b' + seq

    if button & 64:
        action = MouseAction.WHEEL_DOWN if button & 1 else MouseAction.WHEEL_UP
    elif button & 32:
        action = MouseAction.MOVE
    elif final == 'm':
        action = MouseAction.RELEASE
    else:
        action = MouseAction.PRESS

    return MouseEvent(action=action, row=int(row), col=int(col), button=button & 3, raw=raw)


class InputReader:
    """
    Blocking keyboard and mouse input reader.

    Uses os.read() to bypass Python's I/O buffering and properly
    handle escape sequences that may arrive split across reads.
    """

    # Escape sequence mappings (without the \x1b prefix)
    SEQUENCES: dict[str, Key] = {
        # Arrow keys (CSI)
        '[A': Key.UP,
        '[B': Key.DOWN,
        '[C': Key.RIGHT,
        '[D': Key.LEFT,
        # Arrow keys (SS3 - application mode)
        'OA': Key.UP,
        'OB': Key.DOWN,
        'OC': Key.RIGHT,
        'OD': Key.LEFT,
        # Navigation
        '[H': Key.HOME,
        '[F': Key.END,
        'OH': Key.HOME,
        'OF': Key.END,
        '[1~': Key.HOME,
        '[4~': Key.END,
        '[7~': Key.HOME,
        '[8~': Key.END,
        '[5~': Key.PAGE_UP,
        '[6~': Key.PAGE_DOWN,
        '[3~': Key.DELETE,
    }

    SIMPLE_KEYS: dict[str, Key] = {
        '\r': Key.ENTER,
        '\n': Key.ENTER,
        '\t': Key.TAB,
        '\x7f': Key.BACKSPACE,
        '\x08': Key.BACKSPACE,
    }

    def __init__(self, fd: Optional[int] = None) -> None:
        self._buffer = ""
        self._fd = sys.stdin.fileno() if fd is None else fd
        # Keeps multi-byte characters split across reads intact
        self._decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')

    def read(self, timeout: float = 0.1) -> Optional[InputEvent]:
        """
        Read a single input event.

        Returns None if no input available within timeout.
        """
        # Process any buffered input first
        if self._buffer:
            return self._process_buffer()

        if not self._has_input(timeout):
            return None

        # Read all available input using os.read to bypass Python buffering
        self._read_available()

        if self._buffer:
            return self._process_buffer()

        return None

    def read_event(self) -> InputEvent:
        """Read an input event, blocking until one is available."""
        while True:
            event = self.read(timeout=1.0)
            if event is not None:
                return event

    def feed(self, data: str) -> None:
        """Append raw terminal input to the pending buffer."""
        self._buffer += data

    def _read_available(self) -> None:
        """Read all currently available input into buffer using os.read."""
        try:
            data = os.read(self._fd, 1024)
            self._buffer += self._decoder.decode(data)
        except (OSError, BlockingIOError):
            pass

        # If buffer is just escape, wait for potential sequence
        if self._buffer == '\x1b':
            self._wait_for_escape_sequence()

    def _wait_for_escape_sequence(self) -> None:
        """Wait for escape sequence to complete with proper timeouts."""
        deadline = time.monotonic() + 0.1  # 100ms total wait

        while time.monotonic() < deadline:
            remaining = deadline - time.monotonic()
            wait_time = min(remaining, 0.025)  # 25ms intervals

            if wait_time <= 0:
                break

            if self._has_input(wait_time):
                try:
                    data = os.read(self._fd, 1024)
                    self._buffer += self._decoder.decode(data)
                except (OSError, BlockingIOError):
                    pass

                # Check if sequence looks complete
                if len(self._buffer) > 1:
                    rest = self._buffer[1:]
                    # Sequence ends with letter or ~
                    if rest and (rest[-1].isalpha() or rest[-1] == '~'):
                        return
                    if rest in self.SEQUENCES:
                        return

    def _process_buffer(self) -> Optional[InputEvent]:
        """Process buffered input and return next event."""
        if not self._buffer:
            return None

        first = self._buffer[0]

        # Simple keys
        if first in self.SIMPLE_KEYS:
            self._buffer = self._buffer[1:]
            return KeyEvent(key=self.SIMPLE_KEYS[first], raw=first)

        # Escape sequence
        if first == '\x1b':
            return self._parse_escape_sequence()

        # Ctrl+A .. Ctrl+Z (minus the ones claimed by SIMPLE_KEYS above)
        if '\x01' <= first <= '\x1a':
            self._buffer = self._buffer[1:]
            return KeyEvent(char=chr(ord(first) + 96), ctrl=True, raw=first)

        # Printable character
        if first.isprintable():
            self._buffer = self._buffer[1:]
            return KeyEvent(char=first, raw=first)

        # Unknown control character - skip it
        self._buffer = self._buffer[1:]
        return None

    def _parse_escape_sequence(self) -> InputEvent:
        """Parse an escape sequence from the buffer."""
        # Buffer starts with \x1b
        if len(self._buffer) == 1:
            # Just escape, no sequence
            self._buffer = ""
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        rest = self._buffer[1:]

        # Find where this sequence ends
        end_idx = self._sequence_length(rest)

        if end_idx == 0:
            # Escape immediately followed by another escape
            self._buffer = self._buffer[1:]
            return KeyEvent(key=Key.ESCAPE, raw='\x1b')

        seq = rest[:end_idx]
        raw = '\x1b' + seq
        self._buffer = self._buffer[1 + end_idx:]

        if seq in self.SEQUENCES:
            return KeyEvent(key=self.SEQUENCES[seq], raw=raw)

        mouse = parse_mouse_sequence(seq)
        if mouse is not None:
            return mouse

        # Unknown sequence
        return KeyEvent(raw=raw)

    def _has_input(self, timeout: float) -> bool:
        """Check if input is available within timeout."""
        try:
            ready, _, _ = select.select([self._fd], [], [], timeout)
            return bool(ready)
        except (ValueError, OSError):
            return False

    @staticmethod
    def _sequence_length(rest: str) -> int:
        """Length of the sequence at the start of ``rest`` (after the ESC)."""
        if rest[0] == 'O' and len(rest) > 1:
            # SS3: 'O' plus exactly one final character
            return 2

        end_idx = 0
        for i, ch in enumerate(rest):
            if ch == '\x1b':
                # Start of next escape sequence
                return i
            if ch.isalpha() or ch == '~':
                return i + 1
            end_idx = i + 1
        return end_idx
