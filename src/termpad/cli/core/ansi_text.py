"""ANSI text utilities - measuring and fitting strings with escape codes."""

from __future__ import annotations

import re

# Pattern to match ANSI escape sequences (including ~ terminator for F-keys, etc.)
_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;]*[A-Za-z~]')

FAINT = '\x1b[2m'
REVERSE = '\x1b[7m'
RESET = '\x1b[0m'

# Drawn in place of characters the terminal must not receive
STAND_IN = '?'


def strip_ansi(s: str) -> str:
    """Remove all ANSI escape codes."""
    return _ANSI_ESCAPE.sub('', s)


def visible_len(s: str) -> int:
    """Get visible length of string (excluding ANSI escape codes)."""
    return len(strip_ansi(s))


def printable(s: str) -> str:
    """Make untrusted text safe to paint, one cell per character.

    Control characters (ESC, tab, CR, ...) and the lone surrogates that
    undecodable file bytes load as are replaced by STAND_IN, so the text
    can neither move the terminal cursor nor fail to encode.
    """
    if s.isprintable():
        return s
    return ''.join(ch if ch.isprintable() else STAND_IN for ch in s)


def truncate(s: str, max_width: int, reset: bool = True) -> str:
    """
    Truncate an ANSI-escaped string to max visible width.

    Preserves ANSI codes but counts only visible characters.

    Args:
        s: String to truncate
        max_width: Maximum visible width
        reset: If True, append reset sequence to prevent color bleed
    """
    if max_width <= 0:
        return ""

    result: list[str] = []
    vis_len = 0
    i = 0

    while i < len(s) and vis_len < max_width:
        if s[i] == '\x1b' and i + 1 < len(s) and s[i + 1] == '[':
            # ANSI escape sequence - include whole thing
            j = i + 2
            while j < len(s) and s[j] not in 'ABCDEFGHJKSTfmsu~':
                j += 1
            if j < len(s):
                j += 1  # Include terminator
            result.append(s[i:j])
            i = j
        else:
            result.append(s[i])
            vis_len += 1
            i += 1

    output = ''.join(result)

    if reset and i < len(s):
        output += RESET

    return output


def truncate_and_pad(s: str, width: int) -> str:
    """Truncate if too long, pad if too short. Always returns exactly width visible chars."""
    vlen = visible_len(s)
    if vlen > width:
        return truncate(s, width)
    elif vlen < width:
        return s + ' ' * (width - vlen)
    return s
