"""Position and Size - the value types shared by documents and the screen."""

from dataclasses import dataclass


@dataclass(slots=True)
class Position:
    """
    A zero-based row/column pair.

    For a document cursor, ``row`` indexes into the line list and ``col``
    indexes characters within that line.
    """
    row: int = 0
    col: int = 0


@dataclass(frozen=True, slots=True)
class Size:
    """Height/width of a rectangle of character cells."""
    height: int
    width: int
