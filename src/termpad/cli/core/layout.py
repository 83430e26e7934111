"""Screen layout for the editor frame.

A frame is, top to bottom:
- the tab bar (1 row)
- the document body (everything left over, at least 1 row)
- the status line (1 row)
- the input line (1 row)

Only the document view is implemented. The file tree view exists as a
reserved variant and every attempt to lay it out fails loudly.
"""

from dataclasses import dataclass
from enum import Enum

from termpad.core.geometry import Size


class View(Enum):
    """Which panels are shown."""
    DOC = "doc"
    FILE_TREE = "file_tree"
    BOTH = "both"


class Focus(Enum):
    """Which panel has focus when both are shown."""
    DOC = "doc"
    FILE_TREE = "file_tree"


HEADER_HEIGHT = 1
STATUS_HEIGHT = 1
INPUT_HEIGHT = 1
CHROME_HEIGHT = HEADER_HEIGHT + STATUS_HEIGHT + INPUT_HEIGHT


@dataclass(frozen=True)
class FrameLayout:
    """Computed layout dimensions for the current terminal size."""
    term_height: int
    term_width: int

    # Document body rectangle; doc_left columns precede it on each row
    doc_height: int
    doc_width: int
    doc_left: int

    @property
    def doc_top(self) -> int:
        """Number of rows above the document body."""
        return HEADER_HEIGHT

    @property
    def doc_size(self) -> Size:
        return Size(self.doc_height, self.doc_width)

    @property
    def input_row(self) -> int:
        """1-based terminal row of the input line."""
        return self.doc_top + self.doc_height + STATUS_HEIGHT + INPUT_HEIGHT


def unsupported_view(view: View) -> NotImplementedError:
    """Error for view variants that have no implementation."""
    return NotImplementedError(f"view '{view.value}' is not supported")


def calculate_layout(size: Size, view: View) -> FrameLayout:
    """Calculate the frame layout for a terminal size.

    Raises:
        NotImplementedError: for any view other than View.DOC
    """
    if view != View.DOC:
        raise unsupported_view(view)

    return FrameLayout(
        term_height=size.height,
        term_width=size.width,
        doc_height=max(1, size.height - CHROME_HEIGHT),
        doc_width=max(1, size.width),
        doc_left=0,
    )
