"""
termpad: a small tabbed text editor for the terminal

Quick Start:
    $ termpad notes.txt

    >>> from termpad import Document
    >>> doc = Document.open("notes.txt")
    >>> doc.insert_char("!")
    >>> doc.save()

Features:
    - Multiple documents in tabs (^N new, ^O open, ^K/^L switch, ^W close)
    - Line numbers and a minimal-scroll viewport that follows the cursor
    - Prompted input line for save and open paths
    - DOS and Unix line endings read, Unix line endings written
"""

import logging

__version__ = "0.1.0"

from termpad.config import EditorConfig, load_config
from termpad.core.geometry import Position, Size
from termpad.core.tasks import Task, TaskKind, PendingTask
from termpad.core.errors import InvalidStateError
from termpad.edit.document import Document

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "EditorConfig",
    "load_config",
    "Position",
    "Size",
    "Task",
    "TaskKind",
    "PendingTask",
    "InvalidStateError",
    "Document",
]
