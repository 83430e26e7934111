"""Edit module - the text document model."""

from termpad.edit.document import Document, split_lines

__all__ = ["Document", "split_lines"]
