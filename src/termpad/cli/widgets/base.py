"""Base class for the single-row widgets around the document body."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseWidget(ABC):
    """Base class for the editor's chrome rows (tabs, status, input)."""

    @abstractmethod
    def render(self, width: int) -> str:
        """Render the widget as one row of at most ``width`` columns."""
        pass
