"""Centralized keyboard shortcut registry.

This module provides a single source of truth for the editor's key
bindings. A shortcut either names a Document method to call (``handler``)
or a task for the editor to execute (``task``), so the same table drives
key dispatch and the hint line shown when a document has no status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from termpad.cli.core.input import Key, KeyEvent
from termpad.core.tasks import TaskKind


class ShortcutContext(Enum):
    """Context in which a shortcut is active."""
    GLOBAL = auto()          # Checked before any mode dispatch
    DOCUMENT = auto()        # A document has focus


@dataclass
class ShortcutDef:
    """Definition of a keyboard shortcut.

    Attributes:
        id: Unique identifier for the shortcut
        keys: Named keys, or "^X" strings for Ctrl+X chords
        label: Short label for the hint line (empty hides it)
        description: Longer description
        context: Context(s) where this shortcut is active
        handler: Name of the Document method to call
        task: Task to hand to the editor instead of calling a handler
    """
    id: str
    keys: list[str | Key]
    label: str
    description: str
    context: list[ShortcutContext] = field(default_factory=lambda: [ShortcutContext.DOCUMENT])
    handler: str = ""
    task: Optional[TaskKind] = None

    def matches(self, event: KeyEvent) -> bool:
        """Check if a key event matches this shortcut."""
        for key in self.keys:
            if isinstance(key, Key):
                if event.key == key:
                    return True
            elif key.startswith('^') and len(key) == 2:
                if event.ctrl and event.char == key[1].lower():
                    return True
            elif event.is_char and event.char == key:
                return True
        return False

    @property
    def key_display(self) -> str:
        """Get display string for the keys."""
        displays = []
        for key in self.keys:
            if isinstance(key, Key):
                displays.append(_key_to_display(key))
            else:
                displays.append(key)
        return "/".join(displays)


def _key_to_display(key: Key) -> str:
    """Convert a Key enum to display string."""
    display_map = {
        Key.UP: "↑",
        Key.DOWN: "↓",
        Key.LEFT: "←",
        Key.RIGHT: "→",
        Key.ENTER: "Enter",
        Key.ESCAPE: "Esc",
        Key.TAB: "Tab",
        Key.BACKSPACE: "Bksp",
        Key.HOME: "Home",
        Key.END: "End",
        Key.PAGE_UP: "PgUp",
        Key.PAGE_DOWN: "PgDn",
        Key.DELETE: "Del",
    }
    return display_map.get(key, key.name)


class ShortcutRegistry:
    """Central registry for all keyboard shortcuts.

    Example:
        registry = ShortcutRegistry()
        registry.register(ShortcutDef(
            id="save",
            keys=["^S"],
            label="Save",
            description="Save the current document",
            handler="request_save",
        ))

        shortcut = registry.match(event, ShortcutContext.DOCUMENT)
        if shortcut:
            getattr(document, shortcut.handler)()
    """

    def __init__(self) -> None:
        self._by_context: dict[ShortcutContext, list[ShortcutDef]] = {
            ctx: [] for ctx in ShortcutContext
        }

    def register(self, shortcut: ShortcutDef) -> None:
        """Register a shortcut definition."""
        for ctx in shortcut.context:
            self._by_context[ctx].append(shortcut)

    def register_many(self, shortcuts: list[ShortcutDef]) -> None:
        """Register multiple shortcuts at once."""
        for shortcut in shortcuts:
            self.register(shortcut)

    def match(self, event: KeyEvent, context: ShortcutContext) -> Optional[ShortcutDef]:
        """Find a shortcut matching the event in exactly one context.

        GLOBAL shortcuts are not searched implicitly: the editor checks
        them first, before deciding whether a document or the input line
        gets the event.
        """
        for shortcut in self._by_context[context]:
            if shortcut.matches(event):
                return shortcut
        return None

    def get_status_bar_hints(self, context: ShortcutContext, max_hints: int = 8) -> list[tuple[str, str]]:
        """Get (key_display, label) hints for a context plus the global ones."""
        shortcuts = self._by_context[context] + self._by_context[ShortcutContext.GLOBAL]
        hints = []
        for shortcut in shortcuts:
            if shortcut.label:
                hints.append((shortcut.key_display, shortcut.label))
                if len(hints) >= max_hints:
                    break
        return hints


# =============================================================================
# Default Shortcuts - The single source of truth for all editor shortcuts
# =============================================================================

def create_default_shortcuts() -> ShortcutRegistry:
    """Create the default shortcut registry."""
    registry = ShortcutRegistry()

    registry.register(ShortcutDef(
        id="quit",
        keys=["^Q"],
        label="Quit",
        description="Leave the editor",
        context=[ShortcutContext.GLOBAL],
    ))

    # -------------------------------------------------------------------------
    # File & tab shortcuts
    # -------------------------------------------------------------------------
    registry.register_many([
        ShortcutDef(
            id="save",
            keys=["^S"],
            label="Save",
            description="Save the document, asking for a path if it has none",
            handler="request_save",
        ),
        ShortcutDef(
            id="open",
            keys=["^O"],
            label="Open",
            description="Open a file in a new tab",
            handler="request_open",
        ),
        ShortcutDef(
            id="new",
            keys=["^N"],
            label="New",
            description="Open an empty untitled tab",
            task=TaskKind.NEW_DOC,
        ),
        ShortcutDef(
            id="prev_tab",
            keys=["^K"],
            label="Prev",
            description="Focus the previous tab",
            task=TaskKind.PREV_TAB,
        ),
        ShortcutDef(
            id="next_tab",
            keys=["^L"],
            label="Next",
            description="Focus the next tab",
            task=TaskKind.NEXT_TAB,
        ),
        ShortcutDef(
            id="close_tab",
            keys=["^W"],
            label="Close",
            description="Close the current tab",
            task=TaskKind.CLOSE_CURRENT_TAB,
        ),
    ])

    # -------------------------------------------------------------------------
    # Navigation & editing
    # -------------------------------------------------------------------------
    registry.register_many([
        ShortcutDef(id="nav_up", keys=[Key.UP], label="", description="Move cursor up", handler="move_up"),
        ShortcutDef(id="nav_down", keys=[Key.DOWN], label="", description="Move cursor down", handler="move_down"),
        ShortcutDef(id="nav_left", keys=[Key.LEFT], label="", description="Move cursor left", handler="move_left"),
        ShortcutDef(id="nav_right", keys=[Key.RIGHT], label="", description="Move cursor right", handler="move_right"),
        ShortcutDef(id="nav_home", keys=[Key.HOME], label="", description="Start of line", handler="move_home"),
        ShortcutDef(id="nav_end", keys=[Key.END], label="", description="End of line", handler="move_end"),
        ShortcutDef(id="page_up", keys=[Key.PAGE_UP], label="", description="Up one screen", handler="page_up"),
        ShortcutDef(id="page_down", keys=[Key.PAGE_DOWN], label="", description="Down one screen", handler="page_down"),
        ShortcutDef(id="newline", keys=[Key.ENTER], label="", description="Split the line", handler="insert_newline"),
        ShortcutDef(id="backspace", keys=[Key.BACKSPACE], label="", description="Delete backwards", handler="backspace"),
        ShortcutDef(id="delete", keys=[Key.DELETE], label="", description="Delete forwards", handler="delete"),
        ShortcutDef(id="tab", keys=[Key.TAB], label="", description="Insert spaces", handler="insert_tab"),
    ])

    return registry


# Default registry instance
_default_registry: Optional[ShortcutRegistry] = None


def get_shortcut_registry() -> ShortcutRegistry:
    """Get the shared default shortcut registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_shortcuts()
    return _default_registry
