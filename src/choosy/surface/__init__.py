"""Display surfaces for the picker."""

from choosy.surface.base import DisplaySurface, Event, Key, KeyEvent, ResizeEvent
from choosy.surface.terminal import RichTerminalSurface, open_terminal_surface

__all__ = [
    "DisplaySurface",
    "Event",
    "Key",
    "KeyEvent",
    "ResizeEvent",
    "RichTerminalSurface",
    "open_terminal_surface",
]
