"""Display surface protocol and input events.

Allows swapping the terminal backend, e.g. for an in-memory surface in tests.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Protocol, Union


class Key(Enum):
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    HOME = auto()
    END = auto()
    PAGE_UP = auto()
    PAGE_DOWN = auto()
    BACKSPACE = auto()
    ENTER = auto()
    ESCAPE = auto()
    CTRL_C = auto()
    RUNE = auto()


@dataclass(frozen=True)
class KeyEvent:
    """A key press. ``rune`` is set only for ``Key.RUNE``."""

    key: Key
    rune: Optional[str] = None

    @classmethod
    def char(cls, rune: str) -> "KeyEvent":
        return cls(Key.RUNE, rune)


@dataclass(frozen=True)
class ResizeEvent:
    """The terminal changed size."""

    columns: int
    rows: int


Event = Union[KeyEvent, ResizeEvent]


class DisplaySurface(Protocol):
    """Protocol for terminal backends driven by the picker controller."""

    def size(self) -> tuple[int, int]:
        """Return (columns, rows)."""
        ...

    def clear(self) -> None:
        ...

    def draw_text(
        self,
        x: int,
        y: int,
        text: str,
        foreground: str,
        background: str,
        bold: bool = False,
    ) -> None:
        """Draw ``text`` starting at cell (x, y), advancing by display width."""
        ...

    def synchronize(self) -> None:
        """Flush everything drawn since the last clear to the terminal."""
        ...

    def poll_event(self) -> Event:
        """Block until the next key or resize event."""
        ...

    def teardown(self) -> None:
        """Release the terminal. Safe to call more than once."""
        ...
