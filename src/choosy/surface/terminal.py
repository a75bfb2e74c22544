"""Terminal display surface built on rich and readchar.

Output goes through a rich Console on stderr so stdout stays free for the
picked value. Input is read one key at a time with readchar.
"""

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import readchar
from rich.cells import cell_len
from rich.console import Console
from rich.color import ColorParseError
from rich.control import Control
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.text import Text

from choosy.surface.base import Event, Key, KeyEvent, ResizeEvent
from choosy.utils.config import PickerConfig
from choosy.utils.debug import debug_render, log_error
from choosy.utils.exceptions import DisplaySurfaceError

# readchar key sequence -> Key
KEY_MAP: dict[str, Key] = {
    readchar.key.UP: Key.UP,
    readchar.key.DOWN: Key.DOWN,
    readchar.key.LEFT: Key.LEFT,
    readchar.key.RIGHT: Key.RIGHT,
    readchar.key.HOME: Key.HOME,
    readchar.key.END: Key.END,
    readchar.key.PAGE_UP: Key.PAGE_UP,
    readchar.key.PAGE_DOWN: Key.PAGE_DOWN,
    readchar.key.BACKSPACE: Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
    readchar.key.ENTER: Key.ENTER,
    readchar.key.CR: Key.ENTER,
    readchar.key.LF: Key.ENTER,
    readchar.key.ESC: Key.ESCAPE,
    readchar.key.CTRL_C: Key.CTRL_C,
    # Alternate Home/End sequences sent by some terminals
    "\x1b[1~": Key.HOME,
    "\x1b[4~": Key.END,
    "\x1bOH": Key.HOME,
    "\x1bOF": Key.END,
}


# Second characters that start a CSI/SS3 sequence after Escape
ESCAPE_PREFIXES = ("[", "O")


def translate_key(raw: str) -> Optional[KeyEvent]:
    """Map a readchar key string to a KeyEvent (None for unhandled keys)."""
    if raw in KEY_MAP:
        return KeyEvent(KEY_MAP[raw])
    # readchar pairs a lone Escape with the following key
    if (
        len(raw) == 2
        and raw[0] == readchar.key.ESC
        and raw[1] not in ESCAPE_PREFIXES
    ):
        return KeyEvent(Key.ESCAPE)
    if len(raw) == 1 and raw.isprintable():
        return KeyEvent.char(raw)
    return None


class _Cell:
    __slots__ = ("char", "style")

    def __init__(self, char: str, style: Style):
        self.char = char
        self.style = style


def _runs(row: list[_Cell]) -> Iterator[tuple[str, Style]]:
    """Group consecutive cells sharing a style."""
    chars: list[str] = []
    style: Optional[Style] = None
    for cell in row:
        if style is not None and cell.style != style:
            yield "".join(chars), style
            chars = []
        style = cell.style
        chars.append(cell.char)
    if style is not None:
        yield "".join(chars), style


class RichTerminalSurface:
    """Full-screen surface: an off-screen cell buffer repainted on synchronize.

    Wide characters occupy two cells; the second cell holds an empty
    string so the row still adds up to the terminal width.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        read_key: Callable[[], str] = readchar.readkey,
        background: str = "default",
    ):
        self.console = console or Console(stderr=True, highlight=False)
        self._read_key = read_key
        self._base_style = Style(bgcolor=background)
        self._buffer: list[list[_Cell]] = []
        self._synced_size: Optional[tuple[int, int]] = None
        self._active = False

    def open(self) -> "RichTerminalSurface":
        """Enter the alternate screen and hide the cursor."""
        if not self.console.is_terminal:
            raise DisplaySurfaceError("failed to initialize screen: not a terminal")
        self._active = True
        self.console.set_alt_screen(True)
        self.console.show_cursor(False)
        self.clear()
        return self

    def size(self) -> tuple[int, int]:
        width, height = self.console.size
        return width, height

    def clear(self) -> None:
        columns, rows = self.size()
        self._buffer = [
            [_Cell(" ", self._base_style) for _ in range(columns)] for _ in range(rows)
        ]

    def draw_text(
        self,
        x: int,
        y: int,
        text: str,
        foreground: str,
        background: str,
        bold: bool = False,
    ) -> None:
        if y < 0 or y >= len(self._buffer):
            return
        try:
            style = Style(color=foreground, bgcolor=background, bold=bold)
        except (ColorParseError, StyleSyntaxError) as e:
            raise DisplaySurfaceError(f"invalid style: {e}") from e

        row = self._buffer[y]
        for character in text:
            width = cell_len(character)
            if width == 0:
                continue
            if x < 0 or x + width > len(row):
                break
            row[x] = _Cell(character, style)
            for extra in range(1, width):
                row[x + extra] = _Cell("", style)
            x += width

    def rows_text(self) -> list[str]:
        """Plain text of the buffer, one string per row."""
        return ["".join(cell.char for cell in row) for row in self._buffer]

    def synchronize(self) -> None:
        # Buffered so the whole frame is written in one go
        with self.console:
            self.console.control(Control.home())
            last = len(self._buffer) - 1
            for index, row in enumerate(self._buffer):
                line = Text(no_wrap=True, overflow="crop")
                for chars, style in _runs(row):
                    line.append(chars, style)
                self.console.print(line, end="\n" if index < last else "")
        self._synced_size = self.size()
        debug_render("synchronized", rows=len(self._buffer))

    def poll_event(self) -> Event:
        """Return the next key, or a ResizeEvent if the size changed.

        The size is compared before each blocking read, so a resize that
        happens while waiting for a key is reported after that key.
        Until then the previous frame stays on screen.
        """
        while True:
            current = self.size()
            if self._synced_size is not None and current != self._synced_size:
                self._synced_size = current
                return ResizeEvent(*current)
            try:
                raw = self._read_key()
            except KeyboardInterrupt:
                return KeyEvent(Key.CTRL_C)
            event = translate_key(raw)
            if event is not None:
                return event

    def teardown(self) -> None:
        if not self._active:
            return
        self._active = False
        self.console.show_cursor(True)
        self.console.set_alt_screen(False)


@contextmanager
def open_terminal_surface(config: PickerConfig) -> Iterator[RichTerminalSurface]:
    """Open the terminal surface for one picking session.

    The surface is torn down on every exit path, including failed
    initialization.
    """
    surface = RichTerminalSurface(background=config.background_color)
    try:
        try:
            surface.open()
        except DisplaySurfaceError:
            raise
        except Exception as e:
            log_error("surface", "failed to initialize screen", e)
            raise DisplaySurfaceError(f"failed to initialize screen: {e}") from e
        yield surface
    finally:
        surface.teardown()
