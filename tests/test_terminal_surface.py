"""Tests for the rich/readchar terminal surface."""

import io

import pytest
import readchar
from rich.console import Console

from choosy.core.controller import Outcome, PickerController
from choosy.surface import terminal
from choosy.surface.base import Key, KeyEvent, ResizeEvent
from choosy.surface.terminal import RichTerminalSurface, open_terminal_surface, translate_key
from choosy.utils.config import PickerConfig
from choosy.utils.exceptions import DisplaySurfaceError


def make_console(width=20, height=5, terminal=True):
    return Console(
        file=io.StringIO(),
        force_terminal=terminal,
        width=width,
        height=height,
        color_system="standard",
    )


def scripted_reader(*raw_keys):
    pending = list(raw_keys)

    def read_key():
        item = pending.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item

    return read_key


class TestTranslateKey:
    """Tests for readchar -> KeyEvent translation."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (readchar.key.UP, Key.UP),
            (readchar.key.DOWN, Key.DOWN),
            (readchar.key.LEFT, Key.LEFT),
            (readchar.key.RIGHT, Key.RIGHT),
            (readchar.key.HOME, Key.HOME),
            (readchar.key.END, Key.END),
            (readchar.key.PAGE_UP, Key.PAGE_UP),
            (readchar.key.PAGE_DOWN, Key.PAGE_DOWN),
            (readchar.key.BACKSPACE, Key.BACKSPACE),
            (readchar.key.ENTER, Key.ENTER),
            ("\r", Key.ENTER),
            ("\n", Key.ENTER),
            (readchar.key.ESC, Key.ESCAPE),
            (readchar.key.CTRL_C, Key.CTRL_C),
        ],
    )
    def test_special_keys(self, raw, expected):
        assert translate_key(raw) == KeyEvent(expected)

    @pytest.mark.parametrize("char", ["a", "Z", " ", "é", "日"])
    def test_printable_characters(self, char):
        assert translate_key(char) == KeyEvent(Key.RUNE, char)

    @pytest.mark.parametrize("raw", ["\t", "\x1b[99~", readchar.key.CTRL_A])
    def test_unhandled_keys(self, raw):
        assert translate_key(raw) is None

    @pytest.mark.parametrize("raw", ["\x1b\x1b", "\x1bq", "\x1b\r", "\x1b "])
    def test_escape_paired_with_next_key(self, raw):
        """readchar returns a lone Escape together with the following key."""
        assert translate_key(raw) == KeyEvent(Key.ESCAPE)

    @pytest.mark.parametrize("raw", ["\x1b[", "\x1bO"])
    def test_escape_sequence_prefixes_are_not_escape(self, raw):
        assert translate_key(raw) is None


class TestPosixReadkey:
    """Escape handling through readchar's own POSIX key reader."""

    @pytest.fixture
    def posix_read(self):
        return pytest.importorskip("readchar._posix_read")

    def feed(self, monkeypatch, posix_read, chars):
        pending = list(chars)
        monkeypatch.setattr(posix_read, "readchar", lambda: pending.pop(0))

    @pytest.mark.parametrize("second", ["\x1b", "q", "\r"])
    def test_escape_aborts_session(self, monkeypatch, posix_read, second):
        self.feed(monkeypatch, posix_read, ["\x1b", second, "\r"])
        surface = RichTerminalSurface(
            console=make_console(), read_key=posix_read.readkey
        )
        controller = PickerController("Pick:", ["x", "y"], surface)

        session = controller.run()

        assert session.outcome is Outcome.ABORTED
        assert session.choices.selected is None

    def test_arrow_keys_still_navigate(self, monkeypatch, posix_read):
        self.feed(monkeypatch, posix_read, ["\x1b", "[", "B", "\r"])
        surface = RichTerminalSurface(
            console=make_console(), read_key=posix_read.readkey
        )
        controller = PickerController("Pick:", ["x", "y"], surface)

        assert controller.run().result() == ("y", 1)


class TestDrawing:
    """Tests for the cell buffer."""

    def test_draw_text_at_position(self):
        surface = RichTerminalSurface(console=make_console())
        surface.clear()
        surface.draw_text(3, 1, "hello", "white", "black")

        rows = surface.rows_text()
        assert len(rows) == 5
        assert rows[1] == "   hello" + " " * 12

    def test_wide_characters_advance_two_cells(self):
        surface = RichTerminalSurface(console=make_console())
        surface.clear()
        surface.draw_text(1, 0, "日本x", "white", "black")

        assert surface.rows_text()[0] == " 日本x" + " " * 14

    def test_text_clipped_at_right_edge(self):
        surface = RichTerminalSurface(console=make_console(width=10))
        surface.clear()
        surface.draw_text(8, 0, "abcd", "white", "black")
        assert surface.rows_text()[0] == " " * 8 + "ab"

    def test_rows_outside_screen_ignored(self):
        surface = RichTerminalSurface(console=make_console(height=2))
        surface.clear()
        surface.draw_text(0, 5, "lost", "white", "black")
        surface.draw_text(0, -1, "lost", "white", "black")
        assert "lost" not in "".join(surface.rows_text())

    def test_clear_resets_buffer(self):
        surface = RichTerminalSurface(console=make_console())
        surface.clear()
        surface.draw_text(0, 0, "hello", "white", "black")
        surface.clear()
        assert surface.rows_text()[0] == " " * 20

    def test_invalid_style_is_display_error(self):
        surface = RichTerminalSurface(console=make_console())
        surface.clear()
        with pytest.raises(DisplaySurfaceError):
            surface.draw_text(0, 0, "x", "not a colour", "black")

    def test_synchronize_writes_buffer(self):
        console = make_console()
        surface = RichTerminalSurface(console=console)
        surface.clear()
        surface.draw_text(1, 0, "> apple", "white", "black", bold=True)
        surface.synchronize()

        output = console.file.getvalue()
        assert "> apple" in output


class TestPollEvent:
    """Tests for blocking input."""

    def test_skips_unhandled_keys(self):
        surface = RichTerminalSurface(
            console=make_console(),
            read_key=scripted_reader("\x1b[99~", readchar.key.UP),
        )
        assert surface.poll_event() == KeyEvent(Key.UP)

    def test_keyboard_interrupt_becomes_ctrl_c(self):
        surface = RichTerminalSurface(
            console=make_console(), read_key=scripted_reader(KeyboardInterrupt())
        )
        assert surface.poll_event() == KeyEvent(Key.CTRL_C)

    def test_reports_resize_since_last_synchronize(self):
        console = make_console()
        surface = RichTerminalSurface(console=console, read_key=scripted_reader("a"))
        surface.clear()
        surface.synchronize()

        console.size = (30, 8)

        assert surface.poll_event() == ResizeEvent(30, 8)
        assert surface.poll_event() == KeyEvent(Key.RUNE, "a")


class TestLifecycle:
    """Tests for opening and tearing down the surface."""

    def test_open_requires_terminal(self):
        surface = RichTerminalSurface(console=make_console(terminal=False))
        with pytest.raises(DisplaySurfaceError):
            surface.open()

    def test_teardown_is_idempotent(self):
        console = make_console()
        surface = RichTerminalSurface(console=console).open()
        surface.teardown()
        written = console.file.getvalue()
        surface.teardown()
        assert console.file.getvalue() == written

    def test_open_terminal_surface_tears_down(self, monkeypatch):
        console = make_console()
        monkeypatch.setattr(terminal, "Console", lambda **kwargs: console)
        torn_down = []
        monkeypatch.setattr(
            RichTerminalSurface, "teardown", lambda self: torn_down.append(True)
        )

        with pytest.raises(RuntimeError):
            with open_terminal_surface(PickerConfig.defaults()) as surface:
                assert surface.console is console
                raise RuntimeError("boom")

        assert torn_down == [True]

    def test_open_terminal_surface_not_a_terminal(self, monkeypatch):
        monkeypatch.setattr(
            terminal, "Console", lambda **kwargs: make_console(terminal=False)
        )
        with pytest.raises(DisplaySurfaceError, match="not a terminal"):
            with open_terminal_surface(PickerConfig.defaults()):
                pass
