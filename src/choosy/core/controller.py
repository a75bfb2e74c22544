"""Picker controller: maps input events onto the choice store and renders it."""

from concurrent.futures import Future
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import NamedTuple, Optional, Sequence

from choosy.core.choices import ChoiceStore
from choosy.core.navigation import Direction, move
from choosy.core.search import SearchQuery, apply_query
from choosy.core.viewport import calculate_window, compute_page_size
from choosy.surface.base import DisplaySurface, Event, Key, KeyEvent, ResizeEvent
from choosy.utils.config import PickerConfig
from choosy.utils.debug import debug_event, debug_render
from choosy.utils.exceptions import InternalFaultError, SelectionAborted

SELECTED_MARKER = "> "

# Letter shortcuts, only active while the search query is empty
RUNE_UP = ("k", "w")
RUNE_DOWN = ("j", "s")
RUNE_CONFIRM = (" ", "l", "d")
RUNE_ABORT = ("q",)

CONFIRM_KEYS = (Key.ENTER, Key.RIGHT)
ABORT_KEYS = (Key.ESCAPE, Key.CTRL_C, Key.LEFT)


class Outcome(Enum):
    PENDING = auto()
    CONFIRMED = auto()
    ABORTED = auto()


class PickResult(NamedTuple):
    """Confirmed choice: its value and original position."""

    value: str
    id: int


@dataclass
class Session:
    """State of one picking session."""

    choices: ChoiceStore
    query: SearchQuery = field(default_factory=SearchQuery)
    outcome: Outcome = Outcome.PENDING

    @property
    def finished(self) -> bool:
        return self.outcome is not Outcome.PENDING

    def result(self) -> PickResult:
        """Resolve the finished session into a PickResult.

        Raises:
            SelectionAborted: aborted, or confirmed with nothing visible
            InternalFaultError: confirmed with visible choices but no selection
        """
        if self.outcome is Outcome.ABORTED:
            raise SelectionAborted("aborted")
        if self.outcome is not Outcome.CONFIRMED:
            raise InternalFaultError(f"session not finished: {self.outcome.name}")

        selected = self.choices.selected
        if selected is not None:
            return PickResult(selected.value, selected.id)
        if self.choices.visible():
            raise InternalFaultError("no choice selected while choices are visible")
        raise SelectionAborted("no choice matches the search query")


class PickerController:
    """Single-consumer render/input loop for one session.

    The controller exclusively owns its session; the only thing shared
    with the caller is the completion future passed to :meth:`run`.
    """

    def __init__(
        self,
        prompt: str,
        choices: Sequence[str],
        surface: DisplaySurface,
        config: Optional[PickerConfig] = None,
    ):
        self.prompt_lines = prompt.split("\n")
        self.session = Session(ChoiceStore(choices))
        self.surface = surface
        self.config = config or PickerConfig.defaults()

    @property
    def header_lines(self) -> int:
        return len(self.prompt_lines)

    def run(self, done: Optional[Future] = None) -> Session:
        """Render, wait for an event, apply it; repeat until the session ends.

        When ``done`` is given, the finished session (or the raised error)
        is delivered through it exactly once.
        """
        try:
            while not self.session.finished:
                self.render()
                self.handle_event(self.surface.poll_event())
        except BaseException as e:
            if done is None:
                raise
            done.set_exception(e)
            return self.session
        if done is not None:
            done.set_result(self.session)
        return self.session

    def handle_event(self, event: Event):
        debug_event("received", event=event)
        if isinstance(event, ResizeEvent):
            self.surface.synchronize()
        elif isinstance(event, KeyEvent):
            self.handle_key(event)

    def handle_key(self, event: KeyEvent):
        store = self.session.choices
        key = event.key

        if key == Key.UP:
            move(store, Direction.UP)
        elif key == Key.DOWN:
            move(store, Direction.DOWN)
        elif key == Key.HOME:
            move(store, Direction.UP, len(store.visible()))
        elif key == Key.END:
            move(store, Direction.DOWN, len(store.visible()))
        elif key == Key.PAGE_UP:
            move(store, Direction.UP, self.page_size())
        elif key == Key.PAGE_DOWN:
            move(store, Direction.DOWN, self.page_size())
        elif key == Key.BACKSPACE:
            if self.session.query.backspace():
                self._requery()
        elif key in CONFIRM_KEYS:
            self.confirm()
        elif key in ABORT_KEYS:
            self.abort()
        elif key == Key.RUNE and event.rune:
            self.handle_rune(event.rune)

    def handle_rune(self, rune: str):
        store = self.session.choices
        if not self.session.query:
            if rune in RUNE_UP:
                move(store, Direction.UP)
                return
            if rune in RUNE_DOWN:
                move(store, Direction.DOWN)
                return
            if rune in RUNE_CONFIRM:
                self.confirm()
                return
            if rune in RUNE_ABORT:
                self.abort()
                return
        self.session.query.append(rune)
        self._requery()

    def _requery(self):
        apply_query(self.session.choices, self.session.query)
        self.session.choices.select_first_visible()

    def confirm(self):
        debug_event("confirm", query=repr(str(self.session.query)))
        self.session.outcome = Outcome.CONFIRMED

    def abort(self):
        debug_event("abort")
        self.session.choices.clear_selection()
        self.session.outcome = Outcome.ABORTED

    def page_size(self) -> int:
        _, rows = self.surface.size()
        return compute_page_size(rows, self.header_lines)

    def render(self):
        """Draw the prompt and the current window of visible choices."""
        surface = self.surface
        config = self.config
        surface.clear()
        _, rows = surface.size()

        line_number = 0
        for line in self.prompt_lines:
            surface.draw_text(
                1, line_number, line, config.text_color, config.background_color
            )
            line_number += 1

        visible = self.session.choices.visible()
        selected = self.session.choices.selected
        if visible and selected is None:
            raise InternalFaultError("no choice selected while choices are visible")
        position = visible.index(selected) if selected is not None else -1

        window = calculate_window(position, len(visible), rows, self.header_lines)
        for choice in visible[window.start : window.end]:
            if choice.selected:
                surface.draw_text(
                    1,
                    line_number,
                    f"{SELECTED_MARKER}{choice.value}",
                    config.selected_text_color,
                    config.background_color,
                    config.selected_text_bold,
                )
            else:
                surface.draw_text(
                    3,
                    line_number,
                    choice.value,
                    config.text_color,
                    config.background_color,
                )
            line_number += 1

        debug_render(
            "frame",
            rows=rows,
            window=f"{window.start}:{window.end}",
            visible=len(visible),
        )
        surface.synchronize()
