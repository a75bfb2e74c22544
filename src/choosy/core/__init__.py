"""Picker core: choice store, filtering, navigation, viewport and controller."""

from choosy.core.choices import Choice, ChoiceStore
from choosy.core.controller import Outcome, PickerController, PickResult, Session
from choosy.core.navigation import Direction, move
from choosy.core.search import SearchQuery, apply_query
from choosy.core.viewport import Window, calculate_window, compute_page_size

__all__ = [
    "Choice",
    "ChoiceStore",
    "Direction",
    "Outcome",
    "PickResult",
    "PickerController",
    "SearchQuery",
    "Session",
    "Window",
    "apply_query",
    "calculate_window",
    "compute_page_size",
    "move",
]
