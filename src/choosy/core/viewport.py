"""Viewport windowing for the choice list."""

from typing import NamedTuple


class Window(NamedTuple):
    """Slice of the visible choices that is rendered."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


def choice_capacity(rows: int, header_lines: int) -> int:
    """Rows available for choices below the prompt (at least one)."""
    return max(1, rows - header_lines)


def calculate_window(selected: int, total_items: int, rows: int, header_lines: int) -> Window:
    """Calculate the visible window for the choice list.

    The window starts at the top while the selected item fits in the
    available rows. Past that, it scrolls so the selected item is the last
    rendered row.

    Args:
        selected: Position of the selected item among visible choices
            (-1 when nothing is selected)
        total_items: Number of visible choices
        rows: Terminal height
        header_lines: Rows taken by the prompt

    Returns:
        Window(start, end) with end exclusive
    """
    capacity = choice_capacity(rows, header_lines)
    if selected < capacity:
        start = 0
    else:
        start = selected - capacity + 1
    end = min(start + capacity, total_items)
    return Window(start, end)


def compute_page_size(rows: int, header_lines: int) -> int:
    """Step used for PageUp/PageDown.

    Falls back to ``rows`` when the prompt alone fills the terminal.
    """
    if rows > header_lines:
        return rows - header_lines - 1
    return rows
