"""Tests for viewport windowing and page size."""

import pytest

from choosy.core.viewport import Window, calculate_window, compute_page_size


class TestCalculateWindow:
    """Tests for calculate_window."""

    def test_everything_fits(self):
        assert calculate_window(2, 5, rows=10, header_lines=1) == Window(0, 5)

    def test_window_starts_at_top_while_selection_fits(self):
        # 5 rows, 1 header -> 4 choice rows
        assert calculate_window(3, 10, rows=5, header_lines=1) == Window(0, 4)

    def test_selection_becomes_last_row_when_scrolling(self):
        window = calculate_window(6, 10, rows=5, header_lines=1)
        assert window == Window(3, 7)
        assert window.end - 1 == 6
        assert len(window) == 4

    def test_last_item(self):
        assert calculate_window(9, 10, rows=5, header_lines=2) == Window(7, 10)

    def test_no_selection(self):
        assert calculate_window(-1, 10, rows=5, header_lines=1) == Window(0, 4)

    def test_no_visible_items(self):
        assert calculate_window(-1, 0, rows=5, header_lines=1) == Window(0, 0)

    def test_prompt_fills_terminal_keeps_selected_in_window(self):
        window = calculate_window(4, 10, rows=2, header_lines=3)
        assert window == Window(4, 5)


class TestComputePageSize:
    """Tests for compute_page_size."""

    def test_regular_terminal(self):
        assert compute_page_size(24, 1) == 22

    def test_one_row_left_for_choices(self):
        assert compute_page_size(3, 2) == 0

    @pytest.mark.parametrize("rows,header_lines", [(3, 3), (2, 5), (0, 1)])
    def test_falls_back_to_rows_when_prompt_fills_terminal(self, rows, header_lines):
        assert compute_page_size(rows, header_lines) == rows

    @pytest.mark.parametrize("rows", range(0, 8))
    @pytest.mark.parametrize("header_lines", range(0, 8))
    def test_never_negative(self, rows, header_lines):
        assert compute_page_size(rows, header_lines) >= 0
