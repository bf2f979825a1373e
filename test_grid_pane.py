import datetime
import unittest
from dataclasses import replace

from app_state import Phase, initial_state
from errors import ErrorInfo
from grid_builder import ContributionSample, build, window_anchor
from grid_pane import GridPane
from renderer import cell_start


TODAY = datetime.date(2024, 5, 20)

LABEL, DIM, COUNT, ERROR = 1, 2, 4, 8


class DummyWin:
    def __init__(self, h=24, w=120):
        self._h = h
        self._w = w
        self.calls = []

    def getmaxyx(self):
        return self._h, self._w

    def erase(self):
        pass

    def refresh(self):
        pass

    def addnstr(self, y, x, text, n, attr=0):
        if not (0 <= y < self._h and 0 <= x < self._w):
            raise AssertionError(f"addnstr at ({y}, {x}) outside {self._h}x{self._w}")
        shown = text[: max(0, n)]
        if x + len(shown) > self._w:
            raise AssertionError(f"addnstr at ({y}, {x}) writes past width {self._w}")
        self.calls.append((y, x, shown, attr))


def _pane():
    pane = GridPane()
    pane.label_attr = LABEL
    pane.dim_attr = DIM
    pane.count_attr = COUNT
    pane.error_attr = ERROR
    return pane


def _failed_state():
    grid = build(
        [ContributionSample(datetime.date(2023, 5, 25), 4)], window_anchor(TODAY)
    )
    return replace(
        initial_state(TODAY),
        grid=grid,
        submitted_identifier="octocat",
        phase=Phase.FAILED,
        last_error=ErrorInfo("transport", "offline"),
    )


def _call_at(win, y, x):
    for call in win.calls:
        if call[0] == y and call[1] == x:
            return call
    raise AssertionError(f"nothing drawn at ({y}, {x})")


class GridPaneDrawTests(unittest.TestCase):
    def test_draw_stays_inside_window(self):
        for h, w in [(5, 30), (40, 200), (1, 2), (3, 1)]:
            win = DummyWin(h, w)
            _pane().draw(win, _failed_state())
            for y, x, text, _ in win.calls:
                self.assertLess(y, h)
                self.assertLessEqual(x + len(text), w - 1)

    def test_long_rows_are_clipped(self):
        win = DummyWin(24, 40)
        _pane().draw(win, _failed_state())
        self.assertFalse([c for c in win.calls if c[1] >= 39])

    def test_header_row_uses_label_attr(self):
        win = DummyWin(24, 200)
        _pane().draw(win, _failed_state())
        # identifier, error, blank, then the day header
        y, _, text, attr = _call_at(win, 3, cell_start(1))
        self.assertEqual(text, "  1")
        self.assertEqual(attr, LABEL)

    def test_counts_and_no_data_cells(self):
        win = DummyWin(24, 200)
        _pane().draw(win, _failed_state())
        _, _, text, attr = _call_at(win, 4, cell_start(25))
        self.assertEqual((text, attr), ("  4", COUNT))
        _, _, text, attr = _call_at(win, 4, cell_start(26))
        self.assertEqual((text, attr), ("  ✗", DIM))

    def test_error_line_uses_error_attr(self):
        win = DummyWin(24, 200)
        _pane().draw(win, _failed_state())
        _, _, text, attr = _call_at(win, 1, 0)
        self.assertEqual(text, "Error: offline")
        self.assertEqual(attr, ERROR)

    def test_header_detected_before_first_submit(self):
        win = DummyWin(24, 200)
        _pane().draw(win, initial_state(TODAY))
        _, _, text, attr = _call_at(win, 1, cell_start(31))
        self.assertEqual((text, attr), (" 31", LABEL))
        _, _, text, attr = _call_at(win, 2, cell_start(1))
        self.assertEqual(attr, DIM)


if __name__ == "__main__":
    unittest.main()
