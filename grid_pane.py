import curses

from grid_builder import DAY_COLUMNS
from renderer import CELL_WIDTH, LABEL_SPAN, NO_DATA_GLYPH, cell_start, view_lines


class GridPane:
    PAIR_COUNT = 1
    PAIR_LABEL = 2
    PAIR_ERROR = 3

    def __init__(self):
        self.count_attr = curses.A_BOLD
        self.label_attr = curses.A_NORMAL
        self.error_attr = curses.A_BOLD
        self.dim_attr = curses.A_DIM
        try:
            curses.start_color()
            curses.use_default_colors()
            curses.init_pair(self.PAIR_COUNT, curses.COLOR_CYAN, -1)
            curses.init_pair(self.PAIR_LABEL, curses.COLOR_WHITE, -1)
            curses.init_pair(self.PAIR_ERROR, curses.COLOR_RED, -1)
            self.count_attr = curses.color_pair(self.PAIR_COUNT) | curses.A_BOLD
            self.label_attr = curses.color_pair(self.PAIR_LABEL)
            self.error_attr = curses.color_pair(self.PAIR_ERROR) | curses.A_BOLD
        except curses.error:
            pass

    @staticmethod
    def _put(win, y, x, text, attr, w):
        if x >= w - 1:
            return
        try:
            win.addnstr(y, x, text, w - 1 - x, attr)
        except curses.error:
            pass

    def _draw_grid_row(self, win, y, line, header, w):
        self._put(win, y, 0, line[:LABEL_SPAN], self.label_attr, w)
        for day in DAY_COLUMNS:
            x = cell_start(day)
            text = line[x : x + CELL_WIDTH]
            if header:
                attr = self.label_attr
            elif text.strip() == NO_DATA_GLYPH:
                attr = self.dim_attr
            else:
                attr = self.count_attr
            self._put(win, y, x, text, attr, w)
            self._put(win, y, x + CELL_WIDTH, "|", self.dim_attr, w)

    def draw(self, win, state):
        win.erase()
        h, w = win.getmaxyx()
        lines = view_lines(state)
        # the grid layout (header + one row per month) closes the view
        grid_top = len(lines) - (state.grid.rows + 1)

        for y, line in enumerate(lines[:h]):
            if y >= grid_top:
                self._draw_grid_row(win, y, line, header=(y == grid_top), w=w)
            elif line.startswith("Error:"):
                self._put(win, y, 0, line, self.error_attr, w)
            else:
                self._put(win, y, 0, line, curses.A_NORMAL, w)

        win.refresh()
