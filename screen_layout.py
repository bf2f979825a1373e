import curses


class ScreenLayout:
    def __init__(self, stdscr):
        self.stdscr = stdscr
        H, W = stdscr.getmaxyx()
        self.H, self.W = max(1, H), max(1, W)

        # layout: header (title, prompt, hint), grid (main), status bar (1 line)
        self.header_h = min(4, max(1, self.H - 2))
        self.status_h = 1

        self.grid_h = max(1, self.H - self.header_h - self.status_h)

        # the header owns the cursor, it holds the input prompt
        self.header_win = curses.newwin(self.header_h, self.W, 0, 0)

        # on very short terminals the panes overlap rather than leave the screen
        grid_y = min(self.header_h, self.H - 1)
        self.grid_win = curses.newwin(self.grid_h, self.W, grid_y, 0)
        # grid pane must never own cursor
        self.grid_win.leaveok(True)

        self.status_win = curses.newwin(self.status_h, self.W, self.H - 1, 0)
        # do not let status bar steal cursor
        self.status_win.leaveok(True)
