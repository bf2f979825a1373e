import curses
import logging
import queue
import time

import input_line
from app_state import QUIT, FetchCommand, KeyPressed, Phase, update
from fetch_task import FetchFailed, FetchSucceeded, FetchTask
from grid_pane import GridPane
from screen_layout import ScreenLayout
from status_bar import render_status


logger = logging.getLogger(__name__)

TITLE = "GitHub Contributions"
HINT = "(ctrl+c or esc to quit)"


class Orchestrator:
    def __init__(self, stdscr, app_state, client, task_factory=FetchTask):
        self.stdscr = stdscr
        curses.curs_set(1)
        curses.raw()
        self.stdscr.nodelay(False)
        self.stdscr.timeout(100)

        self.state = app_state
        self.client = client
        self.task_factory = task_factory
        self.inbox = queue.Queue()

        self.layout = ScreenLayout(stdscr)
        self.grid = GridPane()

        # ---- status ----
        self.status_msg = None
        self.status_msg_until = 0

    # ---------------- helpers ----------------

    def _set_status(self, msg, seconds=3):
        self.status_msg = msg
        self.status_msg_until = time.time() + seconds

    def _run_command(self, command):
        if command is QUIT:
            return False
        if isinstance(command, FetchCommand):
            task = self.task_factory(command.identifier, self.client, self.inbox)
            task.start()
        return True

    def dispatch(self, event):
        """Feed one event through the reducer. Returns False when quitting."""
        previous = self.state
        self.state, command = update(self.state, event)

        if previous.phase is Phase.FETCHING and self.state.phase is Phase.DISPLAYING:
            self._set_status(
                f"Fetched {self.state.grid.rows} months for {self.state.submitted_identifier}",
                3,
            )
        elif previous.phase is Phase.FETCHING and self.state.phase is Phase.FAILED:
            self._set_status("Fetch failed", 3)

        return self._run_command(command)

    def drain_inbox(self):
        while True:
            try:
                message = self.inbox.get_nowait()
            except queue.Empty:
                return
            if isinstance(message, (FetchSucceeded, FetchFailed)):
                self.dispatch(message)

    # ---------------- UI ----------------

    def _draw_header(self):
        hw = self.layout.header_win
        hw.erase()
        h, w = hw.getmaxyx()
        rows = [(0, TITLE, curses.A_BOLD), (3, HINT, curses.A_DIM)]
        for y, text, attr in rows:
            if y < h:
                try:
                    hw.addnstr(y, 0, text, w - 1, attr)
                except curses.error:
                    pass
        prompt_y = 2 if h > 2 else h - 1
        input_line.draw(hw, prompt_y, self.state.input_buffer, self.state.cursor)

    def _draw_status(self):
        sw = self.layout.status_win
        sw.erase()
        _, w = sw.getmaxyx()
        text = render_status(
            {
                "status_msg": self.status_msg,
                "status_until": self.status_msg_until,
                "phase": self.state.phase.value,
                "identifier": self.state.submitted_identifier,
                "total": self.state.grid.total(),
                "months": self.state.grid.rows,
            },
            w,
        )
        try:
            sw.addnstr(0, 0, text, max(1, w - 1), curses.A_REVERSE)
        except curses.error:
            pass
        sw.refresh()

    def redraw(self):
        self.grid.draw(self.layout.grid_win, self.state)
        self._draw_status()
        self._draw_header()
        # header last so the terminal cursor ends on the prompt
        self.layout.header_win.refresh()

    # ---------------- main loop ----------------

    def run(self, submit_on_start=False):
        self.stdscr.clear()
        self.stdscr.refresh()

        if submit_on_start and not self.dispatch(KeyPressed(10)):
            return
        self.redraw()

        while True:
            self.drain_inbox()

            ch = self.stdscr.getch()

            if ch == curses.KEY_RESIZE:
                self.stdscr.clear()
                self.stdscr.refresh()
                try:
                    self.layout = ScreenLayout(self.stdscr)
                except curses.error:
                    logger.warning("Could not rebuild layout after resize")
                self.redraw()
                continue

            if ch != -1 and not self.dispatch(KeyPressed(ch)):
                logger.info("Quit requested")
                break

            self.redraw()
