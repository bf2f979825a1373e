import curses
import logging
from dataclasses import dataclass, field, replace
from enum import Enum

import input_line
from errors import ErrorInfo
from fetch_task import FetchFailed, FetchSucceeded
from grid_builder import ContributionGrid, build, window_anchor


logger = logging.getLogger(__name__)

QUIT_KEYS = (3, 27)  # Ctrl+C, Esc
SUBMIT_KEYS = (10, 13, curses.KEY_ENTER)


class Phase(Enum):
    AWAITING_INPUT = "awaiting_input"
    FETCHING = "fetching"
    DISPLAYING = "displaying"
    FAILED = "failed"


@dataclass(frozen=True)
class KeyPressed:
    ch: int


@dataclass(frozen=True)
class FetchCommand:
    identifier: str


class _Quit:
    def __repr__(self):
        return "QUIT"


QUIT = _Quit()


@dataclass(frozen=True)
class AppState:
    grid: ContributionGrid
    input_buffer: str = ""
    cursor: int = 0
    submitted_identifier: str = ""
    last_error: ErrorInfo | None = None
    phase: Phase = field(default=Phase.AWAITING_INPUT)


def initial_state(today=None, input_buffer=""):
    return AppState(
        grid=build([], window_anchor(today)),
        input_buffer=input_buffer,
        cursor=len(input_buffer),
    )


def _submit(state):
    identifier = state.input_buffer.strip()
    if not identifier:
        return state, None
    if state.phase is Phase.FETCHING:
        logger.debug("Submit ignored while a fetch is in flight")
        return state, None
    logger.info("Submitting %s", identifier)
    new_state = replace(
        state,
        submitted_identifier=identifier,
        input_buffer="",
        cursor=0,
        phase=Phase.FETCHING,
    )
    return new_state, FetchCommand(identifier)


def _on_key(state, ch):
    if ch in QUIT_KEYS:
        return state, QUIT
    if ch in SUBMIT_KEYS:
        return _submit(state)
    buffer, cursor = input_line.edit(state.input_buffer, state.cursor, ch)
    if buffer == state.input_buffer and cursor == state.cursor:
        return state, None
    return replace(state, input_buffer=buffer, cursor=cursor), None


def update(state, event):
    """Fold one event into `state`. Returns (new_state, command or None)."""
    if isinstance(event, KeyPressed):
        return _on_key(state, event.ch)

    if isinstance(event, (FetchSucceeded, FetchFailed)):
        if state.phase is not Phase.FETCHING:
            logger.debug("Ignoring stale completion for %s", event.identifier)
            return state, None
        if isinstance(event, FetchSucceeded):
            return (
                replace(state, grid=event.grid, last_error=None, phase=Phase.DISPLAYING),
                None,
            )
        return replace(state, last_error=event.error, phase=Phase.FAILED), None

    raise TypeError(f"Unknown event: {event!r}")
