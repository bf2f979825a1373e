import datetime
from dataclasses import replace

import pytest

from app_state import (
    QUIT,
    AppState,
    FetchCommand,
    KeyPressed,
    Phase,
    initial_state,
    update,
)
from errors import ErrorInfo
from fetch_task import FetchFailed, FetchSucceeded
from grid_builder import ContributionSample, build


TODAY = datetime.date(2024, 5, 20)
ANCHOR = datetime.date(2023, 5, 20)


def _type(state, text):
    for ch in text:
        state, cmd = update(state, KeyPressed(ord(ch)))
        assert cmd is None
    return state


def _fetching(identifier="octocat"):
    state = _type(initial_state(TODAY), identifier)
    state, cmd = update(state, KeyPressed(10))
    assert cmd == FetchCommand(identifier)
    return state


def test_initial_state_awaits_input_with_empty_grid():
    state = initial_state(TODAY)
    assert state.phase is Phase.AWAITING_INPUT
    assert state.grid.rows == 13
    assert state.grid.total() == 0
    assert state.last_error is None


def test_typing_edits_buffer_without_phase_change():
    state = _type(initial_state(TODAY), "octo")
    assert state.input_buffer == "octo"
    assert state.cursor == 4
    state, cmd = update(state, KeyPressed(127))
    assert state.input_buffer == "oct"
    assert state.phase is Phase.AWAITING_INPUT
    assert cmd is None


def test_submit_moves_to_fetching_and_emits_one_task():
    state = _fetching("octocat")
    assert state.phase is Phase.FETCHING
    assert state.submitted_identifier == "octocat"
    assert state.input_buffer == ""
    assert state.cursor == 0


@pytest.mark.parametrize("buffer", ["", "   "])
def test_empty_submit_is_noop(buffer):
    state = _type(initial_state(TODAY), buffer)
    new_state, cmd = update(state, KeyPressed(13))
    assert cmd is None
    assert new_state is state


def test_submit_suppressed_while_fetching():
    state = _type(_fetching(), "other")
    new_state, cmd = update(state, KeyPressed(10))
    assert cmd is None
    assert new_state.phase is Phase.FETCHING
    assert new_state.submitted_identifier == "octocat"


@pytest.mark.parametrize("ch", [3, 27])
@pytest.mark.parametrize("phase", list(Phase))
def test_quit_from_any_phase(ch, phase):
    state = replace(initial_state(TODAY), phase=phase)
    new_state, cmd = update(state, KeyPressed(ch))
    assert cmd is QUIT
    assert new_state is state


def test_success_installs_grid_and_clears_error():
    grid = build([ContributionSample(datetime.date(2023, 5, 25), 4)], ANCHOR)
    state = replace(_fetching(), last_error=ErrorInfo("transport", "boom"))
    state, cmd = update(state, FetchSucceeded("octocat", grid))
    assert cmd is None
    assert state.phase is Phase.DISPLAYING
    assert state.grid == grid
    assert state.last_error is None


def test_failure_records_error_and_keeps_previous_grid():
    before = _fetching()
    error = ErrorInfo("decode", "Malformed date: 'nope'")
    state, cmd = update(before, FetchFailed("octocat", error))
    assert cmd is None
    assert state.phase is Phase.FAILED
    assert state.last_error == error
    assert state.grid is before.grid


@pytest.mark.parametrize("phase", [Phase.AWAITING_INPUT, Phase.DISPLAYING, Phase.FAILED])
def test_completions_outside_fetching_are_ignored(phase):
    state = replace(initial_state(TODAY), phase=phase)
    grid = build([ContributionSample(datetime.date(2023, 5, 25), 4)], ANCHOR)
    for message in (
        FetchSucceeded("octocat", grid),
        FetchFailed("octocat", ErrorInfo("transport", "late")),
    ):
        new_state, cmd = update(state, message)
        assert new_state is state
        assert cmd is None


@pytest.mark.parametrize("phase", [Phase.DISPLAYING, Phase.FAILED])
def test_resubmit_after_result(phase):
    state = _type(replace(initial_state(TODAY), phase=phase), "hubot")
    state, cmd = update(state, KeyPressed(10))
    assert cmd == FetchCommand("hubot")
    assert state.phase is Phase.FETCHING


def test_updates_never_mutate_previous_state():
    state = initial_state(TODAY)
    new_state, _ = update(state, KeyPressed(ord("a")))
    assert state.input_buffer == ""
    assert new_state.input_buffer == "a"
    assert isinstance(new_state, AppState)


def test_unknown_event_raises():
    with pytest.raises(TypeError):
        update(initial_state(TODAY), object())
