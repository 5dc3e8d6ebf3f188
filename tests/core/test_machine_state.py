"""Tests for MachineState snapshots and per-run History."""

from typing import Any, cast

import pytest
from pyrsistent import pmap

from duotape.core import HISTORY_LIMIT, Conditional, History, MachineState, Mode, StepResult


class TestMachineState:
    def test_defaults(self):
        state = MachineState()

        assert state.snapshot_id == 0
        assert state.mode is Mode.EDITING
        assert state.conditional is Conditional.INPUT
        assert state.result is None
        assert not state.halted

    def test_is_immutable(self):
        state = MachineState()

        with pytest.raises(AttributeError):
            state.steps = 1

    def test_tapes_are_immutable(self):
        state = MachineState(input=pmap({0: 1}))

        with pytest.raises(TypeError):
            cast(Any, state.input)[0] = 2

    def test_halted_follows_result(self):
        assert MachineState(result=StepResult.HALTED_FAIL).halted
        assert not MachineState(result=StepResult.CONTINUED).halted


class TestStepResult:
    def test_flags(self):
        assert not StepResult.CONTINUED.halted
        assert StepResult.HALTED_PASS.halted and StepResult.HALTED_PASS.passed
        assert StepResult.HALTED_FAIL.halted and not StepResult.HALTED_FAIL.passed


def _history(limit: int | None = None) -> History:
    history = History(MachineState(steps=0), limit=limit)
    for steps in range(1, 6):
        history.record(MachineState(snapshot_id=steps, steps=steps))
    return history


def test_history_at_step_and_missing():
    history = _history()
    assert history.at_step(3).snapshot_id == 3
    with pytest.raises(KeyError):
        history.at_step(99)


def test_history_at_step_returns_first_match():
    history = _history()
    history.record(MachineState(snapshot_id=6, steps=5))

    assert history.at_step(5).snapshot_id == 5


def test_history_latest():
    history = _history()
    assert [s.steps for s in history.latest(2)] == [4, 5]
    assert history.latest(0) == []


def test_history_drops_oldest_at_limit():
    history = _history(limit=2)
    assert [s.steps for s in history] == [4, 5]
    assert (history.oldest.steps, history.newest.steps) == (4, 5)
    with pytest.raises(KeyError):
        history.at_step(3)


def test_history_restart_keeps_only_new_state():
    history = _history(limit=4)
    history.restart(MachineState(snapshot_id=10))

    assert len(history) == 1
    assert history.newest.snapshot_id == 10
    assert history.limit == 4


def test_history_default_limit():
    assert History(MachineState()).limit == HISTORY_LIMIT
    assert History(MachineState(), limit=None).limit is None


def test_history_rejects_bad_limit():
    with pytest.raises(ValueError):
        History(MachineState(), limit=0)
