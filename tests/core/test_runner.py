"""Tests for MachineRunner - external stepping policies."""

import pytest

from duotape.core import (
    FAST_INTERVAL,
    RUN_INTERVAL,
    Machine,
    MachineRunner,
    Mode,
    ParseError,
    RunMode,
    StepResult,
)
from tests.conftest import COPY_PROGRAM, make_machine


class _Clock:
    """Fake sleep that records requested delays."""

    def __init__(self) -> None:
        self.sleeps: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.sleeps.append(seconds)


class TestRunModeEnum:
    def test_intervals(self):
        assert RunMode.RUN.interval == RUN_INTERVAL == 0.1
        assert RunMode.FAST.interval == FAST_INTERVAL == 0.0
        assert RunMode.STEP.interval == 0.0


class TestStep:
    def test_step_from_editing_begins_running(self):
        machine = Machine()
        runner = MachineRunner(machine, COPY_PROGRAM)

        result = runner.step()

        assert result is StepResult.CONTINUED
        assert machine.mode is Mode.RUNNING
        assert machine.steps == 1

    def test_parse_error_propagates_and_stays_editing(self):
        machine = Machine()
        runner = MachineRunner(machine, ["I BAD"])

        with pytest.raises(ParseError):
            runner.step()

        assert machine.mode is Mode.EDITING

    def test_listeners_receive_result_and_snapshot(self):
        machine = Machine()
        runner = MachineRunner(machine, COPY_PROGRAM)
        seen = []
        runner.on_step(lambda result, state: seen.append((result, state.steps)))

        runner.step()
        runner.step()

        assert seen == [(StepResult.CONTINUED, 1), (StepResult.CONTINUED, 2)]


class TestRun:
    def test_run_stops_at_halt(self):
        machine = Machine()
        runner = MachineRunner(machine, COPY_PROGRAM)

        result = runner.run(10_000)

        assert result is StepResult.HALTED_PASS
        assert machine.steps < 10_000

    def test_run_zero_steps(self):
        runner = MachineRunner(Machine(), COPY_PROGRAM)
        assert runner.run(0) is None

    def test_run_until_halt_times_out(self):
        runner = MachineRunner(make_machine(), ["I MVR"])

        with pytest.raises(TimeoutError):
            runner.run_until_halt(max_steps=50)

    def test_edit_returns_to_editing(self):
        machine = Machine()
        runner = MachineRunner(machine, COPY_PROGRAM)
        runner.run(5)

        runner.edit(["O HLT"])

        assert machine.mode is Mode.EDITING
        assert runner.program_text == ["O HLT"]


class TestPlay:
    def test_run_mode_sleeps_between_steps(self):
        clock = _Clock()
        runner = MachineRunner(make_machine(), ["I MVR"], sleep=clock)

        runner.play(RunMode.RUN, max_steps=4)

        assert clock.sleeps == [RUN_INTERVAL] * 3
        assert runner.paused

    def test_fast_mode_plays_until_halt(self):
        clock = _Clock()
        machine = Machine()
        runner = MachineRunner(machine, COPY_PROGRAM, sleep=clock)

        result = runner.play(RunMode.FAST)

        assert result is StepResult.HALTED_PASS
        assert set(clock.sleeps) == {FAST_INTERVAL}
        assert len(clock.sleeps) == machine.steps - 1

    def test_step_mode_takes_one_step(self):
        machine = make_machine()
        runner = MachineRunner(machine, ["I MVR"], sleep=_Clock())

        runner.play(RunMode.STEP)

        assert machine.steps == 1

    def test_interval_override(self):
        clock = _Clock()
        runner = MachineRunner(make_machine(), ["I MVR"], interval=0.25, sleep=clock)

        runner.play(RunMode.RUN, max_steps=3)

        assert clock.sleeps == [0.25, 0.25]

    def test_listener_can_pause(self):
        machine = make_machine()
        runner = MachineRunner(machine, ["I MVR"], sleep=_Clock())

        def pause_at_three(result, state):
            if state.steps == 3:
                runner.pause()

        runner.on_step(pause_at_three)
        runner.play(RunMode.FAST)

        assert machine.steps == 3

    def test_rejects_negative_interval(self):
        with pytest.raises(ValueError):
            MachineRunner(make_machine(), interval=-1)
