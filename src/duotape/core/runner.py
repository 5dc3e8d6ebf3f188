"""MachineRunner - stepping policies layered outside the machine.

The machine only knows how to take one step. The runner decides when to
call it: on demand, at a fixed interval, or back to back. Waiting is done
through an injected ``sleep`` so tests and hosts control the clock.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Final

from duotape.core.machine import Machine
from duotape.core.state import MachineState, Mode, StepResult

logger = logging.getLogger(__name__)

RUN_INTERVAL: Final = 0.1
FAST_INTERVAL: Final = 0.0

StepListener = Callable[[StepResult, MachineState], None]


class RunMode(Enum):
    """Stepping policies.

    STEP: One step per call, driven by the caller.
    RUN: One step every RUN_INTERVAL seconds.
    FAST: Steps back to back (FAST_INTERVAL, zero delay).
    """

    STEP = "step"
    RUN = "run"
    FAST = "fast"

    @property
    def interval(self) -> float:
        match self:
            case RunMode.STEP:
                return 0.0
            case RunMode.RUN:
                return RUN_INTERVAL
            case RunMode.FAST:
                return FAST_INTERVAL


class MachineRunner:
    """Drives a Machine the way the editor's Step / Run / Fast controls do.

    The runner keeps the program text being edited. Any stepping call made
    while the machine is Editing first begins a run with that text; a
    ParseError propagates and leaves the machine in Editing.

    Attributes:
        machine: The driven machine.
        program_text: Text handed to begin_running().
    """

    def __init__(
        self,
        machine: Machine,
        program_text: str | Sequence[str] = "",
        *,
        interval: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Create a runner.

        Args:
            machine: Machine to drive.
            program_text: Initial program text.
            interval: Override the per-mode interval used by play().
            sleep: Called with the delay between paced steps.
        """
        if interval is not None and interval < 0:
            raise ValueError("interval must be >= 0 or None")
        self.machine = machine
        self.program_text = program_text
        self._interval = interval
        self._sleep = sleep
        self._paused = True
        self._listeners: list[StepListener] = []

    @property
    def paused(self) -> bool:
        return self._paused

    def edit(self, program_text: str | Sequence[str]) -> None:
        """Replace the program text and return the machine to Editing."""
        self.program_text = program_text
        self.stop()

    def on_step(self, listener: StepListener) -> None:
        """Register a callback invoked with (result, snapshot) after every step."""
        self._listeners.append(listener)

    def pause(self) -> None:
        """Stop play() before its next step."""
        self._paused = True

    def stop(self) -> None:
        self.pause()
        self.machine.stop()

    def _ensure_running(self) -> None:
        if self.machine.mode is Mode.EDITING:
            self.machine.begin_running(self.program_text)

    def step(self) -> StepResult:
        """Execute one step, beginning a run first if the machine is Editing."""
        self._ensure_running()
        result = self.machine.step()
        snapshot = self.machine.snapshot()
        for listener in self._listeners:
            listener(result, snapshot)
        if result.halted:
            self._paused = True
        return result

    def run(self, steps: int) -> StepResult | None:
        """Execute up to ``steps`` steps, stopping early at a halt.

        Returns:
            The last step result, or None if ``steps`` is 0.
        """
        result = None
        for _ in range(steps):
            result = self.step()
            if result.halted:
                break
        return result

    def run_until_halt(self, max_steps: int = 10000) -> StepResult:
        """Step until the machine halts.

        Raises:
            TimeoutError: If the machine has not halted after ``max_steps``.
        """
        result = self.run(max_steps)
        if result is None or not result.halted:
            raise TimeoutError(f"Machine did not halt within {max_steps} steps")
        return result

    def play(self, mode: RunMode = RunMode.RUN, max_steps: int | None = None) -> StepResult | None:
        """Step at the mode's interval until halted, paused or out of steps.

        Takes one step immediately, then sleeps for the interval before each
        following step. A listener may call pause() to stop the loop.
        """
        interval = mode.interval if self._interval is None else self._interval
        logger.info("Playing in %s mode (interval=%ss)", mode.value, interval)

        self._paused = False
        result = None
        taken = 0
        while not self._paused:
            if max_steps is not None and taken >= max_steps:
                self._paused = True
                break
            if taken:
                self._sleep(interval)
            result = self.step()
            taken += 1
            if mode is RunMode.STEP:
                self._paused = True
        return result
