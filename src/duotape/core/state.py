"""Immutable machine snapshots.

The machine itself is mutable and stepped in place; after every transition
it records a MachineState so renderers and tests can look at a consistent
picture without touching live tapes.
"""

from __future__ import annotations

from enum import Enum

from pyrsistent import PMap, PRecord, field, pmap

from duotape.core.instruction import Conditional


class Mode(Enum):
    """Machine modes."""

    EDITING = "editing"
    RUNNING = "running"


class StepResult(Enum):
    """Outcome of one step() call."""

    CONTINUED = "continued"
    HALTED_PASS = "halted_pass"
    HALTED_FAIL = "halted_fail"

    @property
    def halted(self) -> bool:
        return self is not StepResult.CONTINUED

    @property
    def passed(self) -> bool:
        return self is StepResult.HALTED_PASS


class MachineState(PRecord):
    """Snapshot of the machine after one transition.

    Attributes:
        snapshot_id: Monotonically increasing across the machine's lifetime.
        steps: Steps executed since the last begin_running().
        mode: Editing or Running.
        conditional: Active conditional.
        puzzle_index: Index of the active puzzle.
        program_position: Program cursor.
        input_position / output_position / reference_position: Tape heads.
        input / output: Stored tape cells.
        result: Result of the step that produced this snapshot, if any.
    """

    snapshot_id = field(type=int, initial=0)
    steps = field(type=int, initial=0)
    mode = field(type=Mode, initial=Mode.EDITING)
    conditional = field(type=Conditional, initial=Conditional.INPUT)
    puzzle_index = field(type=int, initial=0)
    program_position = field(type=int, initial=0)
    input_position = field(type=int, initial=0)
    output_position = field(type=int, initial=0)
    reference_position = field(type=int, initial=0)
    input = field(type=PMap, initial=pmap())
    output = field(type=PMap, initial=pmap())
    result = field(type=(StepResult, type(None)), initial=None)

    @property
    def halted(self) -> bool:
        return self.result is not None and self.result.halted
