"""Machine - the two-tape interpreter.

The machine owns one program grid and three tapes. Only instructions tagged
with the active conditional are visible: Input-tagged cells operate with the
input tape as main, Output-tagged cells with the output tape as main. Swap
and a matching SetOnEqual flip which set of instructions is live.

The machine is stepped by its caller. It never schedules itself, performs
no I/O and keeps no global state; see MachineRunner for stepping policies.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import cast

from duotape.core.context import StepContext
from duotape.core.errors import MachineModeError, NoExecutableInstruction, ParseError
from duotape.core.grid import PROGRAM_HEIGHT, PROGRAM_WIDTH, ProgramGrid
from duotape.core.history import HISTORY_LIMIT, History
from duotape.core.instruction import Conditional, Instruction
from duotape.core.puzzle import PUZZLES, Puzzle
from duotape.core.state import MachineState, Mode, StepResult
from duotape.core.tape import DataTape
from duotape.core.trace_formatter import TraceFormatter

logger = logging.getLogger(__name__)


class Machine:
    """Two-tape machine with an instruction grid and a reference tape.

    Attributes:
        program: The instruction grid.
        input_tape: Tape loaded from the puzzle input on every run.
        output_tape: Tape written by the program; cleared on every transition.
        reference_tape: Expected output, loaded once per puzzle.
        mode: Editing or Running.
        conditional: Active conditional (which tape is main).
    """

    def __init__(
        self,
        puzzles: Sequence[Puzzle] = PUZZLES,
        *,
        width: int = PROGRAM_WIDTH,
        height: int = PROGRAM_HEIGHT,
        seek_limit: int | None = None,
        history_limit: int | None = HISTORY_LIMIT,
    ) -> None:
        """Create a machine and start the first puzzle in Editing mode.

        Args:
            puzzles: Puzzle catalog; must not be empty.
            width: Program grid columns.
            height: Program grid rows.
            seek_limit: Max cells visited when seeking the next instruction.
                None means one full lap of the grid, which is exact: if no
                cell matches in one lap, none ever will.
            history_limit: Max snapshots kept for the current run. None for
                unbounded.
        """
        if not puzzles:
            raise ValueError("puzzles must not be empty")
        if seek_limit is not None and seek_limit < 1:
            raise ValueError("seek_limit must be >= 1 or None")

        self._puzzles = tuple(puzzles)
        self._puzzle_index = 0
        self._seek_limit = seek_limit

        self.program = ProgramGrid(width, height)
        self.input_tape = DataTape()
        self.output_tape = DataTape()
        self.reference_tape = DataTape()

        self.mode = Mode.EDITING
        self.conditional = Conditional.INPUT
        self._steps = 0
        self._last_result: StepResult | None = None
        self._snapshot_id = 0

        self._formatter = TraceFormatter()
        self._history = History(self._capture(), limit=history_limit)
        self.start_puzzle(0)

    # =========================================================================
    # Introspection
    # =========================================================================

    @property
    def puzzles(self) -> tuple[Puzzle, ...]:
        return self._puzzles

    @property
    def puzzle_index(self) -> int:
        return self._puzzle_index

    @property
    def current_puzzle(self) -> Puzzle:
        return self._puzzles[self._puzzle_index]

    @property
    def steps(self) -> int:
        """Steps executed since the last begin_running()."""
        return self._steps

    @property
    def last_result(self) -> StepResult | None:
        return self._last_result

    @property
    def halted(self) -> bool:
        return self._last_result is not None and self._last_result.halted

    @property
    def history(self) -> History:
        return self._history

    def snapshot(self) -> MachineState:
        """The most recently recorded snapshot."""
        return self._history.newest

    def current_instruction(self) -> Instruction | None:
        """Decoded instruction under the program cursor, or None when empty."""
        cell = self.program.current()
        return cell if isinstance(cell, Instruction) else None

    # =========================================================================
    # Puzzle lifecycle
    # =========================================================================

    def start_puzzle(self, index: int | None = None) -> Puzzle:
        """Load a puzzle's tapes, clear the program and enter Editing.

        Args:
            index: Puzzle index; defaults to the current puzzle.
        """
        if index is not None:
            if not 0 <= index < len(self._puzzles):
                raise IndexError(f"puzzle index {index} out of range")
            self._puzzle_index = index

        puzzle = self.current_puzzle
        logger.info("Starting puzzle %d: %s", self._puzzle_index, puzzle.description)

        self.input_tape.clear_and_reset()
        self.input_tape.load_from_hex_string(puzzle.input)
        self.program.clear()
        self.output_tape.clear_and_reset()
        self.reference_tape.clear_and_reset()
        self.reference_tape.load_from_hex_string(puzzle.output)

        self.begin_editing()
        return puzzle

    def advance_puzzle(self) -> bool:
        """Start the next puzzle.

        Returns:
            False when the catalog is exhausted; the machine stays put.
        """
        if self._puzzle_index + 1 >= len(self._puzzles):
            logger.info("All %d puzzles completed", len(self._puzzles))
            return False
        self.start_puzzle(self._puzzle_index + 1)
        return True

    @property
    def completed(self) -> bool:
        """True once the last puzzle has been passed."""
        return self._puzzle_index == len(self._puzzles) - 1 and self._last_result is StepResult.HALTED_PASS

    # =========================================================================
    # Mode transitions
    # =========================================================================

    def begin_editing(self) -> None:
        """Enter Editing: rewind every head and clear the output tape."""
        self.mode = Mode.EDITING
        self.input_tape.reset()
        self.program.reset()
        self.output_tape.clear_and_reset()
        self.reference_tape.reset()
        self._last_result = None
        logger.info("Editing puzzle %d", self._puzzle_index)
        self._record()

    def stop(self) -> None:
        """Abandon a run and return to Editing."""
        self.begin_editing()

    def begin_running(self, program_text: str | Sequence[str]) -> None:
        """Load program text and enter Running.

        The input tape is reloaded from the puzzle; the reference tape's
        values are left as loaded by start_puzzle().

        Raises:
            ParseError: If the program text is invalid. The machine stays in
                its current mode.
        """
        try:
            self.program.load_from_text(program_text)
        except ParseError as exc:
            logger.warning("%s", exc)
            raise

        self.mode = Mode.RUNNING
        self.conditional = Conditional.INPUT
        self.input_tape.clear_and_reset()
        self.input_tape.load_from_hex_string(self.current_puzzle.input)
        self.program.reset()
        self.output_tape.clear_and_reset()
        self.reference_tape.reset()
        self._steps = 0
        self._last_result = None
        logger.info("Running puzzle %d", self._puzzle_index)
        self._history.restart(self._next_state())

    # =========================================================================
    # Execution
    # =========================================================================

    def step(self) -> StepResult:
        """Execute one instruction.

        Seeks to the next instruction for the active conditional, executes
        it, mirrors the reference head to the output head and, unless the
        instruction was Halt or Jump, advances and seeks again so the cursor
        rests on the next executable instruction.

        Returns:
            CONTINUED, or HALTED_PASS / HALTED_FAIL after a Halt.

        Raises:
            MachineModeError: If called while Editing.
            NoExecutableInstruction: If no cell matches the active conditional.
        """
        if self.mode is not Mode.RUNNING:
            raise MachineModeError("step() requires Running mode; call begin_running() first")

        if self.conditional is Conditional.INPUT:
            main, other = self.input_tape, self.output_tape
        else:
            main, other = self.output_tape, self.input_tape

        instruction = self._seek()
        ctx = StepContext(self.conditional, main, other, self.program)
        instruction.execute(ctx)

        if ctx.flip:
            self.conditional = self.conditional.flipped()

        self.reference_tape.move_to(self.output_tape.position)
        self._steps += 1

        if ctx.halted:
            passed = self.reference_tape.equals(self.output_tape)
            result = StepResult.HALTED_PASS if passed else StepResult.HALTED_FAIL
            logger.info("Halted after %d steps: %s", self._steps, "passed" if passed else "failed")
        else:
            if ctx.advance:
                self.program.advance()
                # Nothing to rest on is not an error yet; the next step() reports it.
                index = self.program.find(self.conditional, self.program.position, self._seek_limit)
                if index is not None:
                    self.program.move_to(index)
            result = StepResult.CONTINUED

        self._last_result = result
        state = self._record(result)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s", self._formatter.format_state(state, self.program))
        return result

    def _seek(self) -> Instruction:
        """Move the program cursor to the next instruction for the active conditional."""
        index = self.program.find(self.conditional, self.program.position, self._seek_limit)
        if index is None:
            raise NoExecutableInstruction(self.conditional)
        self.program.move_to(index)
        # find() only matches programmed cells.
        return cast(Instruction, self.program.current())

    # =========================================================================
    # Snapshots
    # =========================================================================

    def _capture(self, result: StepResult | None = None) -> MachineState:
        return MachineState(
            snapshot_id=self._snapshot_id,
            steps=self._steps,
            mode=self.mode,
            conditional=self.conditional,
            puzzle_index=self._puzzle_index,
            program_position=self.program.position,
            input_position=self.input_tape.position,
            output_position=self.output_tape.position,
            reference_position=self.reference_tape.position,
            input=self.input_tape.snapshot(),
            output=self.output_tape.snapshot(),
            result=result,
        )

    def _next_state(self, result: StepResult | None = None) -> MachineState:
        self._snapshot_id += 1
        return self._capture(result)

    def _record(self, result: StepResult | None = None) -> MachineState:
        state = self._next_state(result)
        self._history.record(state)
        return state
