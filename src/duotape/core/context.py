"""StepContext - the per-step view an instruction executes against.

The machine builds one context per step, with the main and other tapes
already selected from the active conditional. Instructions write tape
cells directly and raise control signals (flip, halt, jump) on the
context; the machine applies the signals once the instruction returns.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from duotape.core.grid import ProgramGrid
    from duotape.core.instruction import Conditional
    from duotape.core.tape import DataTape


class StepContext:
    """Execution context for a single machine step.

    Attributes:
        conditional: The conditional active when the step began.
        main: The tape that is moved and written.
        other: The counterpart tape, read by Add/Subtract.
        program: The program grid, repositioned by Jump.
        flip: Set when the instruction swaps the active conditional.
        halted: Set by Halt.
        advance: Cleared by instructions that reposition the program cursor.
    """

    __slots__ = ("conditional", "main", "other", "program", "flip", "halted", "advance")

    def __init__(
        self,
        conditional: Conditional,
        main: DataTape,
        other: DataTape,
        program: ProgramGrid,
    ) -> None:
        self.conditional = conditional
        self.main = main
        self.other = other
        self.program = program
        self.flip = False
        self.halted = False
        self.advance = True

    def request_flip(self) -> None:
        self.flip = True

    def request_halt(self) -> None:
        self.halted = True
        self.advance = False

    def jump(self, offset: int) -> None:
        """Move the program cursor relative to its position; skip advancing."""
        self.program.jump(offset)
        self.advance = False
