"""Instructions that move or write the main tape."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import Instruction, Opcode

if TYPE_CHECKING:
    from duotape.core.context import StepContext


@dataclass(frozen=True)
class MoveRight(Instruction):
    """Move the main tape head one cell right."""

    OPCODE = Opcode.MVR

    def execute(self, ctx: StepContext) -> None:
        ctx.main.move(1)


@dataclass(frozen=True)
class MoveLeft(Instruction):
    """Move the main tape head one cell left."""

    OPCODE = Opcode.MVL

    def execute(self, ctx: StepContext) -> None:
        ctx.main.move(-1)


@dataclass(frozen=True)
class Add(Instruction):
    """main[head] += other[head], wrapping to 4 bits."""

    OPCODE = Opcode.ADD

    def execute(self, ctx: StepContext) -> None:
        ctx.main.set_current(ctx.main.get_current() + ctx.other.get_current())


@dataclass(frozen=True)
class Subtract(Instruction):
    """main[head] -= other[head], borrowing modulo 16."""

    OPCODE = Opcode.SUB

    def execute(self, ctx: StepContext) -> None:
        ctx.main.set_current(ctx.main.get_current() - ctx.other.get_current())
