"""Control-flow instructions: halt, conditional swaps and relative jumps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import Instruction, Opcode, ValueInstruction

if TYPE_CHECKING:
    from duotape.core.context import StepContext


def sign_extend_4bit(value: int) -> int:
    """Interpret a 4-bit value as two's complement (-8..7)."""
    value &= 0xF
    return value - 16 if value & 0x8 else value


@dataclass(frozen=True)
class Halt(Instruction):
    """Stop execution; the machine compares output against reference."""

    OPCODE = Opcode.HLT

    def execute(self, ctx: StepContext) -> None:
        ctx.request_halt()


@dataclass(frozen=True)
class Swap(Instruction):
    """Flip the active conditional."""

    OPCODE = Opcode.SWP

    def execute(self, ctx: StepContext) -> None:
        ctx.request_flip()


@dataclass(frozen=True)
class SetOnEqual(ValueInstruction):
    """Flip the active conditional when the main head reads ``value``."""

    OPCODE = Opcode.SEQ

    def execute(self, ctx: StepContext) -> None:
        if ctx.main.get_current() == self.operand:
            ctx.request_flip()


@dataclass(frozen=True)
class Jump(ValueInstruction):
    """Relative jump by a signed 4-bit offset.

    The grid skips forward over empty cells after landing, and the program
    cursor is not advanced afterwards.
    """

    OPCODE = Opcode.JMP

    @property
    def offset(self) -> int:
        return sign_extend_4bit(self.operand)

    def execute(self, ctx: StepContext) -> None:
        ctx.jump(self.offset)
