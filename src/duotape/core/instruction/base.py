"""Instruction base types: conditionals, opcodes and the abstract instruction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from duotape.core.context import StepContext


class Conditional(Enum):
    """Which tape an instruction belongs to (and which tape is main)."""

    INPUT = 0
    OUTPUT = 1

    @property
    def letter(self) -> str:
        return "I" if self is Conditional.INPUT else "O"

    @classmethod
    def from_letter(cls, letter: str) -> Conditional:
        """Look up a conditional by letter, case-insensitive.

        Raises:
            KeyError: If the letter is not ``I`` or ``O``.
        """
        return _CONDITIONAL_LETTERS[letter.upper()]

    def flipped(self) -> Conditional:
        return Conditional.OUTPUT if self is Conditional.INPUT else Conditional.INPUT


_CONDITIONAL_LETTERS = {"I": Conditional.INPUT, "O": Conditional.OUTPUT}


class Opcode(Enum):
    """3-bit operation codes."""

    HLT = 0
    MVR = 1
    MVL = 2
    SWP = 3
    SEQ = 4
    ADD = 5
    SUB = 6
    JMP = 7

    @property
    def mnemonic(self) -> str:
        return self.name

    @property
    def has_value(self) -> bool:
        """Whether instructions with this opcode carry a 4-bit operand."""
        return self in (Opcode.SEQ, Opcode.JMP)

    @classmethod
    def from_mnemonic(cls, mnemonic: str) -> Opcode:
        """Look up an opcode by mnemonic, case-insensitive.

        Raises:
            KeyError: If the mnemonic is unknown.
        """
        return cls[mnemonic.upper()]


@dataclass(frozen=True)
class Instruction(ABC):
    """One decoded program cell.

    Concrete subclasses are the variants of the instruction set. Only
    ``SetOnEqual`` and ``Jump`` carry a value; for every other variant the
    ``value`` property is ``None``.

    Attributes:
        conditional: The tape this instruction is visible to.
    """

    conditional: Conditional
    OPCODE: ClassVar[Opcode]

    @property
    def opcode(self) -> Opcode:
        return self.OPCODE

    @property
    def value(self) -> int | None:
        return None

    @abstractmethod
    def execute(self, ctx: StepContext) -> None:
        """Apply this instruction to the step context."""

    @staticmethod
    def create(conditional: Conditional, opcode: Opcode, value: int | None = None) -> Instruction:
        """Build the variant for ``opcode``.

        Raises:
            ValueError: If value presence does not match the opcode, or the
                value is outside 0..15.
        """
        from duotape.core.instruction import INSTRUCTION_TYPES

        cls = INSTRUCTION_TYPES[opcode]
        if opcode.has_value:
            if value is None:
                raise ValueError(f"{opcode.mnemonic} requires a value")
            return cls(conditional, value)  # type: ignore[call-arg]
        if value is not None:
            raise ValueError(f"{opcode.mnemonic} does not take a value")
        return cls(conditional)


@dataclass(frozen=True)
class ValueInstruction(Instruction):
    """Instruction variant carrying a 4-bit operand."""

    operand: int

    def __post_init__(self) -> None:
        if not isinstance(self.operand, int) or isinstance(self.operand, bool):
            raise TypeError(f"{self.OPCODE.mnemonic} value must be int")
        if not 0 <= self.operand <= 0xF:
            raise ValueError(f"{self.OPCODE.mnemonic} value must be in range 0..15")

    @property
    def value(self) -> int:
        return self.operand
