"""Instruction set for the two-tape machine.

Each opcode is its own frozen dataclass; instructions execute themselves
against a StepContext.
"""

from .base import Conditional, Instruction, Opcode, ValueInstruction
from .control import Halt, Jump, SetOnEqual, Swap, sign_extend_4bit
from .tape_ops import Add, MoveLeft, MoveRight, Subtract

INSTRUCTION_TYPES: dict[Opcode, type[Instruction]] = {
    Opcode.HLT: Halt,
    Opcode.MVR: MoveRight,
    Opcode.MVL: MoveLeft,
    Opcode.SWP: Swap,
    Opcode.SEQ: SetOnEqual,
    Opcode.ADD: Add,
    Opcode.SUB: Subtract,
    Opcode.JMP: Jump,
}

__all__ = [
    # Base
    "Conditional",
    "Instruction",
    "INSTRUCTION_TYPES",
    "Opcode",
    "ValueInstruction",
    "sign_extend_4bit",
    # Instructions
    "Add",
    "Halt",
    "Jump",
    "MoveLeft",
    "MoveRight",
    "SetOnEqual",
    "Subtract",
    "Swap",
]
