"""Two-tape machine core.

A fixed grid of byte-encoded instructions runs against an input tape and an
output tape; a reference tape holds the expected output. Each instruction is
tagged with a conditional and is only visible while that tape is active.
"""

from duotape.core.codec import EMPTY, EMPTY_CELL, decode, encode, format_text, parse_text
from duotape.core.context import StepContext
from duotape.core.errors import DecodeError, MachineModeError, NoExecutableInstruction, ParseError
from duotape.core.grid import PROGRAM_HEIGHT, PROGRAM_WIDTH, ProgramGrid
from duotape.core.history import HISTORY_LIMIT, History
from duotape.core.instruction import (
    Add,
    Conditional,
    Halt,
    Instruction,
    Jump,
    MoveLeft,
    MoveRight,
    Opcode,
    SetOnEqual,
    Subtract,
    Swap,
)
from duotape.core.machine import Machine
from duotape.core.puzzle import PUZZLES, Puzzle
from duotape.core.runner import FAST_INTERVAL, RUN_INTERVAL, MachineRunner, RunMode
from duotape.core.state import MachineState, Mode, StepResult
from duotape.core.tape import DATA_HALFWIDTH, DataTape, TapeCell
from duotape.core.trace_formatter import TraceFormatter

__all__ = [
    # Codec
    "EMPTY",
    "EMPTY_CELL",
    "decode",
    "encode",
    "format_text",
    "parse_text",
    # Errors
    "DecodeError",
    "MachineModeError",
    "NoExecutableInstruction",
    "ParseError",
    # Instructions
    "Add",
    "Conditional",
    "Halt",
    "Instruction",
    "Jump",
    "MoveLeft",
    "MoveRight",
    "Opcode",
    "SetOnEqual",
    "Subtract",
    "Swap",
    # Storage
    "DATA_HALFWIDTH",
    "DataTape",
    "PROGRAM_HEIGHT",
    "PROGRAM_WIDTH",
    "ProgramGrid",
    "TapeCell",
    # Machine
    "HISTORY_LIMIT",
    "History",
    "Machine",
    "MachineState",
    "Mode",
    "PUZZLES",
    "Puzzle",
    "StepContext",
    "StepResult",
    "TraceFormatter",
    # Runner
    "FAST_INTERVAL",
    "MachineRunner",
    "RUN_INTERVAL",
    "RunMode",
]
