"""Instruction codec: one byte per cell, one line of text per cell.

Byte layout is ``C OOO VVVV``: bit 7 selects the conditional, bits 6-4 hold
the opcode, bits 3-0 hold the operand or a filler for opcodes without one.
The byte ``EMPTY_CELL`` marks an unprogrammed cell.

Text form is ``<I|O> <MNEMONIC> [<hex digit>]``, case-insensitive, with runs
of whitespace collapsed. A blank line is an empty cell.
"""

from __future__ import annotations

import re
from typing import Final

from duotape.core.errors import DecodeError, ParseError
from duotape.core.instruction import Conditional, Instruction, Opcode

EMPTY_CELL: Final = 0x0F
FILLER: Final = 0xF

# Input-Halt with the usual filler would encode to EMPTY_CELL.
_INPUT_HALT_FILLER: Final = 0x0

_WHITESPACE = re.compile(r"\s+")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class _EmptyMarker:
    """Singleton marker for an unprogrammed cell."""

    _instance: _EmptyMarker | None = None

    def __new__(cls) -> _EmptyMarker:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY: Final = _EmptyMarker()

Cell = Instruction | _EmptyMarker


def _filler_for(conditional: Conditional, opcode: Opcode) -> int:
    if conditional is Conditional.INPUT and opcode is Opcode.HLT:
        return _INPUT_HALT_FILLER
    return FILLER


def encode(cell: Cell) -> int:
    """Encode an instruction (or ``EMPTY``) to its byte."""
    if cell is EMPTY:
        return EMPTY_CELL
    if not isinstance(cell, Instruction):
        raise TypeError(f"Expected Instruction or EMPTY, got {type(cell).__name__}")
    value = cell.value
    if value is None:
        value = _filler_for(cell.conditional, cell.opcode)
    return (cell.conditional.value << 7) | (cell.opcode.value << 4) | (value & 0xF)


def decode(byte: int) -> Cell:
    """Decode one cell byte.

    Returns:
        The decoded instruction, or ``EMPTY`` for the empty-cell sentinel.

    Raises:
        DecodeError: If ``byte`` is not an int in 0..255, or a value-less
            opcode carries something other than its filler.
    """
    if not isinstance(byte, int) or isinstance(byte, bool) or not 0 <= byte <= 0xFF:
        raise DecodeError(byte, "cell byte must be an int in range 0..255")
    if byte == EMPTY_CELL:
        return EMPTY

    conditional = Conditional((byte & 0x80) >> 7)
    opcode = Opcode((byte & 0x70) >> 4)
    value = byte & 0x0F

    if opcode.has_value:
        return Instruction.create(conditional, opcode, value)
    if value != _filler_for(conditional, opcode):
        raise DecodeError(byte, f"{opcode.mnemonic} carries an operand")
    return Instruction.create(conditional, opcode)


def parse_text(line: str) -> Cell:
    """Parse one line of program text.

    Raises:
        ParseError: On a malformed line; the error carries the raw text.
    """
    text = _WHITESPACE.sub(" ", line).strip()
    if not text:
        return EMPTY

    pieces = text.split(" ")
    if len(pieces) > 3:
        raise ParseError(line, "too many tokens")
    if len(pieces) < 2:
        raise ParseError(line, "missing opcode")

    try:
        conditional = Conditional.from_letter(pieces[0])
    except KeyError as exc:
        raise ParseError(line, f"unknown conditional {pieces[0]!r}") from exc
    try:
        opcode = Opcode.from_mnemonic(pieces[1])
    except KeyError as exc:
        raise ParseError(line, f"unknown opcode {pieces[1]!r}") from exc

    value: int | None = None
    if len(pieces) == 3:
        token = pieces[2]
        if len(token) != 1 or token not in _HEX_DIGITS:
            raise ParseError(line, f"value must be one hex digit, got {token!r}")
        value = int(token, 16)

    if (value is not None) != opcode.has_value:
        reason = "missing value" if opcode.has_value else "unexpected value"
        raise ParseError(line, f"{reason} for {opcode.mnemonic}")

    return Instruction.create(conditional, opcode, value)


def format_text(cell: Cell) -> str:
    """Render an instruction as program text; ``EMPTY`` renders as ``""``."""
    if cell is EMPTY:
        return ""
    if not isinstance(cell, Instruction):
        raise TypeError(f"Expected Instruction or EMPTY, got {type(cell).__name__}")
    text = f"{cell.conditional.letter} {cell.opcode.mnemonic}"
    if cell.value is not None:
        text += f" {cell.value:X}"
    return text
