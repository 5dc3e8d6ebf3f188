"""Exceptions raised by the tape machine core."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from duotape.core.instruction import Conditional


class ParseError(ValueError):
    """Program text that does not parse as an instruction.

    Attributes:
        line: The raw offending text.
        index: Line index within the loaded program, if known.
        column: Grid column of the line, if known.
        row: Grid row of the line, if known.
    """

    def __init__(
        self,
        line: str,
        reason: str = "invalid instruction",
        *,
        index: int | None = None,
        column: int | None = None,
        row: int | None = None,
    ) -> None:
        self.line = line
        self.reason = reason
        self.index = index
        self.column = column
        self.row = row
        super().__init__(self._message())

    def at(self, index: int, column: int, row: int) -> ParseError:
        """Return a copy of this error located at a grid cell."""
        return ParseError(self.line, self.reason, index=index, column=column, row=row)

    def _message(self) -> str:
        if self.column is None or self.row is None:
            return f"{self.reason}: {self.line!r}"
        return f"Invalid code at column {self.column}, row {self.row} ({self.reason}): {self.line!r}"


class DecodeError(ValueError):
    """A stored byte that is not a valid instruction encoding."""

    def __init__(self, byte: object, reason: str = "not a valid instruction encoding") -> None:
        self.byte = byte
        super().__init__(f"{reason}: {byte!r}")


class NoExecutableInstruction(RuntimeError):
    """The program grid holds no instruction for the active conditional."""

    def __init__(self, conditional: Conditional | None = None) -> None:
        self.conditional = conditional
        if conditional is None:
            super().__init__("Program grid holds no instructions")
        else:
            super().__init__(f"No executable instruction for conditional {conditional.letter}")


class MachineModeError(RuntimeError):
    """An operation was called in a mode that does not allow it."""
