"""ProgramGrid - fixed-size grid of encoded instruction cells.

Cells are stored as bytes in a flat buffer. Program text fills the grid
column by column, ``height`` lines per column, so line ``i`` lands in
column ``i // height``, row ``i % height`` and at flat index ``i``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import Final

from duotape.core.codec import EMPTY_CELL, Cell, decode, encode, format_text, parse_text
from duotape.core.errors import NoExecutableInstruction, ParseError
from duotape.core.instruction import Conditional, Instruction, Opcode

logger = logging.getLogger(__name__)

PROGRAM_WIDTH: Final = 8
PROGRAM_HEIGHT: Final = 8


class ProgramGrid:
    """Fixed-capacity program storage with a wrapping cursor.

    ``advance()`` always moves exactly one cell. ``jump()`` additionally
    skips forward over empty cells, so a relative jump lands on the next
    programmed cell.

    Attributes:
        width: Number of columns.
        height: Number of rows per column.
        position: Flat index of the current cell.
    """

    def __init__(self, width: int = PROGRAM_WIDTH, height: int = PROGRAM_HEIGHT) -> None:
        if width < 1 or height < 1:
            raise ValueError("grid width and height must be >= 1")
        self.width = width
        self.height = height
        self._data = bytearray([EMPTY_CELL]) * (width * height)
        self._position = 0

    @property
    def size(self) -> int:
        return self.width * self.height

    @property
    def position(self) -> int:
        return self._position

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        programmed = sum(1 for byte in self._data if byte != EMPTY_CELL)
        return (
            f"ProgramGrid({self.width}x{self.height}, position={self._position}, "
            f"programmed={programmed})"
        )

    # =========================================================================
    # Loading
    # =========================================================================

    def clear(self) -> None:
        """Set every cell to empty."""
        self._data[:] = bytes([EMPTY_CELL]) * self.size

    def load_from_text(self, lines: str | Sequence[str]) -> None:
        """Re-initialize the grid from program text, one line per cell.

        Args:
            lines: Sequence of lines, or a single newline-joined string.

        Raises:
            ParseError: On the first line that fails to parse, located by
                column and row. The grid is left partially loaded.
        """
        if isinstance(lines, str):
            lines = lines.split("\n")

        self.clear()
        for index, line in enumerate(lines):
            column, row = divmod(index, self.height)
            if index >= self.size:
                if line.strip():
                    raise ParseError(line, "program exceeds grid capacity").at(index, column, row)
                continue
            try:
                cell = parse_text(line)
            except ParseError as exc:
                raise exc.at(index, column, row) from exc
            self._data[index] = encode(cell)

        logger.debug("Loaded program: %r", self)

    def load_columns(self, columns: Sequence[str]) -> None:
        """Load one text block per column, padding short columns with empty lines.

        Raises:
            ParseError: On more columns than the grid has, on a column with
                more than ``height`` lines, or on an invalid line.
        """
        if len(columns) > self.width:
            raise ParseError(columns[self.width], "program exceeds grid width").at(
                self.width * self.height, self.width, 0
            )

        all_lines: list[str] = []
        for column, text in enumerate(columns):
            lines = text.split("\n")
            if len(lines) > self.height:
                extra = [line for line in lines[self.height :] if line.strip()]
                if extra:
                    raise ParseError(extra[0], "column exceeds grid height").at(
                        column * self.height + self.height, column, self.height
                    )
                lines = lines[: self.height]
            all_lines.extend(lines)
            all_lines.extend([""] * (self.height - len(lines)))

        self.load_from_text(all_lines)

    def set(self, index: int, cell: Cell) -> None:
        """Write one cell through the codec."""
        self._data[self._check_index(index)] = encode(cell)

    # =========================================================================
    # Cursor movement
    # =========================================================================

    def advance(self) -> None:
        """Move the cursor one cell forward, wrapping at the end."""
        self._position = (self._position + 1) % self.size

    def jump(self, offset: int) -> None:
        """Move the cursor by ``offset`` (wrapping), then skip empty cells.

        Raises:
            NoExecutableInstruction: If every cell is empty.
        """
        self._position = (self._position + offset) % self.size
        for _ in range(self.size):
            if self._data[self._position] != EMPTY_CELL:
                return
            self.advance()
        raise NoExecutableInstruction()

    def move_to(self, position: int) -> None:
        """Set the cursor directly; no empty-cell skipping."""
        self._position = self._check_index(position)

    def reset(self) -> None:
        self._position = 0

    # =========================================================================
    # Cell access
    # =========================================================================

    def cell(self, index: int) -> int:
        """Raw encoded byte at ``index``."""
        return self._data[self._check_index(index)]

    def decoded(self, index: int) -> Cell:
        return decode(self.cell(index))

    def is_empty(self, index: int) -> bool:
        return self.cell(index) == EMPTY_CELL

    def cells(self) -> Iterator[tuple[int, Cell]]:
        """Yield ``(index, decoded cell)`` for the whole grid in flat order."""
        for index in range(self.size):
            yield index, self.decoded(index)

    def current(self) -> Cell:
        return self.decoded(self._position)

    def current_is_empty(self) -> bool:
        return self.is_empty(self._position)

    def current_conditional(self) -> Conditional | None:
        cell = self.current()
        return cell.conditional if isinstance(cell, Instruction) else None

    def current_opcode(self) -> Opcode | None:
        cell = self.current()
        return cell.opcode if isinstance(cell, Instruction) else None

    def current_value(self) -> int | None:
        cell = self.current()
        return cell.value if isinstance(cell, Instruction) else None

    def find(self, conditional: Conditional, start: int, limit: int | None = None) -> int | None:
        """Index of the first non-empty cell for ``conditional`` at or after ``start``.

        Scans at most ``limit`` cells (default: one full lap), wrapping.
        """
        limit = self.size if limit is None else min(limit, self.size)
        for step in range(limit):
            index = (start + step) % self.size
            cell = self.decoded(index)
            if isinstance(cell, Instruction) and cell.conditional is conditional:
                return index
        return None

    # =========================================================================
    # Rendering
    # =========================================================================

    def to_lines(self) -> list[str]:
        """Program text, one line per cell in flat order."""
        return [format_text(cell) for _, cell in self.cells()]

    def to_columns(self) -> list[str]:
        """Program text as one newline-joined block per column."""
        lines = self.to_lines()
        return [
            "\n".join(lines[column * self.height : (column + 1) * self.height])
            for column in range(self.width)
        ]

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self.size:
            raise IndexError(f"cell index {index} out of range 0..{self.size - 1}")
        return index
