"""Sparse, unbounded 4-bit data tape with a single head.

Cells are addressed by any signed integer. Cells never written read as 0.
Every stored value is reduced modulo 16, so arithmetic on the tape wraps
like a hex digit.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Final

from pyrsistent import PMap, pmap

DATA_HALFWIDTH: Final = 28
CELL_MASK: Final = 0xF


@dataclass(frozen=True)
class TapeCell:
    """One cell of a tape window, as shown to renderers."""

    index: int
    value: int
    is_set: bool
    is_current: bool


class DataTape:
    """A mapping from signed index to 4-bit value, plus a head position."""

    __slots__ = ("_cells", "position")

    def __init__(self, data: str | None = None) -> None:
        self._cells: dict[int, int] = {}
        self.position = 0
        if data is not None:
            self.load_from_hex_string(data)

    def __repr__(self) -> str:
        return f"DataTape({self.to_hex_string()!r}, position={self.position})"

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, index: object) -> bool:
        return index in self._cells

    # =========================================================================
    # Cell access
    # =========================================================================

    def get(self, index: int) -> int:
        """Value at ``index``; 0 when never written."""
        return self._cells.get(index, 0)

    def set(self, index: int, value: int) -> None:
        """Store ``value`` at ``index``, wrapped to 0..15."""
        self._cells[index] = value & CELL_MASK

    def get_current(self) -> int:
        return self.get(self.position)

    def set_current(self, value: int) -> None:
        self.set(self.position, value)

    # =========================================================================
    # Head movement
    # =========================================================================

    def move(self, delta: int) -> None:
        self.position += delta

    def move_to(self, position: int) -> None:
        self.position = position

    def reset(self) -> None:
        """Return the head to 0; stored values are kept."""
        self.position = 0

    def clear(self) -> None:
        """Drop every stored value; the head is kept."""
        self._cells.clear()

    def clear_and_reset(self) -> None:
        self.clear()
        self.reset()

    # =========================================================================
    # Comparison and loading
    # =========================================================================

    def equals(self, other: DataTape) -> bool:
        """Cell-wise equality over every index either tape has stored.

        Unset cells read as 0 on both sides, so an explicit 0 on one tape
        matches a cell the other tape never touched. Head positions are
        not compared.
        """
        for index in self._cells.keys() | other._cells.keys():
            if self.get(index) != other.get(index):
                return False
        return True

    def load_from_hex_string(self, data: str) -> None:
        """Write one hex digit per cell starting at index 0.

        Existing cells are overwritten, not cleared.

        Raises:
            ValueError: If ``data`` contains a non-hex character.
        """
        for index, char in enumerate(data):
            try:
                value = int(char, 16)
            except ValueError as exc:
                raise ValueError(f"Invalid hex digit {char!r} at index {index}") from exc
            self.set(index, value)

    # =========================================================================
    # Introspection
    # =========================================================================

    def items(self) -> Iterator[tuple[int, int]]:
        """Stored ``(index, value)`` pairs in index order."""
        for index in sorted(self._cells):
            yield index, self._cells[index]

    def window(self, half_width: int = DATA_HALFWIDTH) -> list[TapeCell]:
        """Cells from ``position - half_width`` to ``position + half_width``."""
        if half_width < 0:
            raise ValueError("half_width must be >= 0")
        return [
            TapeCell(
                index=index,
                value=self.get(index),
                is_set=index in self._cells,
                is_current=index == self.position,
            )
            for index in range(self.position - half_width, self.position + half_width + 1)
        ]

    def to_hex_string(self) -> str:
        """Uppercase hex dump of cells 0 through the highest stored index."""
        stored = [index for index in self._cells if index >= 0]
        if not stored:
            return ""
        return "".join(f"{self.get(index):X}" for index in range(max(stored) + 1))

    def snapshot(self) -> PMap:
        """Immutable copy of the stored cells."""
        return pmap(self._cells)
