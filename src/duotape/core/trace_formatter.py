"""Text formatting for machine snapshots and tape windows."""

from __future__ import annotations

from collections.abc import Iterable

from duotape.core.codec import format_text
from duotape.core.grid import ProgramGrid
from duotape.core.state import MachineState
from duotape.core.tape import DataTape, TapeCell


class TraceFormatter:
    """Build stable, human-readable trace strings."""

    @staticmethod
    def format_state(state: MachineState, program: ProgramGrid | None = None) -> str:
        """One line describing a snapshot, e.g. for debug logging."""
        parts = [
            f"#{state.snapshot_id}",
            f"step={state.steps}",
            f"mode={state.mode.value}",
            f"cond={state.conditional.letter}",
            f"pc={state.program_position}",
        ]
        if program is not None:
            text = format_text(program.decoded(state.program_position)) or "--"
            parts.append(f"[{text}]")
        parts.append(f"in@{state.input_position}")
        parts.append(f"out@{state.output_position}")
        if state.result is not None:
            parts.append(state.result.value)
        return " ".join(parts)

    @staticmethod
    def format_window(cells: Iterable[TapeCell]) -> str:
        """Hex digits of a tape window; the current cell is bracketed, unset cells are '.'."""
        pieces = []
        for cell in cells:
            digit = f"{cell.value:X}" if cell.is_set else "."
            pieces.append(f"[{digit}]" if cell.is_current else digit)
        return "".join(pieces)

    @classmethod
    def format_tape(cls, tape: DataTape, half_width: int) -> str:
        return cls.format_window(tape.window(half_width))

    @staticmethod
    def format_program(program: ProgramGrid, *, cell_width: int = 8) -> str:
        """Grid text laid out in columns; the current cell is marked with '>'."""
        lines = program.to_lines()
        rows = []
        for row in range(program.height):
            cells = []
            for column in range(program.width):
                index = column * program.height + row
                marker = ">" if index == program.position else " "
                cells.append(f"{marker}{lines[index]:<{cell_width}}")
            rows.append("|".join(cells).rstrip())
        return "\n".join(rows)
