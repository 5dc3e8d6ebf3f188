"""Puzzle descriptors: an input tape, the expected output, and a goal."""

from __future__ import annotations

from dataclasses import dataclass

_HEX_DIGITS = frozenset("0123456789ABCDEFabcdef")


@dataclass(frozen=True)
class Puzzle:
    """One puzzle.

    Attributes:
        description: Human-readable goal.
        input: Hex digits loaded onto the input tape from index 0.
        output: Hex digits expected on the output tape from index 0.
    """

    description: str
    input: str
    output: str

    def __post_init__(self) -> None:
        for name in ("input", "output"):
            data = getattr(self, name)
            bad = [char for char in data if char not in _HEX_DIGITS]
            if bad:
                raise ValueError(f"Puzzle {name} must be hex digits, got {bad[0]!r}")


PUZZLES: tuple[Puzzle, ...] = (
    Puzzle(
        "Copy input to output then halt",
        "123456789ABCDEF",
        "123456789ABCDEF",
    ),
    Puzzle(
        "Add each pair of inputs then halt",
        "12345678765432",
        "37BFD95",
    ),
    Puzzle(
        "Copy the input to the output reversed",
        "123456789ABCDEF",
        "FEDCBA987654321",
    ),
    Puzzle(
        "Add each F-delimited subsequence from input into output",
        "12F1F12345F722F",
        "31FB",
    ),
    Puzzle(
        "Read a number and output the next one that number of times",
        "1F23F7663B",
        "F33777777777777777666666BBB",
    ),
)
