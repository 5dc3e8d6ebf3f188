"""Pytest configuration and shared programs."""

import pytest

from duotape.core import Machine, MachineRunner, Puzzle

# Copies each input cell to the output until the input reads 0.
COPY_PROGRAM = [
    "I SWP",
    "O ADD",
    "O MVR",
    "O SWP",
    "I MVR",
    "I SEQ 0",
    "O HLT",
    "I SWP",
    "O JMP 9",
]

# Adds each pair of input cells into one output cell until the input reads 0.
# The Input-tagged jump at cell 6 is invisible to the Output flow and serves
# as a hop back to the top of the loop.
ADD_PAIRS_PROGRAM = [
    "I SWP",
    "O ADD",
    "O SWP",
    "I MVR",
    "I SWP",
    "O ADD",
    "I JMP A",
    "O MVR",
    "O SWP",
    "I MVR",
    "I SEQ 0",
    "O HLT",
    "I JMP A",
]


def make_machine(*puzzles: Puzzle, **kwargs) -> Machine:
    """Machine over the given puzzles, or a single blank puzzle."""
    if not puzzles:
        puzzles = (Puzzle("scratch", "", ""),)
    return Machine(puzzles, **kwargs)


def run_program(machine: Machine, program: list[str] | str, max_steps: int = 10000):
    """Begin running ``program`` and step until halt."""
    runner = MachineRunner(machine, program)
    return runner.run_until_halt(max_steps=max_steps)


@pytest.fixture
def machine() -> Machine:
    return make_machine()
