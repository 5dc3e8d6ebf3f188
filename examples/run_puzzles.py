"""Solve the first two built-in puzzles and print the tapes.

Demonstrates:
  1. Loading program text into a Machine via MachineRunner
  2. Fast-mode play with a step listener
  3. Advancing to the next puzzle after a pass
"""

import logging

from duotape import DATA_HALFWIDTH, Machine, MachineRunner, RunMode, TraceFormatter

SOLUTIONS = [
    # Copy input to output then halt
    [
        "I SWP",
        "O ADD",
        "O MVR",
        "O SWP",
        "I MVR",
        "I SEQ 0",
        "O HLT",
        "I SWP",
        "O JMP 9",
    ],
    # Add each pair of inputs then halt
    [
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
    ],
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    machine = Machine()

    for program in SOLUTIONS:
        print(f"PUZZLE: {machine.current_puzzle.description.upper()}")
        runner = MachineRunner(machine, program)
        result = runner.play(RunMode.FAST, max_steps=10_000)

        print(TraceFormatter.format_program(machine.program))
        print("in ", TraceFormatter.format_tape(machine.input_tape, DATA_HALFWIDTH // 2))
        print("out", TraceFormatter.format_tape(machine.output_tape, DATA_HALFWIDTH // 2))
        print("ref", TraceFormatter.format_tape(machine.reference_tape, DATA_HALFWIDTH // 2))
        print(f"{result} after {machine.steps} steps\n")

        if result is None or not result.passed or not machine.advance_puzzle():
            break


if __name__ == "__main__":
    main()
