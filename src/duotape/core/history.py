"""Snapshots of the current run, newest last."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import Final

from duotape.core.state import MachineState

HISTORY_LIMIT: Final = 1000


class History:
    """Bounded record of the snapshots taken since the last run began.

    ``restart()`` drops everything and seeds the record with the first
    snapshot of a new run. Once ``limit`` snapshots are held, each new one
    pushes out the oldest.
    """

    def __init__(self, initial_state: MachineState, *, limit: int | None = HISTORY_LIMIT) -> None:
        if limit is not None and limit < 1:
            raise ValueError("history_limit must be >= 1 or None")
        self._snapshots: deque[MachineState] = deque([initial_state], maxlen=limit)

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[MachineState]:
        return iter(self._snapshots)

    @property
    def limit(self) -> int | None:
        return self._snapshots.maxlen

    @property
    def newest(self) -> MachineState:
        return self._snapshots[-1]

    @property
    def oldest(self) -> MachineState:
        return self._snapshots[0]

    def record(self, state: MachineState) -> None:
        self._snapshots.append(state)

    def restart(self, state: MachineState) -> None:
        """Forget the previous run and start a new record at ``state``."""
        self._snapshots.clear()
        self._snapshots.append(state)

    def at_step(self, steps: int) -> MachineState:
        """Return the snapshot taken right after step number ``steps``.

        Step 0 is the snapshot taken when the run began.

        Raises:
            KeyError: If that step was never taken or has been pushed out.
        """
        for state in self._snapshots:
            if state.steps == steps:
                return state
        raise KeyError(steps)

    def latest(self, n: int) -> list[MachineState]:
        """Up to ``n`` most recent snapshots, oldest first."""
        if n <= 0:
            return []
        return list(self._snapshots)[-n:]
