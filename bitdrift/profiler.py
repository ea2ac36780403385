from __future__ import annotations

import time
from typing import Callable


class MissingStart(RuntimeError):
    def __init__(self, name: str) -> None:
        super().__init__(f"No matching start() call for '{name}'")
        self.name = name


class Stopwatch:
    """Named elapsed-time measurements owned by the caller.

    start() on a running name restarts it. stop() consumes the pending start;
    only the most recent measurement per name is kept.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._started: dict[str, float] = {}
        self._elapsed: dict[str, float] = {}

    def start(self, name: str) -> None:
        self._started[name] = self._clock()

    def stop(self, name: str) -> float:
        started = self._started.pop(name, None)
        if started is None:
            raise MissingStart(name)
        elapsed = self._clock() - started
        self._elapsed[name] = elapsed
        return elapsed

    def all_elapsed(self) -> dict[str, float]:
        return dict(self._elapsed)
