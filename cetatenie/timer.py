"""Timing helpers and duration formatting for user-facing reports."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

_ESCAPES = str.maketrans({".": "\\.", "-": "\\-", "(": "\\(", ")": "\\)", "!": "\\!"})


@dataclass(frozen=True)
class TimeReport:
    """Durations, in seconds, spent fetching and parsing a document."""

    fetch_time: float = 0.0
    parse_time: float = 0.0


def format_duration(seconds: float) -> str:
    """Format a duration in seconds as Romanian text with markup characters escaped."""
    if seconds == 0:
        return "0 secunde"
    return f"{seconds:.2f} secunde".translate(_ESCAPES)


class Timer:
    """Measures the time between start() and stop()."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._start = 0.0
        self._end = 0.0

    def start(self) -> None:
        self._start = self._clock()

    def stop(self) -> None:
        self._end = self._clock()

    def duration(self) -> float:
        """Seconds elapsed between the last start() and stop()."""
        return self._end - self._start