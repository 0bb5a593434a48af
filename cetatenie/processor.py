"""Looks up a decree number in the report for its year."""

from __future__ import annotations

import time
from typing import Callable, Protocol

from cetatenie.decree import FindState, get_year, read_pdf
from cetatenie.timer import TimeReport, Timer


class DecreeError(Exception):
    """A decree lookup failed."""


class _Fetcher(Protocol):
    def get_file(self, year: int) -> bytes: ...

    def clean_up_cache(self) -> None: ...


class DecreeProcessor:
    """Fetches the yearly report and searches it for a decree number."""

    def __init__(
        self,
        fetcher: _Fetcher | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if fetcher is None:
            from cetatenie.fetcher import FileFetcher

            fetcher = FileFetcher()
        self._fetcher = fetcher
        self._clock = clock

    def handle(self, search: str) -> tuple[FindState, TimeReport]:
        """Return the decree's state and how long fetching and parsing took."""
        try:
            year = get_year(search)
        except ValueError as exc:
            raise DecreeError(f"format dosar invalid: {exc}") from exc

        fetch_timer = Timer(self._clock)
        fetch_timer.start()
        try:
            data = self._fetcher.get_file(year)
        except Exception as exc:
            raise DecreeError(
                f"nu am putut obține fișierul pentru anul {year}: {exc}"
            ) from exc
        fetch_timer.stop()

        parse_timer = Timer(self._clock)
        parse_timer.start()
        try:
            state = read_pdf(data, search)
        except Exception as exc:
            raise DecreeError(f"eroare la analiza documentului: {exc}") from exc
        parse_timer.stop()

        return state, TimeReport(fetch_timer.duration(), parse_timer.duration())

    def clean_up_cache(self) -> None:
        self._fetcher.clean_up_cache()