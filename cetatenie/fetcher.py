"""Download of the yearly decree reports, with retries and a time-limited cache."""

from __future__ import annotations

import time
from typing import Callable

import httpx

from cetatenie.cache import TtlCache

DEFAULT_BASE_URL = "https://cetatenie.just.ro/storage/2023/11/"
CACHE_TTL = 24 * 60 * 60
MAX_RETRIES = 3

SUPPORTED_YEARS: dict[int, str] = {
    2020: "art_11_anul_2020.pdf",
    2021: "art_11_anul_2021.pdf",
    2022: "art_11_anul_2022.pdf",
    2023: "art_11_anul_2023.pdf",
    2024: "art_11_anul_2024.pdf",
    2025: "art_11_anul_2025.pdf",
}

_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "ro-RO,ro;q=0.9,en-US;q=0.8,en;q=0.7",
    "Accept-Encoding": "gzip",
}


class FetchError(Exception):
    """A report could not be obtained."""


def _default_client() -> httpx.Client:
    return httpx.Client(
        verify=False,
        timeout=60.0,
        limits=httpx.Limits(max_keepalive_connections=10, keepalive_expiry=30.0),
    )


class FileFetcher:
    """Fetches the annual report PDF for a year, caching each download."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        base_url: str = DEFAULT_BASE_URL,
        cache: TtlCache | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._client = client if client is not None else _default_client()
        self.base_url = base_url
        self._cache = cache if cache is not None else TtlCache(CACHE_TTL)
        self._sleep = sleep

    def get_file(self, year: int) -> bytes:
        """Return the report for ``year``, from the cache when it is still fresh."""
        filename = SUPPORTED_YEARS.get(year)
        if filename is None:
            raise FetchError(f"year {year} is not supported")
        url = self.base_url + filename

        cached = self._cache.get(url)
        if cached is not None:
            return cached

        try:
            data = self._download_with_retry(url, MAX_RETRIES)
        except FetchError as exc:
            raise FetchError(f"failed to download file: {exc}") from exc

        self._cache.set(url, data)
        self._cache.cleanup()
        return data

    def clean_up_cache(self) -> None:
        self._cache.cleanup()

    def _download_with_retry(self, url: str, max_retries: int) -> bytes:
        last_error: FetchError | None = None
        for attempt in range(max_retries):
            if attempt > 0:
                self._sleep(float(attempt * attempt))
            try:
                return self._download(url)
            except FetchError as exc:
                last_error = exc
        raise FetchError(f"after {max_retries} attempts: {last_error}") from last_error

    def _download(self, url: str) -> bytes:
        try:
            response = self._client.get(url, headers=_HEADERS)
        except httpx.HTTPError as exc:
            raise FetchError(f"request failed: {exc}") from exc

        if response.status_code != 200:
            body = response.content[:1024].decode("utf-8", errors="replace")
            raise FetchError(f"unexpected status code {response.status_code}: {body}")

        content_type = response.headers.get("Content-Type", "")
        if "application/pdf" not in content_type:
            raise FetchError(f"unexpected content type: {content_type}")

        return response.content