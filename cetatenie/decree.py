"""Decree number validation and lookup of a decree in a yearly PDF report."""

from __future__ import annotations

import enum
import re

from cetatenie.pdftext import extract_pages

OFFSET = 43
_RESOLVED_MARK = "/P/"
_INT_RE = re.compile(r"[+-]?[0-9]+")


class FindState(enum.Enum):
    NOT_FOUND = "Not Found"
    FOUND_BUT_NOT_RESOLVED = "Found but not resolved"
    FOUND_AND_RESOLVED = "Found and resolved"

    def __str__(self) -> str:
        return self.value


class DecreeFormatError(ValueError):
    """A decree number is not of the form <number>/RD/<year>."""


def get_year(search: str) -> int:
    """Return the year of a decree number such as ``123/RD/2023``."""
    parts = search.split("/")
    if len(parts) != 3 or parts[1] != "RD":
        raise DecreeFormatError("format invalid, folosește [număr]/RD/[an]")
    year_text = parts[2]
    if len(year_text.encode()) != 4:
        raise DecreeFormatError("anul trebuie să aibă 4 cifre")
    if not _INT_RE.fullmatch(year_text):
        raise DecreeFormatError(f"an invalid: {year_text}")
    year = int(year_text)
    if not 2000 <= year <= 2100:
        raise DecreeFormatError(f"anul {year} este în afara intervalului valid")
    return year


def search_text(text: str, search: str) -> FindState:
    """Classify one page's text by whether it mentions ``search`` and marks it resolved."""
    index = text.find(search)
    if index < 0:
        return FindState.NOT_FOUND
    if _RESOLVED_MARK in text[index:index + OFFSET]:
        return FindState.FOUND_AND_RESOLVED
    return FindState.FOUND_BUT_NOT_RESOLVED


def read_pdf(data: bytes, search: str) -> FindState:
    """Search every page of a PDF; the first page that mentions ``search`` decides."""
    for text in extract_pages(data):
        state = search_text(text, search)
        if state is not FindState.NOT_FOUND:
            return state
    return FindState.NOT_FOUND