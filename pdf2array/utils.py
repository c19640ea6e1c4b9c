"""Helpers shared by the filters for walking and normalising row sequences."""

from __future__ import annotations

from itertools import groupby
from typing import Iterable, Iterator, List, Sequence, Tuple

from .models import Row


def iter_pages(rows: Sequence[Row]) -> Iterator[Tuple[int, List[Row]]]:
    """Yield ``(page, rows)`` for each run of consecutive rows on one page."""
    for page, page_rows in groupby(rows, key=lambda row: row.page):
        yield page, list(page_rows)


def renumber(rows: Iterable[Row]) -> List[Row]:
    """Return ``rows`` with ``row_number`` reset to each row's position.

    Every filter that drops or reorders rows must pass its output through
    here before handing it on.
    """
    return [row.renumbered(idx) for idx, row in enumerate(rows)]


def rows_to_array(rows: Iterable[Row]) -> List[List[str]]:
    """Flatten rows into their fragment texts."""
    return [row.texts() for row in rows]


__all__ = ["iter_pages", "renumber", "rows_to_array"]
