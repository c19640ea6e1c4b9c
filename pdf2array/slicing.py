"""Realign each row's fragments to columns inferred from page occupancy.

The approach follows "Spatial Layout based Information and Content
Extraction" (SLICE): every fragment's horizontal extent is counted into a
quantised histogram of the page width, and the local minima of that
histogram become column boundaries.

::

     [...] [...] [...]
     [..]  [..]  [..]
     [.........] [...]
    =
    0333321333320333320
    |     |     |     |
"""

from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple

from .config import SliceOptions
from .geometry_utils import find_local_minima, occupancy_histogram
from .logging_config import get_logger
from .models import Fragment, Row
from .utils import iter_pages, renumber

logger = get_logger(__name__)

Column = Tuple[float, float]


def page_width(rows: Sequence[Row]) -> float:
    """Right-most fragment edge on the page."""
    return max((item.right for row in rows for item in row.items), default=0.0)


def column_intervals(minima: Sequence[int], width: float, slices: int) -> List[Column]:
    """Translate histogram minima into ``[start, end)`` page-space columns.

    The last column is open ended.
    """
    bounds = [index * width / slices for index in minima]
    columns: List[Column] = []
    start = 0.0
    for end in bounds:
        columns.append((start, end))
        start = end
    columns.append((start, math.inf))
    return columns


def page_columns(rows: Sequence[Row], slices: int) -> List[Column]:
    """Infer the column grid of one page."""
    width = page_width(rows)
    if width <= 0:
        return []
    extents = [(item.x, item.right) for row in rows for item in row.items]
    histogram = occupancy_histogram(extents, width, slices)
    return column_intervals(find_local_minima(histogram), width, slices)


def _join(left: str, right: str) -> str:
    return f"{left} {right}" if left and right else left + right


def _merge(items: Sequence[Fragment], start: float) -> Fragment:
    text = ""
    for item in items:
        text = _join(text, item.text)
    return items[0].replace(
        text=text,
        x=start,
        width=items[-1].right - start,
        height=max(item.height for item in items),
    )


def slice_row(row: Row, columns: Sequence[Column], keep_empty_columns: bool = False) -> Row:
    """Merge a row's fragments into one fragment per occupied column."""
    merged: List[Fragment] = []
    idx = 0
    count = len(row.items)
    for start, end in columns:
        if idx >= count and not keep_empty_columns:
            break

        consumed: List[Fragment] = []
        while idx < count and row.items[idx].x < end:
            consumed.append(row.items[idx])
            idx += 1

        if consumed:
            merged.append(_merge(consumed, start))
        elif keep_empty_columns:
            merged.append(Fragment(text="", x=start, y=row.y, width=0.0, height=0.0))

    return row.with_items(merged)


def apply_slice(rows: Sequence[Row], options: Optional[SliceOptions] = None) -> List[Row]:
    """Return ``rows`` with fragments merged into per-page inferred columns.

    Pages whose fragments span no positive width are passed through
    unchanged.
    """
    options = options or SliceOptions()
    result: List[Row] = []
    for page, page_rows in iter_pages(rows):
        columns = page_columns(page_rows, options.vertical_slices)
        if not columns:
            result.extend(page_rows)
            continue

        logger.debug(
            "page %d: %d columns starting at %s",
            page,
            len(columns),
            [round(start, 2) for start, _ in columns],
        )
        result.extend(
            slice_row(row, columns, options.keep_empty_columns) for row in page_rows
        )
    return renumber(result)


__all__ = ["apply_slice", "column_intervals", "page_columns", "slice_row"]
