"""Group positioned fragments into rows, page by page."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Callable, Collection, Iterable, List, Optional, Sequence, Tuple

from .logging_config import get_logger
from .models import Fragment, Row

logger = get_logger(__name__)

# Floor for the smallest fragment height so the tolerance never collapses to 0.
EPSILON = 0.001


def y_tolerance_for(fragments: Sequence[Fragment]) -> float:
    """Half the smallest fragment height on the page."""
    min_height = max(min(item.height for item in fragments), EPSILON)
    return min_height / 2


def _reading_order(y_tolerance: float) -> Callable[[Fragment, Fragment], int]:
    """Comparator putting higher baselines first, then smaller x."""

    def compare(a: Fragment, b: Fragment) -> int:
        if a.y >= b.y + y_tolerance:
            return -1
        if a.y < b.y - y_tolerance:
            return 1
        if a.x < b.x:
            return -1
        if a.x > b.x:
            return 1
        return 0

    return compare


def sort_fragments(fragments: Iterable[Fragment], y_tolerance: float) -> List[Fragment]:
    """Sort fragments top to bottom, then left to right."""
    return sorted(fragments, key=cmp_to_key(_reading_order(y_tolerance)))


def build_page_rows(page: int, fragments: Iterable[Fragment], first_row_number: int = 0) -> List[Row]:
    """Build the rows of a single page.

    Fragments with a non-positive width or height are dropped. Returns an
    empty list when nothing is left.
    """
    fragments = list(fragments)
    items = [item for item in fragments if item.width > 0 and item.height > 0]
    if len(items) != len(fragments):
        logger.debug(
            "page %d: dropped %d zero-size fragments", page, len(fragments) - len(items)
        )
    if not items:
        return []

    y_tolerance = y_tolerance_for(items)
    rows: List[Row] = []
    current: Optional[Row] = None

    for item in sort_fragments(items, y_tolerance):
        if (
            current is None
            or item.y < current.y - y_tolerance
            or item.y >= current.y + y_tolerance
        ):
            current = Row(page=page, row_number=first_row_number + len(rows), y=item.y)
            rows.append(current)
        current.append(item)

    logger.debug(
        "page %d: %d fragments in %d rows (y tolerance %.4f)",
        page,
        len(items),
        len(rows),
        y_tolerance,
    )
    return rows


def build_rows(
    pages: Iterable[Tuple[int, Iterable[Fragment]]],
    page_numbers: Optional[Collection[int]] = None,
) -> List[Row]:
    """Build the document's rows from ``(page_index, fragments)`` pairs.

    Args:
        pages: 0-based page index and the raw fragments of that page, in
            page order.
        page_numbers: Optional 1-based page numbers to include; other pages
            are skipped.

    Returns:
        All rows in reading order, numbered by position. A row never spans
        two pages.
    """
    wanted = frozenset(page_numbers) if page_numbers is not None else None
    rows: List[Row] = []
    for page, fragments in pages:
        if wanted is not None and page + 1 not in wanted:
            continue
        rows.extend(build_page_rows(page, fragments, first_row_number=len(rows)))
    return rows


__all__ = ["EPSILON", "build_page_rows", "build_rows", "sort_fragments", "y_tolerance_for"]
