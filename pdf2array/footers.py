"""Detect and remove a footer row repeated at the bottom of most pages."""

from __future__ import annotations

import re
from typing import List, Optional, Sequence

from .config import FooterOptions
from .logging_config import get_logger
from .models import Fragment, Row
from .utils import renumber

logger = get_logger(__name__)

_DIGITS_RE = re.compile(r"\d+")


def _normalize_text(text: str) -> str:
    """Footer text with page numbers removed, for comparison."""
    return _DIGITS_RE.sub("", text).strip().lower()


def _aligned(a: Fragment, b: Fragment, x_tolerance: float) -> bool:
    # footers may be left, right or centre justified
    return (
        abs(a.x - b.x) <= x_tolerance
        or abs(a.right - b.right) <= x_tolerance
        or abs(a.center - b.center) <= x_tolerance
    )


def rows_match(a: Row, b: Row, options: Optional[FooterOptions] = None) -> bool:
    """Return True when two bottom-of-page rows look like the same footer."""
    options = options or FooterOptions()
    if len(a.items) != len(b.items):
        return False
    if abs(a.y - b.y) > options.y_tolerance:
        return False
    for a_item, b_item in zip(a.items, b.items):
        if not _aligned(a_item, b_item, options.x_tolerance):
            return False
        if _normalize_text(a_item.text) != _normalize_text(b_item.text):
            return False
    return True


def footer_candidates(rows: Sequence[Row]) -> List[Row]:
    """The last row of every page, in page order."""
    candidates: List[Row] = []
    for row in rows:
        if candidates and candidates[-1].page == row.page:
            candidates[-1] = row
        else:
            candidates.append(row)
    return candidates


def largest_cluster(candidates: Sequence[Row], options: FooterOptions) -> List[int]:
    """Indices of the largest group of similar footer candidates.

    Each candidate ``i`` seeds a cluster holding ``i`` and every later
    candidate similar to it. Seeds without a match form no cluster. The
    first cluster of maximal size wins.
    """
    best: List[int] = []
    for i, seed in enumerate(candidates):
        cluster = [i]
        for j in range(i + 1, len(candidates)):
            if rows_match(candidates[j], seed, options):
                cluster.append(j)
        if len(cluster) > 1 and len(cluster) > len(best):
            best = cluster
    return best


def _strip_once(rows: List[Row], options: FooterOptions) -> Optional[List[Row]]:
    """Remove one layer of footer rows, or return None if there is none."""
    candidates = footer_candidates(rows)
    # one page cannot establish a pattern
    if len(candidates) <= 1:
        return None

    cluster = largest_cluster(candidates, options)
    if not cluster or len(cluster) / len(candidates) <= options.confidence:
        return None

    footers = {id(candidates[i]) for i in cluster}
    logger.debug(
        "removing footer %r from %d of %d pages",
        candidates[cluster[0]].texts(),
        len(cluster),
        len(candidates),
    )
    return renumber(row for row in rows if id(row) not in footers)


def strip_footers(rows: Sequence[Row], options: Optional[FooterOptions] = None) -> List[Row]:
    """Return ``rows`` without the footer rows repeated across pages.

    A footer may be several rows tall, so one layer is removed per pass and
    passes repeat until no cluster of bottom rows clears
    ``options.confidence``.
    """
    options = options or FooterOptions()
    current = list(rows)
    while True:
        stripped = _strip_once(current, options)
        if stripped is None:
            return current
        current = stripped


__all__ = ["footer_candidates", "largest_cluster", "rows_match", "strip_footers"]
