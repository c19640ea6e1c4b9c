"""Remove superscript and subscript fragments hugging larger text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set

from .config import SuperscriptOptions
from .geometry_utils import KDTreeIndex, Point, SpatialIndex
from .logging_config import get_logger
from .models import Fragment, Row
from .utils import iter_pages, renumber

logger = get_logger(__name__)

IndexFactory = Callable[[Sequence[Point]], SpatialIndex]


@dataclass(frozen=True, slots=True)
class _Located:
    """A fragment together with where it lives in the row sequence."""

    row_index: int
    item_index: int
    item: Fragment


def _count_matches(
    index: Optional[SpatialIndex],
    located: Sequence[_Located],
    i: int,
    point: Point,
    radius: float,
    height_scale: float,
    on_right: bool,
) -> int:
    if index is None:
        return 0
    item = located[i].item
    count = 0
    for idx in index.radius_search(point, radius):
        if idx == i:
            continue
        other = located[idx].item
        beside = other.x > item.x if on_right else other.x < item.x
        if beside and other.height * height_scale > item.height:
            count += 1
    return count


def find_superscripts(
    rows: Sequence[Row],
    options: Optional[SuperscriptOptions] = None,
    index_factory: IndexFactory = KDTreeIndex,
) -> Dict[int, Set[int]]:
    """Map row position to the item indices classified as superscript.

    A fragment is a superscript when exactly one taller fragment has its top
    corner near the fragment's mid-height edge, on either side. Two or more
    such neighbours on one side are ambiguous and do not count.
    """
    options = options or SuperscriptOptions()
    found: Dict[int, Set[int]] = {}
    if not options.strip_left and not options.strip_right:
        return found

    positions = {id(row): pos for pos, row in enumerate(rows)}
    for page, page_rows in iter_pages(rows):
        located = [
            _Located(positions[id(row)], item_index, item)
            for row in page_rows
            for item_index, item in enumerate(row.items)
        ]

        top_left = (
            index_factory([(loc.item.x, loc.item.y) for loc in located])
            if options.strip_left
            else None
        )
        top_right = (
            index_factory([(loc.item.right, loc.item.y) for loc in located])
            if options.strip_right
            else None
        )

        for i, loc in enumerate(located):
            item = loc.item
            mid_y = item.y - item.height / 2
            radius = item.height * options.radius_scale

            right_matches = _count_matches(
                top_left, located, i, (item.right, mid_y), radius, options.height_scale, True
            )
            left_matches = _count_matches(
                top_right, located, i, (item.x, mid_y), radius, options.height_scale, False
            )
            if right_matches == 1 or left_matches == 1:
                logger.debug("page %d: superscript %r", page, item.text)
                found.setdefault(loc.row_index, set()).add(loc.item_index)

    return found


def strip_superscripts(
    rows: Sequence[Row],
    options: Optional[SuperscriptOptions] = None,
    index_factory: IndexFactory = KDTreeIndex,
) -> List[Row]:
    """Return ``rows`` with superscript fragments removed.

    Rows left without fragments are dropped and the survivors renumbered.

    Args:
        rows: Rows in document order.
        options: Search radius and size thresholds.
        index_factory: Builds the spatial index over corner points. Any
            :class:`~pdf2array.geometry_utils.SpatialIndex` works.
    """
    found = find_superscripts(rows, options, index_factory)
    if not found:
        return list(rows)

    kept: List[Row] = []
    for pos, row in enumerate(rows):
        drop = found.get(pos)
        if drop is None:
            kept.append(row)
            continue
        items = [item for idx, item in enumerate(row.items) if idx not in drop]
        if items:
            kept.append(row.with_items(items))

    logger.debug(
        "stripped %d superscripts", sum(len(drop) for drop in found.values())
    )
    return renumber(kept)


__all__ = ["find_superscripts", "strip_superscripts"]
