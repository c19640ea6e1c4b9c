"""Value types shared by the row builder and the filters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, List, Sequence


@dataclass(frozen=True, slots=True)
class Fragment:
    """A positioned run of text.

    ``x`` is the left edge and ``y`` the baseline in PDF user space, where y
    grows towards the top of the page.
    """

    text: str
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def center(self) -> float:
        return self.x + self.width / 2

    def replace(self, **changes: Any) -> "Fragment":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)


@dataclass(slots=True)
class Row:
    """Fragments believed to share one visual line on one page."""

    page: int
    row_number: int
    y: float
    items: List[Fragment] = field(default_factory=list)
    xs: List[float] = field(default_factory=list)

    def append(self, item: Fragment) -> None:
        self.items.append(item)
        self.xs.append(item.x)

    def with_items(self, items: Sequence[Fragment]) -> "Row":
        """Return a copy holding ``items``, with ``xs`` rebuilt to match."""
        return Row(
            page=self.page,
            row_number=self.row_number,
            y=self.y,
            items=list(items),
            xs=[item.x for item in items],
        )

    def renumbered(self, row_number: int) -> "Row":
        if row_number == self.row_number:
            return self
        return Row(
            page=self.page,
            row_number=row_number,
            y=self.y,
            items=list(self.items),
            xs=list(self.xs),
        )

    def texts(self) -> List[str]:
        return [item.text for item in self.items]


__all__ = ["Fragment", "Row"]
