"""Configuration for controlling row building and the filter chain."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, fields
from typing import Any, Collection, Mapping, Optional, Type, TypeVar, Union

from .errors import InvalidOptions

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")

T = TypeVar("T")


def _snake_case(key: str) -> str:
    return _CAMEL_RE.sub("_", key).lower()


def _require_number(owner: str, name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidOptions(f"{owner}.{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidOptions(f"{owner}.{name} must be finite, got {value!r}")
    return float(value)


def _require_bool(owner: str, name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise InvalidOptions(f"{owner}.{name} must be a bool, got {value!r}")
    return value


@dataclass(slots=True)
class FooterOptions:
    """Tolerances for recognising a repeating footer row.

    Attributes:
        y_tolerance: Maximum baseline difference between two footer rows.
        x_tolerance: Maximum difference of the left, right or centre x of
            aligned fragments.
        confidence: Fraction of pages (exclusive lower bound) that must
            share a footer before it is removed.
    """

    y_tolerance: float = 1.0
    x_tolerance: float = 1.0
    confidence: float = 0.5

    def __post_init__(self) -> None:
        for name in ("y_tolerance", "x_tolerance"):
            value = _require_number("FooterOptions", name, getattr(self, name))
            if value < 0:
                raise InvalidOptions(f"FooterOptions.{name} must be >= 0, got {value}")
        confidence = _require_number("FooterOptions", "confidence", self.confidence)
        if not 0 < confidence <= 1:
            raise InvalidOptions(
                f"FooterOptions.confidence must be in (0, 1], got {confidence}"
            )


@dataclass(slots=True)
class SuperscriptOptions:
    """Neighbourhood settings for superscript detection.

    Attributes:
        radius_scale: Search radius around a fragment as a fraction of its
            height.
        height_scale: A neighbour only counts as main text when its height
            times this factor still exceeds the fragment's height. Use 1 if
            superscripts are set at the body size.
        strip_left: Strip superscripts sitting left of the main text.
        strip_right: Strip superscripts sitting right of the main text.
    """

    radius_scale: float = 0.5
    height_scale: float = 0.75
    strip_left: bool = True
    strip_right: bool = True

    def __post_init__(self) -> None:
        for name in ("radius_scale", "height_scale"):
            value = _require_number("SuperscriptOptions", name, getattr(self, name))
            if value <= 0:
                raise InvalidOptions(
                    f"SuperscriptOptions.{name} must be > 0, got {value}"
                )
        _require_bool("SuperscriptOptions", "strip_left", self.strip_left)
        _require_bool("SuperscriptOptions", "strip_right", self.strip_right)


@dataclass(slots=True)
class SliceOptions:
    """Histogram settings for column slicing.

    Attributes:
        vertical_slices: Number of histogram buckets across the page width.
        keep_empty_columns: Emit an empty fragment for every column a row
            has no text in, so all rows on a page share one column count.
    """

    vertical_slices: int = 1024
    keep_empty_columns: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.vertical_slices, bool) or not isinstance(
            self.vertical_slices, int
        ):
            raise InvalidOptions(
                f"SliceOptions.vertical_slices must be an int, got {self.vertical_slices!r}"
            )
        if self.vertical_slices < 1:
            raise InvalidOptions(
                f"SliceOptions.vertical_slices must be >= 1, got {self.vertical_slices}"
            )
        _require_bool("SliceOptions", "keep_empty_columns", self.keep_empty_columns)


def coerce_options(value: Union[bool, None, T, Mapping[str, Any]], cls: Type[T]) -> Optional[T]:
    """Turn a ``bool | options | mapping`` switch into an options instance.

    ``False`` and ``None`` disable the stage, ``True`` enables it with
    defaults. Mapping keys may be snake_case or camelCase.
    """
    if value is None or value is False:
        return None
    if value is True:
        return cls()
    if isinstance(value, cls):
        return value
    if isinstance(value, Mapping):
        known = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        kwargs = {}
        for key, item in value.items():
            name = _snake_case(str(key))
            if name not in known:
                raise InvalidOptions(f"Unknown {cls.__name__} option: {key!r}")
            kwargs[name] = item
        return cls(**kwargs)
    raise InvalidOptions(
        f"Expected bool, mapping or {cls.__name__}, got {type(value).__name__}"
    )


@dataclass(slots=True)
class Pdf2ArrayOptions:
    """Runtime configuration for :func:`pdf2array.pdf2array`.

    Attributes:
        pages: Optional 1-based page numbers to include. None keeps all.
        strip_footers: Footer filter switch or its options.
        strip_superscript: Superscript filter switch or its options.
        slice: Slice filter switch or its options.
        verbose: Log the pipeline at DEBUG level for the duration of a call.
    """

    pages: Optional[Collection[int]] = None
    strip_footers: Union[bool, FooterOptions, Mapping[str, Any], None] = False
    strip_superscript: Union[bool, SuperscriptOptions, Mapping[str, Any], None] = False
    slice: Union[bool, SliceOptions, Mapping[str, Any], None] = False
    verbose: bool = field(default=False, compare=False)

    def __post_init__(self) -> None:
        if self.pages is not None:
            try:
                pages = frozenset(self.pages)
            except TypeError as exc:
                raise InvalidOptions(
                    f"Pdf2ArrayOptions.pages must be a collection of page numbers, got {self.pages!r}"
                ) from exc
            for page in pages:
                if isinstance(page, bool) or not isinstance(page, int) or page < 1:
                    raise InvalidOptions(
                        f"Pdf2ArrayOptions.pages must hold 1-based page numbers, got {page!r}"
                    )
            self.pages = pages
        self.strip_footers = coerce_options(self.strip_footers, FooterOptions)
        self.strip_superscript = coerce_options(
            self.strip_superscript, SuperscriptOptions
        )
        self.slice = coerce_options(self.slice, SliceOptions)
        _require_bool("Pdf2ArrayOptions", "verbose", self.verbose)

    @classmethod
    def from_value(
        cls, value: Union["Pdf2ArrayOptions", Mapping[str, Any], None] = None, **overrides: Any
    ) -> "Pdf2ArrayOptions":
        """Build options from an instance, a mapping, or keyword arguments."""
        if value is None:
            merged: dict = {}
        elif isinstance(value, cls):
            if not overrides:
                return value
            merged = {f.name: getattr(value, f.name) for f in fields(cls)}
        elif isinstance(value, Mapping):
            merged = dict(value)
        else:
            raise InvalidOptions(
                f"Expected Pdf2ArrayOptions or mapping, got {type(value).__name__}"
            )
        merged.update(overrides)

        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, item in merged.items():
            name = _snake_case(str(key))
            if name not in known:
                raise InvalidOptions(f"Unknown option: {key!r}")
            kwargs[name] = item
        return cls(**kwargs)


__all__ = [
    "FooterOptions",
    "Pdf2ArrayOptions",
    "SliceOptions",
    "SuperscriptOptions",
    "coerce_options",
]
