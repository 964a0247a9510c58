from __future__ import annotations

from typing import Callable, Iterable, Sequence, TypeVar

from plagscope_core.types import Match

T = TypeVar("T")

Interval = tuple[int, int]


def _intersects(span: Interval, kept: Sequence[Interval]) -> bool:
    start, end = span
    return any(start < kept_end and end > kept_start for kept_start, kept_end in kept)


def select_longest_disjoint(items: Iterable[T], interval_of: Callable[[T], Interval]) -> list[T]:
    """Greedy longest-first selection of non-intersecting half-open intervals.

    Ties on length keep first-seen order (``sorted`` is stable). The result is
    in keep order, longest first.
    """
    ordered = sorted(items, key=lambda item: -(interval_of(item)[1] - interval_of(item)[0]))
    kept: list[T] = []
    kept_intervals: list[Interval] = []
    for item in ordered:
        interval = interval_of(item)
        if _intersects(interval, kept_intervals):
            continue
        kept.append(item)
        kept_intervals.append(interval)
    return kept


def _source_interval(match: Match) -> Interval:
    return match.source.start, match.source.end


def resolve_overlaps(matches: Iterable[Match]) -> list[Match]:
    return select_longest_disjoint(matches, _source_interval)
