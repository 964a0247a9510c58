from __future__ import annotations

from bisect import bisect_left, bisect_right, insort
from typing import Iterator

from plagscope_core.errors import ConfigurationError
from plagscope_core.textnorm import normalize_text
from plagscope_core.types import Match, Span

DEFAULT_MIN_LENGTH = 15

# (start, end) in normalized coordinates
_Candidate = tuple[int, int]


def _longest_shared_ends(text_a: str, text_b: str, min_length: int) -> Iterator[_Candidate]:
    """``(start, end)`` of the longest substring of ``text_a`` at each start that occurs in ``text_b``.

    Starts with no shared substring of ``min_length`` are skipped. The end
    never moves backwards: dropping the first character of a shared substring
    leaves a shared substring.
    """
    end = 0
    for start in range(len(text_a) - min_length + 1):
        if end < start + min_length:
            end = start + min_length
            if text_a[start:end] not in text_b:
                continue
        while end < len(text_a) and text_a[start : end + 1] in text_b:
            end += 1
        yield start, end


class _KeptSpans:
    """Disjoint kept spans, indexed by start, remembering keep order."""

    def __init__(self) -> None:
        self._starts: list[int] = []
        self._ends: list[int] = []
        self.in_keep_order: list[_Candidate] = []

    def covers(self, position: int) -> bool:
        index = bisect_right(self._starts, position)
        return index > 0 and self._ends[index - 1] > position

    def intersects(self, start: int, end: int) -> bool:
        index = bisect_left(self._starts, start)
        if index > 0 and self._ends[index - 1] > start:
            return True
        return index < len(self._starts) and self._starts[index] < end

    def add(self, start: int, end: int) -> None:
        index = bisect_left(self._starts, start)
        self._starts.insert(index, start)
        self._ends.insert(index, end)
        self.in_keep_order.append((start, end))


def _select_longest_shared(text_a: str, text_b: str, min_length: int) -> list[_Candidate]:
    """Greedy longest-first keep over every shared substring of ``min_length`` or more.

    Candidates are visited by length descending, then start ascending. The
    prefixes of a shared substring are shared too, so a start offers every
    length up to its longest; only that longest is stored per start.
    """
    starts_by_length: dict[int, list[int]] = {}
    for start, end in _longest_shared_ends(text_a, text_b, min_length):
        starts_by_length.setdefault(end - start, []).append(start)
    if not starts_by_length:
        return []

    kept = _KeptSpans()
    eligible: list[int] = []
    for length in range(max(starts_by_length), min_length - 1, -1):
        for start in starts_by_length.get(length, ()):
            insort(eligible, start)

        remaining: list[int] = []
        for start in eligible:
            if kept.covers(start):
                continue
            if kept.intersects(start, start + length):
                remaining.append(start)
                continue
            kept.add(start, start + length)
        eligible = remaining

    return kept.in_keep_order


def find_exact_matches(text_a: str, text_b: str, min_length: int = DEFAULT_MIN_LENGTH) -> list[Match]:
    if min_length < 1:
        raise ConfigurationError(f"exact-match minimum length must be positive, got {min_length}")

    normalized_a = normalize_text(text_a)
    normalized_b = normalize_text(text_b)
    if len(normalized_a) < min_length or len(normalized_b) < min_length:
        return []

    matches: list[Match] = []
    for start, end in _select_longest_shared(normalized_a, normalized_b, min_length):
        substring = normalized_a[start:end]
        target_start = normalized_b.find(substring)
        matches.append(
            Match(
                source=Span(start=start, end=end),
                target=Span(start=target_start, end=target_start + len(substring)),
                similarity=1.0,
                algorithm="exact-match",
                confidence=1.0,
                matched_text=substring,
                source_text=substring,
            )
        )
    return matches
