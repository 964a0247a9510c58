"""
Raw-text coordinates for matcher spans.

Exact matches are located on ``normalize_text`` output and n-gram matches on
the space-joined ``split_into_words`` tokens of that output. ``OffsetMap``
carries both kinds of span back to offsets in the original text, where
citations and paraphrase matches already live.
"""
from __future__ import annotations

from plagscope_core.types import Span

from .normalize import normalize_with_offsets, split_into_words, word_spans


class OffsetMap:
    def __init__(self, text: str) -> None:
        self.text = text
        self.normalized, self._origins = normalize_with_offsets(text)

        # joined-token offset -> raw offset, for word starts and word ends
        self._word_starts: dict[int, int] = {}
        self._word_ends: dict[int, int] = {}
        position = 0
        for word, (start, end) in zip(split_into_words(self.normalized), word_spans(self.normalized)):
            self._word_starts[position] = self._origins[start]
            position += len(word)
            self._word_ends[position] = self._origins[end - 1] + 1
            position += 1

    def normalized_to_raw(self, span: Span) -> Span:
        return Span(start=self._origins[span.start], end=self._origins[span.end - 1] + 1)

    def words_to_raw(self, span: Span) -> Span:
        return Span(start=self._word_starts[span.start], end=self._word_ends[span.end])
