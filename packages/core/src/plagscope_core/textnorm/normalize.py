from __future__ import annotations

import re
from re import Pattern

_WHITESPACE_RE: Pattern[str] = re.compile(r"\s+")
_DISALLOWED_CHARS_RE: Pattern[str] = re.compile(r"[^\w\s.,!?;:()\-'\"]", re.ASCII)
_NON_WORD_RE: Pattern[str] = re.compile(r"[^\w]", re.ASCII)
_SENTENCE_BREAK_RE: Pattern[str] = re.compile(r"[.!?]+")
_TOKEN_RE: Pattern[str] = re.compile(r"\S+")
_WORD_CHAR_RE: Pattern[str] = re.compile(r"\w", re.ASCII)

MIN_WORD_LENGTH = 3
MIN_SENTENCE_LENGTH = 11


def normalize_text(text: str) -> str:
    """Comparison-ready form: single spaces, basic punctuation only, lowercase."""
    if not text:
        return ""
    collapsed = _WHITESPACE_RE.sub(" ", text)
    cleaned = _DISALLOWED_CHARS_RE.sub("", collapsed)
    return cleaned.lower().strip()


def split_into_words(text: str) -> list[str]:
    words: list[str] = []
    for raw in text.split():
        word = _NON_WORD_RE.sub("", raw).lower()
        if len(word) >= MIN_WORD_LENGTH:
            words.append(word)
    return words


def split_into_sentences(text: str) -> list[str]:
    sentences = (part.strip() for part in _SENTENCE_BREAK_RE.split(text))
    return [sentence for sentence in sentences if len(sentence) >= MIN_SENTENCE_LENGTH]


def text_statistics(text: str) -> dict[str, int]:
    words = split_into_words(text)
    sentences = split_into_sentences(text)
    return {
        "character_count": len(text),
        "word_count": len(words),
        "sentence_count": len(sentences),
        "average_words_per_sentence": round(len(words) / len(sentences)) if sentences else 0,
        "unique_words": len(set(words)),
    }


def normalize_with_offsets(text: str) -> tuple[str, list[int]]:
    """``normalize_text`` plus, for each output character, its index in ``text``.

    A collapsed whitespace run maps to the run's first character.
    """
    chars: list[str] = []
    origins: list[int] = []

    def keep_allowed(start: int, end: int) -> None:
        for index in range(start, end):
            if not _DISALLOWED_CHARS_RE.match(text[index]):
                chars.append(text[index])
                origins.append(index)

    position = 0
    for run in _WHITESPACE_RE.finditer(text):
        keep_allowed(position, run.start())
        chars.append(" ")
        origins.append(run.start())
        position = run.end()
    keep_allowed(position, len(text))

    # Only ASCII survives the filter, so lowercasing keeps every index.
    lowered = "".join(chars).lower()
    start = len(lowered) - len(lowered.lstrip())
    end = len(lowered.rstrip())
    return lowered[start:end], origins[start:end]


def word_spans(text: str) -> list[tuple[int, int]]:
    """Spans in ``text`` of the words ``split_into_words`` returns, in the same order."""
    spans: list[tuple[int, int]] = []
    for token in _TOKEN_RE.finditer(text):
        word_chars = [char.start() for char in _WORD_CHAR_RE.finditer(token.group())]
        if len(word_chars) >= MIN_WORD_LENGTH:
            spans.append((token.start() + word_chars[0], token.start() + word_chars[-1] + 1))
    return spans
