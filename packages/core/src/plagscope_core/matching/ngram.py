from __future__ import annotations

from plagscope_core.errors import ConfigurationError
from plagscope_core.textnorm import split_into_words
from plagscope_core.types import Match, Span

from .overlap import resolve_overlaps

SUPPORTED_NGRAM_SIZES: tuple[int, ...] = (3, 4, 5)
NGRAM_SIMILARITY = 0.8
NGRAM_CONFIDENCE = 0.8


def generate_ngrams(words: list[str], n: int) -> list[str]:
    return [" ".join(words[index : index + n]) for index in range(len(words) - n + 1)]


def _word_offsets(words: list[str]) -> list[int]:
    # Offsets into " ".join(words); approximate relative to the caller's text.
    offsets: list[int] = []
    position = 0
    for word in words:
        offsets.append(position)
        position += len(word) + 1
    return offsets


def find_ngram_matches(text_a: str, text_b: str, n: int = 3) -> list[Match]:
    if n not in SUPPORTED_NGRAM_SIZES:
        raise ConfigurationError(f"unsupported n-gram size {n}; expected one of {SUPPORTED_NGRAM_SIZES}")

    words_a = split_into_words(text_a)
    words_b = split_into_words(text_b)

    first_index_b: dict[str, int] = {}
    for index, gram in enumerate(generate_ngrams(words_b, n)):
        first_index_b.setdefault(gram, index)
    if not first_index_b:
        return []

    offsets_a = _word_offsets(words_a)
    offsets_b = _word_offsets(words_b)
    algorithm = f"{n}-gram"

    matches: list[Match] = []
    for index, gram in enumerate(generate_ngrams(words_a, n)):
        match_index = first_index_b.get(gram)
        if match_index is None:
            continue
        start_a = offsets_a[index]
        start_b = offsets_b[match_index]
        matches.append(
            Match(
                source=Span(start=start_a, end=start_a + len(gram)),
                target=Span(start=start_b, end=start_b + len(gram)),
                similarity=NGRAM_SIMILARITY,
                algorithm=algorithm,
                confidence=NGRAM_CONFIDENCE,
                matched_text=gram,
                source_text=gram,
            )
        )
    return resolve_overlaps(matches)
