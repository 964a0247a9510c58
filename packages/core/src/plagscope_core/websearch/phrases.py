from __future__ import annotations

import re
from re import Pattern

from plagscope_core.textnorm import normalize_text, split_into_sentences
from plagscope_core.types import WebMatch

MIN_PHRASE_LENGTH = 20
MAX_PHRASE_LENGTH = 200
MAX_WEB_MATCHES = 10

_STOPWORDS_RE: Pattern[str] = re.compile(r"\b(the|a|an|and|or|but|in|on|at|to|for|of|with|by)\b", re.IGNORECASE)


def build_search_queries(text: str, max_queries: int = 3) -> list[str]:
    sentences = [s for s in split_into_sentences(text) if 50 < len(s) < 200]
    return [f'"{sentence[:100]}"' for sentence in sentences[:max_queries]]


def extract_key_phrases(text: str, max_phrases: int = 5) -> list[str]:
    phrases: list[str] = []
    for sentence in split_into_sentences(text):
        if not 30 < len(sentence) < 150:
            continue
        cleaned = _STOPWORDS_RE.sub("", sentence).strip()
        if len(cleaned) > 20:
            phrases.append(cleaned)
    return phrases[:max_phrases]


def _longest_phrase_at(source: str, start: int, web_content: str) -> int:
    """Length of the longest phrase at ``start`` found in ``web_content``, 0 if none."""
    limit = min(MAX_PHRASE_LENGTH, len(source) - start)
    if limit < MIN_PHRASE_LENGTH or source[start : start + MIN_PHRASE_LENGTH] not in web_content:
        return 0
    length = MIN_PHRASE_LENGTH
    while length < limit and source[start : start + length + 1] in web_content:
        length += 1
    return length


def find_text_matches(input_text: str, web_content: str, title: str, url: str) -> list[WebMatch]:
    processed_input = normalize_text(input_text)
    processed_web = normalize_text(web_content)

    matches: list[WebMatch] = []
    position = 0
    while position < len(processed_input) - MIN_PHRASE_LENGTH + 1:
        length = _longest_phrase_at(processed_input, position, processed_web)
        if length == 0:
            position += 1
            continue
        phrase = processed_input[position : position + length]
        matches.append(
            WebMatch(
                url=url,
                title=title,
                matched_text=phrase,
                source_text=phrase,
                similarity=min(1.0, length / 100),
                start_position=position,
                end_position=position + length,
            )
        )
        position += length

    return remove_duplicate_web_matches(matches)


def remove_duplicate_web_matches(matches: list[WebMatch], limit: int = MAX_WEB_MATCHES) -> list[WebMatch]:
    ordered = sorted(matches, key=lambda match: -match.similarity)
    kept: list[WebMatch] = []
    for match in ordered:
        overlapping = any(
            match.start_position < existing.end_position and match.end_position > existing.start_position
            for existing in kept
        )
        if not overlapping:
            kept.append(match)
    return kept[:limit]
