from __future__ import annotations

import math
from collections import Counter
from typing import Iterable

from plagscope_core.matching.semantic import jaccard_similarity
from plagscope_core.settings import EngineSettings
from plagscope_core.textnorm import split_into_words
from plagscope_core.types import Match, SignalScores


def structural_score(matches: Iterable[Match], text_length: int) -> float:
    """Percentage of the subject text covered by matched spans, capped at 100."""
    if text_length <= 0:
        return 0.0
    covered = sum(match.length for match in matches)
    return min(100.0, (covered / text_length) * 100)


def cosine_similarity(text_a: str, text_b: str) -> float:
    counts_a = Counter(split_into_words(text_a))
    counts_b = Counter(split_into_words(text_b))
    vocabulary = counts_a.keys() | counts_b.keys()

    dot = sum(counts_a[word] * counts_b[word] for word in vocabulary)
    norm_a = math.sqrt(sum(value * value for value in counts_a.values()))
    norm_b = math.sqrt(sum(value * value for value in counts_b.values()))
    if norm_a == 0.0 or norm_b == 0.0:
        return 0.0
    return min(1.0, dot / (norm_a * norm_b))


def word_set_jaccard(text_a: str, text_b: str) -> float:
    return jaccard_similarity(set(split_into_words(text_a)), set(split_into_words(text_b)))


def clamp_score(value: float) -> float:
    return round(max(0.0, min(100.0, value)), 2)


def combine_signals(signals: SignalScores, settings: EngineSettings) -> float:
    combined = (
        signals.structural * settings.structural_weight
        + signals.cosine * settings.cosine_weight
        + signals.jaccard * settings.jaccard_weight
        + signals.semantic * settings.semantic_weight
    )
    return clamp_score(combined)
