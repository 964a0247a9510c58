"""Pluggable semantic-similarity capability.

The default is token-set Jaccard. Anything with the signature
``(text, text) -> float in [0, 1]`` can replace it, e.g. an embedding model.
"""
from __future__ import annotations

from typing import AbstractSet, Callable

from plagscope_core.textnorm import split_into_words

SemanticSimilarity = Callable[[str, str], float]


def jaccard_similarity(left: AbstractSet[str], right: AbstractSet[str]) -> float:
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


def token_jaccard(text_a: str, text_b: str) -> float:
    return jaccard_similarity(set(split_into_words(text_a)), set(split_into_words(text_b)))
