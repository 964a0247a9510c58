from __future__ import annotations

from plagscope_core.textnorm import split_into_sentences
from plagscope_core.types import Match, Span

from .overlap import resolve_overlaps
from .semantic import SemanticSimilarity, token_jaccard

SEMANTIC_WEIGHT = 0.7
LEXICAL_WEIGHT = 0.3


def find_paraphrase_matches(
    text_a: str,
    text_b: str,
    *,
    semantic: SemanticSimilarity = token_jaccard,
    min_sentence_length: int = 30,
    combined_threshold: float = 0.6,
    lexical_ceiling: float = 0.8,
) -> list[Match]:
    """Sentence pairs with high meaning overlap that are not near-verbatim.

    Verbatim overlap is left to the exact and n-gram matchers, hence the
    lexical ceiling.
    """
    sentences_a = [s for s in split_into_sentences(text_a) if len(s) >= min_sentence_length]
    sentences_b = [s for s in split_into_sentences(text_b) if len(s) >= min_sentence_length]

    matches: list[Match] = []
    for sentence_a in sentences_a:
        start_a = text_a.find(sentence_a)
        for sentence_b in sentences_b:
            semantic_score = min(1.0, max(0.0, semantic(sentence_a, sentence_b)))
            lexical_score = token_jaccard(sentence_a, sentence_b)
            combined = SEMANTIC_WEIGHT * semantic_score + LEXICAL_WEIGHT * lexical_score
            if combined <= combined_threshold or lexical_score >= lexical_ceiling:
                continue

            start_b = text_b.find(sentence_b)
            matches.append(
                Match(
                    source=Span(start=start_a, end=start_a + len(sentence_a)),
                    target=Span(start=start_b, end=start_b + len(sentence_b)),
                    similarity=min(1.0, combined),
                    algorithm="semantic-paraphrase",
                    confidence=semantic_score,
                    matched_text=sentence_a,
                    source_text=sentence_b,
                )
            )
    return resolve_overlaps(matches)
