"""Match detectors and the overlap resolver."""

from .exact import find_exact_matches
from .ngram import SUPPORTED_NGRAM_SIZES, find_ngram_matches, generate_ngrams
from .overlap import resolve_overlaps, select_longest_disjoint
from .paraphrase import find_paraphrase_matches
from .semantic import SemanticSimilarity, jaccard_similarity, token_jaccard

__all__ = [
    "SUPPORTED_NGRAM_SIZES",
    "SemanticSimilarity",
    "find_exact_matches",
    "find_ngram_matches",
    "find_paraphrase_matches",
    "generate_ngrams",
    "jaccard_similarity",
    "resolve_overlaps",
    "select_longest_disjoint",
    "token_jaccard",
]
