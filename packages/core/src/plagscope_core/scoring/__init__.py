from .analysis import (
    ProgressCallback,
    analyze_document,
    batch_compare,
    compare_against_all,
    similarity_risk_level,
)
from .engine import SimilarityEngine, comprehensive_check, detect_similarity, web_match_to_match
from .signals import combine_signals, cosine_similarity, structural_score, word_set_jaccard

__all__ = [
    "ProgressCallback",
    "SimilarityEngine",
    "analyze_document",
    "batch_compare",
    "combine_signals",
    "compare_against_all",
    "comprehensive_check",
    "cosine_similarity",
    "detect_similarity",
    "similarity_risk_level",
    "structural_score",
    "web_match_to_match",
    "word_set_jaccard",
]
