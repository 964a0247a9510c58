from .citeextract import analyze_citations, exclude_cited_content, is_cited
from .errors import ConfigurationError, DocumentNotFoundError, InputError, PlagscopeError
from .matching import find_exact_matches, find_ngram_matches, find_paraphrase_matches, resolve_overlaps
from .repository import DocumentRepository, ReportRepository, analyze_stored_document
from .scoring import (
    SimilarityEngine,
    analyze_document,
    batch_compare,
    compare_against_all,
    comprehensive_check,
    detect_similarity,
)
from .settings import EngineSettings, load_settings
from .types import (
    CheckOptions,
    Citation,
    CitationAnalysis,
    Match,
    SimilarityResult,
    SourceInfo,
    Span,
    StoredDocument,
    WebMatch,
)

__all__ = [
    "CheckOptions",
    "Citation",
    "CitationAnalysis",
    "ConfigurationError",
    "DocumentNotFoundError",
    "DocumentRepository",
    "EngineSettings",
    "InputError",
    "Match",
    "PlagscopeError",
    "ReportRepository",
    "SimilarityEngine",
    "SimilarityResult",
    "SourceInfo",
    "Span",
    "StoredDocument",
    "WebMatch",
    "analyze_citations",
    "analyze_document",
    "analyze_stored_document",
    "batch_compare",
    "compare_against_all",
    "comprehensive_check",
    "detect_similarity",
    "exclude_cited_content",
    "find_exact_matches",
    "find_ngram_matches",
    "find_paraphrase_matches",
    "is_cited",
    "load_settings",
    "resolve_overlaps",
]
