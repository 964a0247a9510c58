from .detectors import (
    DEFAULT_DETECTORS,
    BibliographyDetector,
    CitationDetector,
    ParentheticalDetector,
    QuoteDetector,
    ReferenceSectionDetector,
    parse_reference_entry,
)
from .extract import analyze_citations, extract_citations, resolve_citation_overlaps
from .filter import citation_statistics, exclude_cited_content, is_cited, mark_cited

__all__ = [
    "DEFAULT_DETECTORS",
    "BibliographyDetector",
    "CitationDetector",
    "ParentheticalDetector",
    "QuoteDetector",
    "ReferenceSectionDetector",
    "analyze_citations",
    "citation_statistics",
    "exclude_cited_content",
    "extract_citations",
    "is_cited",
    "mark_cited",
    "parse_reference_entry",
    "resolve_citation_overlaps",
]
