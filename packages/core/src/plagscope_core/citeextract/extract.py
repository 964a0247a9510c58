from __future__ import annotations

from typing import Iterable, Sequence

from plagscope_core.types import Citation, CitationAnalysis

from .detectors import DEFAULT_DETECTORS, CitationDetector


def resolve_citation_overlaps(citations: Iterable[Citation]) -> list[Citation]:
    """Earliest start wins; equal starts keep detector order."""
    ordered = sorted(citations, key=lambda citation: citation.span.start)
    kept: list[Citation] = []
    for citation in ordered:
        if any(citation.span.overlaps(existing.span) for existing in kept):
            continue
        kept.append(citation)
    return kept


def extract_citations(text: str, detectors: Sequence[CitationDetector] = DEFAULT_DETECTORS) -> list[Citation]:
    found: list[Citation] = []
    for detector in detectors:
        found.extend(detector.detect(text))
    return resolve_citation_overlaps(found)


def analyze_citations(text: str, detectors: Sequence[CitationDetector] = DEFAULT_DETECTORS) -> CitationAnalysis:
    citations = extract_citations(text, detectors)

    cited_length = sum(citation.span.length for citation in citations)
    coverage = (cited_length / len(text)) * 100 if text else 0.0

    return CitationAnalysis(
        citations=citations,
        total_citations=len(citations),
        quoted_text=[c for c in citations if c.type == "quote"],
        references=[c for c in citations if c.type == "reference"],
        bibliography=[c for c in citations if c.type == "bibliography"],
        citation_coverage=round(coverage, 2),
    )
