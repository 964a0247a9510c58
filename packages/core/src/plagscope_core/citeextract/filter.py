from __future__ import annotations

from typing import Iterable, Sequence

from plagscope_core.types import Citation, CitationAnalysis, CitationStats, Match


def is_cited(match: Match, citations: Iterable[Citation]) -> bool:
    """True iff some citation span fully encloses the match's source span."""
    return any(citation.span.contains(match.source) for citation in citations)


def mark_cited(matches: Iterable[Match], citations: Sequence[Citation]) -> list[Match]:
    return [match.model_copy(update={"is_cited": is_cited(match, citations)}) for match in matches]


def exclude_cited_content(text: str, citations: Iterable[Citation]) -> str:
    """Blank every citation span with spaces; offsets and length are preserved."""
    filtered = text
    for citation in sorted(citations, key=lambda c: c.span.start, reverse=True):
        start, end = citation.span.start, min(citation.span.end, len(filtered))
        if start >= end:
            continue
        filtered = filtered[:start] + " " * (end - start) + filtered[end:]
    return filtered


def citation_statistics(analysis: CitationAnalysis) -> CitationStats:
    citations = analysis.citations
    average = round(sum(c.span.length for c in citations) / len(citations)) if citations else 0
    return CitationStats(
        total_citations=analysis.total_citations,
        quoted_text_count=len(analysis.quoted_text),
        parenthetical_citations=sum(1 for c in citations if c.type == "parenthetical"),
        reference_count=len(analysis.references),
        bibliography_count=len(analysis.bibliography),
        citation_coverage=analysis.citation_coverage,
        average_citation_length=average,
    )
