from __future__ import annotations

from dataclasses import dataclass
from re import Pattern
from typing import Iterator, Protocol

from plagscope_core.types import Citation, CitationType, SourceInfo, Span

from .regex_rules import (
    BIBLIOGRAPHY_ENTRY_BOUNDARY,
    BIBLIOGRAPHY_HEADING,
    ENTRY_AUTHOR,
    ENTRY_DOI,
    ENTRY_NUMBERING,
    ENTRY_TITLE,
    ENTRY_URL,
    ENTRY_YEAR,
    LINE_BREAK,
    PARENTHETICAL_PATTERNS,
    QUOTE_PATTERNS,
    REFERENCE_ENTRY_BOUNDARY,
    REFERENCE_HEADING,
    SECTION_END,
)

MIN_ENTRY_LENGTH = 21


class CitationDetector(Protocol):
    def detect(self, text: str) -> list[Citation]: ...


def parse_reference_entry(entry: str) -> SourceInfo:
    body = ENTRY_NUMBERING.sub("", entry.strip(), count=1)

    author = ENTRY_AUTHOR.match(body)
    year = ENTRY_YEAR.search(body)
    title = ENTRY_TITLE.search(body)
    doi = ENTRY_DOI.search(body)
    url = ENTRY_URL.search(body)

    return SourceInfo(
        author=author.group(1) if author else None,
        year=(year.group(1) or year.group(2)) if year else None,
        title=(title.group(1) or title.group(2) or title.group(3)) if title else None,
        doi=doi.group(1) if doi else None,
        url=url.group(0) if url else None,
    )


@dataclass(frozen=True)
class QuoteDetector:
    patterns: tuple[Pattern[str], ...] = QUOTE_PATTERNS

    def detect(self, text: str) -> list[Citation]:
        citations: list[Citation] = []
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                start, end = match.span()
                citations.append(
                    Citation(
                        id=f"quote-{len(citations)}",
                        text=match.group(1),
                        type="quote",
                        span=Span(start=start, end=end),
                    )
                )
        return citations


@dataclass(frozen=True)
class ParentheticalDetector:
    patterns: tuple[Pattern[str], ...] = PARENTHETICAL_PATTERNS

    def detect(self, text: str) -> list[Citation]:
        citations: list[Citation] = []
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                start, end = match.span()
                groups = match.groups()
                if len(groups) >= 2 and groups[0] and groups[1]:
                    source_info = SourceInfo(author=groups[0], year=groups[1])
                else:
                    source_info = SourceInfo()
                citations.append(
                    Citation(
                        id=f"paren-{len(citations)}",
                        text=match.group(0),
                        type="parenthetical",
                        span=Span(start=start, end=end),
                        source_info=source_info,
                    )
                )
        return citations


def _split_entries(section: str, offset: int, boundary: Pattern[str]) -> Iterator[tuple[int, str]]:
    position = 0
    for match in boundary.finditer(section):
        yield offset + position, section[position : match.start()]
        position = match.end()
    yield offset + position, section[position:]


@dataclass(frozen=True)
class ReferenceSectionDetector:
    """Entries of a reference block introduced by a heading line."""

    heading: Pattern[str] = REFERENCE_HEADING
    entry_boundary: Pattern[str] = REFERENCE_ENTRY_BOUNDARY
    citation_type: CitationType = "reference"
    id_prefix: str = "ref"

    def _section_bounds(self, text: str) -> tuple[int, int] | None:
        heading = self.heading.search(text)
        if heading is None:
            return None
        start = heading.end()
        line_break = LINE_BREAK.match(text, start)
        if line_break is not None:
            start = line_break.end()
        section_end = SECTION_END.search(text, start)
        end = section_end.start() if section_end else len(text)
        return start, end

    def detect(self, text: str) -> list[Citation]:
        bounds = self._section_bounds(text)
        if bounds is None:
            return []
        start, end = bounds

        citations: list[Citation] = []
        for entry_offset, chunk in _split_entries(text[start:end], start, self.entry_boundary):
            entry = chunk.strip()
            if len(entry) < MIN_ENTRY_LENGTH:
                continue
            entry_start = entry_offset + (len(chunk) - len(chunk.lstrip()))
            citations.append(
                Citation(
                    id=f"{self.id_prefix}-{len(citations)}",
                    text=entry,
                    type=self.citation_type,
                    span=Span(start=entry_start, end=entry_start + len(entry)),
                    source_info=parse_reference_entry(entry),
                )
            )
        return citations


@dataclass(frozen=True)
class BibliographyDetector(ReferenceSectionDetector):
    heading: Pattern[str] = BIBLIOGRAPHY_HEADING
    entry_boundary: Pattern[str] = BIBLIOGRAPHY_ENTRY_BOUNDARY
    citation_type: CitationType = "bibliography"
    id_prefix: str = "bib"


DEFAULT_DETECTORS: tuple[CitationDetector, ...] = (
    QuoteDetector(),
    ParentheticalDetector(),
    ReferenceSectionDetector(),
    BibliographyDetector(),
)
