from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Algorithm = Literal[
    "exact-match",
    "3-gram",
    "4-gram",
    "5-gram",
    "semantic-paraphrase",
    "web-search",
]
SourceType = Literal["document", "web", "academic"]
CitationType = Literal["quote", "parenthetical", "reference", "bibliography"]


class Span(BaseModel):
    """Half-open character interval ``[start, end)``."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0)
    end: int

    @model_validator(mode="after")
    def _check_bounds(self) -> Span:
        if self.end <= self.start:
            raise ValueError(f"span end must exceed start: [{self.start}, {self.end})")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: Span) -> bool:
        return self.start < other.end and self.end > other.start

    def contains(self, other: Span) -> bool:
        return self.start <= other.start and self.end >= other.end


class Match(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: Span
    target: Span
    similarity: float = Field(ge=0.0, le=1.0)
    algorithm: Algorithm
    confidence: float = Field(ge=0.0, le=1.0)
    matched_text: str
    source_text: str
    source_type: SourceType = "document"
    source_url: str | None = None
    source_title: str | None = None
    source_id: str | None = None
    is_cited: bool = False

    @property
    def length(self) -> int:
        return self.source.length


class SourceInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str | None = None
    year: str | None = None
    title: str | None = None
    publication: str | None = None
    doi: str | None = None
    url: str | None = None


class Citation(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    type: CitationType
    span: Span
    source_info: SourceInfo = Field(default_factory=SourceInfo)


class CitationAnalysis(BaseModel):
    citations: list[Citation] = Field(default_factory=list)
    total_citations: int = 0
    quoted_text: list[Citation] = Field(default_factory=list)
    references: list[Citation] = Field(default_factory=list)
    bibliography: list[Citation] = Field(default_factory=list)
    citation_coverage: float = 0.0


class CitationStats(BaseModel):
    total_citations: int = 0
    quoted_text_count: int = 0
    parenthetical_citations: int = 0
    reference_count: int = 0
    bibliography_count: int = 0
    citation_coverage: float = 0.0
    average_citation_length: int = 0


class WebMatch(BaseModel):
    url: str
    title: str
    matched_text: str
    source_text: str
    similarity: float
    start_position: int
    end_position: int


class CheckOptions(BaseModel):
    exclude_citations: bool = False
    include_web_search: bool = False
    include_semantic_analysis: bool = True


class SourceBreakdown(BaseModel):
    document: int = 0
    web: int = 0
    academic: int = 0


class SimilarityStatistics(BaseModel):
    total_matches: int = 0
    average_match_length: int = 0
    longest_match: int = 0
    algorithms_used: list[str] = Field(default_factory=list)
    source_breakdown: SourceBreakdown = Field(default_factory=SourceBreakdown)
    citation_stats: CitationStats = Field(default_factory=CitationStats)


class SignalScores(BaseModel):
    structural: float = 0.0
    cosine: float = 0.0
    jaccard: float = 0.0
    semantic: float = 0.0


class SimilarityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    overall_similarity: float = Field(ge=0.0, le=100.0)
    matches: list[Match] = Field(default_factory=list)
    web_matches: list[Match] = Field(default_factory=list)
    citation_analysis: CitationAnalysis = Field(default_factory=CitationAnalysis)
    exclude_citations: bool = False
    signals: SignalScores = Field(default_factory=SignalScores)
    statistics: SimilarityStatistics = Field(default_factory=SimilarityStatistics)


RiskLevel = Literal["High Risk", "Medium Risk", "Low Risk"]


class StoredDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    content: str


class AnalysisReport(BaseModel):
    id: str
    document_id: str
    document_name: str
    overall_similarity: float = Field(ge=0.0, le=100.0)
    total_matches: int
    source_breakdown: SourceBreakdown
    citation_analysis: CitationAnalysis
    matches: list[Match]
    options: CheckOptions
    created_at: datetime


class ComparisonRow(BaseModel):
    document_id: str
    document_name: str
    similarity: float
    match_count: int


class BatchPairResult(BaseModel):
    document1_id: str
    document1_name: str
    document2_id: str
    document2_name: str
    similarity: float
    match_count: int
    risk_level: RiskLevel


class BatchSummary(BaseModel):
    high_risk: int = 0
    medium_risk: int = 0
    low_risk: int = 0
    average_similarity: float = 0.0


class BatchReport(BaseModel):
    total_comparisons: int
    results: list[BatchPairResult]
    summary: BatchSummary
