"""
Multi-source analysis and batch comparison.

``analyze_document`` compares one subject against every source document and,
optionally, the web. Matches from different sources are pooled without
cross-source overlap resolution, so several sources covering the same span
each contribute to the structural total.
"""
from __future__ import annotations

from datetime import UTC, datetime
from itertools import combinations
from typing import Callable, Sequence
from uuid import uuid4

from plagscope_core.citeextract import analyze_citations
from plagscope_core.errors import InputError
from plagscope_core.logging_config import get_logger
from plagscope_core.types import (
    AnalysisReport,
    BatchPairResult,
    BatchReport,
    BatchSummary,
    CheckOptions,
    ComparisonRow,
    Match,
    RiskLevel,
    SourceBreakdown,
    StoredDocument,
)

from .engine import SimilarityEngine
from .signals import clamp_score

logger = get_logger("analysis")

ProgressCallback = Callable[[float, str], None]

HIGH_RISK_THRESHOLD = 50.0
MEDIUM_RISK_THRESHOLD = 25.0


def similarity_risk_level(score: float) -> RiskLevel:
    if score >= HIGH_RISK_THRESHOLD:
        return "High Risk"
    if score >= MEDIUM_RISK_THRESHOLD:
        return "Medium Risk"
    return "Low Risk"


def _notify(progress: ProgressCallback | None, percent: float, status: str) -> None:
    if progress is None:
        return
    try:
        progress(round(percent, 2), status)
    except Exception:  # noqa: BLE001
        logger.warning("Progress callback failed at %.0f%% (%s)", percent, status, exc_info=True)


def _tag_document_matches(matches: Sequence[Match], source: StoredDocument) -> list[Match]:
    return [
        match.model_copy(update={"source_type": "document", "source_title": source.name, "source_id": source.id})
        for match in matches
    ]


def analyze_document(
    engine: SimilarityEngine,
    subject: StoredDocument,
    sources: Sequence[StoredDocument],
    options: CheckOptions | None = None,
    *,
    progress: ProgressCallback | None = None,
) -> AnalysisReport:
    options = options or CheckOptions()
    per_source_options = options.model_copy(update={"include_web_search": False})

    all_matches: list[Match] = []
    breakdown = SourceBreakdown()

    _notify(progress, 10, "Starting analysis...")

    for processed, source in enumerate(sources, start=1):
        try:
            result = engine.check(subject.content, source.content, per_source_options)
        except Exception:  # noqa: BLE001
            logger.exception("Comparison of %s against %s failed, skipping source", subject.id, source.id)
            continue

        document_matches = _tag_document_matches(result.matches, source)
        all_matches.extend(document_matches)
        breakdown.document += len(document_matches)
        _notify(progress, 10 + (processed / len(sources)) * 60, f"Compared against {source.name}")

    if options.include_web_search:
        _notify(progress, 75, "Searching web content...")
        web_matches = engine.find_web_matches(subject.content)
        all_matches.extend(web_matches)
        breakdown.web = len(web_matches)
        _notify(progress, 90, "Web search completed")

    _notify(progress, 95, "Analyzing citations...")
    citation_analysis = analyze_citations(subject.content, engine.detectors)

    overall = 0.0
    if subject.content:
        covered = sum(match.length for match in all_matches)
        overall = (covered / len(subject.content)) * 100

    limit = engine.settings.max_reported_matches
    report = AnalysisReport(
        id=str(uuid4()),
        document_id=subject.id,
        document_name=subject.name,
        overall_similarity=clamp_score(overall),
        total_matches=len(all_matches),
        source_breakdown=breakdown,
        citation_analysis=citation_analysis,
        matches=sorted(all_matches, key=lambda match: -match.similarity)[:limit],
        options=options,
        created_at=datetime.now(UTC),
    )

    _notify(progress, 100, "Analysis complete!")
    logger.info(
        "Analyzed %s against %d source(s): %.2f%% similar, %d match(es)",
        subject.id,
        len(sources),
        report.overall_similarity,
        report.total_matches,
    )
    return report


def compare_against_all(
    engine: SimilarityEngine,
    subject: StoredDocument,
    sources: Sequence[StoredDocument],
    options: CheckOptions | None = None,
) -> list[ComparisonRow]:
    rows: list[ComparisonRow] = []
    for source in sources:
        if source.id == subject.id:
            continue
        result = engine.check(subject.content, source.content, options)
        rows.append(
            ComparisonRow(
                document_id=source.id,
                document_name=source.name,
                similarity=result.overall_similarity,
                match_count=result.statistics.total_matches,
            )
        )
    rows.sort(key=lambda row: -row.similarity)
    return rows


def batch_compare(
    engine: SimilarityEngine,
    documents: Sequence[StoredDocument],
    options: CheckOptions | None = None,
    *,
    progress: ProgressCallback | None = None,
) -> BatchReport:
    if len(documents) < 2:
        raise InputError("At least 2 documents are required for batch comparison")

    pairs = list(combinations(documents, 2))
    results: list[BatchPairResult] = []

    for completed, (first, second) in enumerate(pairs, start=1):
        try:
            result = engine.check(first.content, second.content, options)
        except Exception:  # noqa: BLE001
            logger.exception("Comparison of %s vs %s failed", first.id, second.id)
        else:
            results.append(
                BatchPairResult(
                    document1_id=first.id,
                    document1_name=first.name,
                    document2_id=second.id,
                    document2_name=second.name,
                    similarity=result.overall_similarity,
                    match_count=result.statistics.total_matches,
                    risk_level=similarity_risk_level(result.overall_similarity),
                )
            )
        _notify(progress, (completed / len(pairs)) * 100, f"{completed}/{len(pairs)} comparisons")

    results.sort(key=lambda item: -item.similarity)
    average = sum(item.similarity for item in results) / len(results) if results else 0.0

    return BatchReport(
        total_comparisons=len(pairs),
        results=results,
        summary=BatchSummary(
            high_risk=sum(1 for item in results if item.risk_level == "High Risk"),
            medium_risk=sum(1 for item in results if item.risk_level == "Medium Risk"),
            low_risk=sum(1 for item in results if item.risk_level == "Low Risk"),
            average_similarity=round(average, 2),
        ),
    )
