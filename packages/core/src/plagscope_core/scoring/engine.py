from __future__ import annotations

from typing import Callable, Iterable, Sequence

from plagscope_core.citeextract import (
    DEFAULT_DETECTORS,
    CitationDetector,
    analyze_citations,
    citation_statistics,
    exclude_cited_content,
    mark_cited,
)
from plagscope_core.logging_config import get_logger
from plagscope_core.matching import (
    find_exact_matches,
    find_ngram_matches,
    find_paraphrase_matches,
    resolve_overlaps,
)
from plagscope_core.matching.semantic import SemanticSimilarity, token_jaccard
from plagscope_core.settings import EngineSettings
from plagscope_core.textnorm import OffsetMap
from plagscope_core.types import (
    CheckOptions,
    CitationAnalysis,
    Match,
    SignalScores,
    SimilarityResult,
    SimilarityStatistics,
    SourceBreakdown,
    Span,
    WebMatch,
)
from plagscope_core.websearch import NullWebMatchProvider, WebMatchProvider, fetch_web_matches

from .signals import clamp_score, combine_signals, cosine_similarity, structural_score, word_set_jaccard

logger = get_logger("scoring")


def _unique_in_order(values: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(values))


def _relocate(match: Match, source_to_raw: Callable[[Span], Span], target_to_raw: Callable[[Span], Span]) -> Match:
    return match.model_copy(update={"source": source_to_raw(match.source), "target": target_to_raw(match.target)})


def web_match_to_match(web_match: WebMatch) -> Match | None:
    if web_match.end_position <= web_match.start_position or not web_match.source_text:
        logger.warning("Dropping web match with empty span from %s", web_match.url)
        return None
    similarity = max(0.0, min(1.0, web_match.similarity))
    return Match(
        source=Span(start=max(0, web_match.start_position), end=web_match.end_position),
        target=Span(start=0, end=len(web_match.source_text)),
        similarity=similarity,
        algorithm="web-search",
        confidence=similarity,
        matched_text=web_match.matched_text,
        source_text=web_match.source_text,
        source_type="web",
        source_url=web_match.url,
        source_title=web_match.title,
    )


def build_statistics(
    matches: Sequence[Match],
    web_matches: Sequence[Match],
    citation_analysis: CitationAnalysis,
) -> SimilarityStatistics:
    lengths = [match.length for match in matches]
    return SimilarityStatistics(
        total_matches=len(matches) + len(web_matches),
        average_match_length=round(sum(lengths) / len(lengths)) if lengths else 0,
        longest_match=max(lengths) if lengths else 0,
        algorithms_used=_unique_in_order(m.algorithm for m in [*matches, *web_matches]),
        source_breakdown=SourceBreakdown(
            document=sum(1 for m in matches if m.source_type == "document"),
            web=len(web_matches),
            academic=sum(1 for m in matches if m.source_type == "academic"),
        ),
        citation_stats=citation_statistics(citation_analysis),
    )


class SimilarityEngine:
    """Runs the detectors, citation analysis and score fusion for a text pair.

    Holds no per-comparison state, so one engine may serve concurrent callers.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        *,
        semantic: SemanticSimilarity = token_jaccard,
        web_provider: WebMatchProvider | None = None,
        detectors: Sequence[CitationDetector] = DEFAULT_DETECTORS,
    ) -> None:
        self.settings = settings or EngineSettings()
        self.semantic = semantic
        self.web_provider = web_provider or NullWebMatchProvider()
        self.detectors = tuple(detectors)

    def structural_matches(self, text_a: str, text_b: str) -> list[Match]:
        """Exact and n-gram matches, with spans in ``text_a`` / ``text_b`` offsets."""
        map_a = OffsetMap(text_a)
        map_b = OffsetMap(text_b)

        pooled = [
            _relocate(match, map_a.normalized_to_raw, map_b.normalized_to_raw)
            for match in find_exact_matches(text_a, text_b, self.settings.exact_min_length)
        ]
        for size in self.settings.ngram_sizes:
            pooled.extend(
                _relocate(match, map_a.words_to_raw, map_b.words_to_raw)
                for match in find_ngram_matches(map_a.normalized, map_b.normalized, size)
            )
        return resolve_overlaps(pooled)

    def detect(self, text_a: str, text_b: str) -> SimilarityResult:
        """Structural-only comparison: exact and n-gram matches, no citations."""
        matches = self.structural_matches(text_a, text_b)
        structural = structural_score(matches, len(text_a))
        return SimilarityResult(
            overall_similarity=clamp_score(structural),
            matches=matches,
            signals=SignalScores(structural=structural),
            statistics=build_statistics(matches, [], CitationAnalysis()),
        )

    def find_web_matches(self, text: str) -> list[Match]:
        raw = fetch_web_matches(self.web_provider, text, timeout_seconds=self.settings.web_search_timeout_seconds)
        converted = (web_match_to_match(item) for item in raw)
        return [match for match in converted if match is not None]

    def check(self, text_a: str, text_b: str, options: CheckOptions | None = None) -> SimilarityResult:
        options = options or CheckOptions()

        citations_a = analyze_citations(text_a, self.detectors)
        citations_b = analyze_citations(text_b, self.detectors)

        compared_a, compared_b = text_a, text_b
        if options.exclude_citations:
            compared_a = exclude_cited_content(text_a, citations_a.citations)
            compared_b = exclude_cited_content(text_b, citations_b.citations)

        basic = self.detect(compared_a, compared_b)

        semantic_matches: list[Match] = []
        if options.include_semantic_analysis:
            semantic_matches = find_paraphrase_matches(
                compared_a,
                compared_b,
                semantic=self.semantic,
                min_sentence_length=self.settings.paraphrase_min_sentence_length,
                combined_threshold=self.settings.paraphrase_combined_threshold,
                lexical_ceiling=self.settings.paraphrase_lexical_ceiling,
            )

        matches = mark_cited(resolve_overlaps([*basic.matches, *semantic_matches]), citations_a.citations)

        semantic_signal = 0.0
        if options.include_semantic_analysis:
            semantic_signal = max(0.0, min(1.0, self.semantic(compared_a, compared_b))) * 100
        signals = SignalScores(
            structural=basic.overall_similarity,
            cosine=cosine_similarity(compared_a, compared_b) * 100,
            jaccard=word_set_jaccard(compared_a, compared_b) * 100,
            semantic=semantic_signal,
        )

        web_matches: list[Match] = []
        if options.include_web_search:
            web_matches = self.find_web_matches(compared_a)

        logger.debug(
            "Compared texts (%d/%d chars): %d match(es), %d web match(es)",
            len(text_a),
            len(text_b),
            len(matches),
            len(web_matches),
        )

        return SimilarityResult(
            overall_similarity=combine_signals(signals, self.settings),
            matches=matches,
            web_matches=web_matches,
            citation_analysis=citations_a,
            exclude_citations=options.exclude_citations,
            signals=signals,
            statistics=build_statistics(matches, web_matches, citations_a),
        )


def detect_similarity(text_a: str, text_b: str, settings: EngineSettings | None = None) -> SimilarityResult:
    return SimilarityEngine(settings).detect(text_a, text_b)


def comprehensive_check(
    text_a: str,
    text_b: str,
    options: CheckOptions | None = None,
    *,
    settings: EngineSettings | None = None,
    semantic: SemanticSimilarity = token_jaccard,
    web_provider: WebMatchProvider | None = None,
) -> SimilarityResult:
    engine = SimilarityEngine(settings, semantic=semantic, web_provider=web_provider)
    return engine.check(text_a, text_b, options)
