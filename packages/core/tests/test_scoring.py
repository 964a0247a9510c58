from __future__ import annotations

import time

import pytest

from plagscope_core.scoring import (
    SimilarityEngine,
    comprehensive_check,
    cosine_similarity,
    detect_similarity,
    structural_score,
    word_set_jaccard,
)
from plagscope_core.textnorm import normalize_text
from plagscope_core.types import CheckOptions, WebMatch

FOX = "The quick brown fox jumps over the lazy dog"
NATO = ("alpha bravo charlie delta echo foxtrot golf hotel india juliet " * 2)[:100]
PLANETS = ("mercury venus earth mars jupiter saturn uranus neptune pluto comet " * 2)[:100]


class _StaticProvider:
    def __init__(self, matches: list[WebMatch]) -> None:
        self.matches = matches
        self.calls: list[str] = []

    def find_matches(self, text: str) -> list[WebMatch]:
        self.calls.append(text)
        return self.matches


class _FailingProvider:
    def find_matches(self, text: str) -> list[WebMatch]:
        raise RuntimeError("search backend unavailable")


class _SlowProvider:
    def find_matches(self, text: str) -> list[WebMatch]:
        time.sleep(0.5)
        return []


def _web_match() -> WebMatch:
    phrase = "the quick brown fox jumps"
    return WebMatch(
        url="https://example.com/fox",
        title="Fox page",
        matched_text=phrase,
        source_text=phrase,
        similarity=0.25,
        start_position=0,
        end_position=len(phrase),
    )


def test_identical_texts_score_one_hundred(settings) -> None:
    result = SimilarityEngine(settings).check(FOX, FOX)

    assert result.overall_similarity == 100
    assert len(result.matches) == 1
    assert result.matches[0].algorithm == "exact-match"
    assert (result.matches[0].source.start, result.matches[0].source.end) == (0, len(FOX))
    assert result.statistics.total_matches == 1
    assert result.statistics.longest_match == len(FOX)
    assert result.statistics.algorithms_used == ["exact-match"]
    assert result.statistics.source_breakdown.document == 1


def test_disjoint_vocabulary_scores_zero(settings) -> None:
    assert len(NATO) == 100 and len(PLANETS) == 100

    result = SimilarityEngine(settings).check(NATO, PLANETS)

    assert result.signals.structural == 0
    assert result.signals.cosine == 0
    assert result.signals.jaccard == 0
    assert result.overall_similarity == 0
    assert result.matches == []


def test_empty_texts_give_zero_result(settings) -> None:
    result = SimilarityEngine(settings).check("", "")

    assert result.overall_similarity == 0
    assert result.matches == []
    assert result.statistics.total_matches == 0


@pytest.mark.parametrize(
    ("text_a", "text_b"),
    [
        (FOX, FOX),
        (FOX, FOX + " " + FOX + " " + FOX),
        (FOX + " again and again", FOX),
        ("", FOX),
        (FOX, ""),
        (NATO, PLANETS),
    ],
)
def test_overall_score_stays_in_range(settings, text_a: str, text_b: str) -> None:
    result = SimilarityEngine(settings).check(text_a, text_b)

    assert 0 <= result.overall_similarity <= 100


def test_returned_matches_are_disjoint(settings) -> None:
    text_a = (
        "Climate change threatens coastal cities around the world. "
        "Governments must adapt infrastructure quickly to rising seas."
    )
    text_b = (
        "Many experts say climate change threatens coastal cities around the world. "
        "Officials must adapt infrastructure quickly, they argue."
    )

    result = SimilarityEngine(settings).check(text_a, text_b)

    assert result.matches
    for i, left in enumerate(result.matches):
        for right in result.matches[i + 1 :]:
            assert left.source.start >= right.source.end or left.source.end <= right.source.start


def test_cited_match_is_flagged_and_can_be_excluded(settings) -> None:
    text_a = 'He wrote "the mitochondria is the powerhouse of the cell" in the notes.'
    text_b = "Everyone knows the mitochondria is the powerhouse of the cell by heart."
    engine = SimilarityEngine(settings)

    included = engine.check(text_a, text_b)
    excluded = engine.check(text_a, text_b, CheckOptions(exclude_citations=True))

    assert [m.algorithm for m in included.matches] == ["exact-match"]
    assert included.matches[0].is_cited is True
    assert included.citation_analysis.total_citations == 1
    assert excluded.exclude_citations is True
    assert excluded.matches == []
    assert excluded.overall_similarity < included.overall_similarity


def test_quoted_match_after_collapsed_whitespace_is_cited(settings) -> None:
    text_a = 'Intro.\n\n   He wrote "the mitochondria is the powerhouse of the cell" in the notes.'
    text_b = "Everyone knows the mitochondria is the powerhouse of the cell by heart."

    result = SimilarityEngine(settings).check(text_a, text_b)

    assert [m.algorithm for m in result.matches] == ["exact-match"]
    match = result.matches[0]
    assert text_a[match.source.start : match.source.end] == "the mitochondria is the powerhouse of the cell"
    assert text_b[match.target.start : match.target.end] == "the mitochondria is the powerhouse of the cell"
    assert match.is_cited is True


def test_structural_spans_are_raw_text_offsets(settings) -> None:
    text_a = "Notes:   Climate change threatens coastal cities."
    text_b = "Experts warn climate change threatens island nations."

    matches = SimilarityEngine(settings).structural_matches(text_a, text_b)

    assert matches
    for match in matches:
        assert normalize_text(text_a[match.source.start : match.source.end]) == match.matched_text.strip()


def test_semantic_signal_is_injectable(settings) -> None:
    engine = SimilarityEngine(settings, semantic=lambda left, right: 1.0)

    result = engine.check(NATO, PLANETS)

    assert result.signals.semantic == 100
    assert result.overall_similarity == 20


def test_semantic_signal_off_when_analysis_disabled(settings) -> None:
    result = SimilarityEngine(settings).check(FOX, FOX, CheckOptions(include_semantic_analysis=False))

    assert result.signals.semantic == 0
    assert result.overall_similarity == 80


def test_web_matches_are_added_when_requested(settings) -> None:
    provider = _StaticProvider([_web_match()])
    engine = SimilarityEngine(settings, web_provider=provider)

    without_web = engine.check(FOX, FOX)
    with_web = engine.check(FOX, FOX, CheckOptions(include_web_search=True))

    assert without_web.web_matches == []
    assert len(provider.calls) == 1
    web = with_web.web_matches[0]
    assert web.algorithm == "web-search"
    assert web.source_type == "web"
    assert web.source_url == "https://example.com/fox"
    assert with_web.statistics.source_breakdown.web == 1
    assert with_web.statistics.total_matches == 2
    assert with_web.statistics.algorithms_used == ["exact-match", "web-search"]
    assert with_web.overall_similarity == without_web.overall_similarity


def test_web_provider_failure_is_not_fatal(settings) -> None:
    engine = SimilarityEngine(settings, web_provider=_FailingProvider())

    result = engine.check(FOX, FOX, CheckOptions(include_web_search=True))

    assert result.web_matches == []
    assert result.overall_similarity == 100


def test_web_provider_timeout_is_not_fatal() -> None:
    from plagscope_core.settings import EngineSettings

    settings = EngineSettings(_env_file=None, web_search_timeout_seconds=0.05)
    engine = SimilarityEngine(settings, web_provider=_SlowProvider())

    result = engine.check(FOX, FOX, CheckOptions(include_web_search=True))

    assert result.web_matches == []


def test_detect_similarity_is_structural_only(settings) -> None:
    result = detect_similarity(FOX, FOX, settings)

    assert result.overall_similarity == 100
    assert result.signals.cosine == 0
    assert result.citation_analysis.total_citations == 0


def test_comprehensive_check_function(settings) -> None:
    result = comprehensive_check(NATO, PLANETS, settings=settings)

    assert result.overall_similarity == 0


def test_signal_helpers() -> None:
    assert structural_score([], 0) == 0
    assert cosine_similarity("apple banana", "apple banana") == pytest.approx(1.0)
    assert cosine_similarity("apple apple banana", "cherry") == 0
    assert cosine_similarity("", "apple") == 0
    assert word_set_jaccard("apple banana cherry", "apple banana date") == pytest.approx(0.5)
