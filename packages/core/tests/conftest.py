from __future__ import annotations

import pytest

from plagscope_core.settings import EngineSettings
from plagscope_core.types import Citation, Match, Span


@pytest.fixture
def settings() -> EngineSettings:
    return EngineSettings(_env_file=None, web_query_delay_seconds=0.0)


def make_match(start: int, end: int, algorithm: str = "exact-match", similarity: float = 1.0) -> Match:
    text = "x" * (end - start)
    return Match(
        source=Span(start=start, end=end),
        target=Span(start=start, end=end),
        similarity=similarity,
        algorithm=algorithm,
        confidence=similarity,
        matched_text=text,
        source_text=text,
    )


def make_citation(start: int, end: int, citation_type: str = "quote") -> Citation:
    return Citation(id=f"c-{start}", text="cited", type=citation_type, span=Span(start=start, end=end))
