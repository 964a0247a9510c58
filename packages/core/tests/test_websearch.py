from __future__ import annotations

import time
from typing import Any

import pytest
import requests

from plagscope_core.types import WebMatch
from plagscope_core.websearch import (
    GoogleSearchProvider,
    NullWebMatchProvider,
    build_search_queries,
    extract_key_phrases,
    extract_page_text,
    fetch_web_matches,
    find_text_matches,
)
from plagscope_core.websearch.google import GOOGLE_SEARCH_URL
from plagscope_core.websearch.phrases import remove_duplicate_web_matches

QUERY_TEXT = "This sentence is long enough to become a web search query for the provider. Short."
PAGE_HTML = (
    "<html><head><title>Example A</title><script>var x = 1;</script></head><body>"
    "<nav>menu</nav><article>Elsewhere online: this sentence is long enough to become a web search "
    "query for the provider, and more filler text is here to pad things out.</article>"
    "<footer>footer links</footer></body></html>"
)


class _FakeResponse:
    def __init__(self, payload: Any = None, text: str = "", status_code: int = 200):
        self._payload = payload
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"http error {self.status_code}")

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json body")
        return self._payload


def _search_payload(*links: str) -> dict[str, Any]:
    return {"items": [{"title": f"Example {link[-1].upper()}", "link": link} for link in links]}


def _provider(http_get, **kwargs: Any) -> GoogleSearchProvider:
    return GoogleSearchProvider("key", "engine", query_delay_seconds=0, http_get=http_get, **kwargs)


def test_find_text_matches_extends_to_longest_phrase() -> None:
    input_text = "Our essay says the exact shared phrase appearing inside the web page, then continues."
    web = "A blog post where the exact shared phrase appearing inside the web page is quoted verbatim."

    matches = find_text_matches(input_text, web, "Blog", "https://blog.example")

    assert len(matches) == 1
    match = matches[0]
    assert match.matched_text == " the exact shared phrase appearing inside the web page"
    assert (match.start_position, match.end_position) == (14, 68)
    assert match.similarity == pytest.approx(0.54)
    assert match.url == "https://blog.example"
    assert match.title == "Blog"


def test_find_text_matches_nothing_shared() -> None:
    assert find_text_matches("completely different words here", "nothing in common at all", "t", "u") == []


def test_remove_duplicate_web_matches_prefers_similarity_and_limits() -> None:
    def web(start: int, end: int, similarity: float) -> WebMatch:
        return WebMatch(
            url="u", title="t", matched_text="m", source_text="m",
            similarity=similarity, start_position=start, end_position=end,
        )

    kept = remove_duplicate_web_matches([web(0, 30, 0.3), web(10, 60, 0.5), web(70, 90, 0.2)])
    assert [(m.start_position, m.end_position) for m in kept] == [(10, 60), (70, 90)]

    many = [web(i * 10, i * 10 + 5, 0.1) for i in range(15)]
    assert len(remove_duplicate_web_matches(many)) == 10


def test_build_search_queries_and_key_phrases() -> None:
    queries = build_search_queries(QUERY_TEXT)

    assert queries == ['"This sentence is long enough to become a web search query for the provider"']
    assert build_search_queries("Too short. Also short.") == []
    phrases = extract_key_phrases(QUERY_TEXT)
    assert len(phrases) == 1
    assert " the " not in f" {phrases[0]} "


def test_extract_page_text_strips_chrome() -> None:
    title, content = extract_page_text(PAGE_HTML)

    assert title == "Example A"
    assert content.startswith("Elsewhere online: this sentence")
    assert "menu" not in content
    assert "footer" not in content
    assert "var x" not in content


def test_unconfigured_provider_skips_network() -> None:
    def forbidden_get(*args: Any, **kwargs: Any) -> _FakeResponse:
        raise AssertionError("network must not be used")

    provider = GoogleSearchProvider(None, None, query_delay_seconds=0, http_get=forbidden_get)

    assert provider.configured is False
    assert provider.find_matches(QUERY_TEXT) == []


def test_provider_finds_matches_with_stubbed_http() -> None:
    calls: list[str] = []

    def fake_get(url: str, **kwargs: Any) -> _FakeResponse:
        calls.append(url)
        if url == GOOGLE_SEARCH_URL:
            assert kwargs["params"]["q"].startswith('"This sentence')
            return _FakeResponse(_search_payload("https://example.com/a"))
        return _FakeResponse(text=PAGE_HTML)

    provider = _provider(fake_get)

    matches = provider.find_matches(QUERY_TEXT)

    assert len(matches) == 1
    assert matches[0].url == "https://example.com/a"
    assert matches[0].title == "Example A"
    assert matches[0].similarity == pytest.approx(0.74)
    assert len(provider.cache) == 1

    provider.find_matches(QUERY_TEXT)
    assert calls.count("https://example.com/a") == 1


def test_provider_search_failure_fails_soft() -> None:
    def failing_get(*args: Any, **kwargs: Any) -> _FakeResponse:
        raise requests.ConnectionError("dns failure")

    assert _provider(failing_get).find_matches(QUERY_TEXT) == []


def test_provider_invalid_json_fails_soft() -> None:
    def fake_get(url: str, **kwargs: Any) -> _FakeResponse:
        return _FakeResponse(payload=None)

    assert _provider(fake_get).find_matches(QUERY_TEXT) == []


def test_provider_skips_unreachable_pages() -> None:
    def fake_get(url: str, **kwargs: Any) -> _FakeResponse:
        if url == GOOGLE_SEARCH_URL:
            return _FakeResponse(_search_payload("https://example.com/b", "https://example.com/a"))
        if url.endswith("/b"):
            return _FakeResponse(status_code=500)
        return _FakeResponse(text=PAGE_HTML)

    matches = _provider(fake_get).find_matches(QUERY_TEXT)

    assert [m.url for m in matches] == ["https://example.com/a"]


def test_fetch_web_matches_bounds_and_recovers() -> None:
    class Boom:
        def find_matches(self, text: str) -> list[WebMatch]:
            raise ValueError("parse error")

    class Slow:
        def find_matches(self, text: str) -> list[WebMatch]:
            time.sleep(0.5)
            return []

    assert fetch_web_matches(NullWebMatchProvider(), "text", timeout_seconds=1) == []
    assert fetch_web_matches(Boom(), "text", timeout_seconds=1) == []
    assert fetch_web_matches(Slow(), "text", timeout_seconds=0.05) == []
