from __future__ import annotations

import hashlib
import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import requests
from bs4 import BeautifulSoup

from plagscope_core.errors import ExternalCollaboratorError
from plagscope_core.logging_config import get_logger
from plagscope_core.settings import EngineSettings
from plagscope_core.types import WebMatch

from .phrases import build_search_queries, find_text_matches

logger = get_logger("websearch.google")

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
MIN_CONTENT_LENGTH = 100

_STRIPPED_TAGS = ("script", "style", "nav", "header", "footer", "aside")
_CONTENT_SELECTORS = (
    "main",
    "article",
    ".content",
    ".main-content",
    ".post-content",
    ".entry-content",
    "#content",
    ".container",
)
_WHITESPACE_RE = re.compile(r"\s+")

HttpGet = Callable[..., requests.Response]


@dataclass(frozen=True)
class SearchResult:
    title: str
    link: str
    snippet: str


@dataclass(frozen=True)
class WebSource:
    url: str
    title: str
    content: str
    content_hash: str


@dataclass
class WebSourceCache:
    """Scraped pages keyed by URL."""

    _sources: dict[str, WebSource] = field(default_factory=dict)

    def get(self, url: str) -> WebSource | None:
        return self._sources.get(url)

    def save(self, source: WebSource) -> None:
        self._sources[source.url] = source

    def __len__(self) -> int:
        return len(self._sources)


def extract_page_text(html: str) -> tuple[str, str]:
    """Return ``(title, main_text)`` of an HTML page."""
    soup = BeautifulSoup(html, "html.parser")
    title = soup.title.get_text(strip=True) if soup.title else ""

    for tag in soup(list(_STRIPPED_TAGS)):
        tag.decompose()

    content = ""
    for selector in _CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            content = element.get_text(" ")
            break
    if not content and soup.body is not None:
        content = soup.body.get_text(" ")

    return title, _WHITESPACE_RE.sub(" ", content).strip()


class GoogleSearchProvider:
    def __init__(
        self,
        api_key: str | None,
        engine_id: str | None,
        *,
        max_sources: int = 5,
        request_timeout_seconds: float = 10.0,
        query_delay_seconds: float = 1.0,
        cache: WebSourceCache | None = None,
        http_get: HttpGet = requests.get,
    ) -> None:
        self.api_key = api_key
        self.engine_id = engine_id
        self.max_sources = max_sources
        self.request_timeout_seconds = request_timeout_seconds
        self.query_delay_seconds = max(0.0, query_delay_seconds)
        self.cache = cache if cache is not None else WebSourceCache()
        self._http_get = http_get

    @classmethod
    def from_settings(cls, settings: EngineSettings, **kwargs: Any) -> GoogleSearchProvider:
        return cls(
            settings.google_search_api_key,
            settings.google_search_engine_id,
            max_sources=settings.web_max_sources,
            request_timeout_seconds=settings.web_request_timeout_seconds,
            query_delay_seconds=settings.web_query_delay_seconds,
            **kwargs,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key and self.engine_id)

    def _get_json(self, url: str, params: dict[str, Any]) -> Any:
        try:
            response = self._http_get(url, params=params, timeout=self.request_timeout_seconds)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise ExternalCollaboratorError(f"search request failed: {exc}") from exc
        except ValueError as exc:
            raise ExternalCollaboratorError(f"search response was not valid JSON: {exc}") from exc

    def search(self, query: str) -> list[SearchResult]:
        if not self.configured:
            logger.info("Google Search API not configured, skipping web search")
            return []

        payload = self._get_json(
            GOOGLE_SEARCH_URL,
            {
                "key": self.api_key,
                "cx": self.engine_id,
                "q": query,
                "num": min(self.max_sources, 10),
                "fields": "items(title,link,snippet)",
            },
        )
        items = payload.get("items", []) if isinstance(payload, dict) else []
        if not isinstance(items, list):
            return []

        results: list[SearchResult] = []
        for item in items:
            if not isinstance(item, dict) or not item.get("link"):
                continue
            results.append(
                SearchResult(
                    title=item.get("title") or "",
                    link=item["link"],
                    snippet=item.get("snippet") or "",
                )
            )
        return results

    def scrape(self, url: str) -> WebSource:
        cached = self.cache.get(url)
        if cached is not None:
            return cached

        try:
            response = self._http_get(url, headers={"User-Agent": USER_AGENT}, timeout=self.request_timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise ExternalCollaboratorError(f"scrape of {url} failed: {exc}") from exc

        title, content = extract_page_text(response.text)
        source = WebSource(
            url=url,
            title=title or url,
            content=content,
            content_hash=hashlib.md5(content.encode("utf-8")).hexdigest(),
        )
        if len(content) > MIN_CONTENT_LENGTH:
            self.cache.save(source)
        return source

    def find_matches(self, text: str) -> list[WebMatch]:
        matches: list[WebMatch] = []
        queries = build_search_queries(text)
        for index, query in enumerate(queries):
            try:
                results = self.search(query)
            except ExternalCollaboratorError as exc:
                logger.warning("Web search failed for query %r: %s", query, exc)
                continue

            for result in results:
                try:
                    source = self.scrape(result.link)
                except ExternalCollaboratorError as exc:
                    logger.warning("Skipping %s: %s", result.link, exc)
                    continue
                if len(source.content) <= MIN_CONTENT_LENGTH:
                    continue
                matches.extend(find_text_matches(text, source.content, result.title, result.link))

            if self.query_delay_seconds and index < len(queries) - 1:
                time.sleep(self.query_delay_seconds)

        logger.debug("Web search produced %d match(es) from %d quer(ies)", len(matches), len(queries))
        return matches
