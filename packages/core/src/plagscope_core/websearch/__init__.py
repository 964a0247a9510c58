from .google import GoogleSearchProvider, SearchResult, WebSource, WebSourceCache, extract_page_text
from .phrases import build_search_queries, extract_key_phrases, find_text_matches
from .provider import NullWebMatchProvider, WebMatchProvider, fetch_web_matches

__all__ = [
    "GoogleSearchProvider",
    "NullWebMatchProvider",
    "SearchResult",
    "WebMatchProvider",
    "WebSource",
    "WebSourceCache",
    "build_search_queries",
    "extract_key_phrases",
    "extract_page_text",
    "fetch_web_matches",
    "find_text_matches",
]
