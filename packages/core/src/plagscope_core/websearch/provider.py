from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Protocol

from plagscope_core.logging_config import get_logger
from plagscope_core.types import WebMatch

logger = get_logger("websearch")


class WebMatchProvider(Protocol):
    """Search + scrape collaborator. Implementations must fail soft."""

    def find_matches(self, text: str) -> list[WebMatch]: ...


class NullWebMatchProvider:
    def find_matches(self, text: str) -> list[WebMatch]:
        _ = text
        return []


def fetch_web_matches(provider: WebMatchProvider, text: str, *, timeout_seconds: float) -> list[WebMatch]:
    """Call the provider bounded by ``timeout_seconds``; any failure yields ``[]``."""
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="plagscope-web")
    future = executor.submit(provider.find_matches, text)
    try:
        return list(future.result(timeout=timeout_seconds))
    except FuturesTimeoutError:
        logger.warning("Web match provider timed out after %.1fs, continuing without web matches", timeout_seconds)
        return []
    except Exception:  # noqa: BLE001
        logger.warning("Web match provider failed, continuing without web matches", exc_info=True)
        return []
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
