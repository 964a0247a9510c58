from __future__ import annotations


class PlagscopeError(Exception):
    """Base class for plagscope errors."""


class InputError(PlagscopeError):
    """Raised for caller-level validation failures (empty or too-short text)."""


class DocumentNotFoundError(InputError):
    """Raised when a repository lookup misses."""


class ConfigurationError(PlagscopeError):
    """Raised for invalid numeric configuration."""


class ExternalCollaboratorError(PlagscopeError):
    """Raised for web search/scrape failures. Never escapes a provider."""


def validate_input_text(text: str, *, min_length: int = 1, label: str = "text") -> str:
    if text is None or not text.strip():
        raise InputError(f"{label} must be non-empty")
    stripped = text.strip()
    if len(stripped) < min_length:
        raise InputError(f"{label} must be at least {min_length} characters, got {len(stripped)}")
    return text
