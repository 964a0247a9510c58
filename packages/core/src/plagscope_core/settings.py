from __future__ import annotations

import math

from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError
from .matching.ngram import SUPPORTED_NGRAM_SIZES


class EngineSettings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="PLAGSCOPE_",
        env_file=(".env", "packages/core/.env"),
        env_file_encoding="utf-8",
    )

    exact_min_length: int = 15
    ngram_sizes: tuple[int, ...] = (3, 4, 5)
    paraphrase_min_sentence_length: int = 30
    paraphrase_combined_threshold: float = 0.6
    paraphrase_lexical_ceiling: float = 0.8

    structural_weight: float = 0.4
    cosine_weight: float = 0.2
    jaccard_weight: float = 0.2
    semantic_weight: float = 0.2

    web_search_timeout_seconds: float = 30.0
    web_request_timeout_seconds: float = 10.0
    web_query_delay_seconds: float = 1.0
    web_max_sources: int = 5
    max_reported_matches: int = 50

    google_search_api_key: str | None = None
    google_search_engine_id: str | None = None

    log_level: str = "INFO"

    @field_validator("ngram_sizes")
    @classmethod
    def _check_ngram_sizes(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value:
            raise ValueError("ngram_sizes must name at least one size")
        unsupported = [size for size in value if size not in SUPPORTED_NGRAM_SIZES]
        if unsupported:
            raise ValueError(f"unsupported n-gram sizes {unsupported}; expected a subset of {SUPPORTED_NGRAM_SIZES}")
        return value

    @field_validator("exact_min_length", "paraphrase_min_sentence_length", "web_max_sources")
    @classmethod
    def _check_positive_int(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be a positive integer")
        return value

    @field_validator("web_search_timeout_seconds", "web_request_timeout_seconds")
    @classmethod
    def _check_positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeouts must be positive")
        return value

    @model_validator(mode="after")
    def _check_weights(self) -> EngineSettings:
        total = self.structural_weight + self.cosine_weight + self.jaccard_weight + self.semantic_weight
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"signal weights must sum to 1.0, got {total}")
        return self


def load_settings(**overrides: object) -> EngineSettings:
    try:
        return EngineSettings(**overrides)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid engine settings: {exc}") from exc
