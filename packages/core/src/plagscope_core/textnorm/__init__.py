from .normalize import (
    normalize_text,
    normalize_with_offsets,
    split_into_sentences,
    split_into_words,
    text_statistics,
    word_spans,
)
from .offsets import OffsetMap

__all__ = [
    "OffsetMap",
    "normalize_text",
    "normalize_with_offsets",
    "split_into_words",
    "split_into_sentences",
    "text_statistics",
    "word_spans",
]
