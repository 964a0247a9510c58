from __future__ import annotations

import re
from re import Pattern

_AUTHOR = r"[A-Z][a-z]+(?:\s+[A-Z][a-z]+)*"

DOUBLE_QUOTE: Pattern[str] = re.compile(r'"([^"]{10,}?)"')
SINGLE_QUOTE: Pattern[str] = re.compile(r"'([^']{20,}?)'")

QUOTE_PATTERNS: tuple[Pattern[str], ...] = (
    DOUBLE_QUOTE,
    SINGLE_QUOTE,
)

AUTHOR_COMMA_YEAR: Pattern[str] = re.compile(rf"\(({_AUTHOR}),\s*(\d{{4}})\)")
AUTHOR_YEAR: Pattern[str] = re.compile(rf"\(({_AUTHOR})\s+(\d{{4}})\)")
AUTHOR_ET_AL_YEAR: Pattern[str] = re.compile(rf"\(({_AUTHOR}\s+et\s+al\.),\s*(\d{{4}})\)")
BRACKET_AUTHOR_YEAR: Pattern[str] = re.compile(rf"\[({_AUTHOR}),\s*(\d{{4}})\]")
NUMBERED: Pattern[str] = re.compile(r"\[(\d+)\]")

PARENTHETICAL_PATTERNS: tuple[Pattern[str], ...] = (
    AUTHOR_COMMA_YEAR,
    AUTHOR_YEAR,
    AUTHOR_ET_AL_YEAR,
    BRACKET_AUTHOR_YEAR,
    NUMBERED,
)

REFERENCE_HEADING: Pattern[str] = re.compile(
    r"^[ \t]*(?:references|bibliography|works[ \t]+cited|sources)[ \t]*:?[ \t]*\r?$",
    re.IGNORECASE | re.MULTILINE,
)
BIBLIOGRAPHY_HEADING: Pattern[str] = re.compile(
    r"^[ \t]*bibliography[ \t]*:?[ \t]*\r?$",
    re.IGNORECASE | re.MULTILINE,
)
# A roman-numeral section heading closes a reference block.
SECTION_END: Pattern[str] = re.compile(r"^[ \t]*[IVX]+\.[ \t]", re.MULTILINE)
LINE_BREAK: Pattern[str] = re.compile(r"\r?\n")

REFERENCE_ENTRY_BOUNDARY: Pattern[str] = re.compile(r"\r?\n[ \t]*\r?\n|\r?\n(?=[ \t]*(?:\d+\.|\[|\w+,))")
BIBLIOGRAPHY_ENTRY_BOUNDARY: Pattern[str] = re.compile(r"\r?\n[ \t]*\r?\n|\r?\n(?=[ \t]*\w+,)")

ENTRY_NUMBERING: Pattern[str] = re.compile(r"^(?:\[\d+\]|\d+\.)\s*")
ENTRY_AUTHOR: Pattern[str] = re.compile(r"^([A-Z][a-z]+(?:,\s*[A-Z]\.?)*(?:\s+[A-Z][a-z]+)*)")
ENTRY_YEAR: Pattern[str] = re.compile(r"\((\d{4})\)|\b(\d{4})\b")
ENTRY_TITLE: Pattern[str] = re.compile(r"\"([^\"]+)\"|'([^']+)'|_([^_]+)_")
ENTRY_DOI: Pattern[str] = re.compile(r"doi:\s*([^\s,]+)", re.IGNORECASE)
ENTRY_URL: Pattern[str] = re.compile(r"https?://[^\s,)]+")
