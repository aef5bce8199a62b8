# File: ai_txt/utils.py
"""ai_txt.utils: value sanitizing for the text format and the rate-limit grammar."""

from __future__ import annotations

import re
from typing import Any, Optional, Sequence

from ai_txt.models import RateLimit

__all__: Sequence[str] = (
    "MAX_VALUE_LENGTH",
    "sanitize_value",
    "parse_rate_limit",
    "format_rate_limit",
)

MAX_VALUE_LENGTH = 500

_LINE_BREAKS_RE = re.compile(r"[\r\n]")
# C0/C1 controls, bidi embeddings/overrides/isolates, zero-width characters and BOM
_UNSAFE_CHARS_RE = re.compile(
    r"[\x00-\x1f\x7f-\x9f\u202a-\u202e\u2066-\u2069\u200b-\u200f\u2060\ufeff]"
)
_RATE_LIMIT_RE = re.compile(r"^(\d+)/(second|minute|hour|day)$")


def sanitize_value(value: Any, max_length: int = MAX_VALUE_LENGTH) -> str:
    """Make *value* safe to emit as a single ``Key: value`` line.

    Line breaks become spaces (one per character, so CRLF yields two),
    control and invisible formatting characters are dropped, the result is
    trimmed and cut to *max_length*.
    """
    text = "" if value is None else str(value)
    text = _LINE_BREAKS_RE.sub(" ", text)
    text = _UNSAFE_CHARS_RE.sub("", text)
    return text.strip()[:max_length]


def parse_rate_limit(value: str) -> Optional[RateLimit]:
    """Parse ``"60/minute"``; returns None for anything malformed or non-positive."""
    match = _RATE_LIMIT_RE.match(value)
    if not match:
        return None
    requests = int(match.group(1))
    if requests <= 0:
        return None
    return RateLimit(requests=requests, window=match.group(2))


def format_rate_limit(requests: int, window: str) -> str:
    return f"{requests}/{window}"
