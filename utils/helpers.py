"""Helper utilities for ServiceNow Knowledge Search."""

import re
from typing import List

_TOKEN_RE = re.compile(r"[a-z0-9]+")


def normalize_query(query: str) -> str:
    """Normalize query whitespace."""
    return " ".join(query.split()).strip()


def query_tokens(query: str, min_length: int = 3) -> List[str]:
    """Lowercase word tokens long enough to be meaningful."""
    return [t for t in _TOKEN_RE.findall(query.lower()) if len(t) >= min_length]


def truncate(text: str, limit: int, suffix: str = "...") -> str:
    """Cut text at a word boundary so it fits within limit characters."""
    text = " ".join((text or "").split())
    if len(text) <= limit:
        return text
    cut = text[: max(0, limit - len(suffix))].rsplit(" ", 1)[0]
    return f"{cut}{suffix}"
