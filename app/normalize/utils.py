from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import HttpUrl, TypeAdapter, ValidationError

_WHITESPACE_RE = re.compile(r"\s+")
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+(?:\s+|$)")

_HTTP_URL = TypeAdapter(HttpUrl)

MIN_URL_LENGTH = 10


def normalize_line(line: str) -> str:
    return _WHITESPACE_RE.sub(" ", line).strip()


def clean_text(value: str | None) -> str | None:
    """Trim a raw string; blank strings become ``None``."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def clean_text_list(values: Iterable[str] | None) -> list[str]:
    if not values:
        return []
    output: list[str] = []
    for value in values:
        cleaned = clean_text(value)
        if cleaned:
            output.append(cleaned)
    return output


def dedupe_casefold(values: Iterable[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first-seen casing."""
    seen: set[str] = set()
    output: list[str] = []
    for value in values:
        key = value.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        output.append(value.strip())
    return output


def contains_casefold(values: Iterable[str], candidate: str) -> bool:
    key = candidate.strip().lower()
    return any(value.strip().lower() == key for value in values)


def is_placeholder_url(value: str) -> bool:
    return "." not in value or len(value) < MIN_URL_LENGTH


def has_url_scheme(value: str) -> bool:
    return bool(_SCHEME_RE.match(value))


def strip_url_scheme(value: str) -> str:
    return _SCHEME_RE.sub("", value, count=1)


def is_valid_http_url(value: str) -> bool:
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        return False
    return True


def canonical_url(value: str | None) -> str | None:
    """Return the scheme-less display form of a URL, or ``None`` when unusable.

    Usernames and placeholders (no dot, shorter than ten characters) are
    rejected both before and after the scheme is removed, so the stored form
    always passes this check again. Only values carrying an http(s) scheme are
    parsed as URLs; scheme-less values are stored as given.
    """
    url = clean_text(value)
    if url is None or is_placeholder_url(url):
        return None
    if not has_url_scheme(url):
        return url
    if not is_valid_http_url(url):
        return None
    stripped = strip_url_scheme(url)
    if is_placeholder_url(stripped):
        return None
    return stripped


def split_sentences(text: str | None) -> list[str]:
    if not text:
        return []
    return [part.strip() for part in _SENTENCE_SPLIT_RE.split(text) if part.strip()]


def prune_empty(value: Any) -> Any:
    """Recursively drop ``None`` and blank-string entries.

    Empty lists are kept: required list fields must survive pruning.
    """
    if isinstance(value, Mapping):
        pruned: dict[str, Any] = {}
        for key, item in value.items():
            if item is None or (isinstance(item, str) and not item.strip()):
                continue
            pruned[key] = prune_empty(item)
        return pruned
    if isinstance(value, list):
        return [
            prune_empty(item)
            for item in value
            if item is not None and not (isinstance(item, str) and not item.strip())
        ]
    return value


def text_blob(value: Any, *, skip_keys: frozenset[str] = frozenset()) -> str:
    """Concatenate every string leaf of a nested record, lower-cased."""
    parts: list[str] = []

    def walk(node: Any) -> None:
        if isinstance(node, str):
            parts.append(node)
        elif isinstance(node, Mapping):
            for key, item in node.items():
                if key in skip_keys:
                    continue
                walk(item)
        elif isinstance(node, list):
            for item in node:
                walk(item)

    walk(value)
    return "\n".join(parts).lower()
