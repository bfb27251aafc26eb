from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from .skills import add_skill
from .utils import clean_text_list, contains_casefold, dedupe_casefold, text_blob

logger = logging.getLogger(__name__)

# Bookkeeping lists are not resume content; a keyword listed only there is not covered.
_BOOKKEEPING_KEYS = frozenset({"matchedKeywords", "missingKeywords"})


def find_missing_keywords(record: dict[str, Any], keywords: Iterable[str]) -> list[str]:
    blob = text_blob(record, skip_keys=_BOOKKEEPING_KEYS)
    return [keyword for keyword in keywords if keyword.lower() not in blob]


def enforce_keywords(record: dict[str, Any], required_keywords: Iterable[str]) -> dict[str, Any]:
    """Guarantee every required keyword appears in the record text.

    Keywords absent from the record are filed into their skill bucket. The
    keyword bookkeeping lists are updated so every required keyword is
    reported as matched.
    """
    keywords = dedupe_casefold(clean_text_list(required_keywords))
    if not keywords:
        return dict(record)

    missing = find_missing_keywords(record, keywords)
    skills = record.get("skills") or {}
    for keyword in missing:
        skills = add_skill(skills, keyword, "tailored")
    if missing:
        logger.info("keyword_coverage_injected count=%s keywords=%s", len(missing), missing)

    matched = dedupe_casefold([*clean_text_list(record.get("matchedKeywords")), *keywords])
    still_missing = [
        keyword
        for keyword in dedupe_casefold(clean_text_list(record.get("missingKeywords")))
        if not contains_casefold(keywords, keyword)
    ]

    updated = dict(record)
    updated["skills"] = skills
    updated["matchedKeywords"] = matched
    updated["missingKeywords"] = still_missing
    return updated
