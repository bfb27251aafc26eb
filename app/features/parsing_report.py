from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from app.normalize.utils import clean_text_list, dedupe_casefold
from app.schemas.resume import (
    SKILL_BUCKETS,
    UNKNOWN_COMPANY,
    UNKNOWN_DEGREE,
    UNKNOWN_INSTITUTION,
    UNKNOWN_NAME,
    UNKNOWN_TITLE,
)

MISSING_NAME_WARNING = "Could not find your name - please add it in the editor"
NO_EXPERIENCE_WARNING = "No work experience found - add it in the editor if applicable"
NO_EDUCATION_WARNING = "No education found - add it in the editor if applicable"
INCOMPLETE_EXPERIENCE_WARNING = "Some job entries may be missing company or title information"
INCOMPLETE_EDUCATION_WARNING = "Some education entries may be missing institution or degree information"

_SECTION_TERMS: dict[str, tuple[str, ...]] = {
    "summary": ("summary", "objective"),
    "experience": ("experience", "employment", "work history"),
    "education": ("education",),
    "skills": ("skill",),
    "projects": ("project",),
    "certifications": ("certification", "certificate"),
}
# A gap warning names only the section, e.g. "No work experience section detected".
_GAP_TAIL = r"(?:\s+(?:section|information|info|details|history|entries|listed|found|detected|provided|included|available))*"
_GAP_PATTERNS = {
    section: re.compile(rf"^no\s+(?:work\s+)?(?:{'|'.join(map(re.escape, terms))})s?{_GAP_TAIL}\s*[.!]?$")
    for section, terms in _SECTION_TERMS.items()
}
_NAME_NOT_FOUND_RE = re.compile(r"^(?:(?:contact|candidate|full|your)\s+)?name\s+(?:was\s+)?not\s+found\b")
_HEDGE_SECTIONS = ("summary", "experience", "education", "skills", "projects")


class ParsingReport(BaseModel):
    warnings: list[str] = Field(default_factory=list)
    needs_review: bool = False
    missing_contact: bool = False
    sections: dict[str, bool] = Field(default_factory=dict)


def section_presence(record: Mapping[str, Any]) -> dict[str, bool]:
    contact = record.get("contact") or {}
    name = (contact.get("name") or "").strip()
    skills = record.get("skills") or {}
    return {
        "contact": bool(name) and name != UNKNOWN_NAME,
        "summary": bool((record.get("summary") or "").strip()),
        "experience": bool(record.get("experience")),
        "education": bool(record.get("education")),
        "skills": any(skills.get(bucket) for bucket in SKILL_BUCKETS),
        "projects": bool(record.get("projects")),
        "certifications": bool(record.get("certifications")),
    }


def _is_contradicted(warning: str, presence: dict[str, bool]) -> bool:
    lowered = warning.strip().lower()
    for section, pattern in _GAP_PATTERNS.items():
        if presence[section] and pattern.search(lowered):
            return True
    if presence["contact"] and _NAME_NOT_FOUND_RE.match(lowered):
        return True
    if lowered.startswith("no explicit") and any(presence[section] for section in _HEDGE_SECTIONS):
        return True
    return False


def _deterministic_warnings(record: Mapping[str, Any], presence: dict[str, bool]) -> list[str]:
    warnings: list[str] = []
    contact = record.get("contact") or {}
    if (contact.get("name") or UNKNOWN_NAME) == UNKNOWN_NAME:
        warnings.append(MISSING_NAME_WARNING)
    if not presence["experience"]:
        warnings.append(NO_EXPERIENCE_WARNING)
    if not presence["education"]:
        warnings.append(NO_EDUCATION_WARNING)
    if any(
        entry.get("company") == UNKNOWN_COMPANY or entry.get("title") == UNKNOWN_TITLE
        for entry in record.get("experience") or []
    ):
        warnings.append(INCOMPLETE_EXPERIENCE_WARNING)
    if any(
        entry.get("institution") == UNKNOWN_INSTITUTION or entry.get("degree") == UNKNOWN_DEGREE
        for entry in record.get("education") or []
    ):
        warnings.append(INCOMPLETE_EDUCATION_WARNING)
    return warnings


def build_parsing_report(record: Mapping[str, Any], llm_warnings: Iterable[str] | None = None) -> ParsingReport:
    """Derive review warnings from a normalized parsed-resume record.

    Warnings reported by the parser model are dropped when the normalized
    record contradicts them, then de-duplicated. Deterministic warnings for
    known gaps follow, and each one marks the record for review.
    """
    presence = section_presence(record)
    kept = [
        warning
        for warning in dedupe_casefold(clean_text_list(llm_warnings))
        if not _is_contradicted(warning, presence)
    ]

    deterministic = _deterministic_warnings(record, presence)
    warnings = dedupe_casefold([*kept, *deterministic])

    return ParsingReport(
        warnings=warnings,
        needs_review=bool(deterministic),
        missing_contact=not presence["contact"],
        sections=presence,
    )
