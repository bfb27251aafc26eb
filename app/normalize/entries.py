from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.schemas.raw import RawCertification, RawCustomSection, RawEducation, RawExperience
from app.schemas.resume import (
    UNKNOWN_COMPANY,
    UNKNOWN_DATE,
    UNKNOWN_DEGREE,
    UNKNOWN_INSTITUTION,
    UNKNOWN_TITLE,
)

from .utils import canonical_url, clean_text, clean_text_list

_KEY_SEPARATOR = "::"


def _clean_location(value: str | None) -> str | None:
    location = clean_text(value)
    if location is None or location.lower() == "unknown":
        return None
    return location


def _with_optional(result: dict[str, Any], **fields: Any) -> dict[str, Any]:
    for name, value in fields.items():
        if value is not None:
            result[name] = value
    return result


def normalize_experience_entry(entry: RawExperience) -> dict[str, Any]:
    result: dict[str, Any] = {
        "company": clean_text(entry.company) or UNKNOWN_COMPANY,
        "title": clean_text(entry.title) or UNKNOWN_TITLE,
        "startDate": clean_text(entry.start_date) or UNKNOWN_DATE,
        "highlights": clean_text_list(entry.highlights),
    }
    return _with_optional(
        result,
        location=_clean_location(entry.location),
        endDate=clean_text(entry.end_date),
    )


def completeness_score(entry: dict[str, Any]) -> int:
    score = 0
    if entry.get("company") != UNKNOWN_COMPANY:
        score += 2
    if entry.get("title") != UNKNOWN_TITLE:
        score += 2
    if entry.get("startDate") != UNKNOWN_DATE:
        score += 1
    if entry.get("endDate"):
        score += 1
    if entry.get("location"):
        score += 1
    return score


def experience_key(entry: dict[str, Any]) -> str:
    return _KEY_SEPARATOR.join(
        [entry["company"], entry["title"], "|".join(entry["highlights"])]
    )


def dedupe_experience(entries: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Collapse identical (company, title, highlights) entries.

    The collapsed entry keeps the position of the first occurrence and the
    content of the highest-scoring variant; ties keep the earliest.
    """
    slots: dict[str, int] = {}
    output: list[dict[str, Any]] = []
    for entry in entries:
        key = experience_key(entry)
        index = slots.get(key)
        if index is None:
            slots[key] = len(output)
            output.append(entry)
        elif completeness_score(entry) > completeness_score(output[index]):
            output[index] = entry
    return output


def normalize_experience(entries: Iterable[RawExperience] | None) -> list[dict[str, Any]]:
    return dedupe_experience(normalize_experience_entry(entry) for entry in entries or [])


def normalize_education_entry(entry: RawEducation) -> dict[str, Any]:
    result: dict[str, Any] = {
        "institution": clean_text(entry.institution) or UNKNOWN_INSTITUTION,
        "degree": clean_text(entry.degree) or UNKNOWN_DEGREE,
    }
    return _with_optional(
        result,
        field=clean_text(entry.field),
        location=_clean_location(entry.location),
        startDate=clean_text(entry.start_date),
        endDate=clean_text(entry.end_date),
        gpa=clean_text(entry.gpa),
        highlights=clean_text_list(entry.highlights) or None,
    )


def normalize_education(entries: Iterable[RawEducation] | None) -> list[dict[str, Any]]:
    return [normalize_education_entry(entry) for entry in entries or []]


def normalize_certifications(entries: Iterable[RawCertification] | None) -> list[dict[str, Any]]:
    output: list[dict[str, Any]] = []
    for entry in entries or []:
        name = clean_text(entry.name)
        if name is None:
            continue
        output.append(
            _with_optional(
                {"name": name},
                issuer=clean_text(entry.issuer),
                date=clean_text(entry.date),
                url=canonical_url(entry.url),
            )
        )
    return output


def normalize_custom_sections(entries: Iterable[RawCustomSection] | None) -> list[dict[str, Any]]:
    output: list[dict[str, Any]] = []
    for entry in entries or []:
        section_id = clean_text(entry.id)
        title = clean_text(entry.title)
        if section_id is None or title is None:
            continue
        bullets = clean_text_list(entry.bullets)
        section_type = (clean_text(entry.type) or "").lower()
        if section_type not in {"text", "bullets"}:
            section_type = "bullets" if bullets else "text"
        output.append(
            _with_optional(
                {"id": section_id, "title": title, "type": section_type},
                content=clean_text(entry.content),
                bullets=bullets or None,
            )
        )
    return output
