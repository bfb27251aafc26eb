from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ValidationError

from app.features.parsing_report import build_parsing_report
from app.schemas.raw import RawResume
from app.schemas.resume import UNKNOWN_NAME, Contact, ParsedResume, ParseResult, Skills, TailoredResume

from .contact import sanitize_contact
from .entries import (
    normalize_certifications,
    normalize_custom_sections,
    normalize_education,
    normalize_experience,
)
from .keywords import enforce_keywords
from .projects import normalize_projects
from .skills import bucketize_skills
from .utils import clean_text, clean_text_list, dedupe_casefold, prune_empty

logger = logging.getLogger(__name__)

_WRAPPER_KEYS = ("tailoredResume", "resume")


class ValidationIssue(BaseModel):
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class TailoredResumeValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        super().__init__(f"Failed to tailor resume: {', '.join(str(issue) for issue in issues)}")


def validation_issues(exc: ValidationError) -> list[ValidationIssue]:
    return [
        ValidationIssue(path=".".join(str(part) for part in error["loc"]), message=error["msg"])
        for error in exc.errors()
    ]


def unwrap_tailored_payload(payload: Any) -> Any:
    """Return the resume object when the model wrapped it in an outer key."""
    if isinstance(payload, dict):
        for key in _WRAPPER_KEYS:
            inner = payload.get(key)
            if isinstance(inner, dict):
                return inner
    return payload


def _fill_from_base(source: RawResume, base: RawResume | None) -> RawResume:
    if base is None:
        return source
    updates: dict[str, Any] = {}
    for name in ("contact", "experience", "education", "skills", "projects", "certifications"):
        if getattr(source, name) is None:
            updates[name] = getattr(base, name)
    if not clean_text(source.summary):
        updates["summary"] = base.summary
    return source.model_copy(update=updates)


def _build_parsed_record(source: RawResume) -> dict[str, Any]:
    return {
        "contact": sanitize_contact(source.contact),
        "summary": clean_text(source.summary),
        "experience": normalize_experience(source.experience),
        "education": normalize_education(source.education),
        "skills": bucketize_skills(source.skills, "parsed"),
        "projects": normalize_projects(source.projects),
        "certifications": normalize_certifications(source.certifications),
    }


def _build_tailored_record(source: RawResume) -> dict[str, Any]:
    record: dict[str, Any] = {
        "contact": sanitize_contact(source.contact),
        "summary": clean_text(source.summary) or "",
        "experience": normalize_experience(source.experience),
        "education": normalize_education(source.education),
        "skills": bucketize_skills(source.skills, "tailored"),
        "matchedKeywords": dedupe_casefold(clean_text_list(source.matched_keywords)),
        "missingKeywords": dedupe_casefold(clean_text_list(source.missing_keywords)),
    }
    if source.projects is not None:
        record["projects"] = normalize_projects(source.projects)
    if source.certifications is not None:
        record["certifications"] = normalize_certifications(source.certifications)
    if source.custom_sections is not None:
        record["customSections"] = normalize_custom_sections(source.custom_sections)
    return record


def _fallback_resume(record: dict[str, Any]) -> ParsedResume:
    contact = record.get("contact") or {}
    return ParsedResume(
        contact=Contact(name=contact.get("name") or UNKNOWN_NAME),
        summary=record.get("summary"),
        experience=[],
        education=[],
        skills=Skills.model_validate(record.get("skills") or {}),
        projects=[],
        certifications=[],
    )


def normalize_parsed_resume(raw: Any) -> ParseResult:
    """Normalize a freshly parsed upload. Never raises on content.

    A record that still fails validation is replaced by a minimal renderable
    fallback, with the validation issues appended to the warnings.
    """
    source = RawResume.from_payload(raw)
    record = prune_empty(_build_parsed_record(source))
    report = build_parsing_report(record, source.parse_warnings)

    try:
        resume = ParsedResume.model_validate(record)
    except ValidationError as exc:
        issues = validation_issues(exc)
        logger.warning("resume_parse_fallback issues=%s", [str(issue) for issue in issues])
        warnings = [*report.warnings, *(f"Parsing issue: {issue.path} - {issue.message}" for issue in issues)]
        return ParseResult(resume=_fallback_resume(record), warnings=warnings, needs_review=True)

    return ParseResult(resume=resume, warnings=report.warnings, needs_review=report.needs_review)


def normalize_tailored_resume(
    raw: Any,
    selected_keywords: Iterable[str] | None = None,
    *,
    base: Any = None,
) -> TailoredResume:
    """Normalize tailoring output and guarantee keyword coverage.

    ``base`` (usually the parsed resume the tailoring started from) supplies
    sections the model left out. Raises ``TailoredResumeValidationError``
    when the result does not validate.
    """
    source = RawResume.from_payload(unwrap_tailored_payload(raw))
    if base is not None:
        source = _fill_from_base(source, RawResume.from_payload(base))

    record = _build_tailored_record(source)
    record = enforce_keywords(record, selected_keywords or [])
    record = prune_empty(record)

    try:
        return TailoredResume.model_validate(record)
    except ValidationError as exc:
        issues = validation_issues(exc)
        logger.error("tailored_resume_invalid issues=%s", [str(issue) for issue in issues])
        raise TailoredResumeValidationError(issues) from exc
