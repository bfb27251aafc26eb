from __future__ import annotations

import logging
import uuid
from typing import Any

from app.core.config import settings
from app.normalize.pipeline import normalize_parsed_resume, normalize_tailored_resume
from app.normalize.utils import clean_text, clean_text_list, dedupe_casefold
from app.parsing.parse import extract_document
from app.schemas.api import (
    CoverLetterRequest,
    CoverLetterResponse,
    ParseResumeResponse,
    TailorResumeRequest,
    TailorResumeResponse,
)
from app.schemas.raw import RawJobDescription
from app.schemas.resume import ExtractedJobDescription, ParseResult

from .prompts import (
    COVER_LETTER_PROMPT,
    EXTRACT_JOB_DESCRIPTION_PROMPT,
    PARSE_RESUME_PROMPT,
    TAILOR_RESUME_PROMPT,
    build_cover_letter_payload,
    build_tailor_payload,
)
from .resume_llm import ResumeLLMError, json_completion

logger = logging.getLogger(__name__)


class ResumeInputError(ValueError):
    pass


def _require_job_description(text: str) -> str:
    cleaned = text.strip()
    if len(cleaned) < settings.min_job_description_chars:
        raise ResumeInputError(
            f"Job description must be at least {settings.min_job_description_chars} characters"
        )
    return cleaned


def parse_resume_text(text: str) -> ParseResult:
    raw = json_completion(
        system_prompt=PARSE_RESUME_PROMPT,
        user_prompt=text,
        model=settings.resume_parse_model,
        temperature=0.1,
        task="parse_resume",
    )
    result = normalize_parsed_resume(raw)
    logger.info(
        "resume_parsed experience=%s education=%s warnings=%s needs_review=%s",
        len(result.resume.experience),
        len(result.resume.education),
        len(result.warnings),
        result.needs_review,
    )
    return result


def parse_resume_upload(filename: str, content: bytes) -> ParseResumeResponse:
    document = extract_document(content, filename)
    if document.char_count < settings.min_resume_text_chars:
        raise ResumeInputError(
            "Could not extract enough text from the file. Please try a different file or format."
        )
    result = parse_resume_text(document.text)
    return ParseResumeResponse(
        parsed_resume=result.resume,
        extracted_text=document.text,
        warnings=result.warnings,
        needs_review=result.needs_review,
    )


def normalize_resume_payload(payload: Any) -> ParseResumeResponse:
    result = normalize_parsed_resume(payload)
    return ParseResumeResponse(
        parsed_resume=result.resume,
        warnings=result.warnings,
        needs_review=result.needs_review,
    )


def coerce_job_description(payload: Any) -> ExtractedJobDescription:
    raw = RawJobDescription.model_validate(payload if isinstance(payload, dict) else {})
    preferred = dedupe_casefold(clean_text_list(raw.preferred_skills))
    responsibilities = clean_text_list(raw.responsibilities)
    return ExtractedJobDescription(
        title=clean_text(raw.title),
        company=clean_text(raw.company),
        required_skills=dedupe_casefold(clean_text_list(raw.required_skills)),
        preferred_skills=preferred or None,
        required_experience=clean_text(raw.required_experience),
        responsibilities=responsibilities or None,
        keywords=dedupe_casefold(clean_text_list(raw.keywords)),
    )


def extract_job_description(text: str) -> ExtractedJobDescription:
    raw = json_completion(
        system_prompt=EXTRACT_JOB_DESCRIPTION_PROMPT,
        user_prompt=text,
        model=settings.resume_utility_model,
        temperature=0.1,
        max_output_tokens=2000,
        task="extract_job_description",
    )
    return coerce_job_description(raw)


def tailor_resume(request: TailorResumeRequest) -> TailorResumeResponse:
    job_description_text = _require_job_description(request.job_description)
    job_description = extract_job_description(job_description_text)
    parsed_record = request.parsed_resume.to_record()
    keywords = dedupe_casefold(clean_text_list(request.selected_keywords))

    raw = json_completion(
        system_prompt=TAILOR_RESUME_PROMPT,
        user_prompt=build_tailor_payload(parsed_record, job_description.to_record(), keywords),
        model=settings.resume_tailor_model,
        temperature=0.4,
        task="tailor_resume",
    )
    tailored = normalize_tailored_resume(raw, keywords, base=parsed_record)

    return TailorResumeResponse(
        generation_id=uuid.uuid4().hex,
        tailored_resume=tailored,
        extracted_job_description=job_description,
    )


def generate_cover_letter(request: CoverLetterRequest) -> CoverLetterResponse:
    job_description_text = _require_job_description(request.job_description)
    raw = json_completion(
        system_prompt=COVER_LETTER_PROMPT,
        user_prompt=build_cover_letter_payload(request.tailored_resume.to_record(), job_description_text),
        model=settings.resume_utility_model,
        temperature=0.3,
        max_output_tokens=1500,
        task="cover_letter",
    )
    cover_letter = raw.get("coverLetter")
    if not isinstance(cover_letter, str) or not cover_letter.strip():
        raise ResumeLLMError("Invalid cover letter response", code="invalid_cover_letter")
    return CoverLetterResponse(cover_letter=cover_letter.strip())
