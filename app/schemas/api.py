from __future__ import annotations

from pydantic import Field

from .resume import ExtractedJobDescription, ParsedResume, ResumeModel, TailoredResume, TemplateSlug


class ParseResumeResponse(ResumeModel):
    success: bool = True
    parsed_resume: ParsedResume
    extracted_text: str | None = None
    warnings: list[str] = Field(default_factory=list)
    needs_review: bool = False


class TailorResumeRequest(ResumeModel):
    parsed_resume: ParsedResume
    job_description: str = Field(max_length=50000)
    template_slug: TemplateSlug
    selected_keywords: list[str] = Field(default_factory=list, max_length=100)


class TailorResumeResponse(ResumeModel):
    success: bool = True
    generation_id: str
    tailored_resume: TailoredResume
    extracted_job_description: ExtractedJobDescription


class CoverLetterRequest(ResumeModel):
    tailored_resume: TailoredResume
    job_description: str = Field(max_length=50000)


class CoverLetterResponse(ResumeModel):
    success: bool = True
    cover_letter: str
