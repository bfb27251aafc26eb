from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

UNKNOWN_NAME = "Unknown"
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_DATE = "Unknown"
UNKNOWN_INSTITUTION = "Unknown Institution"
UNKNOWN_DEGREE = "Unknown Degree"
UNTITLED_PROJECT = "Untitled Project"

SKILL_BUCKETS = ("technical", "languages", "frameworks", "tools", "soft", "other")

TemplateSlug = Literal["modern-professional", "classic-ats", "tech-focused"]
CustomSectionType = Literal["text", "bullets"]


class ResumeModel(BaseModel):
    """Base for the JSON contract shared with the editor and renderer (camelCase keys)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Contact(ResumeModel):
    name: str = Field(min_length=1)
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str | None) -> str | None:
        if value is not None and not _EMAIL_RE.match(value):
            raise ValueError("Invalid email")
        return value


class Experience(ResumeModel):
    company: str = Field(min_length=1)
    title: str = Field(min_length=1)
    location: str | None = None
    start_date: str = Field(min_length=1)
    end_date: str | None = None
    highlights: list[str]


class Education(ResumeModel):
    institution: str = Field(min_length=1)
    degree: str = Field(min_length=1)
    field: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    gpa: str | None = None
    highlights: list[str] | None = None


class Project(ResumeModel):
    name: str = Field(min_length=1)
    description: str | None = None
    url: str | None = None
    technologies: list[str] | None = None
    highlights: list[str] | None = None


class Certification(ResumeModel):
    name: str = Field(min_length=1)
    issuer: str | None = None
    date: str | None = None
    url: str | None = None


class CustomSection(ResumeModel):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    type: CustomSectionType
    content: str | None = None
    bullets: list[str] | None = None


class Skills(ResumeModel):
    technical: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)
    other: list[str] = Field(default_factory=list)


class ParsedResume(ResumeModel):
    contact: Contact
    summary: str | None = None
    experience: list[Experience]
    education: list[Education]
    skills: Skills | None = None
    projects: list[Project] | None = None
    certifications: list[Certification] | None = None


class TailoredResume(ResumeModel):
    contact: Contact
    summary: str = ""
    experience: list[Experience]
    education: list[Education]
    skills: Skills
    projects: list[Project] | None = None
    certifications: list[Certification] | None = None
    custom_sections: list[CustomSection] | None = None
    matched_keywords: list[str] | None = None
    missing_keywords: list[str] | None = None


class ExtractedJobDescription(ResumeModel):
    title: str | None = None
    company: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] | None = None
    required_experience: str | None = None
    responsibilities: list[str] | None = None
    keywords: list[str] = Field(default_factory=list)


class ParseResult(BaseModel):
    resume: ParsedResume
    warnings: list[str] = Field(default_factory=list)
    needs_review: bool = False
