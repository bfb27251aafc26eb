"""Permissive shapes for untrusted LLM / client JSON.

Every field is optional. Scalars are coerced to ``str`` (numbers become their
string form, anything else becomes ``None``); lists keep only usable items.
Validating one of these models never fails on content.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def coerce_text(value: Any) -> str | None:
    """Numbers use Python's ``str()`` form: ``3.80`` becomes ``"3.8"``, ``1e20`` becomes ``"1e+20"``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def coerce_text_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        return []
    output: list[str] = []
    for item in value:
        text = coerce_text(item)
        if text is not None:
            output.append(text)
    return output


def coerce_mapping(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def coerce_mapping_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, dict)]


class RawModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class RawContact(RawModel):
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str | None:
        return coerce_text(value)


class RawExperience(RawModel):
    company: str | None = None
    title: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    highlights: list[str] = Field(default_factory=list)

    @field_validator("company", "title", "location", "start_date", "end_date", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("highlights", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str]:
        return coerce_text_list(value)


class RawEducation(RawModel):
    institution: str | None = None
    degree: str | None = None
    field: str | None = None
    location: str | None = None
    start_date: str | None = None
    end_date: str | None = None
    gpa: str | None = None
    highlights: list[str] = Field(default_factory=list)

    @field_validator(
        "institution", "degree", "field", "location", "start_date", "end_date", "gpa", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("highlights", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str]:
        return coerce_text_list(value)


class RawProject(RawModel):
    name: str | None = None
    description: str | None = None
    url: str | None = None
    technologies: list[str] = Field(default_factory=list)
    highlights: list[str] = Field(default_factory=list)

    @field_validator("name", "description", "url", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("technologies", "highlights", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str]:
        return coerce_text_list(value)


class RawCertification(RawModel):
    name: str | None = None
    issuer: str | None = None
    date: str | None = None
    url: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> str | None:
        return coerce_text(value)


class RawCustomSection(RawModel):
    id: str | None = None
    title: str | None = None
    type: str | None = None
    content: str | None = None
    bullets: list[str] = Field(default_factory=list)

    @field_validator("id", "title", "type", "content", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("bullets", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str]:
        return coerce_text_list(value)


class RawSkills(RawModel):
    technical: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    tools: list[str] = Field(default_factory=list)
    soft: list[str] = Field(default_factory=list)
    other: list[str] = Field(default_factory=list)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any) -> list[str]:
        return coerce_text_list(value)


class RawResume(RawModel):
    contact: RawContact | None = None
    summary: str | None = None
    experience: list[RawExperience] | None = None
    education: list[RawEducation] | None = None
    skills: RawSkills | None = None
    projects: list[RawProject] | None = None
    certifications: list[RawCertification] | None = None
    custom_sections: list[RawCustomSection] | None = None
    matched_keywords: list[str] | None = None
    missing_keywords: list[str] | None = None
    parse_warnings: list[str] = Field(default_factory=list, alias="_parseWarnings")

    @field_validator("contact", "skills", mode="before")
    @classmethod
    def _coerce_mapping(cls, value: Any) -> dict[str, Any] | None:
        return coerce_mapping(value)

    @field_validator("summary", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator(
        "experience", "education", "projects", "certifications", "custom_sections", mode="before"
    )
    @classmethod
    def _coerce_entries(cls, value: Any) -> list[dict[str, Any]] | None:
        if value is None:
            return None
        return coerce_mapping_list(value)

    @field_validator("matched_keywords", "missing_keywords", mode="before")
    @classmethod
    def _coerce_keywords(cls, value: Any) -> list[str] | None:
        if value is None:
            return None
        return coerce_text_list(value)

    @field_validator("parse_warnings", mode="before")
    @classmethod
    def _coerce_warnings(cls, value: Any) -> list[str]:
        return coerce_text_list(value)

    @classmethod
    def from_payload(cls, payload: Any) -> "RawResume":
        if isinstance(payload, RawResume):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(by_alias=True, exclude_none=True)
        if not isinstance(payload, dict):
            payload = {}
        return cls.model_validate(payload)


class RawJobDescription(RawModel):
    title: str | None = None
    company: str | None = None
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    required_experience: str | None = None
    responsibilities: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)

    @field_validator("title", "company", "required_experience", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return coerce_text(value)

    @field_validator("required_skills", "preferred_skills", "responsibilities", "keywords", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> list[str]:
        return coerce_text_list(value)
