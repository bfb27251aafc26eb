from __future__ import annotations

from pydantic import BaseModel, field_validator


class ExtractedDocument(BaseModel):
    filename: str
    source_type: str
    text: str

    @field_validator("source_type")
    @classmethod
    def _validate_source_type(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"pdf", "docx", "txt"}:
            raise ValueError("source_type must be one of: pdf, docx, txt")
        return normalized

    @property
    def char_count(self) -> int:
        return len(self.text)
