from __future__ import annotations

import logging
import re
from io import BytesIO

from .models import ExtractedDocument

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("pdf", "docx", "txt")


class DocumentExtractionError(ValueError):
    pass


class UnsupportedFormatError(DocumentExtractionError):
    pass


class CorruptFileError(DocumentExtractionError):
    pass


def file_extension(filename: str) -> str:
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def _extract_txt(content: bytes) -> str:
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return content.decode("latin-1")


def _extract_pdf(content: bytes) -> str:
    import pdfplumber

    try:
        with pdfplumber.open(BytesIO(content)) as pdf:
            pages = [(page.extract_text() or "").strip() for page in pdf.pages]
    except Exception as exc:
        logger.warning("pdf_extraction_failed: %s", exc)
        raise CorruptFileError("Failed to parse PDF file. Please ensure it's a valid PDF.") from exc
    return "\n".join(page for page in pages if page)


def _extract_docx(content: bytes) -> str:
    from docx import Document

    try:
        document = Document(BytesIO(content))
    except Exception as exc:
        logger.warning("docx_extraction_failed: %s", exc)
        raise CorruptFileError(
            "Failed to parse DOCX file. Please ensure it's a valid Word document."
        ) from exc
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def extract_text(content: bytes, filename: str) -> str:
    extension = file_extension(filename)
    if extension == "pdf":
        return _extract_pdf(content)
    if extension == "docx":
        return _extract_docx(content)
    if extension == "txt":
        return _extract_txt(content)
    raise UnsupportedFormatError(f"Unsupported file format: .{extension}")


def clean_resume_text(text: str) -> str:
    """Normalize whitespace while keeping the line structure of the resume."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = text.replace("\t", " ")
    text = re.sub(r"[^\S\n]+", " ", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def extract_document(content: bytes, filename: str) -> ExtractedDocument:
    raw_text = extract_text(content, filename)
    return ExtractedDocument(
        filename=filename,
        source_type=file_extension(filename),
        text=clean_resume_text(raw_text),
    )
