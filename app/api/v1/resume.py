from typing import Any

from fastapi import APIRouter, Body, File, HTTPException, Request, UploadFile, status

from app.core.config import settings
from app.core.rate_limit import rate_limit
from app.normalize.pipeline import TailoredResumeValidationError
from app.parsing.parse import SUPPORTED_EXTENSIONS, DocumentExtractionError, file_extension
from app.schemas.api import (
    CoverLetterRequest,
    CoverLetterResponse,
    ParseResumeResponse,
    TailorResumeRequest,
    TailorResumeResponse,
)
from app.services.resume_llm import ResumeLLMError
from app.services.resume_service import (
    ResumeInputError,
    generate_cover_letter,
    normalize_resume_payload,
    parse_resume_upload,
    tailor_resume,
)

router = APIRouter()

_UPLOAD_CHUNK_BYTES = 64 * 1024


def _raise_http_error(exc: Exception) -> None:
    if isinstance(exc, (ResumeInputError, DocumentExtractionError)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    if isinstance(exc, TailoredResumeValidationError):
        raise HTTPException(
            status_code=422,
            detail={
                "message": str(exc),
                "issues": [issue.model_dump() for issue in exc.issues],
            },
        ) from exc
    if isinstance(exc, ResumeLLMError):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": str(exc), "code": exc.code},
        ) from exc
    raise exc


async def _read_upload(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Maximum size is {settings.max_upload_bytes // (1024 * 1024)}MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/resume/parse", response_model=ParseResumeResponse, response_model_exclude_none=True)
@rate_limit()
async def resume_parse(request: Request, file: UploadFile = File(...)):
    _ = request
    filename = file.filename or "resume"
    extension = file_extension(filename)
    if extension not in SUPPORTED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Please upload a PDF, DOCX or TXT file.",
        )
    content = await _read_upload(file)
    try:
        return parse_resume_upload(filename, content)
    except (ResumeInputError, DocumentExtractionError, ResumeLLMError) as exc:
        _raise_http_error(exc)


@router.post("/resume/normalize", response_model=ParseResumeResponse, response_model_exclude_none=True)
@rate_limit()
async def resume_normalize(request: Request, payload: dict[str, Any] = Body(...)):
    _ = request
    return normalize_resume_payload(payload)


@router.post("/resume/tailor", response_model=TailorResumeResponse, response_model_exclude_none=True)
@rate_limit()
async def resume_tailor(request: Request, payload: TailorResumeRequest):
    _ = request
    try:
        return tailor_resume(payload)
    except (ResumeInputError, TailoredResumeValidationError, ResumeLLMError) as exc:
        _raise_http_error(exc)


@router.post("/resume/cover-letter", response_model=CoverLetterResponse)
@rate_limit()
async def resume_cover_letter(request: Request, payload: CoverLetterRequest):
    _ = request
    try:
        return generate_cover_letter(payload)
    except (ResumeInputError, ResumeLLMError) as exc:
        _raise_http_error(exc)
