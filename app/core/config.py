from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None
    rate_limit: str
    rate_limit_enabled: bool
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    openai_base_url: str | None
    openai_max_retries: int
    resume_llm_enabled: bool
    resume_llm_timeout_s: float
    resume_parse_model: str
    resume_tailor_model: str
    resume_utility_model: str
    max_upload_bytes: int
    min_resume_text_chars: int
    min_job_description_chars: int


settings = Settings(
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    rate_limit=_get_env("RATE_LIMIT", "20/minute") or "20/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
    openai_base_url=_get_env("OPENAI_BASE_URL"),
    openai_max_retries=_get_env_int("OPENAI_MAX_RETRIES", 2),
    resume_llm_enabled=_get_env_bool("RESUME_LLM_ENABLED", True),
    resume_llm_timeout_s=_get_env_float("RESUME_LLM_TIMEOUT_S", 60.0),
    resume_parse_model=_get_env("RESUME_PARSE_MODEL", "gpt-4.1") or "gpt-4.1",
    resume_tailor_model=_get_env("RESUME_TAILOR_MODEL", "gpt-4.1") or "gpt-4.1",
    resume_utility_model=_get_env("RESUME_UTILITY_MODEL", "gpt-4.1") or "gpt-4.1",
    max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 10 * 1024 * 1024),
    min_resume_text_chars=_get_env_int("MIN_RESUME_TEXT_CHARS", 50),
    min_job_description_chars=_get_env_int("MIN_JOB_DESCRIPTION_CHARS", 50),
)

if settings.max_upload_bytes <= 0:
    raise RuntimeError("MAX_UPLOAD_BYTES must be a positive integer.")
