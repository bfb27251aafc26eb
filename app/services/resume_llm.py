from __future__ import annotations

import json
import logging
import os
import time
from functools import lru_cache
from typing import Any

from openai import OpenAI

from app.core.config import settings

logger = logging.getLogger(__name__)


class ResumeLLMError(RuntimeError):
    def __init__(self, message: str, *, code: str = "upstream_error"):
        super().__init__(message)
        self.code = code


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def resume_llm_enabled() -> bool:
    if not settings.resume_llm_enabled:
        return False
    api_key = (os.getenv("OPENAI_API_KEY") or "").strip()
    return bool(api_key) and not _looks_like_placeholder(api_key)


@lru_cache(maxsize=1)
def _client() -> OpenAI:
    return OpenAI(
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=settings.openai_base_url,
        timeout=settings.resume_llm_timeout_s,
        max_retries=settings.openai_max_retries,
    )


def json_completion(
    *,
    system_prompt: str,
    user_prompt: str,
    model: str,
    temperature: float = 0.2,
    max_output_tokens: int = 4000,
    task: str = "unknown",
) -> dict[str, Any]:
    """Run a JSON-mode chat completion and return the decoded object.

    Raises ``ResumeLLMError`` for a disabled client, an upstream failure, an
    empty response or a response that is not a JSON object.
    """
    if not resume_llm_enabled():
        raise ResumeLLMError("The AI service is not configured.", code="llm_disabled")

    started = time.perf_counter()
    try:
        response = _client().chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
            response_format={"type": "json_object"},
            max_tokens=max_output_tokens,
        )
    except Exception as exc:
        logger.warning("resume_llm_failed task=%s model=%s prompt_len=%s: %s", task, model, len(user_prompt), exc)
        raise ResumeLLMError("The AI service is temporarily unavailable. Try again.") from exc

    latency_ms = int((time.perf_counter() - started) * 1000)
    content = response.choices[0].message.content if response.choices else ""
    if not content:
        logger.warning("resume_llm_empty task=%s model=%s latency_ms=%s", task, model, latency_ms)
        raise ResumeLLMError("Empty response from the AI service.", code="empty_response")

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as exc:
        logger.warning("resume_llm_invalid_json task=%s model=%s latency_ms=%s", task, model, latency_ms)
        raise ResumeLLMError("The AI service returned malformed JSON.", code="invalid_json") from exc
    if not isinstance(parsed, dict):
        raise ResumeLLMError("The AI service returned malformed JSON.", code="invalid_json")

    logger.info("resume_llm_ok task=%s model=%s latency_ms=%s", task, model, latency_ms)
    return parsed
