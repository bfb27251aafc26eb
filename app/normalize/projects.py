from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.schemas.raw import RawProject
from app.schemas.resume import UNTITLED_PROJECT

from .utils import canonical_url, clean_text, clean_text_list, dedupe_casefold, split_sentences

MIN_PROJECT_HIGHLIGHTS = 3
MAX_PROJECT_HIGHLIGHTS = 4


def fill_highlights(highlights: Iterable[str], description: str | None) -> list[str]:
    """Bring a highlight list to 3-4 bullets.

    Sentences mined from ``description`` are appended (skipping exact
    duplicates) until there are four; a list still short of three is padded by
    repeating its last bullet. Nothing is invented when both sources are empty.
    """
    filled = clean_text_list(highlights)

    if len(filled) < MAX_PROJECT_HIGHLIGHTS:
        for sentence in split_sentences(description):
            if len(filled) >= MAX_PROJECT_HIGHLIGHTS:
                break
            if sentence not in filled:
                filled.append(sentence)

    if filled and len(filled) < MIN_PROJECT_HIGHLIGHTS:
        filled.extend([filled[-1]] * (MIN_PROJECT_HIGHLIGHTS - len(filled)))

    return filled[:MAX_PROJECT_HIGHLIGHTS]


def enforce_highlights(project: RawProject) -> dict[str, Any]:
    description = clean_text(project.description)
    result: dict[str, Any] = {"name": clean_text(project.name) or UNTITLED_PROJECT}
    if description is not None:
        result["description"] = description
    url = canonical_url(project.url)
    if url is not None:
        result["url"] = url
    technologies = dedupe_casefold(clean_text_list(project.technologies))
    if technologies:
        result["technologies"] = technologies
    highlights = fill_highlights(project.highlights, description)
    if highlights:
        result["highlights"] = highlights
    return result


def normalize_projects(projects: Iterable[RawProject] | None) -> list[dict[str, Any]]:
    return [enforce_highlights(project) for project in projects or []]
