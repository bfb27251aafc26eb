from __future__ import annotations

from typing import Literal

from app.schemas.raw import RawSkills
from app.schemas.resume import SKILL_BUCKETS

from .utils import clean_text_list, contains_casefold

SkillPolicy = Literal["parsed", "tailored"]

_LANGUAGE_KEYS = frozenset(
    {
        "javascript",
        "typescript",
        "python",
        "java",
        "c",
        "c++",
        "c#",
        "go",
        "golang",
        "ruby",
        "php",
        "swift",
        "kotlin",
        "rust",
        "scala",
        "sql",
        "bash",
        "shell",
    }
)
_FRAMEWORK_KEYS = frozenset(
    {
        "react",
        "next.js",
        "nextjs",
        "angular",
        "vue",
        "svelte",
        "tailwind",
        "tailwind css",
        "fastapi",
        "django",
        "flask",
        "spring",
        "node.js",
        "nodejs",
        "express",
        "nestjs",
    }
)
_TOOL_KEYS = frozenset(
    {
        "git",
        "github",
        "git workflow",
        "docker",
        "firebase",
        "firestore",
        "firebase admin sdk",
        "google recaptcha",
        "ci/cd",
        "serverless",
        "serverless api routes",
        "restful apis",
        "api integrations",
        "postgresql",
        "nosql",
    }
)

# Ordered (bucket, keys) pairs per policy; the first matching bucket wins when
# a skill has to be placed from scratch.
LOOKUP_TABLES: dict[str, tuple[tuple[str, frozenset[str]], ...]] = {
    "tailored": (
        ("languages", _LANGUAGE_KEYS),
        ("frameworks", _FRAMEWORK_KEYS),
        ("tools", _TOOL_KEYS),
    ),
    "parsed": (
        ("languages", _LANGUAGE_KEYS),
        ("frameworks", _FRAMEWORK_KEYS),
        ("tools", _TOOL_KEYS | {"sql"}),
    ),
}

MUST_HAVE_LANGUAGES = ("TypeScript", "SQL", "Python", "JavaScript", "C++", "C")

_CATEGORIZED_BUCKETS = ("languages", "frameworks", "tools", "other")


def skill_key(skill: str) -> str:
    return skill.strip().lower()


def matching_buckets(skill: str, policy: SkillPolicy = "tailored") -> list[str]:
    key = skill_key(skill)
    return [bucket for bucket, keys in LOOKUP_TABLES[policy] if key in keys]


def classify_skill(skill: str, policy: SkillPolicy = "tailored") -> str:
    matches = matching_buckets(skill, policy)
    return matches[0] if matches else "other"


def _append_unique(bucket: list[str], skill: str) -> None:
    if not contains_casefold(bucket, skill):
        bucket.append(skill)


def bucketize_skills(skills: RawSkills | None, policy: SkillPolicy) -> dict[str, list[str]]:
    """Sort skills into display buckets.

    Entries already filed under languages/frameworks/tools/other move only when
    the lookup table places them in a different bucket; unknown skills stay
    where the source put them. ``technical`` is drained into the lookup buckets
    under the tailored policy and kept as-is under the parsed policy, which
    also guarantees the must-have languages.
    """
    raw = skills or RawSkills()
    buckets: dict[str, list[str]] = {name: [] for name in SKILL_BUCKETS}

    for source in _CATEGORIZED_BUCKETS:
        for skill in clean_text_list(getattr(raw, source)):
            homes = matching_buckets(skill, policy)
            target = source if not homes or source in homes else homes[0]
            _append_unique(buckets[target], skill)

    for skill in clean_text_list(raw.soft):
        _append_unique(buckets["soft"], skill)

    technical = clean_text_list(raw.technical)
    if policy == "tailored":
        for skill in technical:
            _append_unique(buckets[classify_skill(skill, policy)], skill)
    else:
        for skill in technical:
            _append_unique(buckets["technical"], skill)
        for language in MUST_HAVE_LANGUAGES:
            _append_unique(buckets["languages"], language)

    return buckets


def add_skill(skills: dict[str, list[str]], skill: str, policy: SkillPolicy = "tailored") -> dict[str, list[str]]:
    """Return a copy of ``skills`` with ``skill`` filed into its lookup bucket."""
    updated = {name: list(skills.get(name, [])) for name in SKILL_BUCKETS}
    _append_unique(updated[classify_skill(skill, policy)], skill.strip())
    return updated
