from __future__ import annotations

from typing import Any

from app.schemas.raw import RawContact
from app.schemas.resume import UNKNOWN_NAME

from .utils import canonical_url, clean_text

URL_FIELDS = ("linkedin", "github", "website")
_TEXT_FIELDS = ("email", "phone", "location")


def sanitize_contact(contact: RawContact | None) -> dict[str, Any]:
    """Clean contact fields; always returns a record with a name."""
    raw = contact or RawContact()
    result: dict[str, Any] = {"name": clean_text(raw.name) or UNKNOWN_NAME}

    for field_name in _TEXT_FIELDS:
        value = clean_text(getattr(raw, field_name))
        if value is not None:
            result[field_name] = value

    location = result.get("location")
    if location is not None and location.lower() == "unknown":
        del result["location"]

    for field_name in URL_FIELDS:
        url = canonical_url(getattr(raw, field_name))
        if url is not None:
            result[field_name] = url

    return result
