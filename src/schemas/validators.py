"""
Field validators shared by the request schemas (tag names and text lengths).

Used by the bookmark, tag and list schemas as well as by the services that
accept raw tag names from workers.
"""
import re

from core.config import get_settings

MAX_TAG_LENGTH = 100

_WHITESPACE = re.compile(r"\s+")


def validate_and_normalize_tag(tag: str) -> str:
    """
    Normalize and validate a single tag name.

    Tag names keep their case; surrounding whitespace is trimmed and inner runs
    of whitespace are collapsed to a single space.

    Raises:
        ValueError: If the tag is empty or too long.
    """
    normalized = _WHITESPACE.sub(" ", tag).strip()
    if not normalized:
        raise ValueError("Tag name cannot be empty")
    if len(normalized) > MAX_TAG_LENGTH:
        raise ValueError(
            f"Tag name exceeds maximum length of {MAX_TAG_LENGTH} characters: "
            f"'{normalized[:20]}...'",
        )
    return normalized


def validate_and_normalize_tags(tags: list[str]) -> list[str]:
    """
    Normalize and validate a list of tag names.

    Returns:
        Normalized names with empty strings filtered out and duplicates removed
        (preserving first occurrence order).

    Raises:
        ValueError: If any tag is too long.
    """
    normalized = []
    seen: set[str] = set()
    for tag in tags:
        if not tag.strip():
            continue  # Skip empty tags silently
        validated = validate_and_normalize_tag(tag)
        if validated not in seen:
            seen.add(validated)
            normalized.append(validated)
    return normalized


def validate_title_length(title: str | None) -> str | None:
    """Validate that title doesn't exceed maximum length."""
    settings = get_settings()
    if title is not None and len(title) > settings.max_title_length:
        raise ValueError(
            f"Title exceeds maximum length of {settings.max_title_length:,} characters "
            f"(got {len(title):,} characters).",
        )
    return title


def validate_note_length(note: str | None) -> str | None:
    """Validate that a bookmark note doesn't exceed maximum length."""
    settings = get_settings()
    if note is not None and len(note) > settings.max_note_length:
        raise ValueError(
            f"Note exceeds maximum length of {settings.max_note_length:,} characters "
            f"(got {len(note):,} characters).",
        )
    return note


def validate_text_length(text: str | None) -> str | None:
    """Validate that text bookmark content doesn't exceed maximum length."""
    settings = get_settings()
    if text is not None and len(text) > settings.max_text_length:
        raise ValueError(
            f"Text exceeds maximum length of {settings.max_text_length:,} characters "
            f"(got {len(text):,} characters).",
        )
    return text
