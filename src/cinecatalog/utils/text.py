"""Text normalisation helpers applied to catalog fields before they are stored."""

import re


def title_case(text: str) -> str:
    """
    Capitalise the first letter of every space-separated word.

    Used for names, countries and cities so that "martin SCORSESE" and
    "Martin Scorsese" end up as the same stored value:
    - "ciencia ficción" → "Ciencia Ficción"
    - "  estados   unidos " → "Estados Unidos"

    Args:
        text: Raw user-supplied text

    Returns:
        Normalised text with collapsed whitespace
    """
    words = collapse_whitespace(text).lower().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def collapse_whitespace(text: str) -> str:
    """Trim and collapse runs of whitespace into single spaces."""
    return re.sub(r"\s+", " ", text).strip()


def unique_strings(values: list[str] | None, *, lower: bool = False) -> list[str]:
    """
    Deduplicate a list of strings, preserving first-seen order.

    Blank entries are dropped and every entry is trimmed; with ``lower=True``
    entries are lower-cased before comparison (tags, specialties).
    """
    if not values:
        return []

    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        cleaned = value.strip()
        if lower:
            cleaned = cleaned.lower()
        if not cleaned or cleaned in seen:
            continue
        seen.add(cleaned)
        result.append(cleaned)
    return result


def social_handle(handle: str | None) -> str | None:
    """Prefix a social media handle with "@" when it is missing."""
    if not handle:
        return handle
    handle = handle.strip()
    return handle if handle.startswith("@") else f"@{handle}"


def escape_like(term: str) -> str:
    """
    Escape LIKE wildcards so user search input is matched literally.

    The backslash is used as the escape character, so it is escaped first.
    """
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
