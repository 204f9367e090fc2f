import re

from core import errors

_TAG_STRIP = re.compile(r"[\W_]+", re.UNICODE)
_TAG_SPLIT = re.compile(r"[,;\s]+")


def require_text(value: str | None, field: str) -> str:
    trimmed = (value or "").strip()
    if not trimmed:
        raise errors.ValidationError(f"{field.capitalize()} cannot be empty.", details={"field": field})
    return trimmed


def optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def normalize_tag(tag: str) -> str:
    return _TAG_STRIP.sub("", tag.strip().lower())


def normalize_tags(tags) -> list[str]:
    """Accepts a list of names or a comma/space separated string."""
    if tags is None:
        return []
    if isinstance(tags, str):
        tags = _TAG_SPLIT.split(tags)
    seen: list[str] = []
    for tag in tags:
        normalized = normalize_tag(tag or "")
        if normalized and normalized not in seen:
            seen.append(normalized)
    return seen
