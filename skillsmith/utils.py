"""Small text helpers shared across the pipeline."""

import re
from typing import Iterable, List, Optional

from .config import FALLBACK_NAME, MAX_NAME_LENGTH

_KEYWORD_PATTERN = re.compile(r"[a-zA-Z\u4e00-\u9fa5]{2,10}")


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop empty and repeated items while preserving order."""
    seen = set()
    out: List[str] = []
    for item in items:
        if not item or item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def slugify(text: Optional[str], max_length: int = MAX_NAME_LENGTH) -> str:
    """Lowercase `text` and collapse every non-alphanumeric run to one hyphen.

    Returns an empty string when nothing usable is left, so callers can fall
    through to their next candidate.
    """
    if not text:
        return ""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:max_length].strip("-")


def resolve_name(*candidates: Optional[str]) -> str:
    """Return the first candidate that survives slugification."""
    for candidate in candidates:
        slug = slugify(candidate)
        if slug:
            return slug
    return FALLBACK_NAME


def format_name(name: str) -> str:
    """`commit-helper` -> `Commit Helper`"""
    return " ".join(word[:1].upper() + word[1:] for word in name.split("-"))


def to_pascal_case(name: str) -> str:
    """`commit-helper` -> `CommitHelper`"""
    return "".join(
        word[:1].upper() + word[1:].lower() for word in re.split(r"[-_]", name) if word
    )


def single_line(text: str, limit: int) -> str:
    return re.sub(r"\s*\n\s*", " ", text).strip()[:limit]


def keyword_tags(category: str, description: str, platform: str) -> List[str]:
    """Seed tags plus up to three keyword tokens from the description."""
    tags = [category, f"{platform}-skill", f"{platform}-plugin"]
    keywords = _KEYWORD_PATTERN.findall(description or "")[:3]
    tags.extend(k.lower() for k in keywords)
    return dedupe(tags)
