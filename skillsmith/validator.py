"""Validator - structural lint for SKILL.md bodies"""

import re
from typing import Any, Dict, Optional

import yaml

from .config import MAX_SKILL_LINES, MAX_SKILL_SIZE
from .models import ValidationResult

MIN_BODY_LENGTH = 100

_HEADER = re.compile(r"^---\s*\n(.*?)\n---[ \t]*(?:\n|$)", re.S)
_TITLE = re.compile(r"^#[ \t]+(.+)$", re.M)
_ROLE_TAG = re.compile(r"</?(?:system|user|assistant)>", re.I)
_RESERVED_TITLE = re.compile(r"claude|anthropic", re.I)


def validate(body: str) -> ValidationResult:
    """Run every check over `body`; checks do not short-circuit each other."""
    result = ValidationResult()
    body = body or ""

    content = _check_header(body, result)

    title = _TITLE.search(content)
    if not title:
        result.errors.append("Missing heading (# Title)")
    elif _RESERVED_TITLE.search(title.group(1)):
        result.warnings.append("Title mentions a reserved product name (claude/anthropic)")

    if len(body) < MIN_BODY_LENGTH:
        result.warnings.append(f"Content is very short ({len(body)} chars)")
    if len(body) > MAX_SKILL_SIZE:
        result.errors.append(
            f"Content exceeds {MAX_SKILL_SIZE} characters ({len(body)}); move detail to reference files"
        )

    line_count = len(body.split("\n"))
    if line_count > MAX_SKILL_LINES:
        result.warnings.append(
            f"Content has {line_count} lines; keep it under {MAX_SKILL_LINES}"
        )

    if _ROLE_TAG.search(body):
        result.errors.append("Contains reserved role tags (<system>, <user>, <assistant>)")

    result.valid = not result.errors
    return result


def _check_header(body: str, result: ValidationResult) -> str:
    """Check the YAML header and return the text that follows it."""
    if not body.startswith("---"):
        result.warnings.append("Missing YAML header (name, description)")
        return body

    match = _HEADER.match(body)
    if not match:
        result.errors.append("YAML header is not closed with ---")
        return body

    header = _load_header(match.group(1))
    if header is None:
        result.errors.append("YAML header could not be parsed")
    else:
        for key in ("name", "description"):
            if not header.get(key):
                result.errors.append(f"YAML header is missing '{key}'")

    return body[match.end():]


def _load_header(text: str) -> Optional[Dict[str, Any]]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        return None
    return data if isinstance(data, dict) else None
