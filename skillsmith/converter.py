"""Format converter - detect a skill's format and re-render it in the other.

Conversion is lossy: only name, description, triggers and steps survive.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

import yaml

from .categories import detect_category
from .config import PLATFORMS
from .generators import render
from .generators.claude import STEPS_HEADING, WHEN_TO_USE_HEADING, WORKFLOW_HEADING
from .generators.openclaw import WORKFLOW_MARKER
from .models import ConversionResult, SkillSpec, Workflow
from .spec_builder import DEFAULT_INPUTS, DEFAULT_OUTPUTS, derive_freedom
from .utils import resolve_name, single_line

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
FALLBACK_STEPS = ("execute task",)

_CLAUDE_HEADER = re.compile(r"^---\s*\nname:", re.M)
_CLAUDE_HEADINGS = re.compile(
    rf"^(?:{re.escape(WHEN_TO_USE_HEADING)}|{re.escape(WORKFLOW_HEADING)}|{re.escape(STEPS_HEADING)}"
    r"|## 触发条件|## 工作流程|### 执行步骤)[ \t]*$",
    re.M,
)
_OPENCLAW_MARKERS = ("openclaw/plugin-sdk", "implements Skill", "openclaw plugin install")

_HEADER = re.compile(r"^---\s*\n(.*?)\n---", re.S)
_HEADER_LINE = r"^{key}:[ \t]*(.+)$"
_WHEN_TO_USE = re.compile(r"^##[ \t]*(?:When to Use|触发条件)[ \t]*$(.*?)(?=^##?[ \t]|\Z)", re.M | re.S)
_EXECUTION_STEPS = re.compile(r"^###[ \t]*(?:Execution Steps|执行步骤)[ \t]*$(.*?)(?=^#{1,3}[ \t]|\Z)", re.M | re.S)
_BULLET = re.compile(r"^[ \t]*-[ \t]+(.+)$", re.M)
_NUMBERED = re.compile(r"^[ \t]*\d+\.[ \t]+(.+)$", re.M)

_STRING = r'"(?:[^"\\]|\\.)*"'
_CLASS_NAME = re.compile(r"\bclass\s+(\w+?)Skill\b")
_NAME_FIELD = re.compile(rf"^[ \t]*name\s*=\s*({_STRING})", re.M)
_DESCRIPTION_FIELD = re.compile(rf"\bdescription\s*=\s*({_STRING})")
_TRIGGERS_FIELD = re.compile(r"\btriggers\s*=\s*\[(.*?)\]", re.S)
_COMMANDS_FIELD = re.compile(r"\bcommands\s*=\s*\[(.*?)\n[ \t]*\];", re.S)
_COMMAND_DESCRIPTION = re.compile(rf"\bdescription:\s*({_STRING})")
_WORKFLOW_COMMENT = re.compile(r"^[ \t]*//[ \t]*\d+\.[ \t]+(.+)$")


def detect_format(content: str) -> str:
    """Return "claude", "openclaw" or "unknown" from signature markers."""
    content = (content or "").replace("\r\n", "\n")

    if _CLAUDE_HEADER.search(content):
        detected = "claude"
    elif any(marker in content for marker in _OPENCLAW_MARKERS):
        detected = "openclaw"
    elif _CLAUDE_HEADINGS.search(content):
        detected = "claude"
    else:
        detected = UNKNOWN

    logger.debug("Detected format: %s", detected)
    return detected


def convert(content: str, target_format: Optional[str] = None) -> ConversionResult:
    """Convert `content` to `target_format` (defaults to the other platform).

    Never raises; failures come back as `ConversionResult(success=False)`.
    """
    content = (content or "").replace("\r\n", "\n")
    source = detect_format(content)

    if source == UNKNOWN:
        return ConversionResult(
            success=False,
            error="cannot identify source format; expected a claude or openclaw skill",
            target_format=target_format or "",
        )

    target = target_format or ("openclaw" if source == "claude" else "claude")
    if target not in PLATFORMS:
        return ConversionResult(
            success=False,
            error=f"unknown target format: {target}",
            source_format=source,
            target_format=target,
        )
    if source == target:
        return ConversionResult(
            success=False,
            error=f"already in {target} format",
            source_format=source,
            target_format=target,
        )

    try:
        if source == "claude":
            spec = spec_from_claude(content, platform=target)
        else:
            spec = spec_from_openclaw(content, platform=target)
        generated = render(spec, target)
    except Exception as e:
        logger.debug("Conversion %s -> %s failed", source, target, exc_info=True)
        return ConversionResult(
            success=False,
            error=f"conversion failed: {e}",
            source_format=source,
            target_format=target,
        )

    logger.debug("Converted %s from %s to %s", spec.name, source, target)
    return ConversionResult(
        success=True, result=generated, source_format=source, target_format=target
    )


def spec_from_claude(content: str, platform: str = "openclaw") -> SkillSpec:
    """Rebuild a spec from a SKILL.md body."""
    header = _read_header(content)
    name = resolve_name(str(header.get("name") or ""))
    description = str(header.get("description") or "").strip()

    triggers: List[str] = []
    section = _WHEN_TO_USE.search(content)
    if section:
        triggers = [m.group(1).strip() for m in _BULLET.finditer(section.group(1))]

    steps: List[str] = []
    section = _EXECUTION_STEPS.search(content)
    if section:
        steps = [m.group(1).strip() for m in _NUMBERED.finditer(section.group(1))]

    return _build(name, description, triggers, steps, platform)


def spec_from_openclaw(content: str, platform: str = "claude") -> SkillSpec:
    """Rebuild a spec from a skill.ts stub."""
    match = _NAME_FIELD.search(content)
    if match:
        name = resolve_name(json.loads(match.group(1)))
    else:
        match = _CLASS_NAME.search(content)
        name = resolve_name(_kebab_case(match.group(1)) if match else "")

    match = _DESCRIPTION_FIELD.search(content)
    description = json.loads(match.group(1)) if match else ""

    triggers: List[str] = []
    match = _TRIGGERS_FIELD.search(content)
    if match:
        triggers = [json.loads(s) for s in re.findall(_STRING, match.group(1))]
        # The generator seeds the command and bare-name triggers
        triggers = [t for t in triggers if t not in (f"/{name}", name)]

    steps = _workflow_comments(content)
    if not steps:
        match = _COMMANDS_FIELD.search(content)
        if match:
            steps = [json.loads(m.group(1)) for m in _COMMAND_DESCRIPTION.finditer(match.group(1))]

    return _build(name, description, triggers, steps, platform)


def _build(name: str, description: str, triggers: List[str], steps: List[str], platform: str) -> SkillSpec:
    steps = [s for s in steps if s] or list(FALLBACK_STEPS)
    description = description or name
    return SkillSpec(
        name=name,
        description=description,
        category=detect_category(description),
        triggers=tuple(t for t in triggers if t) or (f"/{name}",),
        workflow=Workflow(inputs=DEFAULT_INPUTS, steps=tuple(steps), outputs=DEFAULT_OUTPUTS),
        freedom=derive_freedom(len(steps)),
        platform=platform,
    )


def _read_header(content: str) -> Dict[str, Any]:
    match = _HEADER.match(content)
    if not match:
        return {}

    text = match.group(1)
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        data = None
    if isinstance(data, dict):
        return data

    # Hand-written headers are not always valid YAML
    header: Dict[str, Any] = {}
    for key in ("name", "description"):
        line = re.search(_HEADER_LINE.format(key=key), text, re.M)
        if line:
            header[key] = single_line(line.group(1), 500)
    return header


def _workflow_comments(content: str) -> List[str]:
    steps: List[str] = []
    marker = content.find(WORKFLOW_MARKER)
    if marker == -1:
        return steps
    for line in content[marker:].split("\n")[1:]:
        m = _WORKFLOW_COMMENT.match(line)
        if not m:
            break
        steps.append(m.group(1).strip())
    return steps


def _kebab_case(identifier: str) -> str:
    """`CommitHelper` -> `commit-helper`"""
    return re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "-", identifier).lower()


__all__ = [
    "convert",
    "detect_format",
    "spec_from_claude",
    "spec_from_openclaw",
]
