"""Spec builder - unify parser and analyzer output into one `SkillSpec`."""

import logging
import re
from typing import Any, Dict, List, Optional, Union

from .config import DEFAULT_PLATFORM, PLATFORMS
from .errors import UnsupportedFormatError
from .models import AnalyzerResult, CodeBlock, ParsedDocument, Resources, SkillSpec, Workflow
from .parsers.document import UNTITLED
from .utils import resolve_name

logger = logging.getLogger(__name__)

DEFAULT_INPUTS = ("user request",)
DEFAULT_STEPS = ("analyze the request", "execute the task", "return the result")
DEFAULT_OUTPUTS = ("task result",)

SCRIPT_EXTENSIONS = {
    "bash": "sh",
    "sh": "sh",
    "shell": "sh",
    "zsh": "sh",
    "python": "py",
    "py": "py",
    "javascript": "js",
    "js": "js",
    "typescript": "ts",
    "ts": "ts",
}


def derive_freedom(step_count: int) -> str:
    """More steps means less latitude: >5 low, 3-5 medium, otherwise high."""
    if step_count > 5:
        return "low"
    if step_count >= 3:
        return "medium"
    return "high"


def build_spec(
    source: Union[ParsedDocument, AnalyzerResult],
    name: Optional[str] = None,
    target_format: str = DEFAULT_PLATFORM,
) -> SkillSpec:
    """Build a `SkillSpec` from a parsed document or an analyzed description.

    Name precedence: explicit `name` > extracted name > slugified title >
    `my-skill`.
    """
    if target_format not in PLATFORMS:
        raise UnsupportedFormatError(f"Unknown target format: {target_format}")

    if isinstance(source, ParsedDocument):
        spec = _from_document(source, name, target_format)
    elif isinstance(source, AnalyzerResult):
        spec = _from_analysis(source, name, target_format)
    else:
        raise TypeError(f"Cannot build a spec from {type(source).__name__}")

    logger.debug("Built spec %s (%s, freedom=%s)", spec.name, spec.category, spec.freedom)
    return spec


def _from_document(parsed: ParsedDocument, name: Optional[str], platform: str) -> SkillSpec:
    title = parsed.title if parsed.title != UNTITLED else ""
    slug = resolve_name(name, title)

    script_languages = [
        SCRIPT_EXTENSIONS[block.language.lower()]
        for block in parsed.code_blocks
        if block.language.lower() in SCRIPT_EXTENSIONS
    ]
    needs_scripts = bool(script_languages)
    needs_references = len(parsed.code_blocks) > 2 or bool(parsed.tips)

    return SkillSpec(
        name=slug,
        description=parsed.summary or title or slug,
        category=parsed.category,
        triggers=tuple(parsed.triggers) or (f"/{slug}",),
        workflow=Workflow(
            inputs=tuple(parsed.inputs) or DEFAULT_INPUTS,
            steps=tuple(parsed.steps) or DEFAULT_STEPS,
            outputs=tuple(parsed.outputs) or DEFAULT_OUTPUTS,
        ),
        resources=Resources(
            needs_scripts=needs_scripts,
            needs_references=needs_references,
            suggested_scripts=(f"scripts/{slug}.{script_languages[0]}",) if needs_scripts else (),
            suggested_references=(f"references/{slug}_guide.md",) if needs_references else (),
        ),
        freedom=derive_freedom(len(parsed.steps)),
        platform=platform,
        code_blocks=tuple(parsed.code_blocks),
        tips=tuple(parsed.tips),
        warnings=tuple(parsed.warnings),
    )


def _from_analysis(analysis: AnalyzerResult, name: Optional[str], platform: str) -> SkillSpec:
    slug = resolve_name(name, analysis.name)
    lowered = analysis.description.lower()

    scripts: List[str] = []
    if analysis.needs_scripts:
        if "pdf" in lowered:
            scripts.append("scripts/process_pdf.py")
        if re.search(r"excel|xlsx", lowered):
            scripts.append("scripts/process_excel.py")
        if "git" in lowered:
            scripts.append("scripts/git_helper.sh")
        if not scripts:
            scripts.append(f"scripts/{slug}.py")

    references: List[str] = []
    if analysis.needs_references:
        references.append(f"references/{slug}_guide.md")
        if "api" in lowered:
            references.append("references/api_docs.md")

    return SkillSpec(
        name=slug,
        description=analysis.description.strip() or slug,
        category=analysis.category,
        triggers=tuple(analysis.triggers) or (f"/{slug}",),
        workflow=Workflow(
            inputs=tuple(analysis.inputs) or DEFAULT_INPUTS,
            steps=tuple(analysis.steps) or DEFAULT_STEPS,
            outputs=tuple(analysis.outputs) or DEFAULT_OUTPUTS,
        ),
        resources=Resources(
            needs_scripts=analysis.needs_scripts,
            needs_references=analysis.needs_references,
            suggested_scripts=tuple(scripts),
            suggested_references=tuple(references),
        ),
        freedom=derive_freedom(len(analysis.steps)),
        platform=platform,
    )


def spec_to_dict(spec: SkillSpec) -> Dict[str, Any]:
    """Plain-data view of a spec (lists instead of tuples)."""
    return {
        "name": spec.name,
        "description": spec.description,
        "category": spec.category,
        "triggers": list(spec.triggers),
        "workflow": {
            "inputs": list(spec.workflow.inputs),
            "steps": list(spec.workflow.steps),
            "outputs": list(spec.workflow.outputs),
        },
        "resources": {
            "needs_scripts": spec.resources.needs_scripts,
            "needs_references": spec.resources.needs_references,
            "suggested_scripts": list(spec.resources.suggested_scripts),
            "suggested_references": list(spec.resources.suggested_references),
        },
        "freedom": spec.freedom,
        "platform": spec.platform,
        "code_blocks": [{"language": b.language, "code": b.code} for b in spec.code_blocks],
        "tips": list(spec.tips),
        "warnings": list(spec.warnings),
    }


def spec_from_dict(data: Dict[str, Any]) -> SkillSpec:
    """Inverse of `spec_to_dict`; expects data already checked by `skillsmith.schema`."""
    workflow = data.get("workflow") or {}
    resources = data.get("resources") or {}
    name = data["name"]

    return SkillSpec(
        name=name,
        description=data.get("description", ""),
        category=data.get("category", "other"),
        triggers=tuple(data.get("triggers") or ()) or (f"/{name}",),
        workflow=Workflow(
            inputs=tuple(workflow.get("inputs") or ()),
            steps=tuple(workflow.get("steps") or ()) or DEFAULT_STEPS,
            outputs=tuple(workflow.get("outputs") or ()),
        ),
        resources=Resources(
            needs_scripts=bool(resources.get("needs_scripts")),
            needs_references=bool(resources.get("needs_references")),
            suggested_scripts=tuple(resources.get("suggested_scripts") or ()),
            suggested_references=tuple(resources.get("suggested_references") or ()),
        ),
        freedom=data.get("freedom", "medium"),
        platform=data.get("platform", DEFAULT_PLATFORM),
        code_blocks=tuple(
            CodeBlock(code=b.get("code", ""), language=b.get("language") or "text")
            for b in data.get("code_blocks") or ()
        ),
        tips=tuple(data.get("tips") or ()),
        warnings=tuple(data.get("warnings") or ()),
    )
