"""Description analyzer - a lighter parser for short free-form prompts."""

import re
from typing import List, Optional

from ..categories import detect_category
from ..config import FALLBACK_NAME
from ..models import AnalyzerResult, ClarifyingQuestion
from ..utils import dedupe

_EXPLICIT_NAME = re.compile(r"(?:叫|名为|\bcalled|\bnamed|skill\s*名)\s*[\"'“”「]?([a-z0-9][a-z0-9-]*)", re.I)
_KEYWORD_NAMES = (
    re.compile(r"(?:帮我|生成|创建)\s*(?:一个\s*)?([a-z0-9][a-z0-9-]*)"),
    re.compile(r"\b(?:help\s+me|create|make|build)\s+(?:(?:a|an|the)\s+)?([a-z0-9][a-z0-9-]*)"),
    re.compile(r"\b([a-z0-9][a-z0-9-]*)\s*(?:skill|工具|助手)"),
)

_TRIGGERS = (
    re.compile(r"当[^，。,.\n]{1,50}?(?:时|后)"),
    re.compile(r"如果[^。\n]{1,50}?就"),
    re.compile(r"\bwhen\s+(?:the\s+)?(?:user|i)\s+(?:wants?|needs?|asks?)\b[^.。\n]*", re.I),
    re.compile(r"\bwhenever\b[^.。\n]*", re.I),
    re.compile(r"每次[^，。,.\n]*"),
)

_STEP_LINE = re.compile(r"^\s*(?:\d+[.、)]|[-•])")
_STEP_MARKER = re.compile(r"^[\d.、)\-•\s]+")

_INPUT = re.compile(r"(?:输入|input|接收|读取)\s*[:：]?\s*([^。\n]+)", re.I)
_OUTPUT = re.compile(r"(?:输出|output|生成|返回|创建)\s*[:：]?\s*([^。\n]+)", re.I)

_SCRIPT_KEYWORDS = re.compile(r"脚本|script|python|bash|代码|execute|运行|命令|执行|\brun\b|command")
_REFERENCE_KEYWORDS = re.compile(r"文档|document|api|schema|规范|spec|reference")


class DescriptionAnalyzer:
    """Extract name, triggers, steps and I/O hints from a short description."""

    def analyze(self, description: str) -> AnalyzerResult:
        description = description or ""
        lowered = description.lower()

        explicit = _EXPLICIT_NAME.search(description)
        name = explicit.group(1).lower() if explicit else self._name_from_keywords(lowered)

        triggers = self._extract_triggers(description)
        steps = self._extract_steps(description)
        inputs = self._first_match(_INPUT, description)
        outputs = self._first_match(_OUTPUT, description)
        complexity = self.evaluate_complexity(description, steps)

        return AnalyzerResult(
            description=description,
            has_name=explicit is not None,
            name=name,
            has_triggers=bool(triggers),
            triggers=triggers,
            has_steps=bool(steps),
            steps=steps,
            has_input_output=bool(inputs or outputs),
            inputs=inputs,
            outputs=outputs,
            category=detect_category(lowered),
            complexity=complexity,
            needs_scripts=bool(_SCRIPT_KEYWORDS.search(lowered)) or complexity == "complex",
            needs_references=bool(_REFERENCE_KEYWORDS.search(lowered)) or len(description) > 500,
        )

    def _name_from_keywords(self, lowered: str) -> str:
        for pattern in _KEYWORD_NAMES:
            match = pattern.search(lowered)
            if match:
                return match.group(1)
        return FALLBACK_NAME

    def _extract_triggers(self, description: str) -> List[str]:
        found: List[str] = []
        for pattern in _TRIGGERS:
            found.extend(m.group(0).strip() for m in pattern.finditer(description))
        return dedupe(found)[:5]

    def _extract_steps(self, description: str) -> List[str]:
        steps: List[str] = []
        for line in re.split(r"[。\n]", description):
            if _STEP_LINE.match(line):
                step = _STEP_MARKER.sub("", line).strip()
                if step:
                    steps.append(step)
        return steps

    def _first_match(self, pattern, description: str) -> List[str]:
        match = pattern.search(description)
        if not match:
            return []
        value = match.group(1).strip()[:100]
        return [value] if value else []

    @staticmethod
    def evaluate_complexity(description: str, steps: List[str]) -> str:
        if len(description) < 100 and len(steps) <= 2:
            return "simple"
        if len(description) > 500 or len(steps) > 5:
            return "complex"
        return "medium"


def clarifying_questions(analysis: AnalyzerResult) -> List[ClarifyingQuestion]:
    """Questions to ask before generating a skill from `analysis`."""
    questions: List[ClarifyingQuestion] = []

    if not analysis.has_name:
        questions.append(
            ClarifyingQuestion(
                id="name",
                question="What should this skill be called?",
                required=True,
                hint=f"Suggested: {analysis.name} (lowercase letters, digits and hyphens)",
            )
        )

    if not analysis.has_triggers:
        questions.append(
            ClarifyingQuestion(
                id="triggers",
                question="When should this skill be activated?",
                type="multiselect",
                options=[
                    "When the user types a command (e.g. /skill-name)",
                    "When the user mentions specific keywords",
                    "When the user works with a specific file type",
                    "Manually",
                ],
                required=True,
            )
        )

    if not analysis.has_input_output:
        questions.append(
            ClarifyingQuestion(
                id="inputs",
                question="What input does this skill need?",
                hint="e.g. file paths, user text, configuration values",
            )
        )
        questions.append(
            ClarifyingQuestion(
                id="outputs",
                question="What does this skill produce?",
                hint="e.g. generated files, processed results, reports",
            )
        )

    if analysis.complexity == "complex":
        questions.append(
            ClarifyingQuestion(
                id="freedom",
                question="How much latitude should the agent have while executing?",
                type="select",
                options=[
                    "High - several approaches are fine, let the agent decide",
                    "Medium - follow the recommended pattern, variations allowed",
                    "Low - follow the steps exactly",
                ],
                required=True,
                hint="Complex tasks are more consistent with low latitude",
            )
        )

    if analysis.needs_scripts or analysis.needs_references:
        questions.append(
            ClarifyingQuestion(
                id="resources",
                question="Should the skill ship extra resources?",
                type="multiselect",
                options=["Python/Bash scripts", "Reference docs / API notes", "Templates", "None"],
            )
        )

    return questions


def analyze_description(description: Optional[str]) -> AnalyzerResult:
    return DescriptionAnalyzer().analyze(description or "")
