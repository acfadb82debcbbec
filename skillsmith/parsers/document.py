"""Document parser - extracts skill structure from articles, posts and READMEs."""

import re
from typing import List, Pattern, Tuple

from ..categories import detect_category
from ..models import CodeBlock, ParsedDocument
from ..utils import dedupe

UNTITLED = "untitled"

MAX_STEPS = 10
MAX_TRIGGERS = 5
MAX_IO_ITEMS = 5
MAX_CALLOUTS = 5

_NUMBERED_STEP = re.compile(r"^[ \t]*\d+[.、)][ \t]*(.+)$", re.M)
_TRANSITION_STEP = re.compile(
    r"^[ \t]*[-•*][ \t]+("
    r"(?:首先|然后|接着|最后|之后|接下来|再"
    r"|(?i:first(?:ly)?|then|next|finally|after that|afterwards)\b).+)$",
    re.M,
)
_SECTION_HEADING = re.compile(r"^##[ \t]+(.+)$", re.M)
_GENERIC_HEADING = re.compile(
    r"^(?:介绍|简介|概述|总结|参考|附录|背景"
    r"|intro(?:duction)?|overview|summary|references?|background|appendix)",
    re.I,
)

_CLAUSE = r"[^，。；,.;\n]"
_TRIGGER_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"当(.{5,50}?)时"),
    re.compile(r"如果(.{5,50}?)就"),
    re.compile(r"每次(.{5,50}?)都"),
    re.compile(rf"用于({_CLAUSE}{{5,50}})"),
    re.compile(rf"适合({_CLAUSE}{{5,50}})"),
    re.compile(r"\bwhenever\s+([^.。\n]{10,100})", re.I),
    re.compile(r"\bwhen\s+(?:you|the user|users?|i)\s+([^.。\n]{10,100})", re.I),
    re.compile(r"\bif\s+([^,.。\n]{5,80}?),?\s+then\b", re.I),
    re.compile(r"\b(?:used|useful|suitable)\s+for\s+([^.。\n]{5,80})", re.I),
)
_HOW_TO_TITLE = re.compile(r"^(如何|怎么|how\s+to\s*)", re.I)

_INPUT_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?:输入|参数|\binputs?|\bparameters?|\bneeds|\brequires)[ \t]*[：:][ \t]*(.+)", re.I),
    re.compile(r"需要(?:提供|准备|输入)[ \t]*(.+)"),
    re.compile(r"接收[ \t]*(.+?)[ \t]*作为输入"),
)
_OUTPUT_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?:输出|返回|生成|\boutputs?|\breturns|\bgenerates|\bproduces)[ \t]*[：:][ \t]*(.+)", re.I),
    re.compile(r"(?:会|将)(?:生成|创建|输出|返回)[ \t]*(.+)"),
    re.compile(r"最终(?:得到|获得)[ \t]*(.+)"),
)

_CODE_BLOCK = re.compile(r"```([\w+#.-]*)[ \t]*\n(.*?)```", re.S)

_TIP_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?:提示|注意|建议|推荐|\btips?\b|\bnotes?\b)[ \t]*[：:][ \t]*(.+)", re.I),
    re.compile("(?:\U0001f4a1|\U0001f514|✨)[ \t]*(.+)"),
)
_WARNING_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"(?:警告|注意|\bwarning\b|\bcaution\b)[ \t]*[：:][ \t]*(.+)", re.I),
    re.compile("(?:⚠️?|\U0001f6a8|❗)[ \t]*(.+)"),
    re.compile(r"不要(.{5,100})"),
    re.compile(r"避免(.{5,100})"),
    re.compile(r"\b(?:avoid|don't|do not)\s+(.{5,100})", re.I),
)

_TRAILING_PUNCTUATION = " \t,.;:，。；：、"


class DocumentParser:
    """Parse long-form text into a `ParsedDocument`.

    Every extractor degrades to an empty or default value, so `parse` never
    raises on odd input.
    """

    def parse(self, content: str) -> ParsedDocument:
        content = content or ""

        title = self._extract_title(content)
        steps = self._extract_steps(content)
        triggers = self._extract_triggers(content, title)
        inputs, outputs = self._extract_inputs_outputs(content)
        code_blocks = self._extract_code_blocks(content)

        return ParsedDocument(
            title=title,
            summary=self._extract_summary(content),
            steps=steps,
            triggers=triggers,
            inputs=inputs,
            outputs=outputs,
            code_blocks=code_blocks,
            tips=self._collect(content, _TIP_PATTERNS, max_length=200, limit=MAX_CALLOUTS),
            warnings=self._collect(content, _WARNING_PATTERNS, max_length=200, limit=MAX_CALLOUTS),
            category=detect_category(content),
            confidence=self.calculate_confidence(steps, triggers, code_blocks),
        )

    def _extract_title(self, content: str) -> str:
        match = re.search(r"^#[ \t]+(.+)$", content, re.M)
        if match:
            return match.group(1).strip()

        first_line = content.split("\n", 1)[0].strip()
        if first_line and len(first_line) < 100:
            return first_line

        return UNTITLED

    def _extract_summary(self, content: str) -> str:
        """First plain paragraph, skipping headings and code fences."""
        paragraph: List[str] = []

        for line in content.split("\n"):
            stripped = line.strip()
            if stripped.startswith("#") or stripped.startswith("```"):
                if paragraph:
                    break
                continue
            if stripped:
                paragraph.append(stripped)
            elif paragraph:
                break

        return " ".join(paragraph)[:300]

    def _extract_steps(self, content: str) -> List[str]:
        steps = [
            m.group(1).strip()
            for m in _NUMBERED_STEP.finditer(content)
            if 5 < len(m.group(1).strip()) < 200
        ]

        if not steps:
            steps = [m.group(1).strip() for m in _TRANSITION_STEP.finditer(content)]

        if not steps:
            for m in _SECTION_HEADING.finditer(content):
                heading = m.group(1).strip()
                if not _GENERIC_HEADING.match(heading):
                    steps.append(heading)

        return steps[:MAX_STEPS]

    def _extract_triggers(self, content: str, title: str) -> List[str]:
        triggers: List[str] = []
        for pattern in _TRIGGER_PATTERNS:
            for m in pattern.finditer(content):
                trigger = m.group(1).strip().rstrip(_TRAILING_PUNCTUATION)
                if 3 < len(trigger) < 100:
                    triggers.append(trigger)

        if not triggers:
            how_to = _HOW_TO_TITLE.match(title)
            if how_to:
                goal = title[how_to.end():].strip()
                if goal:
                    prefix = "user wants to " if how_to.group(1).lower().startswith("how") else "用户想要"
                    triggers.append(f"{prefix}{goal}")

        return dedupe(triggers)[:MAX_TRIGGERS]

    def _extract_inputs_outputs(self, content: str) -> Tuple[List[str], List[str]]:
        inputs = self._collect(content, _INPUT_PATTERNS, max_length=100, limit=MAX_IO_ITEMS)
        outputs = self._collect(content, _OUTPUT_PATTERNS, max_length=100, limit=MAX_IO_ITEMS)
        return inputs, outputs

    def _extract_code_blocks(self, content: str) -> List[CodeBlock]:
        return [
            CodeBlock(language=m.group(1) or "text", code=m.group(2).strip("\n"))
            for m in _CODE_BLOCK.finditer(content)
        ]

    def _collect(
        self, content: str, patterns: Tuple[Pattern[str], ...], *, max_length: int, limit: int
    ) -> List[str]:
        found: List[str] = []
        for pattern in patterns:
            for m in pattern.finditer(content):
                item = m.group(1).strip()
                if item and len(item) < max_length:
                    found.append(item)
        return dedupe(found)[:limit]

    @staticmethod
    def calculate_confidence(steps: List[str], triggers: List[str], code_blocks: List[CodeBlock]) -> float:
        score = 0.0
        if steps:
            score += 0.3
        if len(steps) >= 3:
            score += 0.1
        if triggers:
            score += 0.2
        if code_blocks:
            score += 0.2
        if 2 <= len(steps) <= 8:
            score += 0.2
        return round(min(score, 1.0), 2)


def suggestions(parsed: ParsedDocument) -> List[str]:
    """Hints for making a document easier to turn into a skill."""
    hints: List[str] = []

    if parsed.confidence < 0.5:
        hints.append("Document structure is unclear; add an explicit list of steps")
    if not parsed.steps:
        hints.append("No steps detected; list them as 1. 2. 3.")
    if not parsed.triggers:
        hints.append("No trigger detected; describe when this skill should be used")
    if not parsed.code_blocks and parsed.category == "dev-tools":
        hints.append("Dev-tools skills work better with a code example")
    if len(parsed.summary) < 50:
        hints.append("Summary is short; add a more detailed description")

    return hints


def parse_document(content: str) -> ParsedDocument:
    return DocumentParser().parse(content)
