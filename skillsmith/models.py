"""Data models for the skill pipeline
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class CodeBlock:
    """A fenced code block lifted from a document"""

    code: str
    language: str = "text"


@dataclass
class ParsedDocument:
    """Structural features extracted from a long-form document"""

    title: str = "untitled"
    summary: str = ""
    steps: List[str] = field(default_factory=list)
    triggers: List[str] = field(default_factory=list)
    inputs: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    code_blocks: List[CodeBlock] = field(default_factory=list)
    tips: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    category: str = "other"
    confidence: float = 0.0  # 0-1, advisory only


@dataclass
class AnalyzerResult:
    """What the description analyzer found in a short prompt"""

    description: str
    has_name: bool = False
    name: str = ""
    has_triggers: bool = False
    triggers: List[str] = field(default_factory=list)
    has_steps: bool = False
    steps: List[str] = field(default_factory=list)
    has_input_output: bool = False
    inputs: List[str] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    category: str = "other"
    complexity: str = "simple"  # "simple" | "medium" | "complex"
    needs_scripts: bool = False
    needs_references: bool = False

    @property
    def length(self) -> int:
        return len(self.description)


@dataclass(frozen=True)
class Workflow:
    """Ordered execution plan of a skill"""

    inputs: Tuple[str, ...] = ()
    steps: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Resources:
    """Auxiliary files a generated skill should reference"""

    needs_scripts: bool = False
    needs_references: bool = False
    suggested_scripts: Tuple[str, ...] = ()
    suggested_references: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SkillSpec:
    """Canonical intermediate representation of a skill"""

    name: str
    description: str
    category: str = "other"
    triggers: Tuple[str, ...] = ()
    workflow: Workflow = field(default_factory=Workflow)
    resources: Resources = field(default_factory=Resources)
    freedom: str = "medium"  # "high" | "medium" | "low"
    platform: str = "claude"  # "claude" | "openclaw"

    # Carried from the parsed document; dropped by format conversion
    code_blocks: Tuple[CodeBlock, ...] = ()
    tips: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()


@dataclass
class ValidationResult:
    """Structural lint result for a SKILL.md body"""

    valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


@dataclass
class GeneratedSkill:
    """A rendered skill in one target format"""

    name: str
    format: str  # "claude" | "openclaw"
    body: str  # SKILL.md text or skill.ts source
    readme: str
    category: str
    tags: List[str] = field(default_factory=list)
    files: Dict[str, str] = field(default_factory=dict)
    validation: Optional[ValidationResult] = None


@dataclass
class SecurityFinding:
    """One pattern hit reported by the security scanner"""

    category: str  # "dangerous" | "suspicious" | "size" | "commands"
    description: str
    severity: str  # "info" | "warning" | "danger" | "critical"


@dataclass
class SecurityScanResult:
    """Risk verdict for a document body"""

    safe: bool = True
    risk: str = "low"  # "low" | "medium" | "high" | "critical"
    warnings: List[str] = field(default_factory=list)
    blocked: bool = False
    details: List[SecurityFinding] = field(default_factory=list)


@dataclass(frozen=True)
class QuickCheckResult:
    """Critical/danger-only verdict used for list views"""

    safe: bool
    risk: str


@dataclass
class ConversionResult:
    """Outcome of converting a skill between formats"""

    success: bool
    result: Optional[GeneratedSkill] = None
    error: Optional[str] = None
    source_format: str = "unknown"
    target_format: str = ""


@dataclass
class ClarifyingQuestion:
    """Follow-up question for an under-specified description"""

    id: str
    question: str
    type: str = "text"  # "text" | "select" | "multiselect"
    options: List[str] = field(default_factory=list)
    required: bool = False
    hint: Optional[str] = None


@dataclass
class PipelineResult:
    """Everything produced by one end-to-end pipeline run"""

    success: bool
    error: Optional[str] = None
    parsed: Optional[ParsedDocument] = None
    analysis: Optional[AnalyzerResult] = None
    spec: Optional[SkillSpec] = None
    generated: Optional[GeneratedSkill] = None
    scan: Optional[SecurityScanResult] = None
    suggestions: List[str] = field(default_factory=list)
    questions: List[ClarifyingQuestion] = field(default_factory=list)
