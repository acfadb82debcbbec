"""skillsmith.

Turn free-form documents and prompts into agent skills, convert skills between
the claude and openclaw formats, and lint and scan skill bodies.
"""

__version__ = "1.0.0"

from .converter import convert, detect_format
from .errors import (
    InputValidationError,
    SkillsmithError,
    SpecValidationError,
    UnsupportedFormatError,
)
from .generators import render
from .models import (
    AnalyzerResult,
    ConversionResult,
    GeneratedSkill,
    ParsedDocument,
    PipelineResult,
    SecurityScanResult,
    SkillSpec,
    ValidationResult,
)
from .normalizer import normalize
from .parsers import analyze_description, parse_document
from .pipeline import SkillPipeline, create_from_description, create_from_document
from .security import quick_security_check, scan_security
from .spec_builder import build_spec
from .validator import validate

__all__ = [
    "parse_document",
    "analyze_description",
    "build_spec",
    "render",
    "detect_format",
    "convert",
    "scan_security",
    "quick_security_check",
    "validate",
    "normalize",
    "create_from_document",
    "create_from_description",
    "SkillPipeline",
    "SkillSpec",
    "ParsedDocument",
    "AnalyzerResult",
    "GeneratedSkill",
    "ConversionResult",
    "SecurityScanResult",
    "ValidationResult",
    "PipelineResult",
    "SkillsmithError",
    "InputValidationError",
    "UnsupportedFormatError",
    "SpecValidationError",
]
