"""Pipeline orchestrator - raw text in, rendered and scanned skill out"""

import logging
from typing import Any, Callable, Optional

from .config import DEFAULT_PLATFORM, MAX_DOCUMENT_LENGTH, MIN_DOCUMENT_LENGTH, PLATFORMS
from .errors import InputValidationError, UnsupportedFormatError
from .generators import render
from .models import PipelineResult
from .normalizer import normalize
from .parsers import analyze_description, clarifying_questions, parse_document, suggestions
from .schema import load_spec
from .security import scan_security
from .spec_builder import build_spec

logger = logging.getLogger(__name__)


class SkillPipeline:
    """Runs normalize -> parse/analyze -> build -> render -> scan.

    Input problems raise `InputValidationError` before any stage runs;
    anything that fails inside a stage comes back as a failed `PipelineResult`.
    """

    def __init__(self, target_format: str = DEFAULT_PLATFORM):
        self.target_format = target_format

    def create_from_document(
        self,
        content: str,
        name: Optional[str] = None,
        content_type: Optional[str] = None,
        target_format: Optional[str] = None,
    ) -> PipelineResult:
        """Build a skill from an article, post, README, HTML page or PDF text."""
        if not content or not isinstance(content, str):
            raise InputValidationError("Document content is required")
        if len(content) > MAX_DOCUMENT_LENGTH:
            raise InputValidationError(
                f"Document is too long ({len(content)} chars); keep it under {MAX_DOCUMENT_LENGTH}"
            )

        text = normalize(content, content_type)
        if len(text.strip()) < MIN_DOCUMENT_LENGTH:
            raise InputValidationError(
                f"Document is too short; provide at least {MIN_DOCUMENT_LENGTH} characters of text"
            )

        target = self._target(target_format)
        result = PipelineResult(success=False)

        def run() -> None:
            result.parsed = parse_document(text)
            result.suggestions = suggestions(result.parsed)
            result.spec = build_spec(result.parsed, name=name, target_format=target)

        return self._finish(result, run)

    def create_from_description(
        self,
        description: str,
        name: Optional[str] = None,
        target_format: Optional[str] = None,
    ) -> PipelineResult:
        """Build a skill from a short free-form prompt."""
        if not description or not description.strip():
            raise InputValidationError("Description is required")
        if len(description) > MAX_DOCUMENT_LENGTH:
            raise InputValidationError(
                f"Description is too long ({len(description)} chars); keep it under {MAX_DOCUMENT_LENGTH}"
            )

        target = self._target(target_format)
        result = PipelineResult(success=False)

        def run() -> None:
            result.analysis = analyze_description(description)
            result.questions = clarifying_questions(result.analysis)
            result.spec = build_spec(result.analysis, name=name, target_format=target)

        return self._finish(result, run)

    def create_from_spec(self, data: Any, target_format: Optional[str] = None) -> PipelineResult:
        """Render a serialized spec; raises `SpecValidationError` on a bad payload."""
        target = self._target(target_format) if target_format else None
        spec = load_spec(data)
        result = PipelineResult(success=False, spec=spec)

        def run() -> None:
            if target and target != spec.platform:
                result.generated = render(spec, target)

        return self._finish(result, run)

    def _target(self, target_format: Optional[str]) -> str:
        target = target_format or self.target_format
        if target not in PLATFORMS:
            raise UnsupportedFormatError(f"Unknown target format: {target}")
        return target

    def _finish(self, result: PipelineResult, build: Callable[[], None]) -> PipelineResult:
        """Run the build stage, then render and scan, catching stage failures"""
        try:
            build()
            logger.debug("Spec ready: %s", result.spec.name)

            if result.generated is None:
                result.generated = render(result.spec)
            logger.debug("Rendered %s as %s", result.generated.name, result.generated.format)

            result.scan = scan_security(result.generated.body)
            result.success = True
        except Exception as e:
            logger.debug("Pipeline failed", exc_info=True)
            result.error = str(e)
        return result


def create_from_document(
    content: str,
    name: Optional[str] = None,
    target_format: str = DEFAULT_PLATFORM,
    content_type: Optional[str] = None,
) -> PipelineResult:
    return SkillPipeline(target_format).create_from_document(content, name=name, content_type=content_type)


def create_from_description(
    description: str,
    name: Optional[str] = None,
    target_format: str = DEFAULT_PLATFORM,
) -> PipelineResult:
    return SkillPipeline(target_format).create_from_description(description, name=name)
