"""Heuristic text parsers for documents and short descriptions."""

from .description import DescriptionAnalyzer, analyze_description, clarifying_questions
from .document import DocumentParser, parse_document, suggestions

__all__ = [
    "DocumentParser",
    "DescriptionAnalyzer",
    "parse_document",
    "analyze_description",
    "clarifying_questions",
    "suggestions",
]
