"""Format generators - one renderer per target platform"""

from typing import Optional

from ..errors import UnsupportedFormatError
from ..models import GeneratedSkill, SkillSpec
from .claude import ClaudeSkillGenerator
from .openclaw import OpenClawSkillGenerator

GENERATORS = {
    "claude": ClaudeSkillGenerator,
    "openclaw": OpenClawSkillGenerator,
}


def render(spec: SkillSpec, format: Optional[str] = None) -> GeneratedSkill:
    """Render `spec` in `format` (defaults to the spec's own platform)."""
    target = format or spec.platform
    generator = GENERATORS.get(target)
    if generator is None:
        raise UnsupportedFormatError(f"Unknown target format: {target}")
    return generator().render(spec)


__all__ = [
    "GENERATORS",
    "ClaudeSkillGenerator",
    "OpenClawSkillGenerator",
    "render",
]
