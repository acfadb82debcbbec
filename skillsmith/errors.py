"""Exceptions raised at the package boundary."""


class SkillsmithError(RuntimeError):
    """Base class for skillsmith errors."""


class InputValidationError(SkillsmithError, ValueError):
    """Raised when required input is missing or outside accepted limits."""


class UnsupportedFormatError(SkillsmithError, ValueError):
    """Raised when a target format is not one of the known platforms."""


class SpecValidationError(SkillsmithError, ValueError):
    """Raised when a spec payload fails schema validation."""

    def __init__(self, message: str, errors=None):
        super().__init__(message)
        self.errors = errors or []
