"""Schema for spec payloads that arrive as JSON/YAML from outside the package.

Payloads are checked here before they are turned into a `SkillSpec`; the core
never trusts an unvalidated dict.
"""

from typing import Any, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import MAX_NAME_LENGTH
from .errors import SpecValidationError
from .models import SkillSpec
from .spec_builder import spec_from_dict

Category = Literal[
    "dev-tools", "automation", "content", "productivity", "data", "design", "communication", "other"
]


class CodeBlockPayload(BaseModel):
    language: str = "text"
    code: str = ""


class WorkflowPayload(BaseModel):
    inputs: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    outputs: List[str] = Field(default_factory=list)


class ResourcesPayload(BaseModel):
    needs_scripts: bool = False
    needs_references: bool = False
    suggested_scripts: List[str] = Field(default_factory=list)
    suggested_references: List[str] = Field(default_factory=list)


class SkillSpecPayload(BaseModel):
    """A serialized `SkillSpec` (the shape produced by `spec_to_dict`)."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(
        min_length=1,
        max_length=MAX_NAME_LENGTH,
        pattern=r"^[a-z0-9]+(-[a-z0-9]+)*$",
    )
    description: str = Field(min_length=1)
    category: Category = "other"
    triggers: List[str] = Field(default_factory=list)
    workflow: WorkflowPayload = Field(default_factory=WorkflowPayload)
    resources: ResourcesPayload = Field(default_factory=ResourcesPayload)
    freedom: Literal["high", "medium", "low"] = "medium"
    platform: Literal["claude", "openclaw"] = "claude"
    code_blocks: List[CodeBlockPayload] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


def load_spec(data: Any) -> SkillSpec:
    """Validate `data` and build a `SkillSpec` from it.

    Raises:
        SpecValidationError: the payload does not match `SkillSpecPayload`.
    """
    try:
        payload = SkillSpecPayload.model_validate(data)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or 'spec'}: {err['msg']}" for err in e.errors()
        ]
        raise SpecValidationError("Invalid skill spec: " + "; ".join(errors), errors) from e

    return spec_from_dict(payload.model_dump())
