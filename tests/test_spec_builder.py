from __future__ import annotations

import re

import pytest

from skillsmith.errors import UnsupportedFormatError
from skillsmith.parsers import analyze_description, parse_document
from skillsmith.spec_builder import (
    DEFAULT_INPUTS,
    DEFAULT_OUTPUTS,
    DEFAULT_STEPS,
    build_spec,
    derive_freedom,
    spec_from_dict,
    spec_to_dict,
)

SLUG = re.compile(r"^[a-z0-9-]+$")


def _assert_slug(name: str) -> None:
    assert SLUG.match(name)
    assert len(name) <= 30
    assert not name.startswith("-")
    assert not name.endswith("-")


def test_spec_from_document(deploy_guide: str) -> None:
    spec = build_spec(parse_document(deploy_guide))

    assert spec.name == "how-to-deploy-a-static-site"
    assert spec.description.startswith("This guide walks through")
    assert spec.category == "dev-tools"
    assert len(spec.workflow.steps) == 3
    assert spec.workflow.inputs == DEFAULT_INPUTS
    assert spec.workflow.outputs == DEFAULT_OUTPUTS
    assert spec.freedom == "medium"
    assert spec.platform == "claude"

    assert spec.resources.needs_scripts is True
    assert spec.resources.suggested_scripts == ("scripts/how-to-deploy-a-static-site.sh",)
    assert spec.resources.needs_references is True
    assert spec.resources.suggested_references == ("references/how-to-deploy-a-static-site_guide.md",)
    assert spec.tips == ("keep the dist folder out of version control.",)


@pytest.mark.parametrize(
    "title",
    [
        "!!! Hello, World -- Uber Tool !!!",
        "A very long title that keeps going well past thirty characters",
        "---leading and trailing---",
        "Ends right at a hyphen boundary x-",
        "如何部署",
    ],
)
def test_generated_names_are_slugs(title: str) -> None:
    spec = build_spec(parse_document(f"# {title}\n\nSome body text."))
    _assert_slug(spec.name)


def test_non_ascii_title_falls_back_to_default_name() -> None:
    spec = build_spec(parse_document("# 如何部署\n\n一些正文内容"))
    assert spec.name == "my-skill"


def test_explicit_name_wins(deploy_guide: str) -> None:
    spec = build_spec(parse_document(deploy_guide), name="My Custom Name")
    assert spec.name == "my-custom-name"


def test_defaults_for_empty_document() -> None:
    spec = build_spec(parse_document(""))

    assert spec.name == "my-skill"
    assert spec.triggers == ("/my-skill",)
    assert spec.workflow.steps == DEFAULT_STEPS
    assert spec.freedom == "high"
    assert spec.resources.needs_scripts is False
    assert spec.resources.needs_references is False


def test_spec_from_description(commit_prompt: str) -> None:
    spec = build_spec(analyze_description(commit_prompt), target_format="openclaw")

    assert spec.name == "commit"
    assert spec.category == "dev-tools"
    assert spec.platform == "openclaw"
    assert "当代码修改完成后" in spec.triggers
    assert spec.resources.needs_scripts is True
    assert spec.resources.suggested_scripts == ("scripts/git_helper.sh",)


def test_description_resource_suggestions() -> None:
    spec = build_spec(analyze_description("Run a python script that merges pdf and excel files via the API"))

    assert spec.resources.suggested_scripts == ("scripts/process_pdf.py", "scripts/process_excel.py")
    assert "references/api_docs.md" in spec.resources.suggested_references


@pytest.mark.parametrize(
    "count, expected",
    [(0, "high"), (2, "high"), (3, "medium"), (5, "medium"), (6, "low"), (10, "low")],
)
def test_derive_freedom(count: int, expected: str) -> None:
    assert derive_freedom(count) == expected


def test_freedom_uses_step_count_for_descriptions() -> None:
    description = "\n".join(f"{i}. do thing {i}" for i in range(1, 7))
    assert build_spec(analyze_description(description)).freedom == "low"


def test_unknown_target_format_raises(deploy_guide: str) -> None:
    with pytest.raises(UnsupportedFormatError):
        build_spec(parse_document(deploy_guide), target_format="markdown")


def test_unsupported_source_type_raises() -> None:
    with pytest.raises(TypeError):
        build_spec("plain string")


def test_spec_dict_round_trip(deploy_guide: str) -> None:
    spec = build_spec(parse_document(deploy_guide))
    data = spec_to_dict(spec)

    assert data["workflow"]["steps"][0] == "Install the deployment CLI tool"
    assert data["code_blocks"] == [{"language": "bash", "code": "npm run build && deploy dist"}]
    assert spec_from_dict(data) == spec
