from __future__ import annotations

import pytest

from skillsmith import create_from_description, create_from_document
from skillsmith.errors import InputValidationError, SpecValidationError, UnsupportedFormatError
from skillsmith.pipeline import SkillPipeline


def test_document_pipeline(deploy_guide: str) -> None:
    result = create_from_document(deploy_guide)

    assert result.success is True
    assert result.error is None
    assert result.parsed.title == "How to Deploy a Static Site"
    assert result.spec.name == "how-to-deploy-a-static-site"
    assert result.generated.format == "claude"
    assert result.generated.validation.valid is True
    assert result.scan.blocked is False
    assert result.suggestions == []


def test_document_pipeline_openclaw(deploy_guide: str) -> None:
    result = create_from_document(deploy_guide, name="deployer", target_format="openclaw")

    assert result.success is True
    assert result.spec.platform == "openclaw"
    assert "export class DeployerSkill implements Skill" in result.generated.body


def test_html_document_is_normalized() -> None:
    page = (
        "<html><body><h1>Weekly Report</h1><p>Collect the numbers every Friday and share them with the team.</p>"
        "<ol><li>Export the metrics dashboard</li><li>Summarize the key changes</li></ol></body></html>"
    )
    result = create_from_document(page, content_type="text/html")

    assert result.success is True
    assert result.parsed.title == "Weekly Report"
    assert "<" not in result.parsed.summary


def test_description_pipeline(commit_prompt: str) -> None:
    result = create_from_description(commit_prompt)

    assert result.success is True
    assert result.analysis.category == "dev-tools"
    assert result.spec.name == "commit"
    assert "当代码修改完成后" in result.generated.body
    assert [q.id for q in result.questions][0] == "name"


@pytest.mark.parametrize("content", ["", "too short", "x" * 100001])
def test_document_input_limits(content: str) -> None:
    with pytest.raises(InputValidationError):
        create_from_document(content)


def test_description_is_required() -> None:
    with pytest.raises(InputValidationError):
        create_from_description("   ")


def test_unknown_target_format(deploy_guide: str) -> None:
    with pytest.raises(UnsupportedFormatError):
        SkillPipeline("markdown").create_from_document(deploy_guide)


def test_stage_failures_become_results(deploy_guide: str, monkeypatch) -> None:
    def boom(*args, **kwargs):
        raise RuntimeError("renderer exploded")

    monkeypatch.setattr("skillsmith.pipeline.render", boom)
    result = create_from_document(deploy_guide)

    assert result.success is False
    assert result.error == "renderer exploded"
    assert result.spec is not None
    assert result.generated is None


def test_create_from_spec() -> None:
    data = {
        "name": "release-notes",
        "description": "Draft release notes from merged pull requests",
        "category": "content",
        "workflow": {"steps": ["List merged PRs", "Group by label", "Write notes"]},
    }
    pipeline = SkillPipeline()

    result = pipeline.create_from_spec(data)
    assert result.success is True
    assert result.generated.format == "claude"
    assert "1. List merged PRs" in result.generated.body

    result = pipeline.create_from_spec(data, target_format="openclaw")
    assert "export class ReleaseNotesSkill" in result.generated.body


def test_create_from_spec_rejects_bad_payload() -> None:
    with pytest.raises(SpecValidationError):
        SkillPipeline().create_from_spec({"name": "Not A Slug", "description": "x"})
