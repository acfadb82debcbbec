"""Shared pytest fixtures for skillsmith tests."""

from pathlib import Path

import pytest

from skillsmith.models import CodeBlock, SkillSpec, Workflow

DEPLOY_GUIDE = """# How to Deploy a Static Site

This guide walks through publishing a static site with a single command. It is useful for teams that ship documentation often.

## Steps

1. Install the deployment CLI tool
2. Build the site into the dist folder
3. Run the deploy command from the project root

When you need to publish documentation updates, run this workflow.

```bash
npm run build && deploy dist
```

Tip: keep the dist folder out of version control.
"""

FOO_SKILL_MD = """---
name: foo
description: Does foo things
---

# Foo

Does foo things.

## Workflow

### Execution Steps
1. First step
2. Second step
3. Third step
"""

COMMIT_PROMPT = "创建一个 commit message 生成器,当代码修改完成后分析 git diff 生成规范提交信息"


@pytest.fixture
def deploy_guide() -> str:
    return DEPLOY_GUIDE


@pytest.fixture
def foo_skill_md() -> str:
    return FOO_SKILL_MD


@pytest.fixture
def commit_prompt() -> str:
    return COMMIT_PROMPT


@pytest.fixture
def commit_spec() -> SkillSpec:
    """A small hand-built spec with three steps."""
    return SkillSpec(
        name="commit-helper",
        description="Write commit messages from staged changes",
        category="dev-tools",
        triggers=("/commit-helper",),
        workflow=Workflow(
            inputs=("staged diff",),
            steps=("Read the staged diff", "Summarize the change", "Write the commit message"),
            outputs=("commit message",),
        ),
        code_blocks=(CodeBlock(code="console.log('hi')", language="js"),),
    )


@pytest.fixture
def deploy_guide_file(tmp_path: Path) -> Path:
    path = tmp_path / "guide.md"
    path.write_text(DEPLOY_GUIDE, encoding="utf-8")
    return path
