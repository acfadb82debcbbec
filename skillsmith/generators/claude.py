"""Claude generator - renders a `SkillSpec` as a SKILL.md document"""

from typing import List

import yaml

from ..config import MAX_DESCRIPTION_LENGTH
from ..models import GeneratedSkill, SkillSpec
from ..utils import format_name, keyword_tags, single_line
from ..validator import validate

PLATFORM = "claude"

WHEN_TO_USE_HEADING = "## When to Use"
WORKFLOW_HEADING = "## Workflow"
STEPS_HEADING = "### Execution Steps"

INSTRUCTION_INTROS = {
    "high": "The workflow below is a recommendation; adapt it to the situation:",
    "medium": "Follow these steps; small adjustments are allowed:",
    "low": "Follow these steps strictly:",
}

FREEDOM_NOTES = {
    "low": "Follow the steps exactly; do not skip or reorder them",
    "high": "Adapt the approach to the situation as needed",
}


class ClaudeSkillGenerator:
    """Render SKILL.md plus a README for Claude Code"""

    def render(self, spec: SkillSpec) -> GeneratedSkill:
        body = self.render_skill_md(spec)
        readme = self.render_readme(spec)

        return GeneratedSkill(
            name=spec.name,
            format=PLATFORM,
            body=body,
            readme=readme,
            category=spec.category,
            tags=keyword_tags(spec.category, spec.description, PLATFORM),
            files={"SKILL.md": body, "README.md": readme},
            validation=validate(body),
        )

    def render_skill_md(self, spec: SkillSpec) -> str:
        sections = [
            self._frontmatter(spec),
            f"# {format_name(spec.name)}",
            spec.description.strip(),
            self._triggers_section(spec),
            self._workflow_section(spec),
            self._resources_section(spec),
            self._notes_section(spec),
        ]
        return "\n\n".join(s for s in sections if s) + "\n"

    def _frontmatter(self, spec: SkillSpec) -> str:
        header = yaml.safe_dump(
            {
                "name": spec.name,
                "description": single_line(spec.description, MAX_DESCRIPTION_LENGTH),
            },
            sort_keys=False,
            allow_unicode=True,
            width=1000,
        )
        lines = ["---", header.rstrip("\n")]
        if spec.resources.needs_scripts or spec.resources.needs_references:
            lines.append("# Optional fields")
            lines.append("# license: MIT")
            lines.append("# compatibility: Claude Code")
        lines.append("---")
        return "\n".join(lines)

    def _triggers_section(self, spec: SkillSpec) -> str:
        if not spec.triggers:
            return ""
        lines = [WHEN_TO_USE_HEADING, "", "Activate this skill when:"]
        lines.extend(f"- {t}" for t in spec.triggers)
        return "\n".join(lines)

    def _workflow_section(self, spec: SkillSpec) -> str:
        workflow = spec.workflow
        lines = [WORKFLOW_HEADING, "", INSTRUCTION_INTROS.get(spec.freedom, INSTRUCTION_INTROS["medium"])]

        if workflow.inputs:
            lines.extend(["", "### Inputs"])
            lines.extend(f"- {i}" for i in workflow.inputs)

        lines.extend(["", STEPS_HEADING])
        lines.extend(f"{n}. {single_line(step, 500)}" for n, step in enumerate(workflow.steps, 1))

        if workflow.outputs:
            lines.extend(["", "### Outputs"])
            lines.extend(f"- {o}" for o in workflow.outputs)

        return "\n".join(lines)

    def _resources_section(self, spec: SkillSpec) -> str:
        resources = spec.resources
        if not resources.needs_scripts and not resources.needs_references:
            return ""

        lines: List[str] = ["## Resources"]
        if resources.needs_scripts and resources.suggested_scripts:
            lines.extend(["", "### Scripts"])
            lines.extend(
                f"- `{s}` - run directly, no need to load into context"
                for s in resources.suggested_scripts
            )
        if resources.needs_references and resources.suggested_references:
            lines.extend(["", "### References"])
            lines.extend(f"- `{r}` - load on demand" for r in resources.suggested_references)
        return "\n".join(lines)

    def _notes_section(self, spec: SkillSpec) -> str:
        lines = [
            "## Notes",
            "",
            "- Confirm the user's intent before acting",
            "- Handle likely error cases",
            "- Give clear feedback about what was done",
        ]
        note = FREEDOM_NOTES.get(spec.freedom)
        if note:
            lines.append(f"- {note}")
        return "\n".join(lines)

    def render_readme(self, spec: SkillSpec) -> str:
        name = spec.name
        lines = [
            f"# {format_name(name)}",
            "",
            spec.description.strip(),
            "",
            "## Installation",
            "",
            "```bash",
            f'mkdir -p ~/.claude/skills/{name} && curl -sL "SKILL_URL" -o ~/.claude/skills/{name}/SKILL.md',
            "```",
            "",
            "> Replace `SKILL_URL` with the raw URL of the published SKILL.md",
            "",
            "## Usage",
            "",
            f"Type `/{name}` in Claude Code to trigger this skill.",
            "",
            "## Category",
            "",
            spec.category,
            "",
            "## License",
            "",
            "MIT",
        ]
        return "\n".join(lines) + "\n"
