"""OpenClaw generator - renders a `SkillSpec` as a TypeScript plugin stub.

The stub is plain templated text; nothing here compiles or type-checks it.
"""

import json
from typing import List

import yaml

from ..config import MAX_DESCRIPTION_LENGTH
from ..models import GeneratedSkill, SkillSpec
from ..utils import dedupe, format_name, keyword_tags, single_line, to_pascal_case

PLATFORM = "openclaw"

SDK_IMPORT = 'import { Skill, Message, Context } from "openclaw/plugin-sdk";'
WORKFLOW_MARKER = "// Workflow:"
REFERENCE_LANGUAGES = {"typescript", "javascript", "ts", "js"}


def ts_string(value: str) -> str:
    """Quote `value` as a TypeScript string literal."""
    return json.dumps(value, ensure_ascii=False)


def class_name(name: str) -> str:
    """`commit-helper` -> `CommitHelperSkill`; identifiers cannot start with a digit."""
    pascal = to_pascal_case(name)
    if pascal[:1].isdigit():
        pascal = f"_{pascal}"
    return f"{pascal}Skill"


class OpenClawSkillGenerator:
    """Render skill.ts plus a README/manifest for OpenClaw"""

    def render(self, spec: SkillSpec) -> GeneratedSkill:
        body = self.render_skill_ts(spec)
        readme = self.render_readme(spec)

        return GeneratedSkill(
            name=spec.name,
            format=PLATFORM,
            body=body,
            readme=readme,
            category=spec.category,
            tags=keyword_tags(spec.category, spec.description, PLATFORM),
            files={"skill.ts": body, "README.md": readme},
        )

    def triggers_for(self, spec: SkillSpec) -> List[str]:
        return dedupe([f"/{spec.name}", spec.name, *spec.triggers])

    def render_skill_ts(self, spec: SkillSpec) -> str:
        skill_class = class_name(spec.name)
        description = single_line(spec.description, MAX_DESCRIPTION_LENGTH)
        triggers = self.triggers_for(spec)

        lines = [
            f"// {spec.name} - OpenClaw Skill",
            f"// {single_line(spec.description, 200)}",
            "",
            SDK_IMPORT,
            "",
            f"export class {skill_class} implements Skill {{",
            f"  name = {ts_string(spec.name)};",
            f"  description = {ts_string(description)};",
            "",
            "  triggers = [",
        ]
        lines.extend(f"    {ts_string(t)}," for t in triggers)
        lines.append("  ];")
        lines.append("")
        lines.append("  commands = [")
        for trigger in triggers:
            if not trigger.startswith("/"):
                continue
            command = trigger[1:]
            lines.append(
                f"    {{ name: {ts_string(command)}, "
                f"description: {ts_string(f'Run the {spec.name} {trigger} command')}, "
                f"handler: {ts_string('handle' + to_pascal_case(command))} }},"
            )
        lines.append("  ];")
        lines.extend(
            [
                "",
                "  async handle(message: Message, context: Context): Promise<string> {",
                "    const userInput = this.parseInput(message.content);",
                "",
                "    try {",
                "      const result = await this.execute(userInput, context);",
                "      return this.formatOutput(result);",
                "    } catch (error) {",
                '      return `Execution failed: ${error instanceof Error ? error.message : "unknown error"}`;',
                "    }",
                "  }",
                "",
                "  private parseInput(content: string): Record<string, string> {",
                "    // Strip the trigger prefix",
                '    const cleaned = content.replace(new RegExp(`^/?${this.name}\\\\s*`, "i"), "").trim();',
                "    return { raw: cleaned };",
                "  }",
                "",
                "  private async execute(input: Record<string, string>, context: Context): Promise<unknown> {",
                f"    {WORKFLOW_MARKER}",
            ]
        )
        lines.extend(
            f"    // {n}. {single_line(step, 500)}" for n, step in enumerate(spec.workflow.steps, 1)
        )

        reference = [b.code for b in spec.code_blocks if b.language.lower() in REFERENCE_LANGUAGES]
        if reference:
            lines.append("")
            lines.append("    // Reference code:")
            for code in reference:
                lines.extend(f"    // {line}".rstrip() for line in code.split("\n"))

        lines.extend(
            [
                "",
                '    return { success: true, message: "Task complete", data: input };',
                "  }",
                "",
                "  private formatOutput(result: unknown): string {",
                '    if (typeof result === "string") return result;',
                "    return JSON.stringify(result, null, 2);",
                "  }",
                "}",
                "",
                f"export default {skill_class};",
            ]
        )
        return "\n".join(lines) + "\n"

    def render_readme(self, spec: SkillSpec) -> str:
        name = spec.name
        workflow = spec.workflow
        config = yaml.safe_dump({"plugins": {name: {"enabled": True}}}, sort_keys=False)

        lines = [
            f"# {format_name(name)}",
            "",
            spec.description.strip(),
            "",
            "## Installation",
            "",
            "```bash",
            "# Install with the OpenClaw CLI",
            f"openclaw plugin install {name}",
            "",
            "# Or install manually",
            f"git clone https://github.com/YOUR_USERNAME/{name}.git ~/.openclaw/plugins/{name}",
            f"cd ~/.openclaw/plugins/{name}",
            "npm install",
            "```",
            "",
            "## Usage",
            "",
            "Use one of these commands in OpenClaw:",
            "",
        ]
        lines.extend(f"- `{t}`" for t in self.triggers_for(spec))
        lines.extend(["", "## Workflow", ""])
        lines.extend(f"{n}. {single_line(s, 500)}" for n, s in enumerate(workflow.steps, 1))
        if workflow.inputs:
            lines.extend(["", "## Inputs", ""])
            lines.extend(f"- {i}" for i in workflow.inputs)
        if workflow.outputs:
            lines.extend(["", "## Outputs", ""])
            lines.extend(f"- {o}" for o in workflow.outputs)
        lines.extend(
            [
                "",
                "## Configuration",
                "",
                "Add to `~/.openclaw/config.yaml`:",
                "",
                "```yaml",
                config.rstrip("\n"),
                "```",
                "",
                "## License",
                "",
                "MIT",
            ]
        )
        return "\n".join(lines) + "\n"
