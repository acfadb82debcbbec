"""CLI entry point for skillsmith"""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional

import click
import yaml
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import DEFAULT_PLATFORM, PLATFORMS
from .converter import convert as convert_skill
from .converter import detect_format
from .errors import SkillsmithError
from .exporters import JSONExporter
from .normalizer import normalize
from .parsers import analyze_description, clarifying_questions, parse_document, suggestions
from .pipeline import SkillPipeline
from .security import quick_security_check, scan_security
from .validator import validate as validate_body

SEVERITY_STYLES = {
    "critical": "bold red",
    "danger": "red",
    "warning": "yellow",
    "info": "dim",
}

RISK_ICONS = {"low": "✅", "medium": "⚠️", "high": "🔶", "critical": "🚨"}


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose):
    """skillsmith - Turn documents and prompts into agent skills"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _content_type(path: Path) -> Optional[str]:
    suffix = path.suffix.lower()
    if suffix in (".html", ".htm"):
        return "text/html"
    if suffix == ".pdf":
        return "application/pdf"
    return None


def _read_document(path: Path) -> str:
    """Read a file as text; PDFs are read byte-for-byte so the text streams survive."""
    if path.suffix.lower() == ".pdf":
        return path.read_bytes().decode("latin-1")
    return path.read_text(encoding="utf-8", errors="replace")


def _write_files(output: Path, name: str, files: Dict[str, str]) -> Path:
    target = output / name
    target.mkdir(parents=True, exist_ok=True)
    for filename, text in files.items():
        (target / filename).write_text(text, encoding="utf-8")
    return target


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def parse(file, output_json):
    """Parse a document and show what was extracted"""
    try:
        text = normalize(_read_document(file), _content_type(file))
        parsed = parse_document(text)
        hints = suggestions(parsed)

        if output_json:
            click.echo(JSONExporter().export(parsed))
            return

        click.echo(f"📄 {parsed.title}")
        click.echo(f"   Category: {parsed.category}")
        click.echo(f"   Confidence: {parsed.confidence:.2f}")

        click.echo(f"\n🪜 Steps ({len(parsed.steps)}):")
        for i, step in enumerate(parsed.steps, 1):
            click.echo(f"  {i}. {step}")

        click.echo(f"\n🎯 Triggers ({len(parsed.triggers)}):")
        for trigger in parsed.triggers:
            click.echo(f"  - {trigger}")

        if parsed.inputs or parsed.outputs:
            click.echo("\n📥 Inputs: " + (", ".join(parsed.inputs) or "-"))
            click.echo("📤 Outputs: " + (", ".join(parsed.outputs) or "-"))

        if parsed.code_blocks:
            languages = ", ".join(b.language for b in parsed.code_blocks)
            click.echo(f"\n💻 Code blocks: {len(parsed.code_blocks)} ({languages})")

        if hints:
            click.echo("\n💡 Suggestions:")
            for hint in hints:
                click.echo(f"  - {hint}")

    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise click.Abort()


@cli.command()
@click.argument("text")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def analyze(text, output_json):
    """Analyze a short skill description"""
    try:
        analysis = analyze_description(text)
        questions = clarifying_questions(analysis)

        if output_json:
            click.echo(JSONExporter().export(analysis))
            return

        name_note = "" if analysis.has_name else " (guessed)"
        click.echo(f"🧩 Name: {analysis.name}{name_note}")
        click.echo(f"   Category: {analysis.category}")
        click.echo(f"   Complexity: {analysis.complexity}")
        click.echo(f"   Needs scripts: {'yes' if analysis.needs_scripts else 'no'}")
        click.echo(f"   Needs references: {'yes' if analysis.needs_references else 'no'}")

        if analysis.triggers:
            click.echo("\n🎯 Triggers:")
            for trigger in analysis.triggers:
                click.echo(f"  - {trigger}")

        if analysis.steps:
            click.echo("\n🪜 Steps:")
            for i, step in enumerate(analysis.steps, 1):
                click.echo(f"  {i}. {step}")

        if questions:
            click.echo("\n❓ Questions to answer:")
            for question in questions:
                marker = "*" if question.required else " "
                click.echo(f"  {marker} {question.question}")
                if question.hint:
                    click.echo(f"      {question.hint}")
                for option in question.options:
                    click.echo(f"      - {option}")

    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise click.Abort()


@cli.command()
@click.argument("file", required=False, type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--description", "-d", help="Build from a short description instead of a document")
@click.option(
    "--spec",
    "spec_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Render a JSON/YAML spec file",
)
@click.option(
    "--format",
    "target_format",
    type=click.Choice(PLATFORMS, case_sensitive=False),
    help=f"Target format (default: {DEFAULT_PLATFORM})",
)
@click.option("--name", help="Override the skill name")
@click.option("--output", "-o", type=click.Path(file_okay=False, path_type=Path), help="Write files under this directory")
@click.option("--json", "output_json", is_flag=True, help="Output the full pipeline result as JSON")
def generate(file, description, spec_file, target_format, name, output, output_json):
    """Generate a skill from a document, a description or a spec"""
    sources = [s for s in (file, description, spec_file) if s]
    if len(sources) != 1:
        raise click.UsageError("Provide exactly one of FILE, --description or --spec")

    try:
        pipeline = SkillPipeline(target_format or DEFAULT_PLATFORM)

        if file:
            result = pipeline.create_from_document(
                _read_document(file), name=name, content_type=_content_type(file)
            )
        elif description:
            result = pipeline.create_from_description(description, name=name)
        else:
            with open(spec_file, encoding="utf-8") as f:
                data = yaml.safe_load(f)
            result = pipeline.create_from_spec(data, target_format=target_format)

    except SkillsmithError as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise click.Abort()
    except Exception as e:
        click.echo(f"❌ Unexpected error: {e}", err=True)
        raise click.Abort()

    if not result.success:
        click.echo(f"❌ Error: {result.error}", err=True)
        raise click.Abort()

    if output_json:
        click.echo(JSONExporter().export_pipeline_result(result))
        return

    generated = result.generated
    if output:
        target = _write_files(output, generated.name, generated.files)
        click.echo(f"✅ Generated {generated.name} ({generated.format}) in {target}")
        for filename in generated.files:
            click.echo(f"   - {filename}")
    else:
        click.echo(generated.body, nl=False)

    # Status lines go to stderr so stdout stays pipeable
    if generated.validation and not generated.validation.valid:
        for error in generated.validation.errors:
            click.echo(f"⚠️  Validation: {error}", err=True)
    if result.scan and result.scan.blocked:
        click.echo("🚨 Security scan blocked this skill:", err=True)
        for warning in result.scan.warnings:
            click.echo(f"   - {warning}", err=True)
    for question in result.questions:
        if question.required:
            click.echo(f"❓ {question.question}", err=True)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--to",
    "target_format",
    type=click.Choice(PLATFORMS, case_sensitive=False),
    help="Target format (default: the other one)",
)
@click.option("--output", "-o", type=click.Path(file_okay=False, path_type=Path), help="Write files under this directory")
def convert(file, target_format, output):
    """Convert a skill between the claude and openclaw formats"""
    try:
        conversion = convert_skill(_read_document(file), target_format)
    except Exception as e:
        click.echo(f"❌ Unexpected error: {e}", err=True)
        raise click.Abort()

    if not conversion.success:
        click.echo(f"❌ Error: {conversion.error}", err=True)
        raise click.Abort()

    generated = conversion.result
    if output:
        target = _write_files(output, generated.name, generated.files)
        click.echo(
            f"✅ Converted {generated.name}: {conversion.source_format} -> {conversion.target_format} ({target})"
        )
    else:
        click.echo(generated.body, nl=False)


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def detect(file):
    """Detect the format of a skill file"""
    try:
        detected = detect_format(_read_document(file))
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise click.Abort()

    click.echo(f"🔎 Format: {detected}")


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--quick", is_flag=True, help="Only check critical and high-risk patterns")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def scan(file, quick, output_json):
    """Scan a skill body for dangerous patterns"""
    try:
        content = _read_document(file)

        if quick:
            check = quick_security_check(content)
            if output_json:
                click.echo(JSONExporter().export(check))
            else:
                click.echo(f"{RISK_ICONS[check.risk]} Risk: {check.risk}")
            return

        result = scan_security(content)
        if output_json:
            click.echo(JSONExporter().export(result))
            return

        click.echo(f"{RISK_ICONS[result.risk]} Risk: {result.risk}")
        if result.blocked:
            click.echo("🚨 Blocked: contains critical patterns")

        if result.details:
            table = Table(show_header=True, box=None, padding=(0, 1))
            table.add_column("Severity", style="bold")
            table.add_column("Category")
            table.add_column("Finding")
            for finding in result.details:
                table.add_row(
                    f"[{SEVERITY_STYLES[finding.severity]}]{finding.severity}[/]",
                    finding.category,
                    finding.description,
                )
            Console().print(table)
        else:
            click.echo("   No findings")

    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise click.Abort()


@cli.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate(file):
    """Lint a SKILL.md body; exits non-zero when invalid"""
    try:
        result = validate_body(_read_document(file))
    except Exception as e:
        click.echo(f"❌ Error: {e}", err=True)
        raise click.Abort()

    for error in result.errors:
        click.echo(f"❌ {error}")
    for warning in result.warnings:
        click.echo(f"⚠️  {warning}")

    if not result.valid:
        click.echo(f"\n❌ Invalid ({len(result.errors)} error(s))")
        sys.exit(1)

    click.echo(f"\n✅ Valid ({len(result.warnings)} warning(s))")


if __name__ == "__main__":
    cli()
