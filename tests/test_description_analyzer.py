from __future__ import annotations

from skillsmith.parsers import DescriptionAnalyzer, analyze_description, clarifying_questions


def test_chinese_commit_message_scenario(commit_prompt: str) -> None:
    result = analyze_description(commit_prompt)

    assert result.category == "dev-tools"
    assert result.needs_scripts is True
    assert result.triggers
    assert "当代码修改完成后" in result.triggers
    assert result.name == "commit"
    assert result.has_name is False


def test_explicit_name_and_english_trigger() -> None:
    result = analyze_description(
        "Create a tool called pdf-merger. When the user wants to combine PDF files, merge them."
    )

    assert result.name == "pdf-merger"
    assert result.has_name is True
    assert result.triggers == ["When the user wants to combine PDF files, merge them"]
    assert result.has_triggers is True


def test_name_falls_back_to_default() -> None:
    result = analyze_description("???")
    assert result.name == "my-skill"
    assert result.has_name is False


def test_steps_from_numbered_and_bulleted_lines() -> None:
    result = analyze_description("Steps:\n1. Read the file\n2. Parse rows\n- Write output")

    assert result.steps == ["Read the file", "Parse rows", "Write output"]
    assert result.has_steps is True


def test_first_labeled_input_and_output() -> None:
    result = analyze_description("Input: a CSV file\nOutput: a summary table")

    assert result.inputs == ["a CSV file"]
    assert result.outputs == ["a summary table"]
    assert result.has_input_output is True


def test_complexity_thresholds() -> None:
    evaluate = DescriptionAnalyzer.evaluate_complexity

    assert evaluate("short", []) == "simple"
    assert evaluate("x" * 150, ["a", "b", "c"]) == "medium"
    assert evaluate("x" * 600, []) == "complex"
    assert evaluate("short", ["s"] * 6) == "complex"


def test_reference_needs() -> None:
    assert analyze_description("Summarize the API reference").needs_references is True
    assert analyze_description("Say hello").needs_references is False
    assert analyze_description("x" * 501).needs_references is True


def test_length_property() -> None:
    assert analyze_description("hello").length == 5


def test_clarifying_questions_for_vague_prompt() -> None:
    questions = clarifying_questions(analyze_description("Say hello"))
    ids = [q.id for q in questions]

    assert ids == ["name", "triggers", "inputs", "outputs"]
    assert questions[0].required is True
    assert questions[1].type == "multiselect"


def test_clarifying_questions_for_complex_prompt() -> None:
    result = analyze_description("Build a script called data-cleaner. " + "x" * 600)
    ids = [q.id for q in clarifying_questions(result)]

    assert "name" not in ids
    assert "freedom" in ids
    assert "resources" in ids
