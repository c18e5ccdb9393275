from __future__ import annotations

import pytest

from codetutor.schemas.quiz import Category, Difficulty
from codetutor.services.gemini_service import (
    FailureReason,
    GenerationError,
    build_quiz_prompt,
    extract_json_array,
    parse_questions,
)


def test_prompt_embeds_request_and_category_glossary() -> None:
    prompt = build_quiz_prompt("CSS", Difficulty.easy, 4, Category.practical)

    assert prompt.startswith("Generate 4 multiple-choice quiz questions about CSS at easy difficulty level.")
    assert 'focused on the "practical" category' in prompt
    assert '"basics" means fundamental concepts' in prompt
    assert '"theory" means theoretical knowledge' in prompt
    assert '"correctAnswer": number (index of correct option, 0-3)' in prompt


def test_prompt_accepts_plain_strings() -> None:
    prompt = build_quiz_prompt("HTML", "medium", 3, "basics")

    assert "at medium difficulty level" in prompt
    assert 'focused on the "basics" category' in prompt


def test_extract_json_array_finds_array_inside_prose() -> None:
    raw = 'Sure! [{"question": "Q", "options": []}] Hope this helps.'

    assert extract_json_array(raw) == [{"question": "Q", "options": []}]


def test_extract_json_array_strips_code_fences() -> None:
    raw = "```json\n[1, 2, 3]\n```"

    assert extract_json_array(raw) == [1, 2, 3]


def test_extract_json_array_keeps_backticks_inside_strings() -> None:
    raw = (
        '```json\n[{"question": "Q", "options": ["a", "b", "c", "d"], '
        '"correctAnswer": 0, "explanation": "Use ```<p>``` tags"}]\n```'
    )

    parsed = extract_json_array(raw)

    assert parsed[0]["explanation"] == "Use ```<p>``` tags"


def test_extract_json_array_falls_back_to_fenced_block() -> None:
    raw = "```json\n[1, 2, 3]\n```\nSee [docs] for more."

    assert extract_json_array(raw) == [1, 2, 3]


@pytest.mark.parametrize(
    ("raw", "reason"),
    [
        ("", FailureReason.missing_text),
        ("no array here", FailureReason.no_json_array),
        ("[1, 2,", FailureReason.no_json_array),
        ("[1, 2,]", FailureReason.invalid_json),
    ],
)
def test_extract_json_array_failures(raw, reason) -> None:
    with pytest.raises(GenerationError) as exc_info:
        extract_json_array(raw)
    assert exc_info.value.reason is reason


def test_parse_questions_renumbers_and_forces_category() -> None:
    raw = (
        '[{"id": 3, "question": "A?", "options": ["1", "2", "3", "4"], "correctAnswer": 2,'
        ' "category": "theory"},'
        ' {"id": 3, "question": "B?", "options": ["1", "2", "3", "4"], "correctAnswer": 0,'
        ' "explanation": "because"}]'
    )

    questions = parse_questions(raw, Category.basics)

    assert [q.id for q in questions] == [1, 2]
    assert [q.category for q in questions] == [Category.basics, Category.basics]
    assert questions[0].explanation == ""
    assert questions[1].explanation == "because"


def test_parse_questions_keeps_out_of_range_answer() -> None:
    raw = '[{"question": "A?", "options": ["1", "2", "3", "4"], "correctAnswer": 9}]'

    questions = parse_questions(raw, Category.basics)

    assert questions[0].correct_answer == 9


@pytest.mark.parametrize(
    "raw",
    [
        '{"question": "not a list"}',
        '[{"options": ["1", "2", "3", "4"], "correctAnswer": 0}]',
        '[{"question": "A?", "options": ["1", "2", "3", "4", "5"], "correctAnswer": 0}]',
        '[{"question": "A?", "options": ["1", "2", "3", "4"], "correctAnswer": 0}, "junk"]',
    ],
)
def test_parse_questions_rejects_bad_shapes(raw) -> None:
    with pytest.raises(GenerationError) as exc_info:
        parse_questions(raw, Category.basics)
    assert exc_info.value.reason in {FailureReason.invalid_shape, FailureReason.no_json_array}


@pytest.mark.asyncio
async def test_generate_times_out_as_api_error(fake_gemini) -> None:
    import time

    fake_gemini.timeout = 0.05
    fake_gemini.outcome = lambda: time.sleep(0.3)

    with pytest.raises(GenerationError) as exc_info:
        await fake_gemini.generate("key", "prompt")
    assert exc_info.value.reason is FailureReason.api_error


@pytest.mark.asyncio
async def test_generate_wraps_transport_errors(fake_gemini) -> None:
    fake_gemini.outcome = ConnectionError("network unreachable")

    with pytest.raises(GenerationError) as exc_info:
        await fake_gemini.generate("key", "prompt")
    assert exc_info.value.reason is FailureReason.api_error
    assert "network unreachable" in exc_info.value.detail


@pytest.mark.asyncio
async def test_generate_rejects_empty_text(fake_gemini) -> None:
    fake_gemini.outcome = ""

    with pytest.raises(GenerationError) as exc_info:
        await fake_gemini.generate("key", "prompt")
    assert exc_info.value.reason is FailureReason.missing_text


def test_generation_error_message_includes_reason() -> None:
    error = GenerationError(FailureReason.invalid_json, "Expecting value")

    assert str(error) == "invalid_json: Expecting value"
