"""
Code Tutor — Gemini Question Generator
=======================================
Talks to Google Gemini to produce multiple-choice quiz questions:
  - Prompt construction (topic, difficulty, category, count)
  - One generateContent call per request, keyed by the learner's own API key
  - JSON array recovery from free-form model output
  - Shape validation into QuizQuestion models

Every failure is raised as GenerationError carrying a FailureReason so the
resolver can decide what to do with it.
"""

import json
import re
import logging
import asyncio
from enum import Enum
from typing import Any, List, Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from pydantic import ValidationError

from codetutor.core.config import settings
from codetutor.schemas.quiz import Category, Difficulty, QuizQuestion

logger = logging.getLogger(__name__)


class FailureReason(str, Enum):
    missing_credential = "missing_credential"
    api_error = "api_error"
    missing_text = "missing_text"
    no_json_array = "no_json_array"
    invalid_json = "invalid_json"
    invalid_shape = "invalid_shape"


class GenerationError(Exception):
    """Remote generation did not yield usable questions."""

    def __init__(self, reason: FailureReason, detail: str = ""):
        super().__init__(f"{reason.value}: {detail}" if detail else reason.value)
        self.reason = reason
        self.detail = detail


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PROMPT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_CATEGORY_GLOSSARY = (
    '- "basics" means fundamental concepts\n'
    '- "intermediate" means intermediate level knowledge\n'
    '- "advanced" means advanced topics\n'
    '- "practical" means practical applications\n'
    '- "theory" means theoretical knowledge\n'
)

_OUTPUT_SCHEMA = (
    "[\n"
    "  {\n"
    '    "id": number,\n'
    '    "question": "string",\n'
    '    "options": ["string", "string", "string", "string"],\n'
    '    "correctAnswer": number (index of correct option, 0-3),\n'
    '    "explanation": "string explaining why the answer is correct",\n'
    '    "category": "string (the category of this question: basics, intermediate, '
    'advanced, practical, or theory)"\n'
    "  }\n"
    "]"
)


def build_quiz_prompt(
    topic: str,
    difficulty: Difficulty | str = Difficulty.medium,
    count: int = 3,
    category: Category | str = Category.basics,
) -> str:
    difficulty = getattr(difficulty, "value", difficulty)
    category = getattr(category, "value", category)
    return (
        f"Generate {count} multiple-choice quiz questions about {topic} "
        f"at {difficulty} difficulty level.\n"
        f'The questions should be focused on the "{category}" category, where:\n'
        f"{_CATEGORY_GLOSSARY}\n"
        "Each question should have 4 options and one correct answer.\n"
        "Format the response as a valid JSON array with the following structure:\n"
        f"{_OUTPUT_SCHEMA}"
    )


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# JSON RECOVERY
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def extract_json_array(raw_text: str) -> Any:
    """
    Pull the JSON array out of a model reply:
    1. Take everything from the first '[' to the last ']' of the raw reply
    2. If that does not parse, retry inside the first markdown fence (```json ... ```)
    3. Parse with json.loads
    Raises GenerationError (no_json_array / invalid_json).
    """
    if not raw_text or not raw_text.strip():
        raise GenerationError(FailureReason.missing_text, "Empty AI response received")

    cleaned = raw_text.strip()
    candidates = [cleaned]
    fence_match = re.search(r"```(?:json)?\s*\n?(.*?)\n?\s*```", cleaned, re.DOTALL)
    if fence_match:
        candidates.append(fence_match.group(1).strip())

    parse_error = None
    for candidate in candidates:
        array_match = re.search(r"\[.*\]", candidate, re.DOTALL)
        if not array_match:
            continue
        try:
            return json.loads(array_match.group(0))
        except json.JSONDecodeError as e:
            parse_error = parse_error or e

    if parse_error is None:
        raise GenerationError(FailureReason.no_json_array, f"No JSON array in: {raw_text[:200]}")
    logger.error(f"[GEMINI] JSON parse failed. Raw (first 500 chars): {raw_text[:500]}")
    raise GenerationError(FailureReason.invalid_json, str(parse_error))


def parse_questions(raw_text: str, category: Category) -> List[QuizQuestion]:
    """
    Validate model output into QuizQuestion objects.
    Ids are renumbered 1..n and every category is forced to the requested one.
    """
    parsed = extract_json_array(raw_text)

    if not isinstance(parsed, list) or not parsed:
        raise GenerationError(FailureReason.invalid_shape, "Expected a non-empty JSON array")

    first = parsed[0]
    if not isinstance(first, dict) or not first.get("question") or not first.get("options"):
        raise GenerationError(FailureReason.invalid_shape, "First item lacks question/options")

    questions: List[QuizQuestion] = []
    for index, item in enumerate(parsed, start=1):
        if not isinstance(item, dict):
            raise GenerationError(FailureReason.invalid_shape, f"Item {index} is not an object")
        payload = {**item, "id": index, "category": category}
        payload.setdefault("explanation", "")
        try:
            questions.append(QuizQuestion.model_validate(payload))
        except ValidationError as e:
            raise GenerationError(
                FailureReason.invalid_shape,
                f"Item {index}: {e.errors()[0]['msg']}",
            )
    return questions


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PROVIDER CALL
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class GeminiQuestionGenerator:
    """Single-shot Gemini client. No retries."""

    def __init__(
        self,
        model_name: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.model_name = model_name or settings.GEMINI_MODEL
        self.temperature = settings.GEMINI_TEMPERATURE if temperature is None else temperature
        self.max_output_tokens = max_output_tokens or settings.GEMINI_MAX_OUTPUT_TOKENS
        self.timeout = settings.GEMINI_TIMEOUT_SECONDS if timeout is None else timeout

    def _generate_sync(self, api_key: str, prompt: str) -> Any:
        # The key travels as the ?key= query parameter on the REST transport.
        genai.configure(api_key=api_key, transport="rest")
        model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={
                "temperature": self.temperature,
                "max_output_tokens": self.max_output_tokens,
            },
        )
        return model.generate_content(prompt)

    async def generate(self, api_key: str, prompt: str) -> str:
        """Return the first candidate's text or raise GenerationError."""
        logger.info(f"[GEMINI] Calling {self.model_name}...")
        call = asyncio.to_thread(self._generate_sync, api_key, prompt)
        try:
            if self.timeout:
                response = await asyncio.wait_for(call, timeout=self.timeout)
            else:
                response = await call
        except asyncio.TimeoutError:
            raise GenerationError(FailureReason.api_error, f"Timed out after {self.timeout}s")
        except google_exceptions.GoogleAPICallError as e:
            raise GenerationError(FailureReason.api_error, f"HTTP {e.code}: {e.message}")
        except Exception as e:
            raise GenerationError(FailureReason.api_error, str(e)[:200])

        try:
            text = response.text
        except (ValueError, IndexError, AttributeError) as e:
            raise GenerationError(FailureReason.missing_text, str(e)[:200])
        if not text:
            raise GenerationError(FailureReason.missing_text, "Candidate has no text")

        logger.info("[GEMINI] ✓ Call succeeded")
        return text

    async def generate_questions(
        self,
        api_key: str,
        topic: str,
        difficulty: Difficulty,
        count: int,
        category: Category,
    ) -> List[QuizQuestion]:
        prompt = build_quiz_prompt(topic, difficulty, count, category)
        raw = await self.generate(api_key, prompt)
        return parse_questions(raw, category)
