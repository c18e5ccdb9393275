"""
Code Tutor — Question Resolver
===============================
Turns (topic, difficulty, count, category) into quiz questions.

  1. Stored Gemini key?  → one remote generation call
  2. No key / any remote failure → canned fallback questions (after a short delay)
  3. Anything unexpected → placeholder questions

The learner is never blocked: resolve() always returns a non-empty list.
resolve_detailed() keeps track of which path produced it.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from codetutor.core.config import settings
from codetutor.schemas.quiz import Category, CredentialTestResult, Difficulty, QuizQuestion
from codetutor.services.credentials import CredentialStore
from codetutor.services.fallback_questions import fallback_questions, placeholder_questions
from codetutor.services.gemini_service import (
    FailureReason,
    GeminiQuestionGenerator,
    GenerationError,
)

logger = logging.getLogger(__name__)


class QuestionSource(str, Enum):
    remote = "remote"
    fallback = "fallback"
    placeholder = "placeholder"


@dataclass(frozen=True)
class RemoteFailure:
    reason: FailureReason
    detail: str = ""


@dataclass(frozen=True)
class Resolution:
    questions: List[QuizQuestion]
    source: QuestionSource
    failure: Optional[RemoteFailure] = None


class QuestionResolver:
    def __init__(
        self,
        credentials: CredentialStore,
        generator: Optional[GeminiQuestionGenerator] = None,
    ):
        self.credentials = credentials
        self.generator = generator or GeminiQuestionGenerator()

    async def resolve(
        self,
        topic: str,
        difficulty: Difficulty = Difficulty.medium,
        count: int = 3,
        category: Category = Category.basics,
    ) -> List[QuizQuestion]:
        resolution = await self.resolve_detailed(topic, difficulty, count, category)
        return resolution.questions

    async def resolve_detailed(
        self,
        topic: str,
        difficulty: Difficulty = Difficulty.medium,
        count: int = 3,
        category: Category = Category.basics,
    ) -> Resolution:
        category = Category(category)
        try:
            return await self._resolve(topic, Difficulty(difficulty), count, category)
        except Exception as e:
            logger.error(f"[RESOLVER] Error generating questions: {e}", exc_info=True)
            return Resolution(
                questions=placeholder_questions(category),
                source=QuestionSource.placeholder,
            )

    async def _resolve(
        self,
        topic: str,
        difficulty: Difficulty,
        count: int,
        category: Category,
    ) -> Resolution:
        api_key = await self.credentials.get()
        logger.info(
            f"[RESOLVER] Generating {count} questions about {topic} "
            f"at {difficulty.value} difficulty, category={category.value}"
        )

        if api_key:
            try:
                questions = await self.generator.generate_questions(
                    api_key, topic, difficulty, count, category
                )
                logger.info(f"[RESOLVER] ✓ Using {len(questions)} Gemini questions")
                return Resolution(questions=questions, source=QuestionSource.remote)
            except GenerationError as e:
                failure = RemoteFailure(reason=e.reason, detail=e.detail)
                logger.warning(
                    f"[RESOLVER] Gemini failed ({e.reason.value}): {e.detail[:200]}. "
                    "Falling back to predefined questions"
                )
        else:
            failure = RemoteFailure(reason=FailureReason.missing_credential)
            logger.info("[RESOLVER] No API key stored, using predefined questions")

        # Simulated network latency so the UI does not flash.
        if settings.FALLBACK_DELAY_SECONDS > 0:
            await asyncio.sleep(settings.FALLBACK_DELAY_SECONDS)

        return Resolution(
            questions=fallback_questions(topic, category),
            source=QuestionSource.fallback,
            failure=failure,
        )


async def check_credential(
    credentials: CredentialStore,
    resolver: QuestionResolver,
    api_key: str,
) -> CredentialTestResult:
    """
    Store api_key and try a one-question generation with it.
    Success only when Gemini itself answered; fallback content counts as error.
    """
    if not await credentials.set(api_key):
        return CredentialTestResult(status="error", detail="Could not store the API key.")

    resolution = await resolver.resolve_detailed("HTML", Difficulty.easy, 1, Category.basics)
    if resolution.source is QuestionSource.remote and resolution.questions:
        return CredentialTestResult(status="success")

    detail = resolution.failure.reason.value if resolution.failure else resolution.source.value
    logger.warning(f"[RESOLVER] API key test failed: {detail}")
    return CredentialTestResult(status="error", detail=detail)
