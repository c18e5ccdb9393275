from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from enum import Enum


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class Category(str, Enum):
    basics = "basics"
    intermediate = "intermediate"
    advanced = "advanced"
    practical = "practical"
    theory = "theory"


# ── Question ─────────────────────────────────────────────────────────────────

class QuizQuestion(BaseModel):
    """A single multiple-choice question with exactly 4 options."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=4, max_length=4)
    # Index into options. Out-of-range values are passed through untouched.
    correct_answer: int = Field(..., alias="correctAnswer")
    explanation: str = ""
    category: Category = Category.basics


# ── Request ──────────────────────────────────────────────────────────────────

class QuizRequest(BaseModel):
    """Request body for question resolution."""
    topic: str = Field(..., min_length=1, description="Topic display name, e.g. 'HTML'")
    difficulty: Difficulty = Field(default=Difficulty.medium)
    count: int = Field(default=3, ge=1, le=20, description="Ignored when fallback questions are used")
    category: Category = Field(default=Category.basics)


class ScoreRequest(BaseModel):
    """Answers picked by the learner, keyed by question id."""
    questions: List[QuizQuestion]
    selected_answers: Dict[int, int] = Field(default_factory=dict, alias="selectedAnswers")

    model_config = ConfigDict(populate_by_name=True)


# ── Response ─────────────────────────────────────────────────────────────────

class QuizResponse(BaseModel):
    """Questions returned to the client."""
    topic: str
    category: Category
    questions: List[QuizQuestion]


class QuizScore(BaseModel):
    correct: int
    total: int
    percentage: int


class CredentialTestResult(BaseModel):
    """Outcome of the settings screen's 'test key' action."""
    status: str = Field(..., pattern=r"^(success|error)$")
    detail: Optional[str] = None
