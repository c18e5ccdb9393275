from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TutorMode(str, Enum):
    iniciante = "iniciante"
    intermediario = "intermediario"
    avancado = "avancado"


# ── Transcript ───────────────────────────────────────────────────────────────

class ChatMessage(BaseModel):
    """One bubble in the tutor conversation."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    text: str
    sender: Literal["user", "tutor"]
    timestamp: str
    feedback: Optional[Literal["positive", "negative"]] = None
    feedback_shown: bool = Field(default=False, alias="feedbackShown")


class ChatTranscript(BaseModel):
    """
    Snapshot persisted per topic under ``chat_history_<topic>``.
    Field names match what the mobile client already stores.
    """
    model_config = ConfigDict(populate_by_name=True)

    messages: List[ChatMessage] = []
    correct_exercises_count: int = Field(default=0, alias="correctExercisesCount")
    total_exercises_attempted: int = Field(default=0, alias="totalExercisesAttempted")
    last_message_is_exercise: bool = Field(default=False, alias="lastMessageIsExercise")
    has_evaluated_last_exercise: bool = Field(default=False, alias="hasEvaluatedLastExercise")


class ExerciseScore(BaseModel):
    correct: int
    attempted: int
    percentage: int


# ── Requests ─────────────────────────────────────────────────────────────────

class SendMessageRequest(BaseModel):
    text: str = Field(..., max_length=2000)
    mode: TutorMode = TutorMode.iniciante


class ExerciseEvaluationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_correct: bool = Field(..., alias="isCorrect")


class FeedbackRequest(BaseModel):
    feedback: Literal["positive", "negative"]


class ModeChangeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_mode: TutorMode = Field(..., alias="currentMode")
    new_mode: TutorMode = Field(..., alias="newMode")


# ── Responses ────────────────────────────────────────────────────────────────

class ChatState(BaseModel):
    """Everything the chat screen needs to render."""
    model_config = ConfigDict(populate_by_name=True)

    topic: str
    transcript: ChatTranscript
    suggested_questions: List[str] = Field(default_factory=list, alias="suggestedQuestions")
    score: Optional[ExerciseScore] = None
