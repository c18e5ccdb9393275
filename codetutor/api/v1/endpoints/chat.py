import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from codetutor.api.deps import get_tutor
from codetutor.schemas.chat import (
    ChatState,
    ExerciseEvaluationRequest,
    FeedbackRequest,
    ModeChangeRequest,
    SendMessageRequest,
    TutorMode,
)
from codetutor.services.tutor import (
    TutorError,
    TutorService,
    exercise_score,
    suggested_questions,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat")


async def _state(tutor: TutorService, lesson: str, mode: Optional[TutorMode] = None) -> ChatState:
    transcript = await tutor.load_transcript(lesson)
    mode = mode or await tutor.current_mode()
    return ChatState(
        topic=lesson,
        transcript=transcript,
        suggested_questions=suggested_questions(lesson, mode),
        score=exercise_score(transcript),
    )


def _raise(error: TutorError) -> None:
    logger.warning(f"[CHAT] {error.message}")
    raise HTTPException(status_code=error.status_code, detail=error.message)


@router.get("/{lesson}", response_model=ChatState)
async def read_chat(
    lesson: str,
    mode: Optional[TutorMode] = None,
    tutor: TutorService = Depends(get_tutor),
):
    """Transcript, suggested questions and exercise score for a lesson."""
    return await _state(tutor, lesson, mode)


@router.post("/{lesson}/messages", response_model=ChatState)
async def send_message(
    lesson: str,
    request: SendMessageRequest,
    tutor: TutorService = Depends(get_tutor),
):
    try:
        await tutor.send_message(lesson, request.mode, request.text)
    except TutorError as te:
        _raise(te)
    return await _state(tutor, lesson, request.mode)


@router.post("/{lesson}/exercise-evaluation", response_model=ChatState)
async def evaluate_exercise(
    lesson: str,
    request: ExerciseEvaluationRequest,
    tutor: TutorService = Depends(get_tutor),
):
    try:
        await tutor.evaluate_exercise(lesson, request.is_correct)
    except TutorError as te:
        _raise(te)
    return await _state(tutor, lesson)


@router.post("/{lesson}/messages/{message_id}/feedback", response_model=ChatState)
async def record_feedback(
    lesson: str,
    message_id: int,
    request: FeedbackRequest,
    tutor: TutorService = Depends(get_tutor),
):
    """Store thumbs up/down on a tutor message."""
    try:
        await tutor.record_feedback(lesson, message_id, request.feedback)
    except TutorError as te:
        _raise(te)
    return await _state(tutor, lesson)


@router.put("/{lesson}/mode", response_model=ChatState)
async def change_mode(
    lesson: str,
    request: ModeChangeRequest,
    tutor: TutorService = Depends(get_tutor),
):
    try:
        await tutor.change_mode(lesson, request.current_mode, request.new_mode)
    except TutorError as te:
        _raise(te)
    return await _state(tutor, lesson, request.new_mode)
