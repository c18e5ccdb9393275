import logging

from fastapi import APIRouter, Depends

from codetutor.api.deps import get_resolver
from codetutor.schemas.quiz import QuizRequest, QuizResponse, QuizScore, ScoreRequest
from codetutor.services.question_resolver import QuestionResolver
from codetutor.services.scoring import score_answers

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz")


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 1. QUESTIONS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post("/questions", response_model=QuizResponse)
async def create_questions(
    request: QuizRequest,
    resolver: QuestionResolver = Depends(get_resolver),
):
    """
    Resolve quiz questions for a topic.
    Always succeeds: Gemini when a key is stored, canned questions otherwise.
    """
    questions = await resolver.resolve(
        request.topic, request.difficulty, request.count, request.category
    )
    return QuizResponse(topic=request.topic, category=request.category, questions=questions)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# 2. SCORING
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.post("/score", response_model=QuizScore)
async def score_quiz(request: ScoreRequest):
    """Score the learner's picks against the questions they were shown."""
    return score_answers(request.questions, request.selected_answers)
