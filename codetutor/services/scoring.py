import math
from typing import Dict, Iterable

from codetutor.schemas.quiz import QuizQuestion, QuizScore


def percentage(part: int, whole: int) -> int:
    """Half-up rounded percentage; 0 when whole is 0."""
    if not whole:
        return 0
    return math.floor(part / whole * 100 + 0.5)


def score_answers(questions: Iterable[QuizQuestion], selected: Dict[int, int]) -> QuizScore:
    """Count selected answers that match; answers to unknown question ids are ignored."""
    questions = list(questions)
    by_id = {q.id: q for q in questions}

    correct = sum(
        1
        for question_id, answer in selected.items()
        if question_id in by_id and by_id[question_id].correct_answer == answer
    )
    return QuizScore(correct=correct, total=len(questions), percentage=percentage(correct, len(questions)))
