from typing import List

from fastapi import APIRouter, HTTPException

from codetutor.schemas.catalog import Lesson, TopicView
from codetutor.services.topic_catalog import LEARNING_TOPICS, TUTOR_LESSONS, find_topic, topic_view

router = APIRouter()


@router.get("/topics", response_model=List[TopicView])
async def list_topics():
    """Learning-path cards, in display order."""
    return [topic_view(topic) for topic in LEARNING_TOPICS]


@router.get("/topics/{topic_id}", response_model=TopicView)
async def get_topic(topic_id: str):
    topic = find_topic(topic_id)
    if topic is None:
        raise HTTPException(status_code=404, detail=f"Unknown topic '{topic_id}'.")
    return topic_view(topic)


@router.get("/lessons", response_model=List[Lesson])
async def list_lessons():
    """Lessons available in the tutor chat."""
    return sorted(TUTOR_LESSONS.values(), key=lambda lesson: lesson.level)
