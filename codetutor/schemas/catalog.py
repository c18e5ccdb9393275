from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TopicLevel(str, Enum):
    beginner = "beginner"
    intermediate = "intermediate"
    advanced = "advanced"


class Topic(BaseModel):
    """A learning-path card."""
    id: str
    name: str
    description: str
    icon: str
    color: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")
    difficulty: TopicLevel


class TopicView(Topic):
    """Catalog entry with its localized difficulty label."""
    difficulty_label: str


class Lesson(BaseModel):
    """A tutor-chat lesson on the learning track."""
    id: str
    name: str
    description: str
    level: int = Field(..., ge=1)
    category: str
    prerequisite: Optional[str] = None
    icon: str
