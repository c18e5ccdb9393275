from fastapi import APIRouter

from codetutor.api.v1.endpoints import chat, preferences, quiz, settings, topics, users

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(topics.router, tags=["Topics"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(quiz.router, tags=["Quiz"])
api_router.include_router(settings.router, tags=["Settings"])
api_router.include_router(chat.router, tags=["Chat"])
api_router.include_router(preferences.router, tags=["Preferences"])
