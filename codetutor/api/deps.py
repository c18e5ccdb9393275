from fastapi import Depends

from codetutor.services.credentials import CredentialStore
from codetutor.services.gemini_service import GeminiQuestionGenerator
from codetutor.services.question_resolver import QuestionResolver
from codetutor.services.storage import KeyValueStore, get_store
from codetutor.services.tutor import TutorService


def get_generator() -> GeminiQuestionGenerator:
    return GeminiQuestionGenerator()


def get_credentials(store: KeyValueStore = Depends(get_store)) -> CredentialStore:
    return CredentialStore(store)


def get_resolver(
    credentials: CredentialStore = Depends(get_credentials),
    generator: GeminiQuestionGenerator = Depends(get_generator),
) -> QuestionResolver:
    return QuestionResolver(credentials, generator)


def get_tutor(store: KeyValueStore = Depends(get_store)) -> TutorService:
    return TutorService(store)
