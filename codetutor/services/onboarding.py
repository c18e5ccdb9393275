import re
import time
import logging
from typing import Optional

from pydantic import ValidationError

from codetutor.schemas.user import UserInfo
from codetutor.services.storage import KeyValueStore

logger = logging.getLogger(__name__)

USER_INFO_STORAGE = "userInfo"

_NAME_PATTERN = re.compile(r"^[A-Za-zÀ-ÖØ-öø-ÿ\s]+$")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class OnboardingError(ValueError):
    """Form validation failure. ``field`` names the offending input."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def validate_registration(name: str, email: str) -> None:
    if not name.strip():
        raise OnboardingError("name", "O nome é obrigatório.")
    if not email.strip():
        raise OnboardingError("email", "O email é obrigatório.")
    if not _NAME_PATTERN.fullmatch(name):
        raise OnboardingError("name", "O nome deve conter apenas letras e espaços.")
    if not _EMAIL_PATTERN.fullmatch(email):
        raise OnboardingError("email", "Formato de email inválido.")


async def register_user(store: KeyValueStore, name: str, email: str) -> UserInfo:
    validate_registration(name, email)
    user = UserInfo(
        name=name,
        email=email,
        session_id=f"session-{int(time.time() * 1000)}",
    )
    await store.set_json(USER_INFO_STORAGE, user.model_dump(by_alias=True))
    logger.info(f"[ONBOARDING] Registered session {user.session_id}")
    return user


async def get_current_user(store: KeyValueStore) -> Optional[UserInfo]:
    data = await store.get_json(USER_INFO_STORAGE)
    if not data:
        return None
    try:
        return UserInfo.model_validate(data)
    except ValidationError as e:
        logger.warning(f"[ONBOARDING] Stored user info is unreadable: {e.errors()[0]['msg']}")
        return None
