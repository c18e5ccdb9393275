from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Onboarding form. Format checks live in the onboarding service."""
    name: str
    email: str


class UserInfo(BaseModel):
    """Locally stored session identity, saved under ``userInfo``."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    session_id: str = Field(..., alias="sessionId")
