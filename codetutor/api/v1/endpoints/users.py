import logging

from fastapi import APIRouter, Depends, HTTPException

from codetutor.schemas.user import RegisterRequest, UserInfo
from codetutor.services.onboarding import OnboardingError, get_current_user, register_user
from codetutor.services.storage import KeyValueStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users")


@router.post("", response_model=UserInfo, status_code=201)
async def create_user(request: RegisterRequest, store: KeyValueStore = Depends(get_store)):
    """Onboard the learner and start a local session."""
    try:
        return await register_user(store, request.name, request.email)
    except OnboardingError as oe:
        raise HTTPException(status_code=422, detail={"field": oe.field, "message": oe.message})


@router.get("/me", response_model=UserInfo)
async def read_current_user(store: KeyValueStore = Depends(get_store)):
    user = await get_current_user(store)
    if user is None:
        raise HTTPException(status_code=404, detail="No registered user.")
    return user
