import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from codetutor.api.deps import get_credentials, get_resolver
from codetutor.schemas.common import CredentialStatus, StatusResponse
from codetutor.schemas.quiz import CredentialTestResult
from codetutor.services.credentials import CredentialStore
from codetutor.services.question_resolver import QuestionResolver, check_credential

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings")


class ApiKeyRequest(BaseModel):
    model_config = {"populate_by_name": True}

    api_key: str = Field(..., alias="apiKey", max_length=512)


@router.get("/api-key", response_model=CredentialStatus)
async def get_api_key_status(credentials: CredentialStore = Depends(get_credentials)):
    """Report whether a Gemini key is stored."""
    return CredentialStatus(configured=await credentials.is_configured())


@router.put("/api-key", response_model=StatusResponse)
async def save_api_key(
    request: ApiKeyRequest,
    credentials: CredentialStore = Depends(get_credentials),
):
    try:
        saved = await credentials.set(request.api_key)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
    if not saved:
        raise HTTPException(
            status_code=503,
            detail="Não foi possível salvar a chave de API. Tente novamente.",
        )
    return StatusResponse(message="Chave de API salva com sucesso!")


@router.delete("/api-key", response_model=StatusResponse)
async def clear_api_key(credentials: CredentialStore = Depends(get_credentials)):
    if not await credentials.clear():
        raise HTTPException(
            status_code=503,
            detail="Não foi possível remover a chave de API. Tente novamente.",
        )
    return StatusResponse(message="Chave de API removida com sucesso.")


@router.post("/api-key/test", response_model=CredentialTestResult)
async def test_api_key(
    request: ApiKeyRequest,
    credentials: CredentialStore = Depends(get_credentials),
    resolver: QuestionResolver = Depends(get_resolver),
):
    """Store the key and check that Gemini actually answers with it."""
    try:
        return await check_credential(credentials, resolver, request.api_key)
    except ValueError as ve:
        raise HTTPException(status_code=400, detail=str(ve))
