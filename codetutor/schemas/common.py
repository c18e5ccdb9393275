"""
Shared response envelopes.
Every error leaving this API has the ErrorResponse shape.
"""

from typing import Optional

from pydantic import BaseModel


class StatusResponse(BaseModel):
    status: str = "success"
    message: Optional[str] = None


class ErrorResponse(BaseModel):
    """Standard error envelope."""
    status: str = "error"
    message: str
    detail: Optional[str] = None


class CredentialStatus(BaseModel):
    """Whether a Gemini key is stored. The key itself is never echoed."""
    configured: bool
