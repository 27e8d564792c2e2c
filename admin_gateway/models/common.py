"""
Common Pydantic models for the Admin Gateway
"""
from pydantic import BaseModel
from datetime import datetime
from typing import Optional

from fastapi.responses import JSONResponse

PROXY_ERROR = "admin_proxy_error"
NO_STORE = {"Cache-Control": "no-store"}


class HealthResponse(BaseModel):
    """
    Health check response model
    """
    status: str
    message: str
    timestamp: datetime
    version: str


class ErrorEnvelope(BaseModel):
    """
    The one error shape the frontend ever sees from the gateway
    """
    error: str = PROXY_ERROR
    details: str
    response: Optional[str] = None


def error_response(
    status_code: int,
    details: str,
    response: Optional[str] = None,
    error: str = PROXY_ERROR,
) -> JSONResponse:
    envelope = ErrorEnvelope(error=error, details=details, response=response)
    return JSONResponse(
        status_code=status_code,
        content=envelope.model_dump(exclude_none=True),
        headers=NO_STORE,
    )
