"""
Common schemas.
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = True
    configured: bool = False


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str
