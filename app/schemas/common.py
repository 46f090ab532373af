"""
Error envelope shared by every router's `responses=` documentation.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response raised through PontuaException."""
    code: str = Field(examples=["INVALID_FILTER"])
    message: str
    details: Optional[dict[str, Any]] = Field(
        default=None,
        examples=[{"field": "data_inicio", "value": "01/03/2025"}],
    )
