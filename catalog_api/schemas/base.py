# ==============================================================================
# BASE SCHEMAS - Request Models and Response Envelope
# ==============================================================================
# Every successful response is wrapped as {success, message, data}
# Error bodies are produced by AppException.to_dict()
# ==============================================================================

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class BaseSchema(BaseModel):
    """
    Base for catalog request schemas.

    Enum fields dump to their stored values (``"Curso corto"``), so the
    dumped payload can be handed to the ORM unchanged.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )


class APIResponse(BaseModel, Generic[T]):
    """
    Success envelope shared by all catalog endpoints.

    Attributes:
        success: Always True for this envelope
        message: ``"<Resource> retrieved successfully"`` and friends
        data: Serialized entity or list of entities
    """

    success: bool = Field(True, description="Whether the request was successful")
    message: Optional[str] = Field(None, description="Status message")
    data: Optional[T] = Field(None, description="Response data")

    @classmethod
    def ok(cls, data: T, message: Optional[str] = None) -> "APIResponse[T]":
        return cls(success=True, data=data, message=message)


class HealthResponse(BaseModel):
    """Body of ``GET /health``."""

    status: str = Field(..., description="healthy | degraded")
    version: str = Field(..., description="Application version")
    database: str = Field(..., description="connected | disconnected")
