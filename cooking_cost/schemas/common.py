"""Response envelopes shared by every endpoint."""
from datetime import datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Success envelope: {success, data, message, timestamp}."""

    success: bool = True
    data: Optional[T] = None
    message: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class PaginationMeta(BaseModel):
    """Pagination block of list responses."""

    model_config = ConfigDict(populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: int = Field(..., alias="totalPages")
    has_next: bool = Field(..., alias="hasNext")
    has_prev: bool = Field(..., alias="hasPrev")


class PaginatedResponse(BaseModel, Generic[T]):
    """List envelope: {success, data, pagination, timestamp}."""

    success: bool = True
    data: list[T] = []
    pagination: PaginationMeta
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ErrorDetail(BaseModel):
    """One per-field validation problem."""

    field: str
    message: str


class ErrorResponse(BaseModel):
    """Error envelope: {success: false, error, message, details, timestamp}."""

    success: bool = False
    error: str
    message: str
    details: Optional[list[ErrorDetail]] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    path: Optional[str] = None
    method: Optional[str] = None


class DeleteResult(BaseModel):
    """Payload of delete responses."""

    id: int
    deleted: bool = True
