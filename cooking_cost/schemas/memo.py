"""Pydantic schemas for Memo."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MemoWrite(BaseModel):
    """Schema for creating or replacing a memo."""

    content: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Memo content is required")
        return v


class MemoResponse(BaseModel):
    """Schema for memo response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    content: str
    created_at: datetime
    updated_at: datetime
