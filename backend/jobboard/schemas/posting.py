"""Post-related Pydantic schemas."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PostingBase(BaseModel):
    """Base schema with common job post fields."""
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    company_name: str = ""
    tags: str = ""
    documents: str = ""
    tips: str = ""
    skills: str = ""
    experience: str = ""  # easy | medium | hard
    jobtype: str = ""  # full-time | part-time
    location: str = ""
    questions: Optional[str] = None


class PostingCreate(PostingBase):
    """Schema for creating a new job post."""
    pass


class PostingUpdate(BaseModel):
    """Partial update of content fields. Status is never writable here."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    company_name: Optional[str] = None
    tags: Optional[str] = None
    documents: Optional[str] = None
    tips: Optional[str] = None
    skills: Optional[str] = None
    experience: Optional[str] = None
    jobtype: Optional[str] = None
    location: Optional[str] = None
    questions: Optional[str] = None

    @field_validator(
        "title", "description", "company_name", "tags", "documents", "tips",
        "skills", "experience", "jobtype", "location",
    )
    @classmethod
    def reject_null(cls, value):
        # Omit a field to leave it unchanged; only questions may be cleared
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class ModerationRequest(BaseModel):
    decision: Literal["accept", "reject"]


class PostingResponse(PostingBase):
    """Schema for job post response."""
    id: int
    employer_id: str
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostingListResponse(BaseModel):
    success: bool = True
    posts: list[PostingResponse]


class PostingResultResponse(BaseModel):
    success: bool = True
    message: str
    post: PostingResponse


class MessageOnlyResponse(BaseModel):
    success: bool = True
    message: str
