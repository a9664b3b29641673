"""Application-related Pydantic schemas."""
from datetime import datetime
from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class ApplicationCreate(BaseModel):
    """Schema for applying to a post."""
    post_id: int
    answers: dict[str, Any] = Field(default_factory=dict)


class ApplicationStatusUpdate(BaseModel):
    status: Literal["accepted", "rejected"]


class ApplicationResponse(BaseModel):
    """Schema for application response."""
    id: int
    post_id: int
    applicant_id: str
    employer_id: str
    status: str
    answers: dict[str, Any]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ApplicationResultResponse(BaseModel):
    success: bool = True
    message: str
    application: ApplicationResponse


class SubmittedApplication(BaseModel):
    """An application as its student sees it."""
    id: int
    post_id: int
    post_title: str
    company_name: str
    status: str
    answers: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class Applicant(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str


class ReceivedApplication(BaseModel):
    """An application as the post's employer sees it."""
    id: int
    post_id: int
    post_title: str
    applicant: Applicant
    status: str
    answers: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class SubmittedApplicationsResponse(BaseModel):
    success: bool = True
    applications: list[SubmittedApplication]


class ReceivedApplicationsResponse(BaseModel):
    success: bool = True
    applications: list[ReceivedApplication]
