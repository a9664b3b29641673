"""
Applications API endpoints.
Handles applying to posts, listing, and employer decisions.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.api.auth import get_current_account, require_employer, require_student
from jobboard.database import get_db
from jobboard.models.account import Account
from jobboard.schemas.application import (
    ApplicationCreate,
    ApplicationResponse,
    ApplicationResultResponse,
    ApplicationStatusUpdate,
    ReceivedApplicationsResponse,
    SubmittedApplicationsResponse,
)
from jobboard.services import applications

logger = logging.getLogger(__name__)
router = APIRouter()


# Endpoints
@router.post("/apply", response_model=ApplicationResultResponse)
async def create_application(
    request: ApplicationCreate,
    current_account: Account = Depends(require_student),
    db: AsyncSession = Depends(get_db)
):
    """
    Apply to an accepted post.

    Returns 404 for an unknown post, 409 if the post is not open or the
    student already applied.
    """
    application = await applications.apply(db, current_account, request.post_id, request.answers)
    return ApplicationResultResponse(
        message="Application submitted successfully",
        application=ApplicationResponse.model_validate(application),
    )


@router.get("/applications/submitted", response_model=SubmittedApplicationsResponse)
async def get_submitted_applications(
    current_account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """Applications the caller has submitted."""
    submitted = await applications.list_submitted(db, current_account.unique_id)
    return SubmittedApplicationsResponse(applications=submitted)


@router.get("/applications/received", response_model=ReceivedApplicationsResponse)
async def get_received_applications(
    current_account: Account = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    """Applications to the caller's posts (employers only)."""
    received = await applications.list_received(db, current_account)
    return ReceivedApplicationsResponse(applications=received)


@router.put("/applications/{application_id}/status", response_model=ApplicationResultResponse)
async def update_application_status(
    application_id: int,
    request: ApplicationStatusUpdate,
    current_account: Account = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    """
    Accept or reject an application to one of the caller's posts.

    Returns 409 if the application was already decided.
    """
    application = await applications.set_status(db, application_id, current_account, request.status)
    return ApplicationResultResponse(
        message=f"Application {application.status} successfully",
        application=ApplicationResponse.model_validate(application),
    )
