"""
Application lifecycle: apply, list from both sides, decide.

Application states:
    pending --employer accepts--> accepted
    pending --employer rejects--> rejected
"""
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.errors import (
    DuplicateApplication,
    NotFound,
    PostingNotOpen,
    StoreError,
    ValidationError,
)
from jobboard.models.account import Account, AccountRole
from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.posting import Posting, PostingStatus
from jobboard.services.authorization import check_owner, check_role
from jobboard.services.postings import get_posting
from jobboard.services.state_machine import ensure_application_transition

logger = logging.getLogger(__name__)

DECIDED_STATUSES = (ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED)


async def apply(
    db: AsyncSession,
    applicant: Account,
    posting_id: int,
    answers: Optional[dict[str, Any]] = None,
) -> Application:
    """
    Submit a student's application to an accepted post.

    The post's employer_id is copied onto the application at this instant.

    Raises:
        Forbidden: If the applicant is not a student
        NotFound: If the post does not exist
        PostingNotOpen: If the post is not Accepted
        DuplicateApplication: If the student already applied to this post
    """
    check_role(applicant, AccountRole.STUDENT)
    posting = await get_posting(db, posting_id)

    if posting.status != PostingStatus.ACCEPTED.value:
        raise PostingNotOpen()

    existing = await db.execute(
        select(Application.id).where(
            Application.post_id == posting_id,
            Application.applicant_id == applicant.unique_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise DuplicateApplication()

    now = datetime.utcnow()
    application = Application(
        post_id=posting.id,
        applicant_id=applicant.unique_id,
        employer_id=posting.employer_id,
        status=ApplicationStatus.PENDING.value,
        answers=answers or {},
        created_at=now,
        updated_at=now,
    )
    db.add(application)

    try:
        await db.commit()
    except IntegrityError:
        # Concurrent duplicate caught by uq_post_applicant
        await db.rollback()
        raise DuplicateApplication()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error creating application for post {posting_id}: {str(e)}", exc_info=True)
        raise StoreError()

    await db.refresh(application)
    logger.info(f"Application {application.id} submitted to post {posting_id} by {applicant.unique_id}")
    return application


async def list_submitted(db: AsyncSession, applicant_id: str) -> list[dict]:
    """Applications a student has submitted, with post title and company."""
    result = await db.execute(
        select(Application, Posting.title, Posting.company_name)
        .join(Posting, Application.post_id == Posting.id)
        .where(Application.applicant_id == applicant_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
    )
    return [
        {
            "id": application.id,
            "post_id": application.post_id,
            "post_title": title,
            "company_name": company_name,
            "status": application.status,
            "answers": application.answers or {},
            "created_at": application.created_at,
            "updated_at": application.updated_at,
        }
        for application, title, company_name in result.all()
    ]


async def list_received(db: AsyncSession, caller: Account) -> list[dict]:
    """Applications to an employer's posts, with post title and applicant identity."""
    check_role(caller, AccountRole.EMPLOYER)
    result = await db.execute(
        select(Application, Posting.title, Account)
        .join(Posting, Application.post_id == Posting.id)
        .join(Account, Application.applicant_id == Account.unique_id)
        .where(Application.employer_id == caller.unique_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
    )
    return [
        {
            "id": application.id,
            "post_id": application.post_id,
            "post_title": title,
            "applicant": {
                "id": applicant.unique_id,
                "first_name": applicant.first_name,
                "last_name": applicant.last_name,
                "email": applicant.email,
            },
            "status": application.status,
            "answers": application.answers or {},
            "created_at": application.created_at,
            "updated_at": application.updated_at,
        }
        for application, title, applicant in result.all()
    ]


async def set_status(
    db: AsyncSession,
    application_id: int,
    caller: Account,
    new_status: str,
) -> Application:
    """
    Accept or reject a pending application.

    Raises:
        ValidationError: If new_status is not accepted/rejected
        NotFound: If the application does not exist
        Forbidden: If the caller is not the application's employer
        InvalidTransition: If the application was already decided
    """
    try:
        to_status = ApplicationStatus(new_status)
    except ValueError:
        to_status = None
    if to_status not in DECIDED_STATUSES:
        raise ValidationError("Status must be either 'accepted' or 'rejected'")

    result = await db.execute(
        select(Application).where(Application.id == application_id).with_for_update()
    )
    application = result.scalar_one_or_none()
    if application is None:
        raise NotFound("Application not found")

    check_owner(caller, application.employer_id, "You can only update status for your own applications")

    from_status = ApplicationStatus(application.status)
    ensure_application_transition(from_status, to_status)

    application.status = to_status.value
    application.updated_at = datetime.utcnow()

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error updating application {application_id}: {str(e)}", exc_info=True)
        raise StoreError()

    await db.refresh(application)
    logger.info(
        f"Application status transition: {from_status.value} → {to_status.value}",
        extra={"application_id": application_id, "employer_id": caller.unique_id},
    )
    return application
