"""
Job post lifecycle: creation, moderation, listing, update and delete.

Post states:
    Pending --administrator accepts--> Accepted
    Pending --administrator rejects--> Rejected
"""
import logging
from datetime import datetime
from typing import Literal

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.errors import IncompleteOnboarding, NotFound, StoreError
from jobboard.models.account import Account, AccountRole
from jobboard.models.application import Application
from jobboard.models.posting import CONTENT_FIELDS, Posting, PostingStatus
from jobboard.services.authorization import check_owner, check_role
from jobboard.services.state_machine import ensure_posting_transition

logger = logging.getLogger(__name__)

DECISIONS = {
    "accept": PostingStatus.ACCEPTED,
    "reject": PostingStatus.REJECTED,
}


async def _commit(db: AsyncSession, operation: str, posting_id=None) -> None:
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error during {operation} (post_id={posting_id}): {str(e)}", exc_info=True)
        raise StoreError()


async def get_posting(db: AsyncSession, posting_id: int, for_update: bool = False) -> Posting:
    """
    Raises:
        NotFound: If the post does not exist
    """
    query = select(Posting).where(Posting.id == posting_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    posting = result.scalar_one_or_none()

    if posting is None:
        raise NotFound(f"Post {posting_id} not found")
    return posting


async def create_posting(db: AsyncSession, owner: Account, fields: dict) -> Posting:
    """
    Create a new post in Pending state.

    Raises:
        Forbidden: If the owner is not an employer
        IncompleteOnboarding: If any employer agreement flag is still false
    """
    check_role(owner, AccountRole.EMPLOYER)
    if not owner.has_completed_onboarding():
        raise IncompleteOnboarding()

    posting = Posting(
        employer_id=owner.unique_id,
        status=PostingStatus.PENDING.value,
        **{name: fields[name] for name in CONTENT_FIELDS if name in fields},
    )
    db.add(posting)
    await _commit(db, "create_posting")
    await db.refresh(posting)

    logger.info(f"Created post {posting.id} '{posting.title}' for employer {owner.unique_id}")
    return posting


async def list_public(db: AsyncSession) -> list[Posting]:
    """Accepted posts, newest first."""
    result = await db.execute(
        select(Posting)
        .where(Posting.status == PostingStatus.ACCEPTED.value)
        .order_by(Posting.created_at.desc(), Posting.id.desc())
    )
    return list(result.scalars().all())


async def list_pending(db: AsyncSession, caller: Account) -> list[Posting]:
    """Posts awaiting moderation (administrators only), newest first."""
    check_role(caller, AccountRole.ADMINISTRATOR)
    result = await db.execute(
        select(Posting)
        .where(Posting.status == PostingStatus.PENDING.value)
        .order_by(Posting.created_at.desc(), Posting.id.desc())
    )
    return list(result.scalars().all())


async def list_owned(db: AsyncSession, owner_id: str) -> list[Posting]:
    """Every post owned by an employer, in any status."""
    result = await db.execute(
        select(Posting)
        .where(Posting.employer_id == owner_id)
        .order_by(Posting.created_at.desc(), Posting.id.desc())
    )
    return list(result.scalars().all())


async def moderate(
    db: AsyncSession,
    posting_id: int,
    caller: Account,
    decision: Literal["accept", "reject"],
) -> Posting:
    """
    Accept or reject a pending post.

    Raises:
        Forbidden: If the caller is not an administrator
        NotFound: If the post does not exist
        InvalidTransition: If the post was already moderated
    """
    check_role(caller, AccountRole.ADMINISTRATOR)
    to_status = DECISIONS[decision]

    posting = await get_posting(db, posting_id, for_update=True)
    from_status = PostingStatus(posting.status)
    ensure_posting_transition(from_status, to_status)

    posting.status = to_status.value
    posting.updated_at = datetime.utcnow()
    await _commit(db, "moderate", posting_id)
    await db.refresh(posting)

    logger.info(
        f"Post status transition: {from_status.value} → {to_status.value}",
        extra={"post_id": posting_id, "moderator": caller.unique_id},
    )
    return posting


async def update_posting(db: AsyncSession, posting_id: int, caller: Account, fields: dict) -> Posting:
    """
    Overwrite content fields of an owned post. Status is never changed here.

    Raises:
        NotFound: If the post does not exist
        Forbidden: If the caller does not own the post
    """
    posting = await get_posting(db, posting_id, for_update=True)
    check_owner(caller, posting.employer_id, "You do not have permission to update this post")

    for name, value in fields.items():
        if name in CONTENT_FIELDS:
            setattr(posting, name, value)
    posting.updated_at = datetime.utcnow()

    await _commit(db, "update_posting", posting_id)
    await db.refresh(posting)

    logger.info(f"Post {posting_id} updated by {caller.unique_id}")
    return posting


async def delete_posting(db: AsyncSession, posting_id: int, caller: Account) -> int:
    """
    Delete an owned post together with every application to it.

    Both deletes commit in one transaction; on failure neither is applied.

    Returns:
        Number of applications removed

    Raises:
        NotFound: If the post does not exist
        Forbidden: If the caller does not own the post
        StoreError: If the transaction fails (nothing is deleted)
    """
    posting = await get_posting(db, posting_id, for_update=True)
    check_owner(caller, posting.employer_id, "You do not have permission to delete this post")

    try:
        result = await db.execute(
            delete(Application).where(Application.post_id == posting_id)
        )
        removed = result.rowcount
        await db.execute(delete(Posting).where(Posting.id == posting_id))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error during delete_posting (post_id={posting_id}): {str(e)}", exc_info=True)
        raise StoreError()

    await _commit(db, "delete_posting", posting_id)

    logger.info(f"Deleted post {posting_id} and {removed} application(s)")
    return removed
