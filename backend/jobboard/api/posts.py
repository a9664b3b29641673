"""
Posts API endpoints.
Handles job post creation, moderation, listing, update and delete.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.api.auth import get_current_account, require_admin, require_employer
from jobboard.database import get_db
from jobboard.models.account import Account
from jobboard.schemas.posting import (
    MessageOnlyResponse,
    ModerationRequest,
    PostingCreate,
    PostingListResponse,
    PostingResponse,
    PostingResultResponse,
    PostingUpdate,
)
from jobboard.services import postings

logger = logging.getLogger(__name__)
router = APIRouter()


# Endpoints
@router.post("/create_post", response_model=PostingResultResponse)
async def create_post(
    post: PostingCreate,
    current_account: Account = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a job post. New posts start Pending and are hidden from the
    public listing until an administrator accepts them.

    Returns 400 if any employer agreement is still outstanding.
    """
    posting = await postings.create_posting(db, current_account, post.model_dump())
    return PostingResultResponse(
        message="Post created successfully",
        post=PostingResponse.model_validate(posting),
    )


@router.get("/posts", response_model=PostingListResponse)
async def get_posts(db: AsyncSession = Depends(get_db)):
    """Public listing: accepted posts, newest first."""
    posts = await postings.list_public(db)
    return PostingListResponse(posts=[PostingResponse.model_validate(p) for p in posts])


@router.get("/pending_posts", response_model=PostingListResponse)
async def get_pending_posts(
    current_account: Account = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Posts awaiting moderation (administrators only)."""
    posts = await postings.list_pending(db, current_account)
    return PostingListResponse(posts=[PostingResponse.model_validate(p) for p in posts])


@router.get("/my_posts", response_model=PostingListResponse)
async def get_my_posts(
    current_account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """Every post owned by the caller, in any status."""
    posts = await postings.list_owned(db, current_account.unique_id)
    return PostingListResponse(posts=[PostingResponse.model_validate(p) for p in posts])


@router.put("/posts/{post_id}", response_model=PostingResultResponse)
async def update_post(
    post_id: int,
    post: PostingUpdate,
    current_account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """Update content fields of an owned post (status is unchanged)."""
    posting = await postings.update_posting(
        db, post_id, current_account, post.model_dump(exclude_unset=True)
    )
    return PostingResultResponse(
        message="Post updated successfully",
        post=PostingResponse.model_validate(posting),
    )


@router.delete("/posts/{post_id}", response_model=MessageOnlyResponse)
async def delete_post(
    post_id: int,
    current_account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """Delete an owned post and all applications to it."""
    await postings.delete_posting(db, post_id, current_account)
    return MessageOnlyResponse(message=f"Post with ID {post_id} deleted successfully")


@router.put("/posts/{post_id}/status", response_model=PostingResultResponse)
async def moderate_post(
    post_id: int,
    moderation: ModerationRequest,
    current_account: Account = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Accept or reject a pending post (administrators only).

    Returns 409 if the post was already moderated.
    """
    posting = await postings.moderate(db, post_id, current_account, moderation.decision)
    return PostingResultResponse(
        message=f"Post {posting.status.lower()}",
        post=PostingResponse.model_validate(posting),
    )
