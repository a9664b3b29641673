"""
Messages API endpoints.
Polling-based direct messages between accounts.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.api.auth import get_current_account
from jobboard.database import get_db
from jobboard.models.account import Account
from jobboard.schemas.message import (
    ConversationListResponse,
    ConversationSummary,
    MessageCreate,
    MessageListResponse,
    MessageResponse,
    MessageSentResponse,
)
from jobboard.services import messaging

logger = logging.getLogger(__name__)
router = APIRouter()


# Endpoints
@router.post("/messages", response_model=MessageSentResponse)
async def send_message(
    request: MessageCreate,
    current_account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    message = await messaging.send_message(
        db,
        current_account,
        request.receiver_id,
        request.content,
        message_type=request.message_type,
        file_url=request.file_url,
    )
    return MessageSentResponse(
        message="Message sent successfully",
        data=MessageResponse.model_validate(message),
    )


@router.get("/messages/{user_id}", response_model=MessageListResponse)
async def get_messages(
    user_id: str,
    current_account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """
    Conversation with another account, oldest first.

    Messages the other account sent to the caller are marked read.
    """
    messages = await messaging.list_between(db, current_account.unique_id, user_id)
    return MessageListResponse(messages=[MessageResponse.model_validate(m) for m in messages])


@router.get("/conversations", response_model=ConversationListResponse)
async def get_conversations(
    current_account: Account = Depends(get_current_account),
    db: AsyncSession = Depends(get_db)
):
    """One entry per counterpart with the latest message and an unread flag."""
    summaries = await messaging.list_conversations(db, current_account.unique_id)
    return ConversationListResponse(
        conversations=[
            ConversationSummary(
                counterpart=summary["counterpart"],
                last_message=MessageResponse.model_validate(summary["last_message"]),
                unread=summary["unread"],
            )
            for summary in summaries
        ]
    )
