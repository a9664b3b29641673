"""Direct messages between accounts (append-only, polled)."""
import logging
from typing import Optional

from sqlalchemy import and_, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.errors import StoreError
from jobboard.models.account import Account
from jobboard.models.message import Message
from jobboard.services.accounts import resolve

logger = logging.getLogger(__name__)


async def send_message(
    db: AsyncSession,
    sender: Account,
    receiver_id: str,
    content: str,
    message_type: str = "text",
    file_url: Optional[str] = None,
) -> Message:
    """Append a message. The receiver must exist (NotFound otherwise)."""
    await resolve(db, receiver_id)

    message = Message(
        sender_id=sender.unique_id,
        receiver_id=receiver_id,
        content=content,
        message_type=message_type,
        file_url=file_url,
        read=False,
    )
    db.add(message)

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error sending message from {sender.unique_id}: {str(e)}", exc_info=True)
        raise StoreError()

    await db.refresh(message)
    return message


async def list_between(db: AsyncSession, account_id: str, other_id: str) -> list[Message]:
    """
    Conversation between two accounts, oldest first.

    Messages in the result that ``other_id`` sent to ``account_id`` are marked
    read in the same transaction. Only the retrieved rows are updated, so a
    message sent after the read is left unread.
    """
    result = await db.execute(
        select(Message)
        .where(
            or_(
                and_(Message.sender_id == account_id, Message.receiver_id == other_id),
                and_(Message.sender_id == other_id, Message.receiver_id == account_id),
            )
        )
        .order_by(Message.timestamp.asc(), Message.id.asc())
    )
    messages = list(result.scalars().all())

    unread = [m for m in messages if m.receiver_id == account_id and not m.read]
    if unread:
        for message in unread:
            message.read = True
        try:
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error marking messages read for {account_id}: {str(e)}", exc_info=True)
            raise StoreError()
        logger.debug(f"Marked {len(unread)} message(s) read for {account_id}")

    return messages


async def list_conversations(db: AsyncSession, account_id: str) -> list[dict]:
    """
    One summary per counterpart: latest message and whether anything from
    them is still unread. Most recent conversation first.
    """
    result = await db.execute(
        select(Message)
        .where(or_(Message.sender_id == account_id, Message.receiver_id == account_id))
        .order_by(Message.timestamp.desc(), Message.id.desc())
    )

    summaries: dict[str, dict] = {}
    for message in result.scalars().all():
        other_id = message.receiver_id if message.sender_id == account_id else message.sender_id
        summary = summaries.get(other_id)
        if summary is None:
            # First hit is the newest message thanks to the ordering
            summary = summaries[other_id] = {"last_message": message, "unread": False}
        if message.receiver_id == account_id and not message.read:
            summary["unread"] = True

    if not summaries:
        return []

    counterparts = await db.execute(
        select(Account).where(Account.unique_id.in_(list(summaries)))
    )
    by_id = {account.unique_id: account for account in counterparts.scalars().all()}

    return [
        {
            "counterpart": {
                "id": other_id,
                "first_name": by_id[other_id].first_name,
                "last_name": by_id[other_id].last_name,
                "account_type": by_id[other_id].account_type.value,
            },
            "last_message": summary["last_message"],
            "unread": summary["unread"],
        }
        for other_id, summary in summaries.items()
        if other_id in by_id
    ]
