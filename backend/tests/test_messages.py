"""
Tests for direct messages.

Validates:
- Messages need an existing receiver
- list_between returns the conversation oldest first and only marks the
  caller's incoming messages read
- Conversation summaries: one per counterpart, newest first, unread flag
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.errors import NotFound
from jobboard.services import messaging


# =============================================================================
# Send
# =============================================================================

@pytest.mark.asyncio
async def test_send_message(db: AsyncSession, student, employer):
    message = await messaging.send_message(db, student, employer.unique_id, "Hello!")

    assert message.id is not None
    assert message.sender_id == student.unique_id
    assert message.receiver_id == employer.unique_id
    assert message.message_type == "text"
    assert message.read is False
    assert message.timestamp is not None


@pytest.mark.asyncio
async def test_send_to_unknown_receiver(db: AsyncSession, student):
    with pytest.raises(NotFound):
        await messaging.send_message(db, student, "no-such-account", "Hello?")


# =============================================================================
# Read flag round trip
# =============================================================================

@pytest.mark.asyncio
async def test_read_flag_flips_only_for_receiver(db: AsyncSession, student, employer):
    """
    A sends to B. A reading the conversation leaves it unread; B reading it
    marks it read.
    """
    sent = await messaging.send_message(db, student, employer.unique_id, "Is the job still open?")

    from_sender = await messaging.list_between(db, student.unique_id, employer.unique_id)
    assert [m.id for m in from_sender] == [sent.id]
    assert from_sender[0].read is False

    from_receiver = await messaging.list_between(db, employer.unique_id, student.unique_id)
    assert [m.id for m in from_receiver] == [sent.id]
    assert from_receiver[0].read is True

    await db.refresh(sent)
    assert sent.read is True


@pytest.mark.asyncio
async def test_conversation_order_and_isolation(db: AsyncSession, student, other_student, employer):
    first = await messaging.send_message(db, student, employer.unique_id, "one")
    second = await messaging.send_message(db, employer, student.unique_id, "two")
    await messaging.send_message(db, other_student, employer.unique_id, "elsewhere")
    third = await messaging.send_message(db, student, employer.unique_id, "three")

    conversation = await messaging.list_between(db, student.unique_id, employer.unique_id)

    assert [m.id for m in conversation] == [first.id, second.id, third.id]


# =============================================================================
# Conversations
# =============================================================================

@pytest.mark.asyncio
async def test_conversation_summaries(db: AsyncSession, student, other_student, employer):
    await messaging.send_message(db, student, employer.unique_id, "from student")
    latest = await messaging.send_message(db, other_student, employer.unique_id, "from other student")

    summaries = await messaging.list_conversations(db, employer.unique_id)

    assert [s["counterpart"]["id"] for s in summaries] == [
        other_student.unique_id,
        student.unique_id,
    ]
    assert summaries[0]["last_message"].id == latest.id
    assert summaries[0]["counterpart"]["account_type"] == "student"
    assert all(s["unread"] for s in summaries)

    await messaging.list_between(db, employer.unique_id, student.unique_id)
    summaries = await messaging.list_conversations(db, employer.unique_id)
    unread = {s["counterpart"]["id"]: s["unread"] for s in summaries}
    assert unread == {other_student.unique_id: True, student.unique_id: False}


@pytest.mark.asyncio
async def test_own_messages_never_unread(db: AsyncSession, student, employer):
    await messaging.send_message(db, student, employer.unique_id, "ping")

    summaries = await messaging.list_conversations(db, student.unique_id)

    assert len(summaries) == 1
    assert summaries[0]["unread"] is False


@pytest.mark.asyncio
async def test_no_conversations(db: AsyncSession, student):
    assert await messaging.list_conversations(db, student.unique_id) == []


# =============================================================================
# Through the API
# =============================================================================

@pytest.mark.asyncio
async def test_message_endpoints(async_client: AsyncClient, student, employer, auth_headers):
    sent = await async_client.post(
        "/api/v1/messages",
        json={"receiver_id": employer.unique_id, "content": "Hi there"},
        headers=auth_headers(student),
    )
    assert sent.status_code == 200
    assert sent.json()["success"] is True
    assert sent.json()["data"]["content"] == "Hi there"

    sender_view = await async_client.get(
        f"/api/v1/messages/{employer.unique_id}", headers=auth_headers(student)
    )
    assert sender_view.json()["messages"][0]["read"] is False

    conversations = await async_client.get("/api/v1/conversations", headers=auth_headers(employer))
    summary = conversations.json()["conversations"][0]
    assert summary["counterpart"]["id"] == student.unique_id
    assert summary["unread"] is True

    receiver_view = await async_client.get(
        f"/api/v1/messages/{student.unique_id}", headers=auth_headers(employer)
    )
    assert receiver_view.json()["messages"][0]["read"] is True


@pytest.mark.asyncio
async def test_message_endpoint_errors(async_client: AsyncClient, student, auth_headers):
    unknown = await async_client.post(
        "/api/v1/messages",
        json={"receiver_id": "nobody", "content": "Hi"},
        headers=auth_headers(student),
    )
    assert unknown.status_code == 404

    empty = await async_client.post(
        "/api/v1/messages",
        json={"receiver_id": student.unique_id, "content": ""},
        headers=auth_headers(student),
    )
    assert empty.status_code == 400

    anonymous = await async_client.get("/api/v1/conversations")
    assert anonymous.status_code == 401
