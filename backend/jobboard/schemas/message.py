"""Message-related Pydantic schemas."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class MessageCreate(BaseModel):
    receiver_id: str
    content: str = Field(min_length=1)
    message_type: Literal["text", "file", "image"] = "text"
    file_url: Optional[str] = None


class MessageResponse(BaseModel):
    id: int
    sender_id: str
    receiver_id: str
    content: str
    message_type: str
    file_url: Optional[str] = None
    read: bool
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class MessageSentResponse(BaseModel):
    success: bool = True
    message: str
    data: MessageResponse


class MessageListResponse(BaseModel):
    success: bool = True
    messages: list[MessageResponse]


class Counterpart(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    account_type: str


class ConversationSummary(BaseModel):
    counterpart: Counterpart
    last_message: MessageResponse
    unread: bool


class ConversationListResponse(BaseModel):
    success: bool = True
    conversations: list[ConversationSummary]
