from datetime import datetime
from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, ForeignKey, Index

from jobboard.database import Base


class Message(Base):
    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    sender_id = Column(String(36), ForeignKey("accounts.unique_id"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("accounts.unique_id"), nullable=False, index=True)

    content = Column(Text, nullable=False)
    message_type = Column(String(20), nullable=False, default="text")  # text | file | image
    file_url = Column(String(500), nullable=True)

    # Flipped to True only when the receiver retrieves the conversation
    read = Column(Boolean, default=False, nullable=False)

    timestamp = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('idx_messages_pair', 'sender_id', 'receiver_id', 'timestamp'),
    )
