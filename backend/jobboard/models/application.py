from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint

from jobboard.database import Base
from jobboard.database_types import JSONBlob


class ApplicationStatus(str, Enum):
    """Valid states for applications"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(Integer, ForeignKey("posts.id"), nullable=False, index=True)
    applicant_id = Column(String(36), ForeignKey("accounts.unique_id"), nullable=False, index=True)

    # Copied from the post at creation time, never rewritten
    employer_id = Column(String(36), ForeignKey("accounts.unique_id"), nullable=False, index=True)

    # State machine
    status = Column(String(20), nullable=False, default=ApplicationStatus.PENDING.value)

    # Answers to the post's questions, free-form
    answers = Column(JSONBlob, nullable=False, default=dict)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        # One application per student per post
        UniqueConstraint('post_id', 'applicant_id', name='uq_post_applicant'),
    )
