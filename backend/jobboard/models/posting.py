from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Index

from jobboard.database import Base


class PostingStatus(str, Enum):
    """Moderation states for job posts"""
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


# Free-text content fields an owning employer may overwrite
CONTENT_FIELDS = (
    "title",
    "description",
    "company_name",
    "tags",
    "documents",
    "tips",
    "skills",
    "experience",
    "jobtype",
    "location",
    "questions",
)


class Posting(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employer_id = Column(String(36), ForeignKey("accounts.unique_id"), nullable=False, index=True)

    # Job details (opaque to the backend)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    company_name = Column(String(255), nullable=False, default="")
    tags = Column(Text, nullable=False, default="")
    documents = Column(Text, nullable=False, default="")
    tips = Column(Text, nullable=False, default="")
    skills = Column(Text, nullable=False, default="")
    experience = Column(String(50), nullable=False, default="")  # easy | medium | hard
    jobtype = Column(String(50), nullable=False, default="")  # full-time | part-time
    location = Column(String(255), nullable=False, default="")
    questions = Column(Text, nullable=True)  # employer's application questions

    # Moderation: Pending until an administrator decides
    status = Column(String(20), nullable=False, default=PostingStatus.PENDING.value)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __table_args__ = (
        # Public listing: status filter + newest first
        Index('idx_posts_status_created', 'status', 'created_at'),
    )
