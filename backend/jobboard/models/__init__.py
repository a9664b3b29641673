"""Database models"""
from jobboard.models.account import Account, AccountRole, AccountStatus
from jobboard.models.posting import Posting, PostingStatus
from jobboard.models.application import Application, ApplicationStatus
from jobboard.models.message import Message

__all__ = [
    "Account",
    "AccountRole",
    "AccountStatus",
    "Posting",
    "PostingStatus",
    "Application",
    "ApplicationStatus",
    "Message",
]
