"""
State machines for posts and applications.
ALL status changes must be validated through this module.
"""
from typing import Dict

from jobboard.errors import InvalidTransition
from jobboard.models.application import ApplicationStatus
from jobboard.models.posting import PostingStatus


# Administrators decide once; there is no re-submission path
POSTING_TRANSITIONS: Dict[PostingStatus, list[PostingStatus]] = {
    PostingStatus.PENDING: [PostingStatus.ACCEPTED, PostingStatus.REJECTED],
    PostingStatus.ACCEPTED: [],  # Terminal state
    PostingStatus.REJECTED: [],  # Terminal state
}

# The owning employer decides once
APPLICATION_TRANSITIONS: Dict[ApplicationStatus, list[ApplicationStatus]] = {
    ApplicationStatus.PENDING: [ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED],
    ApplicationStatus.ACCEPTED: [],  # Terminal state
    ApplicationStatus.REJECTED: [],  # Terminal state
}


def can_transition_posting(from_status: PostingStatus, to_status: PostingStatus) -> bool:
    """Check if a post status change is allowed without touching the database"""
    return to_status in POSTING_TRANSITIONS.get(from_status, [])


def can_transition_application(from_status: ApplicationStatus, to_status: ApplicationStatus) -> bool:
    """Check if an application status change is allowed without touching the database"""
    return to_status in APPLICATION_TRANSITIONS.get(from_status, [])


def ensure_posting_transition(from_status: PostingStatus, to_status: PostingStatus) -> None:
    """
    Raises:
        InvalidTransition: If the post has already been moderated
    """
    if not can_transition_posting(from_status, to_status):
        raise InvalidTransition(
            f"Post is already {from_status.value} and cannot be moved to {to_status.value}"
        )


def ensure_application_transition(from_status: ApplicationStatus, to_status: ApplicationStatus) -> None:
    """
    Raises:
        InvalidTransition: If the application has already been decided
    """
    if not can_transition_application(from_status, to_status):
        raise InvalidTransition(
            f"Application is already {from_status.value} and cannot be moved to {to_status.value}"
        )
