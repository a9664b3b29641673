"""
Domain error taxonomy.

Services raise these; the exception handlers registered in jobboard.main
turn them into ``{"success": false, "error": ...}`` payloads with the
matching HTTP status. Messages are safe to show to end users.
"""


class JobBoardError(Exception):
    """Base class for every error that maps to a structured API response."""
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# 400
class ValidationError(JobBoardError):
    status_code = 400
    message = "Invalid request"


class IncompleteOnboarding(JobBoardError):
    status_code = 400
    message = "Please complete all required employer forms before posting jobs"


# 401
class AuthFailure(JobBoardError):
    status_code = 401
    message = "Invalid email or password"


class MissingCredential(JobBoardError):
    status_code = 401
    message = "Missing authorization header"


class InvalidCredential(JobBoardError):
    status_code = 401
    message = "Invalid authorization token"


# 403
class Forbidden(JobBoardError):
    status_code = 403
    message = "You do not have permission to perform this action"


class AccountSuspended(JobBoardError):
    status_code = 403
    message = "Account is not active"


# 404
class NotFound(JobBoardError):
    status_code = 404
    message = "Not found"


# 409
class DuplicateEmail(JobBoardError):
    status_code = 409
    message = "An account with this email already exists"


class DuplicateApplication(JobBoardError):
    status_code = 409
    message = "You have already applied to this post"


class InvalidTransition(JobBoardError):
    status_code = 409
    message = "Invalid status transition"


class PostingNotOpen(JobBoardError):
    status_code = 409
    message = "This post is not accepting applications"


# 500
class StoreError(JobBoardError):
    """Database failure. The underlying exception is logged, never returned."""
    status_code = 500
    message = "A database error occurred. Please try again."


class ConfigurationError(JobBoardError):
    status_code = 500
    message = "Server is misconfigured"
