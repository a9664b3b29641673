"""
Authentication endpoints and dependencies.

Accounts authenticate with email + password and receive their permanent
account identifier, which is then sent as ``Authorization: Bearer <id>``
on every authenticated call. Tokens do not expire.

Security features:
- Argon2id password hashes keyed with a server secret
- Identical error for unknown email and wrong password
- Role-based access control (student / employer / administrator)
- Suspended and inactive accounts are refused
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.config import settings
from jobboard.database import get_db
from jobboard.errors import AuthFailure, ValidationError
from jobboard.models.account import Account, AccountRole
from jobboard.schemas.auth import (
    AuthFailureResponse,
    AuthResponse,
    LoginRequest,
    RegisterRequest,
)
from jobboard.services import accounts
from jobboard.services.authorization import ANY_AUTHENTICATED, Requirement, authorize

logger = logging.getLogger(__name__)
router = APIRouter()


# Authentication Dependencies
async def get_current_account(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db)
) -> Account:
    """
    Dependency to get the authenticated account from the Authorization header.

    Raises:
        MissingCredential (401): No header
        InvalidCredential (401): Token does not match any account
        AccountSuspended (403): Account is not active
    """
    return await authorize(db, authorization, ANY_AUTHENTICATED)


def require_role(role: AccountRole):
    """
    Build a dependency that only lets accounts of one role through.

    Example:
        @router.get("/pending_posts")
        async def pending(admin: Account = Depends(require_role(AccountRole.ADMINISTRATOR))):
            ...
    """
    requirement = Requirement.of_role(role)

    async def dependency(
        authorization: Optional[str] = Header(None),
        db: AsyncSession = Depends(get_db)
    ) -> Account:
        return await authorize(db, authorization, requirement)

    return dependency


require_admin = require_role(AccountRole.ADMINISTRATOR)
require_employer = require_role(AccountRole.EMPLOYER)
require_student = require_role(AccountRole.STUDENT)


# Endpoints
@router.post("/register", response_model=AuthResponse)
async def register_account(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create an account and return its bearer token.

    Returns:
        200: Account created
        400: Malformed request, or administrator self-registration disabled
        409: Email already registered
    """
    role = AccountRole(request.account_type)
    if role == AccountRole.ADMINISTRATOR and not settings.allow_admin_registration:
        logger.warning(f"Refused administrator self-registration for {request.email}")
        raise ValidationError("Administrator accounts cannot be self-registered")

    account = await accounts.register(
        db,
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        role=role,
    )

    return AuthResponse(uuid=account.unique_id, account_type=account.account_type.value)


@router.post(
    "/auth",
    response_model=AuthResponse,
    responses={200: {"model": AuthFailureResponse}},
)
async def login_account(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Log in with email and password.

    Always HTTP 200 for credential problems; the ``success`` flag tells the
    client whether the login worked.
    """
    try:
        account = await accounts.authenticate(db, request.email, request.password)
    except AuthFailure as e:
        return JSONResponse(
            status_code=200,
            content=AuthFailureResponse(error=e.message).model_dump(),
        )

    return AuthResponse(uuid=account.unique_id, account_type=account.account_type.value)
