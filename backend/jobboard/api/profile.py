"""
Account profile endpoints.

Provides endpoints for:
- The current account with its onboarding forms and tasks
- Employer agreement flags (gate for creating posts)
- Public user directory and account counts
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.api.auth import get_current_account, require_employer
from jobboard.database import get_db
from jobboard.models.account import Account, AccountRole
from jobboard.schemas.profile import (
    EmployerAgreementsRequest,
    EmployerAgreementsResponse,
    PublicUser,
    TotalEmployersResponse,
    TotalUsersResponse,
    UserDirectoryResponse,
    UserResponse,
    load_profile,
)
from jobboard.services import accounts

logger = logging.getLogger(__name__)
router = APIRouter()


def build_user_response(account: Account) -> UserResponse:
    """Build UserResponse from Account model."""
    profile = load_profile(account.profile)
    forms = getattr(profile, "forms", None)
    return UserResponse(
        unique_id=account.unique_id,
        email=account.email,
        first_name=account.first_name,
        last_name=account.last_name,
        account_type=account.account_type.value,
        status=account.status.value,
        profile=profile,
        forms={profile.kind: forms.model_dump()} if forms is not None else {},
        tasks=profile.tasks,
        created_at=account.created_at,
        last_login=account.last_login,
    )


# Endpoints
@router.get("/user", response_model=UserResponse)
async def get_user(current_account: Account = Depends(get_current_account)):
    """Get the current account's profile and onboarding scaffold."""
    return build_user_response(current_account)


@router.post("/employer/agreements", response_model=EmployerAgreementsResponse)
async def update_employer_agreements(
    agreements: EmployerAgreementsRequest,
    current_account: Account = Depends(require_employer),
    db: AsyncSession = Depends(get_db)
):
    """
    Set the four employer agreement flags.

    All four must be true before the employer can create posts.
    """
    account = await accounts.update_employer_agreements(db, current_account, agreements.model_dump())
    profile = load_profile(account.profile)
    return EmployerAgreementsResponse(
        message="Employer agreements updated successfully",
        forms=profile.forms,
    )


@router.get("/users", response_model=UserDirectoryResponse)
async def list_users(db: AsyncSession = Depends(get_db)):
    """Public user directory (no email, no profile internals)."""
    directory = await accounts.list_directory(db)
    return UserDirectoryResponse(
        users=[
            PublicUser(
                id=account.unique_id,
                first_name=account.first_name,
                last_name=account.last_name,
                pfp=load_profile(account.profile).pfp,
                account_type=account.account_type.value,
            )
            for account in directory
        ]
    )


@router.get("/total_users", response_model=TotalUsersResponse)
async def get_total_users(db: AsyncSession = Depends(get_db)):
    return TotalUsersResponse(total_users=await accounts.count_accounts(db))


@router.get("/total_employers", response_model=TotalEmployersResponse)
async def get_total_employers(db: AsyncSession = Depends(get_db)):
    return TotalEmployersResponse(
        total_employers=await accounts.count_accounts(db, AccountRole.EMPLOYER)
    )
