"""
Tests for the authorization guard.

Validates the check order: missing header (401), unknown token (401),
non-active account (403), role mismatch (403), ownership mismatch (403).
"""
import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.errors import (
    AccountSuspended,
    Forbidden,
    InvalidCredential,
    MissingCredential,
)
from jobboard.models.account import AccountRole, AccountStatus
from jobboard.services.authorization import (
    ANY_AUTHENTICATED,
    Requirement,
    authorize,
    extract_token,
)


# =============================================================================
# extract_token
# =============================================================================

def test_extract_token_strips_bearer_prefix():
    assert extract_token("Bearer abc-123") == "abc-123"


@pytest.mark.parametrize("header", ["abc-123", "Token abc-123", "bearer abc-123"])
def test_extract_token_requires_prefix(header):
    """The identifier is only read after the configured prefix"""
    with pytest.raises(InvalidCredential) as exc:
        extract_token(header)

    assert exc.value.message == "Invalid authorization header format"


@pytest.mark.parametrize("header", [None, "", "   ", "Bearer", "Bearer ", "Bearer    "])
def test_extract_token_missing(header):
    with pytest.raises(MissingCredential):
        extract_token(header)


# =============================================================================
# authorize
# =============================================================================

@pytest.mark.asyncio
async def test_authorize_any_authenticated(db: AsyncSession, student):
    account = await authorize(db, f"Bearer {student.unique_id}", ANY_AUTHENTICATED)
    assert account.unique_id == student.unique_id


@pytest.mark.asyncio
async def test_authorize_unknown_token(db: AsyncSession):
    with pytest.raises(InvalidCredential):
        await authorize(db, "Bearer 11111111-2222-3333-4444-555555555555")


@pytest.mark.asyncio
async def test_authorize_inactive_account(db: AsyncSession, student):
    student.status = AccountStatus.INACTIVE
    await db.commit()

    with pytest.raises(AccountSuspended):
        await authorize(db, f"Bearer {student.unique_id}")


@pytest.mark.asyncio
async def test_authorize_role_mismatch(db: AsyncSession, student):
    with pytest.raises(Forbidden) as exc:
        await authorize(db, f"Bearer {student.unique_id}", Requirement.of_role(AccountRole.EMPLOYER))

    assert exc.value.message == "Only employers can perform this action"


@pytest.mark.asyncio
async def test_authorize_role_match(db: AsyncSession, admin):
    account = await authorize(db, f"Bearer {admin.unique_id}", Requirement.of_role("administrator"))
    assert account.is_admin()


@pytest.mark.asyncio
async def test_authorize_owner(db: AsyncSession, employer, other_employer):
    account = await authorize(db, f"Bearer {employer.unique_id}", Requirement.owner_of(employer.unique_id))
    assert account.unique_id == employer.unique_id

    with pytest.raises(Forbidden):
        await authorize(db, f"Bearer {other_employer.unique_id}", Requirement.owner_of(employer.unique_id))


@pytest.mark.asyncio
async def test_suspension_checked_before_role(db: AsyncSession, student):
    """A suspended account gets AccountSuspended even when the role is also wrong"""
    student.status = AccountStatus.SUSPENDED
    await db.commit()

    with pytest.raises(AccountSuspended):
        await authorize(db, f"Bearer {student.unique_id}", Requirement.of_role(AccountRole.ADMINISTRATOR))


# =============================================================================
# Through the API
# =============================================================================

@pytest.mark.asyncio
async def test_missing_header_is_401(async_client: AsyncClient):
    response = await async_client.get("/api/v1/user")

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Missing authorization header"}


@pytest.mark.asyncio
async def test_unknown_token_is_401(async_client: AsyncClient):
    response = await async_client.get(
        "/api/v1/user", headers={"Authorization": "Bearer not-a-real-account"}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Invalid authorization token"


@pytest.mark.asyncio
async def test_bare_identifier_header_is_401(async_client: AsyncClient, student):
    """A real account identifier without the Bearer prefix is refused"""
    response = await async_client.get("/api/v1/user", headers={"Authorization": student.unique_id})

    assert response.status_code == 401
    assert response.json() == {"success": False, "error": "Invalid authorization header format"}


@pytest.mark.asyncio
async def test_wrong_role_is_403(async_client: AsyncClient, student, auth_headers):
    response = await async_client.get("/api/v1/pending_posts", headers=auth_headers(student))

    assert response.status_code == 403
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_suspended_account_is_403(async_client: AsyncClient, db: AsyncSession, student, auth_headers):
    student.status = AccountStatus.SUSPENDED
    await db.commit()

    response = await async_client.get("/api/v1/user", headers=auth_headers(student))

    assert response.status_code == 403
    assert response.json()["error"] == "Account is not active"
