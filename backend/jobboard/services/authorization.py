"""
Authorization guard.

Resolves a bearer token to an account and checks it against a requirement
(any authenticated account, a role, or ownership of a resource). Every
mutating endpoint runs this before touching the store.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.config import settings
from jobboard.errors import (
    AccountSuspended,
    Forbidden,
    InvalidCredential,
    MissingCredential,
)
from jobboard.models.account import Account, AccountRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Requirement:
    """What the caller must satisfy. Empty requirement = any authenticated account."""
    role: Optional[AccountRole] = None
    owner_id: Optional[str] = None

    @classmethod
    def of_role(cls, role: AccountRole) -> "Requirement":
        return cls(role=AccountRole(role))

    @classmethod
    def owner_of(cls, owner_id: str) -> "Requirement":
        return cls(owner_id=owner_id)


ANY_AUTHENTICATED = Requirement()


def extract_token(authorization: Optional[str]) -> str:
    """
    Pull the account identifier out of an Authorization header value.

    Raises:
        MissingCredential: If the header is absent or carries no token
        InvalidCredential: If the header does not use the configured prefix
    """
    if not authorization or not authorization.strip():
        raise MissingCredential()

    prefix = settings.auth_header_prefix
    # Servers may strip trailing whitespace, so "Bearer" alone means no token
    if authorization.strip() == prefix.strip():
        raise MissingCredential()

    if not authorization.startswith(prefix):
        logger.warning("Authorization header without the expected prefix")
        raise InvalidCredential("Invalid authorization header format")

    token = authorization[len(prefix):].strip()
    if not token:
        raise MissingCredential()
    return token


def check_role(account: Account, role: AccountRole) -> None:
    if not account.has_role(role):
        logger.warning(
            f"Account {account.unique_id} (role={account.account_type.value}) "
            f"attempted a {AccountRole(role).value}-only action"
        )
        raise Forbidden(f"Only {AccountRole(role).value}s can perform this action")


def check_owner(account: Account, owner_id: str, message: Optional[str] = None) -> None:
    if account.unique_id != owner_id:
        logger.warning(f"Account {account.unique_id} attempted to modify a resource it does not own")
        raise Forbidden(message)


async def authorize(
    db: AsyncSession,
    authorization: Optional[str],
    requirement: Requirement = ANY_AUTHENTICATED,
) -> Account:
    """
    Resolve the caller and check the requirement.

    Args:
        db: Database session
        authorization: Raw Authorization header value (may be None)
        requirement: Role and/or ownership the caller must satisfy

    Returns:
        Account: The authenticated account

    Raises:
        MissingCredential: No header / empty token (401)
        InvalidCredential: Token does not resolve to an account (401)
        AccountSuspended: Account is not active (403)
        Forbidden: Role or ownership mismatch (403)
    """
    token = extract_token(authorization)

    result = await db.execute(
        select(Account).where(Account.unique_id == token)
    )
    account = result.scalar_one_or_none()

    if account is None:
        logger.warning("Request with unknown bearer token")
        raise InvalidCredential()

    if not account.is_active():
        raise AccountSuspended()

    if requirement.role is not None:
        check_role(account, requirement.role)

    if requirement.owner_id is not None:
        check_owner(account, requirement.owner_id)

    return account
