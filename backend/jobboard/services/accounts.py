"""
Account registration, login and profile business logic.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from jobboard.errors import (
    AccountSuspended,
    AuthFailure,
    DuplicateEmail,
    Forbidden,
    NotFound,
    StoreError,
)
from jobboard.models.account import Account, AccountRole, new_identifier
from jobboard.schemas.profile import EmployerProfile, default_profile, load_profile
from jobboard.services.credentials import hash_password, verify_against_dummy, verify_password

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


async def get_by_email(db: AsyncSession, email: str) -> Optional[Account]:
    result = await db.execute(
        select(Account).where(Account.email == _normalize_email(email))
    )
    return result.scalar_one_or_none()


async def register(
    db: AsyncSession,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: AccountRole,
) -> Account:
    """
    Create a new account.

    Returns the persisted Account; its unique_id is the caller's bearer token.

    Raises:
        DuplicateEmail: If the email is already registered
        StoreError: On any other database failure
    """
    role = AccountRole(role)
    email = _normalize_email(email)

    if await get_by_email(db, email) is not None:
        raise DuplicateEmail()

    account = Account(
        unique_id=new_identifier(),
        email=email,
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        account_type=role,
        profile=default_profile(role).model_dump(),
    )
    db.add(account)

    try:
        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise DuplicateEmail()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error registering account for {email}: {str(e)}", exc_info=True)
        raise StoreError()

    await db.refresh(account)
    logger.info(f"Registered {role.value} account {account.unique_id}")
    return account


async def authenticate(db: AsyncSession, email: str, password: str) -> Account:
    """
    Verify email + password.

    Unknown email and wrong password raise the same AuthFailure so callers
    cannot tell which one happened.

    Raises:
        AuthFailure: Unknown email or wrong password
        AccountSuspended: Correct credentials on a non-active account
    """
    account = await get_by_email(db, email)

    if account is None:
        # Pay the Argon2 cost anyway so response time does not reveal the email
        verify_against_dummy(password)
        logger.info("Login attempt failed")
        raise AuthFailure()

    if not verify_password(password, account.password_hash):
        logger.info("Login attempt failed")
        raise AuthFailure()

    if not account.is_active():
        logger.warning(f"Login attempt on {account.status.value} account {account.unique_id}")
        raise AccountSuspended()

    account.last_login = datetime.utcnow()
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error recording login for {account.unique_id}: {str(e)}", exc_info=True)
        raise StoreError()

    logger.info(f"Successful login: {account.unique_id}")
    return account


async def resolve(db: AsyncSession, identifier: str) -> Account:
    """
    Look up an account by its identifier.

    Raises:
        NotFound: If no account has this identifier
    """
    result = await db.execute(
        select(Account).where(Account.unique_id == identifier)
    )
    account = result.scalar_one_or_none()
    if account is None:
        raise NotFound("User not found")
    return account


async def update_employer_agreements(db: AsyncSession, account: Account, flags: dict) -> Account:
    """Merge the four employer agreement flags into the account's profile."""
    profile = load_profile(account.profile)
    if not isinstance(profile, EmployerProfile):
        raise Forbidden("Only employers can update employer agreements")

    profile.forms = profile.forms.model_copy(update=flags)
    # Assign a new dict so the JSON column is flagged dirty
    account.profile = profile.model_dump()
    account.updated_at = datetime.utcnow()

    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error updating agreements for {account.unique_id}: {str(e)}", exc_info=True)
        raise StoreError()

    await db.refresh(account)
    logger.info(f"Employer agreements updated for {account.unique_id}")
    return account


async def count_accounts(db: AsyncSession, role: Optional[AccountRole] = None) -> int:
    """Total accounts, optionally restricted to one role."""
    query = select(func.count()).select_from(Account)
    if role is not None:
        query = query.where(Account.account_type == role)
    result = await db.execute(query)
    return result.scalar_one()


async def list_directory(db: AsyncSession) -> list[Account]:
    """Every account, oldest first. Callers expose public fields only."""
    result = await db.execute(select(Account).order_by(Account.id.asc()))
    return list(result.scalars().all())
