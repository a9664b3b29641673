"""
Pytest fixtures for testing.
"""
import pytest
import pytest_asyncio
from typing import AsyncGenerator

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Import database module BEFORE app to allow override
import jobboard.database
from jobboard.config import settings
from jobboard.database import Base
# Import ALL models so Base.metadata knows about all tables
from jobboard.models.account import Account, AccountRole
from jobboard.models.posting import Posting
from jobboard.models.application import Application
from jobboard.models.message import Message
from jobboard.services import accounts

# Now import app (after we can override database)
from jobboard.main import app as fastapi_app


# Test database URL (use in-memory SQLite for fast tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Password hashing needs a secret; keep Argon2 cheap so the suite stays fast
settings.hash_secret = "test-hash-secret"
settings.argon2_time_cost = 1
settings.argon2_memory_cost = 1024
settings.argon2_parallelism = 1
settings.argon2_hash_len = 16

ALL_AGREEMENTS = {
    "employer_agreement": True,
    "job_posting_guidelines": True,
    "insurance_certificate": True,
    "benefits_description": True,
}


@pytest.fixture
def auth_headers():
    """Build the bearer header carrying an account's identifier."""
    def _headers(account: Account) -> dict:
        return {"Authorization": f"Bearer {account.unique_id}"}
    return _headers


@pytest_asyncio.fixture
async def db() -> AsyncGenerator[AsyncSession, None]:
    """
    Create a fresh database for each test.
    Ensures cleanup happens even if test fails.
    """
    # Use StaticPool to keep single connection alive and reuse it
    # This ensures all sessions see the same in-memory database
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables FIRST
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # THEN replace the app's engine and sessionmaker
    # This ensures get_db() uses sessions connected to DB with tables
    original_engine = jobboard.database.engine
    original_sessionmaker = jobboard.database.AsyncSessionLocal

    jobboard.database.engine = test_engine
    jobboard.database.AsyncSessionLocal = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    # Create session for direct test use
    async_session = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    session = async_session()

    try:
        yield session
    finally:
        try:
            await session.close()
        except Exception as e:
            print(f"Warning: Failed to close session: {e}")

        try:
            async with test_engine.begin() as conn:
                await conn.run_sync(Base.metadata.drop_all)
        except Exception as e:
            print(f"Warning: Failed to drop tables: {e}")

        try:
            await test_engine.dispose()
        except Exception as e:
            print(f"Warning: Failed to dispose engine: {e}")

        jobboard.database.engine = original_engine
        jobboard.database.AsyncSessionLocal = original_sessionmaker


@pytest_asyncio.fixture
async def async_client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async HTTP client for testing endpoints.

    The db fixture already replaced jobboard.database.engine with the test
    engine, so all endpoints will automatically use the test database.
    """
    transport = ASGITransport(app=fastapi_app)

    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def student(db: AsyncSession) -> Account:
    return await accounts.register(
        db, "student@example.com", "student-pw", "Sam", "Student", AccountRole.STUDENT
    )


@pytest_asyncio.fixture
async def other_student(db: AsyncSession) -> Account:
    return await accounts.register(
        db, "student2@example.com", "student2-pw", "Alex", "Learner", AccountRole.STUDENT
    )


@pytest_asyncio.fixture
async def employer(db: AsyncSession) -> Account:
    """Employer with all four agreements signed."""
    account = await accounts.register(
        db, "employer@example.com", "employer-pw", "Erin", "Boss", AccountRole.EMPLOYER
    )
    return await accounts.update_employer_agreements(db, account, ALL_AGREEMENTS)


@pytest_asyncio.fixture
async def other_employer(db: AsyncSession) -> Account:
    account = await accounts.register(
        db, "employer2@example.com", "employer2-pw", "Olive", "Owner", AccountRole.EMPLOYER
    )
    return await accounts.update_employer_agreements(db, account, ALL_AGREEMENTS)


@pytest_asyncio.fixture
async def admin(db: AsyncSession) -> Account:
    return await accounts.register(
        db, "admin@example.com", "admin-pw", "Ada", "Admin", AccountRole.ADMINISTRATOR
    )


@pytest_asyncio.fixture
async def pending_post(db: AsyncSession, employer: Account) -> Posting:
    post = Posting(
        employer_id=employer.unique_id,
        title="Barista",
        description="Morning shifts",
        company_name="Bean Co",
        status="Pending",
    )
    db.add(post)
    await db.commit()
    await db.refresh(post)
    return post


@pytest_asyncio.fixture
async def accepted_post(db: AsyncSession, employer: Account) -> Posting:
    post = Posting(
        employer_id=employer.unique_id,
        title="Cashier",
        description="Weekend shifts",
        company_name="Corner Store",
        status="Accepted",
    )
    db.add(post)
    await db.commit()
    await db.refresh(post)
    return post
