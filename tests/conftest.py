import os
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("LOG_FORMAT", "text")

from expency.db.session import get_db  # noqa: E402
from expency.main import app  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

if TEST_DATABASE_URL.startswith("sqlite"):
    # One shared connection so the in-memory database survives across sessions.
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse: engine and renderer unit tests run without a database.
    """
    from expency.models.base import Base

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user for authentication tests."""
    from expency.core.security import hash_password
    from expency.models.user import User
    from expency.repositories.user import UserRepository

    repo = UserRepository(db_session)
    user = User(
        email="testuser@example.com",
        password_hash=hash_password("password123"),
        name="Test User",
    )
    return await repo.add(user)


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """A second user, for ownership checks."""
    from expency.core.security import hash_password
    from expency.models.user import User
    from expency.repositories.user import UserRepository

    repo = UserRepository(db_session)
    user = User(
        email="other@example.com",
        password_hash=hash_password("password123"),
        name="Other User",
    )
    return await repo.add(user)


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    from expency.core.security import create_access_token

    token = create_access_token(user_id=test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def add_expense(db_session: AsyncSession):
    """Factory that inserts an expense directly through the repository."""
    from expency.models.expense import Expense
    from expency.repositories.expense import ExpenseRepository

    repo = ExpenseRepository(db_session)

    async def _add(
        user,
        amount: str,
        category: str = "Food & Snacks",
        expense_date: date = date(2025, 3, 10),
        description: str = "Canteen lunch",
        payment_mode: str = "UPI",
    ):
        return await repo.add(
            Expense(
                user_id=user.id,
                description=description,
                amount=Decimal(amount),
                category=category,
                expense_date=expense_date,
                payment_mode=payment_mode,
            )
        )

    return _add


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
