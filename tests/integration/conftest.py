"""
Fixtures for integration tests.

Provides:
- In-memory SQLite database shared by the app under test
- Test client for the FastAPI app with repositories bound to that database
- Helpers to register users and build Authorization headers
"""

from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.main import app
from src.core.dependencies import (
    get_gift_card_repository,
    get_password_hasher,
    get_token_service,
    get_user_repository,
)
from src.core.security import PasswordHasher, TokenService
from src.infrastructure.database import Base
from src.infrastructure.repositories import (
    PostgresGiftCardRepository,
    PostgresUserRepository,
)

TEST_SECRET = "integration-test-secret"


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


# =============================================================================
# Security Fixtures
# =============================================================================

@pytest.fixture
def token_service() -> TokenService:
    return TokenService(TEST_SECRET)


@pytest.fixture
def password_hasher() -> PasswordHasher:
    """Cheap bcrypt cost so registration stays fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def auth_headers(token_service: TokenService) -> Callable[[int], dict]:
    """Build an Authorization header for an account id."""

    def build(account_id: int) -> dict:
        return {"Authorization": f"Bearer {token_service.issue(account_id)}"}

    return build


# =============================================================================
# App Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def client(
    test_session: AsyncSession,
    token_service: TokenService,
    password_hasher: PasswordHasher,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client with overridden dependencies.

    This client:
    - Uses an in-memory SQLite database
    - Signs and verifies tokens with a test key
    - Hashes passwords with a low bcrypt cost
    """
    async def override_get_gift_card_repository():
        return PostgresGiftCardRepository(test_session)

    async def override_get_user_repository():
        return PostgresUserRepository(test_session)

    app.dependency_overrides[get_gift_card_repository] = override_get_gift_card_repository
    app.dependency_overrides[get_user_repository] = override_get_user_repository
    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# =============================================================================
# Helper Fixtures
# =============================================================================

@pytest.fixture
def register_user(client: AsyncClient):
    """Register a user through the API and return its id."""

    async def register(email: str, password: str = "password") -> int:
        response = await client.post(
            "/v1/users/register",
            json={"email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()["id"]

    return register


@pytest.fixture
def send_gift_card(client: AsyncClient, auth_headers):
    """Send a gift card through the API and return the response body."""

    async def send(sender_id: int, receiver_id: int, amount: str = "100.00") -> dict:
        response = await client.post(
            "/v1/gift-cards",
            json={"amount": amount, "receiver_id": receiver_id},
            headers=auth_headers(sender_id),
        )
        assert response.status_code == 201, response.text
        return response.json()

    return send
