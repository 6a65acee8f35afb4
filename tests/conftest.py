"""Pytest configuration and shared fixtures."""

from typing import List, Optional

import pytest
from httpx import ASGITransport, AsyncClient

from chatbox.config import Settings
from chatbox.core.security import Role
from chatbox.database import Account, create_engine, create_session_maker, init_db
from chatbox.repositories import AccountRepository
from chatbox.server import create_app
from chatbox.services import AccountService


TEST_SECRET = "test_secret_key_12345"


# ============================================================================
# Mock Components
# ============================================================================

class FakeCompletionClient:
    """Stands in for CompletionClient; records prompts."""

    def __init__(self, reply: str = "Hi there", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.prompts: List[str] = []
        self.closed = False

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_completion():
    """Completion client answering "Hi there"."""
    return FakeCompletionClient()


# ============================================================================
# Configuration and Database
# ============================================================================

@pytest.fixture
def settings(tmp_path):
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        JWT_SECRET=TEST_SECRET,
        BCRYPT_ROUNDS=4,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
async def engine(settings):
    """Engine with tables created."""
    engine = create_engine(settings.DATABASE_URL)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def session(engine):
    """Async session on the test database."""
    async with create_session_maker(engine)() as session:
        yield session


# ============================================================================
# Application
# ============================================================================

@pytest.fixture
async def app(settings, fake_completion):
    """Application wired to the fake completion client."""
    app = create_app(settings, completion_client=fake_completion)
    # ASGITransport does not run the lifespan
    await init_db(app.state.engine)
    yield app
    await app.state.engine.dispose()


@pytest.fixture
async def client(app):
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _seed(app, username: str, email: str, password: str, role: Role) -> Account:
    async with app.state.session_maker() as session:
        service = AccountService(
            AccountRepository(Account, session),
            bcrypt_rounds=app.state.settings.BCRYPT_ROUNDS,
        )
        return await service.create(username, email, password, role=role)


@pytest.fixture
def seed_account(app):
    """Insert an account directly through the service layer."""
    async def _factory(username, email, password, role=Role.USER) -> Account:
        return await _seed(app, username, email, password, role)
    return _factory


@pytest.fixture
async def admin_headers(client, seed_account):
    """Authorization header for a freshly seeded admin."""
    await seed_account("root", "root@mail.com", "rootpass", Role.ADMIN)
    response = await client.post(
        "/admin/login",
        json={"email": "root@mail.com", "password": "rootpass"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['adminToken']}"}


@pytest.fixture
async def user_headers(client):
    """Authorization header for a user created through signup."""
    response = await client.post(
        "/user/signup",
        json={"username": "alice", "email": "alice@mail.com", "password": "alicepass"},
    )
    assert response.status_code == 201
    response = await client.post(
        "/user/login",
        json={"email": "alice@mail.com", "password": "alicepass"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
