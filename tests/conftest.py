"""
Test infrastructure for the Articles API.

Strategy
--------
- SQLite in-memory via aiosqlite removes the need for a running Postgres
  instance; SQLite understands the ``RETURNING`` clauses the service uses.
- StaticPool forces every task to share the same in-memory connection,
  because an in-memory SQLite database only lives as long as its connection.
- The app's ``get_gateway`` dependency is overridden with a gateway bound to
  the test engine. The lifespan (which would build the Postgres gateway) is
  never started by ``ASGITransport``.
- The table is created before each test and dropped after it.
- Compatibility switches on ``settings`` are reset around every test so a
  test that flips one cannot leak into the next.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from articles_api.config import settings
from articles_api.database import Base, StorageGateway, get_gateway
from articles_api.main import app

# ---------------------------------------------------------------------------
# Test gateway — SQLite in-memory with aiosqlite
# ---------------------------------------------------------------------------

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

engine_test = create_async_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

gateway_test = StorageGateway(engine_test)


# ---------------------------------------------------------------------------
# Dependency override — every request talks to the test gateway
# ---------------------------------------------------------------------------

def override_get_gateway() -> StorageGateway:
    return gateway_test


app.dependency_overrides[get_gateway] = override_get_gateway


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture(autouse=True)
async def setup_db():
    """Create the articles table before each test, drop it after."""
    await gateway_test.create_schema()
    yield
    async with engine_test.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(autouse=True)
def legacy_status_policy(monkeypatch):
    """Run every test under the default compatibility settings."""
    monkeypatch.setattr(settings, "STRICT_STATUS_CODES", False)
    monkeypatch.setattr(settings, "EMPTY_LIST_IS_ERROR", True)


@pytest.fixture
def strict_mode(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_STATUS_CODES", True)


@pytest.fixture
def gateway() -> StorageGateway:
    """The gateway used by the app under test, for direct service calls."""
    return gateway_test


@pytest_asyncio.fixture
async def async_client() -> AsyncClient:
    """Yield an httpx.AsyncClient wired to the FastAPI app via ASGITransport."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
