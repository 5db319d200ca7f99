"""Master test fixtures.

Environment variables are set BEFORE any application imports so that
``config.Settings()`` initialises with test-safe values and never
touches Docker secrets or a production database.
"""

import os

# ── Set test env vars before any app import ──────────────────────────
os.environ.update({
    "DATABASE_URL": "sqlite+aiosqlite://",
    "PORT": "3000",
    "CORS_ORIGINS": "http://localhost:5173",
    "MAX_UPLOAD_SIZE": str(1024 * 1024),
})
os.environ.pop("POSTGRES_PASSWORD", None)
os.environ.pop("POSTGRES_PASSWORD_FILE", None)

import pytest

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# Now safe to import application code
from models.base import Base, get_db
from models.submission import Submission


PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog >>\nendobj\ntrailer\n<< /Root 1 0 R >>\n%%EOF\n"

_test_engine = create_async_engine("sqlite+aiosqlite://", echo=False)
_TestSession = async_sessionmaker(_test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture(autouse=True)
async def _create_tables():
    """Create and drop SQLite tables around every test."""
    async with _test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with _test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def db_session():
    """Yield a test DB session."""
    async with _TestSession() as session:
        yield session


@pytest.fixture
async def test_client(db_session: AsyncSession):
    """HTTPX async client wired to the FastAPI app, with DB override.

    The lifespan is NOT run; every request uses the test session instead.
    """
    from main import app

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def pdf_bytes() -> bytes:
    return PDF_BYTES


@pytest.fixture
def upload(test_client):
    """Return a coroutine that posts a submission through /submit-form."""

    async def _upload(
        passkey: str | None = "abc123",
        category: str | None = None,
        content: bytes = PDF_BYTES,
        filename: str = "resume.pdf",
        content_type: str = "application/pdf",
        with_file: bool = True,
    ):
        data = {}
        if passkey is not None:
            data["passkey"] = passkey
        if category is not None:
            data["category"] = category
        files = {"resume": (filename, content, content_type)} if with_file else None
        return await test_client.post("/submit-form", data=data, files=files)

    return _upload


@pytest.fixture
async def stored_submission(db_session: AsyncSession) -> Submission:
    """Insert a submission directly and return it."""
    record = Submission(
        filename="seed.pdf",
        content_type="application/pdf",
        data=PDF_BYTES,
        passkey="seed-passkey",
        category="EEE",
    )
    db_session.add(record)
    await db_session.commit()
    return record
