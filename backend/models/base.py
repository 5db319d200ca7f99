"""SQLAlchemy async engine and session setup."""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Database:
    """Owns the async engine and session factory for one process.

    Built by the application lifespan before traffic is accepted and
    disposed on shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.engine = create_async_engine(url, echo=echo)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    async def create_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request):
    """FastAPI dependency that yields an async database session."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session
