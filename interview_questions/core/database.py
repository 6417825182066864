from typing import AsyncIterator, Optional

from fastapi import Request
from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
import structlog

from interview_questions.core.config import Settings

logger = structlog.get_logger()


class Database:
    """Store client: owns the async engine and the session factory.

    Constructed once per process (in the application lifespan) and handed to
    request handlers through ``get_async_session``.
    """

    def __init__(self, url: str, echo: bool = False, engine: Optional[AsyncEngine] = None):
        self.url = url
        if engine is None:
            kwargs = {"echo": echo, "future": True}
            if url.startswith("sqlite"):
                kwargs["connect_args"] = {"check_same_thread": False}
                if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
                    # one shared connection, otherwise each session sees an empty database
                    kwargs["poolclass"] = StaticPool
            engine = create_async_engine(url, **kwargs)
        self.engine = engine
        self.session_maker = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.database_url, echo=settings.db_echo)

    def session(self) -> AsyncSession:
        """New session for use outside a request (seeding, scripts)."""
        return self.session_maker()

    async def create_all(self) -> None:
        # register every table on SQLModel.metadata
        import interview_questions.models  # noqa: F401

        logger.info("Creating database tables")
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()


async def get_async_session(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency for getting a database session"""
    database: Database = request.app.state.database
    async with database.session_maker() as session:
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error("Database session error", error_type=type(e).__name__, error=str(e))
            raise
