"""
Database client, declarative base and session dependency.
"""
import json
import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import Text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""


class JSONList(TypeDecorator):
    """Ordered list of strings stored as JSON text in a single column."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return "[]"
        return json.dumps([str(item) for item in value])

    def process_result_value(self, value, dialect):
        if not value:
            return []
        try:
            decoded = json.loads(value)
        except ValueError:
            return []
        if not isinstance(decoded, list):
            return []
        return [str(item) for item in decoded]


class Database:
    """
    Owns the async engine and session factory.

    Constructed once by the application factory and closed on shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["timeout"] = 30
        self.engine = create_async_engine(url, echo=echo, connect_args=connect_args)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def create_all(self) -> None:
        # Import models so their tables are registered on the metadata.
        from dealership import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready")

    def session(self) -> AsyncSession:
        return self.session_factory()

    async def close(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield a session bound to the application's database client."""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


def enum_values(enum_cls) -> list[str]:
    """Persist enum members by value rather than by name."""
    return [member.value for member in enum_cls]
