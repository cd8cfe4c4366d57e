"""
Database core functionality for async SQLAlchemy
"""

import re

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from ..config import settings


def to_async_url(database_url: str) -> str:
    """Convert a libpq style PostgreSQL URL to its asyncpg equivalent"""
    if database_url.startswith("postgres://"):
        database_url = database_url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    # asyncpg handles SSL through connect_args, not the query string
    return re.sub(r'[?&]sslmode=\w+', '', database_url)


DATABASE_URL = to_async_url(settings.active_database_url)

engine = create_async_engine(
    DATABASE_URL,
    pool_size=10,
    max_overflow=20,
    pool_pre_ping=True,
    pool_recycle=3600,
    echo=False,
    connect_args={"ssl": "require"} if "neon" in DATABASE_URL else {}
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)

Base = declarative_base()


async def get_db():
    """Async dependency to get database session"""
    async with AsyncSessionLocal() as session:
        yield session
