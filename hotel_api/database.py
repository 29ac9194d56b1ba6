"""Database engine, session factory and declarative base"""

from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from hotel_api.config import settings

engine = create_async_engine(settings.database_url, echo=settings.api_debug, future=True)

SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for the duration of a request"""
    async with SessionLocal() as session:
        yield session

