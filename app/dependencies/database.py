from typing import AsyncIterator
from sqlalchemy.ext.asyncio import AsyncSession
from app.db import SessionLocal

async def get_session() -> AsyncIterator[AsyncSession]:
    """One session per request, closed when the response is sent."""
    async with SessionLocal() as session:
        yield session
