from typing import List, Optional

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.errors import ConflictError
from app.models.base import utcnow
from app.models.owner import Owner
from app.schemas.owner import OwnerCreate
from app.services.validation import validate_owner

logger = get_logger()

async def list_owners(session: AsyncSession) -> List[Owner]:
    result = await session.execute(select(Owner).order_by(Owner.created_at.desc(), Owner.id.desc()))
    return list(result.scalars().all())

async def get_owner(session: AsyncSession, owner_id: str) -> Optional[Owner]:
    return await session.get(Owner, owner_id)

async def owner_exists(session: AsyncSession, owner_id: str) -> bool:
    return bool(await session.scalar(select(exists().where(Owner.id == owner_id))))

async def email_taken(session: AsyncSession, email: str) -> bool:
    return bool(await session.scalar(select(exists().where(Owner.email == email))))

async def create_owner(session: AsyncSession, payload: Optional[OwnerCreate]) -> Owner:
    data = validate_owner(payload)
    if await email_taken(session, data.email):
        raise ConflictError(f"An owner with email '{data.email}' already exists", "email")

    owner = Owner(name=data.name, email=data.email, phone=data.phone, created_at=utcnow())
    session.add(owner)
    try:
        await session.commit()
    except IntegrityError:
        # Lost the race against a concurrent insert with the same email
        await session.rollback()
        raise ConflictError(f"An owner with email '{data.email}' already exists", "email")
    logger.info("Created owner", owner_id=owner.id)
    return owner
