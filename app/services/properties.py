from typing import List, Optional, Tuple

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.errors import ConflictError, ReferentialError
from app.models.base import utcnow
from app.models.property import Property
from app.schemas.property import PropertyCreate, PropertyFilter, PropertyUpdate
from app.services.filters import to_predicate
from app.services.owners import owner_exists
from app.services.pagination import PageWindow
from app.services.validation import validate_property

logger = get_logger()

_NEWEST_FIRST = (Property.created_at.desc(), Property.id.desc())

async def list_properties(session: AsyncSession) -> List[Property]:
    result = await session.execute(select(Property).order_by(*_NEWEST_FIRST))
    return list(result.scalars().all())

async def get_property(session: AsyncSession, property_id: str) -> Optional[Property]:
    return await session.get(Property, property_id)

async def search_properties(
    session: AsyncSession, filters: PropertyFilter, total: Optional[int] = None
) -> Tuple[List[Property], PageWindow]:
    """Return one page of matching properties, newest first, and the window used.

    Pass the already counted total to skip recounting. A window starting at or
    past the last match returns an empty page without querying.
    """
    window = PageWindow(filters.page, filters.page_size)
    if total is None:
        total = await count_properties(session, filters)
    if window.offset >= total:
        return [], window
    stmt = (
        select(Property)
        .where(to_predicate(filters))
        .order_by(*_NEWEST_FIRST)
        .offset(window.offset)
        .limit(window.limit)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all()), window

async def count_properties(session: AsyncSession, filters: Optional[PropertyFilter] = None) -> int:
    stmt = select(func.count()).select_from(Property).where(to_predicate(filters))
    return int(await session.scalar(stmt) or 0)

async def _name_taken(session: AsyncSession, name: str, id_owner: str, exclude_id: Optional[str] = None) -> bool:
    cond = (Property.name == name) & (Property.id_owner == id_owner)
    if exclude_id is not None:
        cond = cond & (Property.id != exclude_id)
    return bool(await session.scalar(select(exists().where(cond))))

async def _check_references(session: AsyncSession, data: PropertyCreate, exclude_id: Optional[str] = None):
    if not await owner_exists(session, data.id_owner):
        raise ReferentialError(f"No owner found with id '{data.id_owner}'", "id_owner")
    if await _name_taken(session, data.name, data.id_owner, exclude_id):
        raise ConflictError(f"A property named '{data.name}' already exists for this owner", "name")

async def _commit(session: AsyncSession, data: PropertyCreate):
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ConflictError(f"A property named '{data.name}' already exists for this owner", "name")

async def create_property(session: AsyncSession, payload: Optional[PropertyCreate]) -> Property:
    data = validate_property(payload)
    await _check_references(session, data)

    now = utcnow()
    prop = Property(
        id_owner=data.id_owner,
        name=data.name,
        address=data.address,
        price=data.price,
        image=data.image,
        created_at=now,
        updated_at=now,
    )
    session.add(prop)
    await _commit(session, data)
    logger.info("Created property", property_id=prop.id, owner_id=prop.id_owner)
    return prop

async def update_property(session: AsyncSession, property_id: str, payload: Optional[PropertyUpdate]) -> Optional[Property]:
    """Replace every mutable field of a property; None when the id is unknown."""
    prop = await session.get(Property, property_id)
    if prop is None:
        return None
    data = validate_property(payload)
    await _check_references(session, data, exclude_id=property_id)

    prop.id_owner = data.id_owner
    prop.name = data.name
    prop.address = data.address
    prop.price = data.price
    prop.image = data.image
    prop.updated_at = utcnow()
    await _commit(session, data)
    logger.info("Updated property", property_id=prop.id)
    return prop

async def delete_property(session: AsyncSession, property_id: str) -> bool:
    result = await session.execute(delete(Property).where(Property.id == property_id))
    await session.commit()
    deleted = result.rowcount > 0
    logger.info("Deleted property", property_id=property_id, deleted=deleted)
    return deleted
