from decimal import Decimal
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from app.config import settings
from app.dependencies.database import get_session
from app.schemas.property import (
    PropertyCreate,
    PropertyFilter,
    PropertyResponse,
    PropertySearchResponse,
    PropertyUpdate,
)
from app.services import properties as service
from app.services.pagination import total_pages
from structlog import get_logger

logger = get_logger()
router = APIRouter(prefix="/api/v1/properties", tags=["properties"])

@router.get("", response_model=List[PropertyResponse])
async def list_properties(session: AsyncSession = Depends(get_session)):
    properties = await service.list_properties(session)
    logger.info("Fetched properties", total_properties=len(properties))
    return properties

@router.get("/search", response_model=PropertySearchResponse)
async def search_properties(
    name: Optional[str] = None,
    address: Optional[str] = None,
    id_owner: Optional[str] = Query(None, alias="idOwner"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, alias="pageSize", ge=1, le=settings.MAX_PAGE_SIZE),
    session: AsyncSession = Depends(get_session),
):
    """
    Filtered, paginated search. Text filters are case-insensitive substrings,
    price bounds are inclusive. Pages past the end come back empty.
    """
    filters = PropertyFilter(
        name=name,
        address=address,
        id_owner=id_owner,
        min_price=min_price,
        max_price=max_price,
        page=page,
        page_size=page_size,
    )
    total = await service.count_properties(session, filters)
    items, window = await service.search_properties(session, filters, total)
    logger.info("Searched properties", total_count=total, page=window.page, page_size=window.page_size)
    return {
        "properties": items,
        "total_count": total,
        "page": window.page,
        "page_size": window.page_size,
        "total_pages": total_pages(total, window.page_size),
    }

@router.get("/{property_id}", response_model=PropertyResponse)
async def get_property(property_id: str, session: AsyncSession = Depends(get_session)):
    prop = await service.get_property(session, property_id)
    if prop is None:
        raise HTTPException(status_code=404, detail=f"Property with ID {property_id} not found")
    logger.info("Fetched property", property_id=property_id)
    return prop

@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property(
    response: Response,
    payload: Optional[PropertyCreate] = Body(None),
    session: AsyncSession = Depends(get_session),
):
    prop = await service.create_property(session, payload)
    response.headers["Location"] = f"{router.prefix}/{prop.id}"
    return prop

@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property(
    property_id: str,
    payload: Optional[PropertyUpdate] = Body(None),
    session: AsyncSession = Depends(get_session),
):
    prop = await service.update_property(session, property_id, payload)
    if prop is None:
        raise HTTPException(status_code=404, detail=f"Property with ID {property_id} not found")
    return prop

@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(property_id: str, session: AsyncSession = Depends(get_session)):
    if not await service.delete_property(session, property_id):
        raise HTTPException(status_code=404, detail=f"Property with ID {property_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
