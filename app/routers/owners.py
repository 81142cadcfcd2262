from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
from app.dependencies.database import get_session
from app.schemas.owner import OwnerCreate, OwnerResponse
from app.services import owners as service
from structlog import get_logger

logger = get_logger()
router = APIRouter(prefix="/api/v1/owners", tags=["owners"])

@router.get("", response_model=List[OwnerResponse])
async def list_owners(session: AsyncSession = Depends(get_session)):
    owners = await service.list_owners(session)
    logger.info("Fetched owners", total_owners=len(owners))
    return owners

@router.get("/{owner_id}", response_model=OwnerResponse)
async def get_owner(owner_id: str, session: AsyncSession = Depends(get_session)):
    owner = await service.get_owner(session, owner_id)
    if owner is None:
        raise HTTPException(status_code=404, detail=f"Owner with ID {owner_id} not found")
    logger.info("Fetched owner", owner_id=owner_id)
    return owner

@router.post("", response_model=OwnerResponse, status_code=status.HTTP_201_CREATED)
async def create_owner(
    response: Response,
    payload: Optional[OwnerCreate] = Body(None),
    session: AsyncSession = Depends(get_session),
):
    owner = await service.create_owner(session, payload)
    response.headers["Location"] = f"{router.prefix}/{owner.id}"
    return owner
