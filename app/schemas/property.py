from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import Field, field_validator
from app.config import settings
from app.schemas.base import CamelModel, as_utc

class PropertyCreate(CamelModel):
    id_owner: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    price: Optional[Decimal] = None
    image: Optional[str] = None

class PropertyUpdate(PropertyCreate):
    """Full replacement of every mutable field."""

class PropertyResponse(CamelModel):
    id: str
    id_owner: str
    name: str
    address: str
    price: float
    image: str
    created_at: datetime
    updated_at: datetime

    normalize_timestamps = field_validator("created_at", "updated_at")(as_utc)

class PropertyFilter(CamelModel):
    name: Optional[str] = None
    address: Optional[str] = None
    id_owner: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    page: int = Field(1, ge=1)
    page_size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE, ge=1)

class PropertySearchResponse(CamelModel):
    properties: List[PropertyResponse]
    total_count: int
    page: int
    page_size: int
    total_pages: int
