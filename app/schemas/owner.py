from datetime import datetime
from typing import Optional
from pydantic import field_validator
from app.schemas.base import CamelModel, as_utc

class OwnerCreate(CamelModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

class OwnerResponse(CamelModel):
    id: str
    name: str
    email: str
    phone: str
    created_at: datetime

    normalize_timestamps = field_validator("created_at")(as_utc)
