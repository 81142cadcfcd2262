from sqlalchemy import Column, String, DateTime, Index
from app.config import settings
from app.models.base import Base, new_id, utcnow

class Owner(Base):
    __tablename__ = settings.OWNERS_TABLE
    id = Column(String(32), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False)
    email = Column(String(254), nullable=False)
    phone = Column(String(30), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("uq_owners_email", "email", unique=True),
        Index("idx_owners_name", "name"),
    )
