from sqlalchemy import Column, String, Numeric, DateTime, Index
from app.config import settings
from app.models.base import Base, new_id, utcnow

class Property(Base):
    __tablename__ = settings.PROPERTIES_TABLE
    id = Column(String(32), primary_key=True, default=new_id)
    # Not a foreign key: owner existence is checked by the service on write
    id_owner = Column(String(50), nullable=False)
    name = Column(String(100), nullable=False)
    address = Column(String(200), nullable=False)
    price = Column(Numeric(18, 2), nullable=False)
    image = Column(String(2048), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        Index("uq_properties_name_owner", "name", "id_owner", unique=True),
        Index("idx_properties_id_owner", "id_owner"),
        Index("idx_properties_price", "price"),
        Index("idx_properties_created_at", "created_at"),
    )
