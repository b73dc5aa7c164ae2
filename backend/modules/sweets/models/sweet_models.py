# backend/modules/sweets/models/sweet_models.py

from sqlalchemy import Column, Integer, Numeric, String, Text

from core.database import Base
from core.mixins import TimestampMixin, UUIDPrimaryKeyMixin


class Sweet(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Catalog item with its remaining stock"""
    __tablename__ = "sweets"

    name = Column(String(200), nullable=False, index=True)
    category = Column(String(100), nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)

    def __repr__(self):
        return f"<Sweet(id={self.id}, name='{self.name}', quantity={self.quantity})>"
