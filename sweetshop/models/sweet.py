"""Sweet (catalog product) model definitions."""

from datetime import datetime, timezone

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Float, Integer, String
from sweetshop.database import Base


DEFAULT_IMAGE_URL = "https://via.placeholder.com/300x200?text=Sweet"
DEFAULT_WEIGHT = "250g"
MAX_QUANTITY = 2**31 - 1
MAX_SWEET_ID = 2**31 - 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Sweet(Base):
    """Represents a purchasable sweet and its on-hand stock."""
    __tablename__ = "sweets"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_sweets_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_sweets_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, index=True, nullable=False)
    category = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    description = Column(String(500), nullable=False)
    image = Column(String, nullable=False, default=DEFAULT_IMAGE_URL)
    ingredients = Column(JSON, nullable=False, default=list)
    weight = Column(String, nullable=False, default=DEFAULT_WEIGHT)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
