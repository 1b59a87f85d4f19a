from datetime import datetime

from sqlalchemy import String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from storefront.models.base import Base


class StoredCart(Base):
    __tablename__ = "carts"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    data: Mapped[str] = mapped_column(Text, default="[]")  # JSON list of line items
    updated_at: Mapped[datetime] = mapped_column(default=func.now(), onupdate=func.now())
