import json
import logging

from sqlalchemy import Boolean, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.models.base import Base, TimestampMixin

logger = logging.getLogger(__name__)


def _load_json(raw: str | None, default):
    if not raw:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Unreadable JSON column value %r, using %r", raw, default)
        return default


class Product(Base, TimestampMixin):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)
    sku: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(200))
    price: Mapped[float] = mapped_column(Float)
    category: Mapped[str] = mapped_column(String(100), index=True)
    section: Mapped[str] = mapped_column(String(100), default="", index=True)  # sections.code or ""
    stock: Mapped[int] = mapped_column(Integer, default=0)
    description: Mapped[str] = mapped_column(Text, default="")
    features_json: Mapped[str | None] = mapped_column("features", Text)
    specifications_json: Mapped[str | None] = mapped_column("specifications", Text)
    badge: Mapped[str] = mapped_column(String(100), default="")
    active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    images_json: Mapped[str | None] = mapped_column("images", Text)

    @property
    def features(self) -> list[str]:
        return _load_json(self.features_json, [])

    @features.setter
    def features(self, value: list[str]) -> None:
        self.features_json = json.dumps(list(value or []), ensure_ascii=False)

    @property
    def specifications(self) -> dict[str, str]:
        return _load_json(self.specifications_json, {})

    @specifications.setter
    def specifications(self, value: dict[str, str]) -> None:
        self.specifications_json = json.dumps(dict(value or {}), ensure_ascii=False)

    @property
    def images(self) -> list[str]:
        return _load_json(self.images_json, [])

    @images.setter
    def images(self, value: list[str]) -> None:
        self.images_json = json.dumps(list(value or []), ensure_ascii=False)
