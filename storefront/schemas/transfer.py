from enum import StrEnum
from typing import Any

from pydantic import BaseModel


class ExportScope(StrEnum):
    ALL = "all"
    PRODUCTS = "products"
    SECTIONS = "sections"


class CatalogDocument(BaseModel):
    """Catalog records as exported, or as the old admin panel kept them in browser storage."""

    products: list[dict[str, Any]] = []
    sections: list[dict[str, Any]] = []


class MigrationResult(BaseModel):
    message: str = "Migration completed"
    migrated_products: int = 0
    migrated_sections: int = 0
    errors: list[str] | None = None


class ImportResult(BaseModel):
    message: str = "Import completed"
    products_created: int = 0
    products_updated: int = 0
    sections_created: int = 0
    sections_updated: int = 0
    errors: list[str] | None = None
