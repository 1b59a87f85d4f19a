import json
import logging
import time
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import format_validation_errors
from storefront.models.product import Product
from storefront.models.section import Section
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.section_repo import SectionRepository
from storefront.schemas.product import ProductCreate
from storefront.schemas.section import SectionCreate
from storefront.schemas.transfer import CatalogDocument, ExportScope, ImportResult, MigrationResult
from storefront.services.catalog import generate_sku
from storefront.services.export_service import ExportService
from storefront.services.image_service import ImageService

logger = logging.getLogger(__name__)


def _label(raw: dict[str, Any]) -> str:
    return str(raw.get("name") or raw.get("sku") or raw.get("code") or "<unnamed>")


def _section_data(raw: dict[str, Any]) -> SectionCreate:
    return SectionCreate.model_validate({**raw, "active": raw.get("active") is not False})


def _product_data(raw: dict[str, Any]) -> ProductCreate:
    return ProductCreate.model_validate({
        **raw,
        "section": raw.get("section") or "",
        "description": raw.get("description") or "",
        "badge": raw.get("badge") or "",
        "stock": raw.get("stock") or 0,
        "active": raw.get("active") is not False,
        "featured": bool(raw.get("featured")),
    })


def _product_row(data: ProductCreate, sku: str) -> dict[str, Any]:
    """Column values for a Core insert of `data`."""
    values = data.model_dump(exclude={"sku", "features", "specifications", "images"})
    values.update(
        sku=sku,
        features_json=json.dumps(data.features, ensure_ascii=False),
        specifications_json=json.dumps(data.specifications, ensure_ascii=False),
        images_json=json.dumps(data.images, ensure_ascii=False),
    )
    return values


@dataclass
class ExportViewModel:
    products: list[Product]
    sections: list[Section]

    @classmethod
    async def load(cls, session: AsyncSession) -> "ExportViewModel":
        products = await ProductRepository(session).search()
        sections = await SectionRepository(session).get_filtered()
        return cls(products=products, sections=sections)

    @property
    def section_names(self) -> dict[str, str]:
        return {s.code: s.name for s in self.sections}

    @classmethod
    async def generate_csv(cls, session: AsyncSession) -> str:
        vm = await cls.load(session)
        return ExportService().export_csv(vm.products, vm.section_names)

    @classmethod
    async def generate_json(cls, session: AsyncSession, scope: ExportScope = ExportScope.ALL) -> str:
        vm = await cls.load(session)
        return ExportService().export_json(vm.products, vm.sections, scope)

    @classmethod
    async def generate_pdf(cls, session: AsyncSession) -> bytes:
        vm = await cls.load(session)
        return ExportService().export_pdf(vm.products, vm.section_names)


@dataclass
class TransferViewModel:
    @classmethod
    async def migrate(cls, session: AsyncSession, request: CatalogDocument) -> MigrationResult:
        """Insert-or-ignore records saved by the old browser-storage admin panel.

        Sections are matched by code and products by SKU; existing rows are
        never touched. Invalid records are reported and skipped.
        """
        section_repo = SectionRepository(session)
        product_repo = ProductRepository(session)
        result = MigrationResult()
        errors: list[str] = []

        for raw in request.sections:
            try:
                data = _section_data(raw)
            except ValidationError as e:
                errors.append(f"Section {_label(raw)}: {format_validation_errors(e.errors())}")
                continue
            if await section_repo.insert_ignore(data.name, data.code, data.active):
                result.migrated_sections += 1

        base_ms = int(time.time() * 1000)
        for i, raw in enumerate(request.products):
            try:
                data = _product_data(raw)
            except ValidationError as e:
                errors.append(f"Product {_label(raw)}: {format_validation_errors(e.errors())}")
                continue
            sku = data.sku or generate_sku(data.name, now_ms=base_ms + i)
            if await product_repo.insert_ignore(**_product_row(data, sku)):
                result.migrated_products += 1

        await session.commit()
        result.errors = errors or None
        logger.info(
            "Migration finished: %d products, %d sections, %d errors",
            result.migrated_products, result.migrated_sections, len(errors),
        )
        return result

    @classmethod
    async def import_catalog(cls, session: AsyncSession, document: CatalogDocument, merge: bool = True) -> ImportResult:
        """Load an exported catalog document.

        With `merge`, sections matched by code and products matched by SKU are
        updated and the rest inserted. Without it the catalog is replaced.
        """
        section_repo = SectionRepository(session)
        product_repo = ProductRepository(session)
        result = ImportResult()
        errors: list[str] = []

        stale_images: list[str] = []
        if not merge:
            stale_images = [url for p in await product_repo.search() for url in p.images]
            removed_products = await product_repo.delete_all()
            removed_sections = await section_repo.delete_all()
            logger.info("Replacing catalog: removed %d products, %d sections", removed_products, removed_sections)

        for raw in document.sections:
            try:
                data = _section_data(raw)
            except ValidationError as e:
                errors.append(f"Section {_label(raw)}: {format_validation_errors(e.errors())}")
                continue
            existing = await section_repo.get_by_code(data.code)
            if existing:
                await section_repo.update(existing.id, name=data.name, active=data.active)
                result.sections_updated += 1
            else:
                await section_repo.create(**data.model_dump())
                result.sections_created += 1

        base_ms = int(time.time() * 1000)
        referenced: set[str] = set()
        for i, raw in enumerate(document.products):
            try:
                data = _product_data(raw)
            except ValidationError as e:
                errors.append(f"Product {_label(raw)}: {format_validation_errors(e.errors())}")
                continue
            referenced.update(data.images)
            sku = data.sku or generate_sku(data.name, now_ms=base_ms + i)
            existing = await product_repo.get_by_sku(sku)
            if existing:
                fields = (set(raw) & set(ProductCreate.model_fields)) - {"sku"}
                await product_repo.update(existing.id, **data.model_dump(include=fields))
                result.products_updated += 1
            else:
                await product_repo.create(**{**data.model_dump(), "sku": sku})
                result.products_created += 1

        await session.commit()
        # files of replaced products that the imported catalog no longer uses
        orphaned = [url for url in stale_images if url not in referenced]
        if orphaned:
            ImageService().delete_many(orphaned)
        result.errors = errors or None
        return result
