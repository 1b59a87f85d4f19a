import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import DuplicateError
from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.product import ProductCreate, ProductSort, ProductUpdate, SectionMove
from storefront.services.catalog import generate_sku
from storefront.services.image_service import ImageService

logger = logging.getLogger(__name__)


@dataclass
class ProductListViewModel:
    products: list[Product] = field(default_factory=list)

    @classmethod
    async def load(
        cls,
        session: AsyncSession,
        query: str | None = None,
        category: str | None = None,
        section: str | None = None,
        active: bool | None = None,
        featured: bool | None = None,
        sort: ProductSort = ProductSort.NEWEST,
        offset: int | None = None,
        limit: int | None = None,
    ) -> "ProductListViewModel":
        repo = ProductRepository(session)
        products = await repo.search(
            query=query,
            category=category,
            section=section,
            active=active,
            featured=featured,
            sort=sort,
            offset=offset,
            limit=limit,
        )
        return cls(products=products)

    @classmethod
    async def load_section(cls, session: AsyncSession, code: str) -> "ProductListViewModel":
        repo = ProductRepository(session)
        return cls(products=await repo.get_active_by_section(code))

    @classmethod
    async def search(
        cls, session: AsyncSession, query: str, category: str | None = None, section: str | None = None
    ) -> "ProductListViewModel":
        repo = ProductRepository(session)
        return cls(products=await repo.search_ranked(query, category=category, section=section))


@dataclass
class ProductDetailViewModel:
    product: Product | None = None

    @classmethod
    async def load(cls, session: AsyncSession, product_id: int) -> "ProductDetailViewModel":
        repo = ProductRepository(session)
        return cls(product=await repo.get(product_id))

    @classmethod
    async def load_by_sku(cls, session: AsyncSession, sku: str) -> "ProductDetailViewModel":
        repo = ProductRepository(session)
        return cls(product=await repo.get_by_sku(sku))

    @classmethod
    async def create_product(cls, session: AsyncSession, data: ProductCreate) -> Product:
        repo = ProductRepository(session)
        values = data.model_dump()
        values["sku"] = data.sku or generate_sku(data.name)
        if await repo.get_by_sku(values["sku"]):
            raise DuplicateError("Product with this SKU already exists")
        product = await repo.create(**values)
        await session.commit()
        logger.info("Created product %s (%s)", product.id, product.sku)
        return product

    @classmethod
    async def update_product(
        cls,
        session: AsyncSession,
        product_id: int,
        data: ProductUpdate,
        images: list[str] | None = None,
    ) -> Product | None:
        """Apply a partial update. New `images` replace the stored ones and the old files are removed."""
        repo = ProductRepository(session)
        product = await repo.get(product_id)
        if not product:
            return None

        updates = data.model_dump(exclude_unset=True)
        new_sku = updates.get("sku")
        if new_sku and new_sku != product.sku and await repo.get_by_sku(new_sku):
            raise DuplicateError("Product with this SKU already exists")
        # detaching a product from its section also deactivates it
        if "section" in updates and not updates["section"]:
            updates["section"] = ""
            updates["active"] = False

        old_images: list[str] = []
        if images:
            old_images = product.images
            updates["images"] = images

        product = await repo.update(product_id, **updates)
        await session.commit()
        if old_images:
            ImageService().delete_many(old_images)
        return product

    @classmethod
    async def delete_product(cls, session: AsyncSession, product_id: int) -> str | None:
        """Delete a product and its uploaded images. Returns the deleted SKU."""
        repo = ProductRepository(session)
        product = await repo.get(product_id)
        if not product:
            return None
        sku, images = product.sku, product.images
        await repo.delete(product_id)
        await session.commit()
        ImageService().delete_many(images)
        logger.info("Deleted product %s (%s)", product_id, sku)
        return sku

    @classmethod
    async def move_section(cls, session: AsyncSession, data: SectionMove) -> int:
        repo = ProductRepository(session)
        count = await repo.move_section(data.old_section, data.new_section)
        await session.commit()
        return count
