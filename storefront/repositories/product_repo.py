from typing import Any

from sqlalchemy import case, func, or_, select, update
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.product import Product
from storefront.models.section import Section
from storefront.repositories.base import BaseRepository
from storefront.schemas.product import ProductSort

def _contains(column, query: str):
    """Case-insensitive substring match that also folds non-ASCII letters."""
    return func.casefold(column).like(f"%{query.casefold()}%")


_ORDERING = {
    ProductSort.NEWEST: (Product.created_at.desc(), Product.id.desc()),
    ProductSort.PRICE_ASC: (Product.price.asc(), Product.id.asc()),
    ProductSort.PRICE_DESC: (Product.price.desc(), Product.id.asc()),
    ProductSort.NAME: (Product.name.asc(), Product.id.asc()),
}


class ProductRepository(BaseRepository[Product]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Product)

    async def get_by_sku(self, sku: str) -> Product | None:
        stmt = select(Product).where(Product.sku == sku)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def search(
        self,
        query: str | None = None,
        category: str | None = None,
        section: str | None = None,
        active: bool | None = None,
        featured: bool | None = None,
        sort: ProductSort = ProductSort.NEWEST,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[Product]:
        stmt = select(Product)

        if category:
            stmt = stmt.where(Product.category == category)
        if section:
            stmt = stmt.where(Product.section == section)
        if active is not None:
            stmt = stmt.where(Product.active == active)
        if featured is not None:
            stmt = stmt.where(Product.featured == featured)
        if query:
            stmt = stmt.where(
                or_(
                    _contains(Product.name, query),
                    _contains(Product.sku, query),
                    _contains(Product.description, query),
                )
            )

        stmt = stmt.order_by(*_ORDERING[sort])
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset:
            stmt = stmt.offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search_ranked(
        self, query: str, category: str | None = None, section: str | None = None
    ) -> list[Product]:
        """Active products matching `query`; name hits first, then SKU hits, then the rest."""
        stmt = select(Product).where(
            Product.active.is_(True),
            or_(
                _contains(Product.name, query),
                _contains(Product.sku, query),
                _contains(Product.description, query),
            ),
        )
        if category:
            stmt = stmt.where(Product.category == category)
        if section:
            stmt = stmt.where(Product.section == section)

        rank = case(
            (_contains(Product.name, query), 1),
            (_contains(Product.sku, query), 2),
            else_=3,
        )
        stmt = stmt.order_by(rank, Product.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_active_by_section(self, code: str) -> list[Product]:
        stmt = (
            select(Product)
            .where(Product.section == code, Product.active.is_(True))
            .order_by(Product.created_at.desc(), Product.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def move_section(self, old_code: str, new_code: str) -> int:
        """Move every product of `old_code` to `new_code`; an empty target detaches and deactivates."""
        stmt = (
            update(Product)
            .where(Product.section == old_code)
            .values(section=new_code, active=bool(new_code), updated_at=func.now())
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def rename_section(self, old_code: str, new_code: str) -> int:
        stmt = (
            update(Product)
            .where(Product.section == old_code)
            .values(section=new_code, updated_at=func.now())
            .execution_options(synchronize_session="fetch")
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def insert_ignore(self, **values: Any) -> bool:
        """Insert a product unless its SKU already exists. Returns True when a row was written."""
        stmt = insert(Product).values(**values).on_conflict_do_nothing(index_elements=["sku"])
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def get_stats(self) -> dict:
        totals_stmt = select(
            func.count(Product.id),
            func.coalesce(func.sum(case((Product.active.is_(True), 1), else_=0)), 0),
            func.coalesce(func.sum(case((Product.featured.is_(True), 1), else_=0)), 0),
            func.count(func.distinct(Product.category)),
            func.count(func.distinct(case((Product.section != "", Product.section)))),
            func.coalesce(func.sum(Product.stock), 0),
            func.coalesce(func.sum(Product.price * Product.stock), 0),
        )
        row = (await self.session.execute(totals_stmt)).one()

        sections_stmt = select(func.count()).select_from(Section)
        total_sections = (await self.session.execute(sections_stmt)).scalar_one()

        category_stmt = (
            select(Product.category, func.count(Product.id))
            .group_by(Product.category)
            .order_by(func.count(Product.id).desc())
        )
        cat_result = await self.session.execute(category_stmt)

        return {
            "total_products": row[0],
            "active_products": int(row[1]),
            "featured_products": int(row[2]),
            "categories_count": row[3],
            "sections_count": row[4],
            "total_sections": total_sections,
            "total_stock": int(row[5]),
            "inventory_value": float(row[6]),
            "by_category": {r[0]: r[1] for r in cat_result.all()},
        }
