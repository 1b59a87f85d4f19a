from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.repositories.product_repo import ProductRepository


@dataclass
class DashboardViewModel:
    total_products: int = 0
    active_products: int = 0
    featured_products: int = 0
    categories_count: int = 0
    sections_count: int = 0
    total_sections: int = 0
    total_stock: int = 0
    inventory_value: float = 0.0
    by_category: dict[str, int] = field(default_factory=dict)

    @classmethod
    async def load(cls, session: AsyncSession) -> "DashboardViewModel":
        stats = await ProductRepository(session).get_stats()
        return cls(**stats)
