from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.models.product import Product
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.section_repo import SectionRepository
from storefront.schemas.product import ProductSort
from storefront.services.catalog import (
    distinct_categories,
    filter_products,
    format_price,
    page_window,
    paginate,
    section_navigation,
    sort_products,
    stock_text,
)


@dataclass
class ShopViewModel:
    products: list[Product] = field(default_factory=list)
    total_products: int = 0
    page: int = 1
    total_pages: int = 0
    page_numbers: list[int | str] = field(default_factory=list)
    sections: list[dict] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    category: str = ""
    section: str = ""
    search: str = ""
    sort: ProductSort = ProductSort.NEWEST

    @classmethod
    async def load(
        cls,
        session: AsyncSession,
        category: str = "",
        section: str = "",
        search: str = "",
        sort: ProductSort = ProductSort.NEWEST,
        page: int = 1,
    ) -> "ShopViewModel":
        product_repo = ProductRepository(session)
        section_repo = SectionRepository(session)

        active = await product_repo.search(active=True)
        sections = await section_repo.get_filtered(active=True)

        matching = sort_products(filter_products(active, category, section, search.strip()), sort)
        page_items, page, total_pages = paginate(matching, page, settings.products_per_page)

        return cls(
            products=page_items,
            total_products=len(matching),
            page=page,
            total_pages=total_pages,
            page_numbers=page_window(total_pages, page),
            sections=section_navigation(sections, active, selected=section),
            categories=distinct_categories(active),
            category=category,
            section=section,
            search=search,
            sort=sort,
        )


@dataclass
class ProductPageViewModel:
    product: Product | None = None
    in_stock: bool = False
    stock_text: str = ""
    price_display: str = ""
    section_name: str | None = None
    breadcrumbs: list[str] = field(default_factory=list)

    @classmethod
    async def load(cls, session: AsyncSession, product_id: int) -> "ProductPageViewModel":
        product = await ProductRepository(session).get(product_id)
        if not product or not product.active:
            return cls()

        section = None
        if product.section:
            section = await SectionRepository(session).get_by_code(product.section)
        section_name = section.name if section else None

        breadcrumbs = ["Shop"]
        if section_name:
            breadcrumbs.append(section_name)
        breadcrumbs.append(product.name)

        return cls(
            product=product,
            in_stock=product.stock > 0,
            stock_text=stock_text(product.stock),
            price_display=format_price(product.price),
            section_name=section_name,
            breadcrumbs=breadcrumbs,
        )
