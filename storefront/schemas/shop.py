from pydantic import BaseModel

from storefront.schemas.product import ProductOut, ProductSort


class SectionNavEntry(BaseModel):
    code: str  # "" for the all-products entry
    name: str
    count: int
    selected: bool = False


class ShopPage(BaseModel):
    model_config = {"from_attributes": True}

    products: list[ProductOut]
    total_products: int
    page: int
    total_pages: int
    page_numbers: list[int | str]
    sections: list[SectionNavEntry]
    categories: list[str]
    category: str = ""
    section: str = ""
    search: str = ""
    sort: ProductSort = ProductSort.NEWEST


class ProductPage(BaseModel):
    model_config = {"from_attributes": True}

    product: ProductOut
    in_stock: bool
    stock_text: str
    price_display: str
    section_name: str | None = None
    breadcrumbs: list[str]
