"""Catalog helpers shared by the shop view, the admin API and data migration."""
import math
import re
import time
from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

from storefront.models.product import Product
from storefront.models.section import Section
from storefront.schemas.product import ProductSort

T = TypeVar("T")

_SKU_NAME_CHARS = re.compile(r"[^a-z0-9а-яё]")


def generate_sku(name: str, now_ms: int | None = None) -> str:
    """Build a SKU like ``MFCLA123456`` from the product name and the clock."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    name_part = _SKU_NAME_CHARS.sub("", name.lower())[:3].upper()
    return f"MF{name_part}{str(now_ms)[-6:]}"


def matches_query(product: Product, query: str) -> bool:
    needle = query.casefold()
    return (
        needle in product.name.casefold()
        or needle in (product.description or "").casefold()
        or needle in product.category.casefold()
    )


def filter_products(
    products: Iterable[Product],
    category: str = "",
    section: str = "",
    search: str = "",
) -> list[Product]:
    out = []
    for p in products:
        if category and p.category != category:
            continue
        if section and p.section != section:
            continue
        if search and not matches_query(p, search):
            continue
        out.append(p)
    return out


def sort_products(products: Sequence[Product], sort: ProductSort) -> list[Product]:
    if sort == ProductSort.PRICE_ASC:
        return sorted(products, key=lambda p: p.price)
    if sort == ProductSort.PRICE_DESC:
        return sorted(products, key=lambda p: p.price, reverse=True)
    if sort == ProductSort.NAME:
        return sorted(products, key=lambda p: p.name.casefold())
    return sorted(products, key=lambda p: p.created_at or datetime.min, reverse=True)


def paginate(items: Sequence[T], page: int, per_page: int) -> tuple[list[T], int, int]:
    """Return (page_items, clamped_page, total_pages)."""
    total_pages = math.ceil(len(items) / per_page) if items else 0
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * per_page
    return list(items[start:start + per_page]), page, total_pages


def page_window(total_pages: int, current: int) -> list[int | str]:
    """Page buttons: first, last and current ±1, with "..." at current ±2."""
    if total_pages <= 1:
        return []
    window: list[int | str] = []
    for i in range(1, total_pages + 1):
        if i == 1 or i == total_pages or current - 1 <= i <= current + 1:
            window.append(i)
        elif i == current - 2 or i == current + 2:
            window.append("...")
    return window


def section_navigation(sections: Iterable[Section], products: Sequence[Product], selected: str = "") -> list[dict]:
    counts: dict[str, int] = {}
    for p in products:
        counts[p.section] = counts.get(p.section, 0) + 1

    nav = [{"code": "", "name": "All products", "count": len(products), "selected": not selected}]
    for s in sections:
        count = counts.get(s.code, 0)
        if count == 0:
            continue
        nav.append({"code": s.code, "name": s.name, "count": count, "selected": selected == s.code})
    return nav


def distinct_categories(products: Iterable[Product]) -> list[str]:
    seen: dict[str, None] = {}
    for p in products:
        seen.setdefault(p.category, None)
    return list(seen)


def stock_text(stock: int | None) -> str:
    if stock is None:
        return "In stock"
    if stock <= 0:
        return "Out of stock"
    if stock < 5:
        return f"Only {stock} left"
    return "In stock"


def format_price(price: float) -> str:
    """Format as roubles the way ru-RU locales do, with non-breaking spaces: ``15 000 ₽``."""
    rounded = Decimal(str(price)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    grouped = f"{int(rounded):,}".replace(",", "\u00a0")
    return f"{grouped}\u00a0₽"
