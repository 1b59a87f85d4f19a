from storefront.models.base import Base
from storefront.models.cart import StoredCart
from storefront.models.product import Product
from storefront.models.section import Section

__all__ = ["Base", "Product", "Section", "StoredCart"]
