import logging

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.section_repo import SectionRepository

logger = logging.getLogger(__name__)

DEFAULT_SECTIONS = [
    ("Classic", "classic"),
    ("Modern", "modern"),
    ("Premium", "premium"),
    ("Exclusive", "exclusive"),
]

DEFAULT_PRODUCTS = [
    {
        "sku": "MF001",
        "name": "Classic pantograph",
        "price": 15000,
        "category": "pantograph",
        "section": "classic",
        "description": "Classic pull-down pantograph for wardrobe systems",
        "stock": 5,
        "features": ["Pull-down mechanism", "Smooth travel"],
        "specifications": {"Material": "Steel", "Color": "Chrome"},
        "badge": "New",
        "active": True,
        "featured": True,
        "images": ["/images/placeholder.jpg"],
    },
    {
        "sku": "MF002",
        "name": "Premium wardrobe system",
        "price": 45000,
        "category": "wardrobe",
        "section": "premium",
        "description": "Premium wardrobe system with Italian hardware",
        "stock": 3,
        "features": ["Italian hardware", "Soft-close system"],
        "specifications": {"Material": "Oak", "Color": "White"},
        "badge": "Bestseller",
        "active": True,
        "featured": True,
        "images": ["/images/placeholder.jpg"],
    },
]


async def seed_defaults(session: AsyncSession) -> tuple[int, int]:
    """Insert the demo sections and products into empty tables. Returns (sections, products) created."""
    section_repo = SectionRepository(session)
    product_repo = ProductRepository(session)
    sections_created = products_created = 0

    if await section_repo.count() == 0:
        for name, code in DEFAULT_SECTIONS:
            if await section_repo.insert_ignore(name=name, code=code):
                sections_created += 1
        logger.info("Default sections created: %d", sections_created)

    if await product_repo.count() == 0:
        for data in DEFAULT_PRODUCTS:
            await product_repo.create(**data)
            products_created += 1
        logger.info("Default products created: %d", products_created)

    await session.commit()
    return sections_created, products_created
