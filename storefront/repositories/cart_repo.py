from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.cart import StoredCart
from storefront.repositories.base import BaseRepository


class CartRepository(BaseRepository[StoredCart]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, StoredCart)

    async def load(self, key: str) -> str | None:
        stored = await self.get(key)
        return stored.data if stored else None

    async def save(self, key: str, data: str) -> StoredCart:
        stored = await self.get(key)
        if stored is None:
            return await self.create(key=key, data=data)
        return await self.update(key, data=data)
