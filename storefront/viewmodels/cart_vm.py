from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.schemas.cart import CartOut
from storefront.services.cart import Cart


@dataclass
class CartViewModel:
    key: str
    cart: Cart = field(default_factory=Cart)

    @classmethod
    async def load(cls, session: AsyncSession, key: str) -> "CartViewModel":
        raw = await CartRepository(session).load(key)
        return cls(key=key, cart=Cart.from_json(raw))

    async def save(self, session: AsyncSession) -> None:
        await CartRepository(session).save(self.key, self.cart.to_json())
        await session.commit()

    @classmethod
    async def add_product(
        cls, session: AsyncSession, key: str, product_id: int, quantity: int = 1
    ) -> "CartViewModel | None":
        """Add an active product, snapshotting its name, price and first image."""
        product = await ProductRepository(session).get(product_id)
        if not product or not product.active:
            return None

        vm = await cls.load(session, key)
        images = product.images
        vm.cart.add(
            product.id,
            name=product.name,
            price=product.price,
            image=images[0] if images else None,
            quantity=quantity,
        )
        await vm.save(session)
        return vm

    @classmethod
    async def change_quantity(
        cls, session: AsyncSession, key: str, product_id: int, change: int
    ) -> "CartViewModel | None":
        vm = await cls.load(session, key)
        if not vm.cart.change_quantity(product_id, change):
            return None
        await vm.save(session)
        return vm

    @classmethod
    async def remove_product(cls, session: AsyncSession, key: str, product_id: int) -> "CartViewModel | None":
        vm = await cls.load(session, key)
        if not vm.cart.remove(product_id):
            return None
        await vm.save(session)
        return vm

    @classmethod
    async def clear(cls, session: AsyncSession, key: str) -> "CartViewModel":
        vm = await cls.load(session, key)
        vm.cart.clear()
        await vm.save(session)
        return vm

    def to_out(self) -> CartOut:
        return CartOut(
            key=self.key,
            items=self.cart.items,
            total_items=self.cart.total_items,
            total=self.cart.total,
            notices=self.cart.notices,
        )
