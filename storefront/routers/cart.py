from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_session
from storefront.schemas.cart import CartAdd, CartOut, CartQuantityChange
from storefront.viewmodels.cart_vm import CartViewModel

router = APIRouter(prefix="/api/cart", tags=["cart"])

CartKey = Annotated[str, Path(min_length=1, max_length=100)]


@router.get("/{key}", response_model=CartOut)
async def get_cart(key: CartKey, session: AsyncSession = Depends(get_session)):
    vm = await CartViewModel.load(session, key)
    return vm.to_out()


@router.post("/{key}/items", response_model=CartOut)
async def add_to_cart(key: CartKey, data: CartAdd, session: AsyncSession = Depends(get_session)):
    vm = await CartViewModel.add_product(session, key, data.product_id, data.quantity)
    if not vm:
        raise HTTPException(status_code=404, detail="Product not found")
    return vm.to_out()


@router.patch("/{key}/items/{product_id}", response_model=CartOut)
async def change_quantity(
    key: CartKey, product_id: int, data: CartQuantityChange, session: AsyncSession = Depends(get_session)
):
    vm = await CartViewModel.change_quantity(session, key, product_id, data.change)
    if not vm:
        raise HTTPException(status_code=404, detail="Product is not in the cart")
    return vm.to_out()


@router.delete("/{key}/items/{product_id}", response_model=CartOut)
async def remove_from_cart(key: CartKey, product_id: int, session: AsyncSession = Depends(get_session)):
    vm = await CartViewModel.remove_product(session, key, product_id)
    if not vm:
        raise HTTPException(status_code=404, detail="Product is not in the cart")
    return vm.to_out()


@router.delete("/{key}", response_model=CartOut)
async def clear_cart(key: CartKey, session: AsyncSession = Depends(get_session)):
    vm = await CartViewModel.clear(session, key)
    return vm.to_out()
