from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_session
from storefront.schemas.product import ProductSort
from storefront.schemas.shop import ProductPage, ShopPage
from storefront.viewmodels.shop_vm import ProductPageViewModel, ShopViewModel

router = APIRouter(prefix="/api/shop", tags=["shop"])


@router.get("", response_model=ShopPage)
async def shop_page(
    category: str = "",
    section: str = "",
    search: str = "",
    sort: ProductSort = ProductSort.NEWEST,
    page: int = 1,
    session: AsyncSession = Depends(get_session),
):
    vm = await ShopViewModel.load(
        session, category=category, section=section, search=search, sort=sort, page=page
    )
    return ShopPage.model_validate(vm)


@router.get("/products/{product_id}", response_model=ProductPage)
async def product_page(product_id: int, session: AsyncSession = Depends(get_session)):
    vm = await ProductPageViewModel.load(session, product_id)
    if not vm.product:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductPage.model_validate(vm)
