from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.config import settings
from storefront.database import get_session
from storefront.schemas.product import ProductOut
from storefront.schemas.stats import HealthOut, StatsOut
from storefront.viewmodels.dashboard_vm import DashboardViewModel
from storefront.viewmodels.product_vm import ProductListViewModel

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/health", response_model=HealthOut)
async def health():
    return HealthOut(
        message=f"{settings.app_name} DB Server is running",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=settings.api_version,
    )


@router.get("/stats", response_model=StatsOut)
async def stats(session: AsyncSession = Depends(get_session)):
    vm = await DashboardViewModel.load(session)
    return StatsOut(**vars(vm))


@router.get("/search", response_model=list[ProductOut])
async def search(
    q: str = "",
    category: str | None = None,
    section: str | None = None,
    session: AsyncSession = Depends(get_session),
):
    q = q.strip()
    if not q:
        raise HTTPException(status_code=400, detail="Search query is required")
    vm = await ProductListViewModel.search(session, q, category=category, section=section)
    return vm.products
