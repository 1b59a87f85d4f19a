from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_session
from storefront.exceptions import DuplicateError
from storefront.schemas.section import SectionCreate, SectionOut, SectionUpdate
from storefront.viewmodels.section_vm import SectionDetailViewModel, SectionListViewModel

router = APIRouter(prefix="/api/sections", tags=["sections"])


def _check_id(section_id: int) -> None:
    if section_id <= 0:
        raise HTTPException(status_code=400, detail="Invalid section ID")


@router.get("", response_model=list[SectionOut])
async def list_sections(active: bool | None = None, session: AsyncSession = Depends(get_session)):
    vm = await SectionListViewModel.load(session, active=active)
    return vm.sections


@router.post("", response_model=SectionOut, status_code=201)
async def create_section(data: SectionCreate, session: AsyncSession = Depends(get_session)):
    try:
        return await SectionDetailViewModel.create_section(session, data)
    except DuplicateError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{section_id}", response_model=SectionOut)
async def update_section(section_id: int, data: SectionUpdate, session: AsyncSession = Depends(get_session)):
    _check_id(section_id)
    try:
        section = await SectionDetailViewModel.update_section(session, section_id, data)
    except DuplicateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not section:
        raise HTTPException(status_code=404, detail="Section not found")
    return section


@router.delete("/{section_id}")
async def delete_section(section_id: int, session: AsyncSession = Depends(get_session)):
    _check_id(section_id)
    deleted = await SectionDetailViewModel.delete_section(session, section_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Section not found")
    return {
        "message": "Section deleted successfully",
        "affected_products": deleted.affected_products,
        "deleted_section": deleted.code,
    }
