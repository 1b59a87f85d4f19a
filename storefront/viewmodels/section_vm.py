from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.exceptions import DuplicateError
from storefront.models.section import Section
from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.section_repo import SectionRepository
from storefront.schemas.section import SectionCreate, SectionUpdate


@dataclass
class SectionListViewModel:
    sections: list[Section] = field(default_factory=list)

    @classmethod
    async def load(cls, session: AsyncSession, active: bool | None = None) -> "SectionListViewModel":
        repo = SectionRepository(session)
        return cls(sections=await repo.get_filtered(active=active))


@dataclass
class SectionDeleted:
    code: str
    affected_products: int


@dataclass
class SectionDetailViewModel:
    section: Section | None = None

    @classmethod
    async def create_section(cls, session: AsyncSession, data: SectionCreate) -> Section:
        repo = SectionRepository(session)
        if await repo.get_by_code(data.code):
            raise DuplicateError("Section with this code already exists")
        section = await repo.create(name=data.name, code=data.code, active=data.active)
        await session.commit()
        return section

    @classmethod
    async def update_section(cls, session: AsyncSession, section_id: int, data: SectionUpdate) -> Section | None:
        repo = SectionRepository(session)
        section = await repo.get(section_id)
        if not section:
            return None

        old_code = section.code
        if data.code != old_code:
            if await repo.get_by_code(data.code):
                raise DuplicateError("Section with this code already exists")
            await ProductRepository(session).rename_section(old_code, data.code)

        section = await repo.update(section_id, **data.model_dump(exclude_unset=True))
        await session.commit()
        return section

    @classmethod
    async def delete_section(cls, session: AsyncSession, section_id: int) -> SectionDeleted | None:
        """Delete a section; its products are detached and deactivated."""
        repo = SectionRepository(session)
        section = await repo.get(section_id)
        if not section:
            return None

        code = section.code
        affected = await ProductRepository(session).move_section(code, "")
        await repo.delete(section_id)
        await session.commit()
        return SectionDeleted(code=code, affected_products=affected)
