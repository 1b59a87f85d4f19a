from sqlalchemy import select
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.section import Section
from storefront.repositories.base import BaseRepository


class SectionRepository(BaseRepository[Section]):
    def __init__(self, session: AsyncSession):
        super().__init__(session, Section)

    async def get_by_code(self, code: str) -> Section | None:
        stmt = select(Section).where(Section.code == code)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_filtered(self, active: bool | None = None) -> list[Section]:
        stmt = select(Section)
        if active is not None:
            stmt = stmt.where(Section.active == active)
        stmt = stmt.order_by(Section.name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def insert_ignore(self, name: str, code: str, active: bool = True) -> bool:
        stmt = (
            insert(Section)
            .values(name=name, code=code, active=active)
            .on_conflict_do_nothing(index_elements=["code"])
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
