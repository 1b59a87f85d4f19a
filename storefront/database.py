from collections.abc import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from storefront.config import settings

# aiosqlite connections are bound to the event loop that opened them
engine = create_async_engine(settings.database_url, echo=settings.debug, poolclass=NullPool)

SessionLocal = async_sessionmaker(engine, expire_on_commit=False)


def _casefold(value: str | None) -> str | None:
    return value.casefold() if value is not None else None


@event.listens_for(engine.sync_engine, "connect")
def _register_functions(dbapi_connection, connection_record):
    # sqlite's lower() only folds ASCII
    dbapi_connection.create_function("casefold", 1, _casefold, deterministic=True)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with SessionLocal() as session:
        yield session
