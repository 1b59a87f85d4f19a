import asyncio
import os
import shutil
import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

_tmp = Path(tempfile.mkdtemp(prefix="storefront-tests-"))
os.environ["STOREFRONT_DATABASE_URL"] = f"sqlite+aiosqlite:///{_tmp / 'test.db'}"
os.environ["STOREFRONT_UPLOADS_DIR"] = str(_tmp / "uploads")
os.environ["STOREFRONT_SEED_DEMO_DATA"] = "false"

from fastapi.testclient import TestClient  # noqa: E402

from storefront.config import settings  # noqa: E402
from storefront.database import SessionLocal, engine  # noqa: E402
from storefront.main import app  # noqa: E402
from storefront.models import Base  # noqa: E402


async def _reset_tables():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture(autouse=True)
def clean_uploads():
    yield
    shutil.rmtree(settings.uploads_dir, ignore_errors=True)
    settings.product_images_dir.mkdir(parents=True, exist_ok=True)


@pytest.fixture
def client():
    asyncio.run(_reset_tables())
    with TestClient(app) as c:
        yield c


@pytest_asyncio.fixture
async def session():
    await _reset_tables()
    async with SessionLocal() as s:
        yield s


