import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text

from storefront.config import settings
from storefront.database import SessionLocal, engine
from storefront.exceptions import format_validation_errors
from storefront.models import Base
from storefront.routers import cart, dashboard, export, products, sections, shop
from storefront.services.seed import seed_defaults

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


async def _migrate_add_columns(conn):
    """Add missing columns to existing SQLite tables. Safe to run repeatedly."""
    # (table, column_name, column_type, default)
    migrations = [
        ("products", "badge", "VARCHAR(100)", ""),
        ("products", "featured", "BOOLEAN", 0),
        ("products", "specifications", "TEXT", None),
        ("products", "images", "TEXT", None),
        ("sections", "active", "BOOLEAN", 1),
    ]

    for table, column, col_type, default in migrations:
        result = await conn.execute(text(f"PRAGMA table_info({table})"))
        existing = {row[1] for row in result.fetchall()}
        if column not in existing:
            default_clause = f" DEFAULT {default!r}" if default is not None else ""
            await conn.execute(text(
                f"ALTER TABLE {table} ADD COLUMN {column} {col_type}{default_clause}"
            ))
            logger.info("Added column %s.%s", table, column)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # sqlite won't create the database's directory
    if engine.url.database and engine.url.database != ":memory:":
        Path(engine.url.database).parent.mkdir(parents=True, exist_ok=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with engine.begin() as conn:
        await _migrate_add_columns(conn)

    if settings.seed_demo_data:
        async with SessionLocal() as session:
            await seed_defaults(session)

    logger.info("%s API %s started", settings.app_name, settings.api_version)
    yield

    await engine.dispose()


app = FastAPI(title=f"{settings.app_name} API", version=settings.api_version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": format_validation_errors(exc.errors())})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# uploaded product images
settings.product_images_dir.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=str(settings.uploads_dir)), name="uploads")

# routers
app.include_router(dashboard.router)
app.include_router(products.router)
app.include_router(sections.router)
app.include_router(export.router)
app.include_router(shop.router)
app.include_router(cart.router)
