from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "MA Furniture"
    api_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite+aiosqlite:///data/mafurniture.db"
    uploads_dir: Path = Path("uploads")
    thumbnail_size: tuple[int, int] = (300, 300)
    max_upload_size_mb: int = 10
    max_upload_files: int = 10
    products_per_page: int = 12
    seed_demo_data: bool = True
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5500",
        "http://127.0.0.1:5500",
    ]

    model_config = {
        "env_prefix": "STOREFRONT_",
        "env_file": ".env",
        "extra": "ignore",
    }

    @property
    def product_images_dir(self) -> Path:
        return self.uploads_dir / "products"

    @property
    def thumbnails_dir(self) -> Path:
        return self.product_images_dir / "thumbnails"


settings = Settings()
