from pydantic import BaseModel


class HealthOut(BaseModel):
    status: str = "OK"
    message: str
    timestamp: str
    database: str = "SQLite"
    version: str


class StatsOut(BaseModel):
    total_products: int = 0
    active_products: int = 0
    featured_products: int = 0
    categories_count: int = 0
    sections_count: int = 0
    total_sections: int = 0
    total_stock: int = 0
    inventory_value: float = 0.0
    by_category: dict[str, int] = {}
