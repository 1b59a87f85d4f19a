from pydantic import BaseModel, Field


class CartLine(BaseModel):
    id: int
    name: str
    price: float
    image: str | None = None
    quantity: int = Field(default=1, ge=1, le=99)


class CartAdd(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartQuantityChange(BaseModel):
    change: int


class CartOut(BaseModel):
    key: str
    items: list[CartLine]
    total_items: int
    total: float
    notices: list[str] = []
