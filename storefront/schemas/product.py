import json
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class ProductSort(StrEnum):
    NEWEST = "newest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NAME = "name"


def _coerce_features(value):
    if value is None:
        return []
    if isinstance(value, str):
        text = value.strip()
        if text.startswith("["):
            return json.loads(text)
        return [text] if text else []
    return value


def _coerce_specifications(value):
    if value is None:
        return {}
    if isinstance(value, str):
        text = value.strip()
        value = json.loads(text) if text else {}
    if isinstance(value, dict):
        # stored specs often carry numbers, e.g. {"Width": 120}
        return {str(k): "" if v is None else str(v) for k, v in value.items()}
    return value


class ProductCreate(BaseModel):
    sku: str | None = Field(default=None, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    price: float = Field(ge=0, allow_inf_nan=False)
    category: str = Field(min_length=1, max_length=100)
    section: str = ""
    stock: int = Field(default=0, ge=0)
    description: str = ""
    features: list[str] = []
    specifications: dict[str, str] = {}
    badge: str = ""
    active: bool = True
    featured: bool = False
    images: list[str] = []

    model_config = {"str_strip_whitespace": True}

    @field_validator("features", mode="before")
    @classmethod
    def parse_features(cls, value):
        return _coerce_features(value)

    @field_validator("specifications", mode="before")
    @classmethod
    def parse_specifications(cls, value):
        return _coerce_specifications(value)

    @field_validator("sku", mode="before")
    @classmethod
    def blank_sku_means_generate(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProductUpdate(BaseModel):
    sku: str | None = Field(default=None, min_length=1, max_length=64)
    name: str | None = Field(default=None, min_length=1, max_length=200)
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    category: str | None = Field(default=None, min_length=1, max_length=100)
    section: str | None = None
    stock: int | None = Field(default=None, ge=0)
    description: str | None = None
    features: list[str] | None = None
    specifications: dict[str, str] | None = None
    badge: str | None = None
    active: bool | None = None
    featured: bool | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("features", mode="before")
    @classmethod
    def parse_features(cls, value):
        return _coerce_features(value)

    @field_validator("specifications", mode="before")
    @classmethod
    def parse_specifications(cls, value):
        return _coerce_specifications(value)


class ProductOut(BaseModel):
    id: int
    sku: str
    name: str
    price: float
    category: str
    section: str
    stock: int
    description: str
    features: list[str]
    specifications: dict[str, str]
    badge: str
    active: bool
    featured: bool
    images: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class SectionMove(BaseModel):
    old_section: str = Field(min_length=1)
    new_section: str = ""
