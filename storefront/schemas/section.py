from datetime import datetime

from pydantic import BaseModel, Field


class SectionCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=100)
    active: bool = True

    model_config = {"str_strip_whitespace": True}


class SectionUpdate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=100)
    active: bool | None = None

    model_config = {"str_strip_whitespace": True}


class SectionOut(BaseModel):
    id: int
    name: str
    code: str
    active: bool
    created_at: datetime

    model_config = {"from_attributes": True}
