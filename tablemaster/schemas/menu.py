from datetime import datetime
from pydantic import BaseModel


class MenuCategoryResponse(BaseModel):
    id: str
    slug: str
    name: str
    sort_order: int

    class Config:
        from_attributes = True


class MenuItemFields(BaseModel):
    """Fields shared by create and update. Steak fields accept raw form text ("" = empty)."""
    description: str | None = None
    price: float | None = None
    currency: str | None = None
    allergens: list[str] | None = None
    common_mods: list[str] | None = None
    notes: str | None = None
    program: str | None = None
    is_active: bool | None = None
    sort_order: int | None = None
    country: str | None = None
    origin: str | None = None
    cut: str | None = None
    weight_oz: float | str | None = None
    aging_days: int | str | None = None


class MenuItemCreate(MenuItemFields):
    name: str
    category: str | None = None  # slug or display name
    category_id: str | None = None


class MenuItemUpdate(MenuItemFields):
    name: str | None = None
    category: str | None = None
    category_id: str | None = None


class AvailabilityUpdate(BaseModel):
    is_unavailable: bool


class MenuItemResponse(BaseModel):
    id: str
    category_id: str
    category: str | None = None  # slug
    category_name: str | None = None
    name: str
    description: str | None
    price: float | None
    currency: str
    allergens: list[str] | None
    common_mods: list[str] | None
    notes: str | None
    program: str | None
    is_active: bool
    is_unavailable: bool
    sort_order: int
    country: str | None
    origin: str | None
    cut: str | None
    weight_oz: float | None
    aging_days: int | None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
