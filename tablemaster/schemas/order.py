from datetime import datetime
from pydantic import BaseModel, Field
from tablemaster.models.order import OrderItemStatus, OrderStatus


class OrderCreate(BaseModel):
    table_id: str


class OrderUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    id: str
    table_id: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class OrderItemCreate(BaseModel):
    menu_item_id: str | None = None
    guest_id: str | None = None
    name: str | None = None  # required when menu_item_id is not given
    quantity: int = Field(default=1, ge=1)
    course: str | None = None
    modifiers: list[str] = []
    notes: str | None = None


class OrderItemUpdate(BaseModel):
    guest_id: str | None = None
    quantity: int | None = Field(default=None, ge=1)
    course: str | None = None
    modifiers: list[str] | None = None
    notes: str | None = None
    status: OrderItemStatus | None = None


class OrderItemResponse(BaseModel):
    id: str
    order_id: str
    table_id: str
    guest_id: str | None
    menu_item_id: str | None
    name: str
    quantity: int
    course: str | None
    modifiers: list[str] | None
    notes: str | None
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class GuestOrders(BaseModel):
    """Items for one guest (guest_id None = shared / table)."""
    guest_id: str | None
    guest_number: int | None
    items: list[OrderItemResponse]
