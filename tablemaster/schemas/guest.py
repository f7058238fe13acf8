from datetime import datetime
from pydantic import BaseModel


class GuestCreate(BaseModel):
    table_id: str
    guest_number: int = 1
    name: str | None = None
    seat: str | None = None
    allergies: list[str] = []
    notes: str | None = None


class GuestUpdate(BaseModel):
    guest_number: int | None = None
    name: str | None = None
    seat: str | None = None
    allergies: list[str] | None = None
    notes: str | None = None


class GuestResponse(BaseModel):
    id: str
    table_id: str
    guest_number: int
    name: str | None
    seat: str | None
    allergies: list[str] | None
    notes: str | None
    created_at: datetime

    class Config:
        from_attributes = True
