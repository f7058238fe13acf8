from datetime import datetime
from pydantic import BaseModel, Field, field_validator
from tablemaster.models.table import TableStatus


class TableBase(BaseModel):
    section: str | None = None
    guest_count: int = Field(default=0, ge=0)
    status: TableStatus = TableStatus.AVAILABLE
    notes: str | None = None
    pos_x: float | None = None
    pos_y: float | None = None


class TableCreate(TableBase):
    table_number: str

    @field_validator("table_number")
    @classmethod
    def strip_number(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Table number is required")
        return value


class TableUpdate(BaseModel):
    table_number: str | None = None
    section: str | None = None
    guest_count: int | None = Field(default=None, ge=0)
    status: TableStatus | None = None
    notes: str | None = None
    pos_x: float | None = None
    pos_y: float | None = None

    @field_validator("table_number")
    @classmethod
    def strip_number(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        if not value:
            raise ValueError("Table number is required")
        return value


class TableResponse(TableBase):
    id: str
    table_number: str
    status: str
    owner_id: str | None = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SeatGuestsBody(BaseModel):
    guest_count: int = Field(ge=1, le=50)
