from datetime import datetime
from typing import Any
from pydantic import BaseModel, field_validator
from tablemaster.models.change_request import ChangeAction, EntityType
from tablemaster.schemas.access_request import AccessRequestResponse


def _normalize_optional_text(value: object) -> object | None:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        return text or None
    return value


class ChangeRequestCreate(BaseModel):
    entity_type: EntityType
    entity_id: str | None = None
    action: ChangeAction
    before_data: dict[str, Any] | None = None
    after_data: dict[str, Any] | None = None
    notes: str | None = None

    @field_validator("notes", mode="before")
    @classmethod
    def normalize_notes(cls, value: object) -> object | None:
        return _normalize_optional_text(value)


class ChangeRequestDecision(BaseModel):
    notes: str | None = None

    @field_validator("notes", mode="before")
    @classmethod
    def normalize_notes(cls, value: object) -> object | None:
        return _normalize_optional_text(value)


class ChangeRequestResponse(BaseModel):
    id: str
    user_id: str
    email: str | None
    full_name: str | None
    entity_type: str
    entity_id: str | None
    action: str
    before_data: dict[str, Any] | None
    after_data: dict[str, Any] | None
    decision_notes: str | None
    status: str
    reviewer_id: str | None
    reviewer_email: str | None
    created_at: datetime
    reviewed_at: datetime | None

    class Config:
        from_attributes = True


class ChangeRequestSummary(ChangeRequestResponse):
    """Inbox card: the request plus its diff lines."""
    changes: list[str]
    more_changes: int = 0
    target_name: str | None = None
    created_ago: str = ""


class AdminInboxResponse(BaseModel):
    access_requests: list[AccessRequestResponse]
    change_requests: list[ChangeRequestSummary]

