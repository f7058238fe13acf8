from datetime import datetime
from pydantic import BaseModel
from tablemaster.models.access_request import AccessRequestStatus


class RequestAccessBody(BaseModel):
    """Body for submitting an access request. User from JWT."""
    reason: str | None = None


class AccessRequestResponse(BaseModel):
    id: str
    user_id: str
    email: str | None
    full_name: str | None
    reason: str | None
    status: str
    reviewer_id: str | None = None
    reviewer_email: str | None = None
    decision_notes: str | None = None
    created_at: datetime
    reviewed_at: datetime | None = None

    class Config:
        from_attributes = True


class AccessRequestReview(BaseModel):
    """Body for admin approve/reject."""
    status: AccessRequestStatus  # approved or rejected
    notes: str | None = None
