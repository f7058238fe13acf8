"""Admin inbox: everything waiting for a decision, with change requests rendered as diff lines."""
from datetime import datetime
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from tablemaster.auth import get_current_user_admin
from tablemaster.database import get_db
from tablemaster.models.change_request import ChangeRequest
from tablemaster.models.user import User
from tablemaster.schemas.access_request import AccessRequestResponse
from tablemaster.schemas.change_request import AdminInboxResponse, ChangeRequestResponse, ChangeRequestSummary
from tablemaster.services import access_requests, change_requests
from tablemaster.services.change_diff import format_ago, summarize, target_name

router = APIRouter(prefix="/api/admin", tags=["admin"])

INBOX_CHANGE_LINES = 5


def summarize_request(req: ChangeRequest, now: datetime | None = None) -> ChangeRequestSummary:
    lines = summarize(req.before_data, req.after_data, req.action)
    base = ChangeRequestResponse.model_validate(req).model_dump()
    return ChangeRequestSummary(
        **base,
        changes=lines[:INBOX_CHANGE_LINES],
        more_changes=max(len(lines) - INBOX_CHANGE_LINES, 0),
        target_name=target_name(req.before_data, req.after_data),
        created_ago=format_ago(req.created_at, now),
    )


@router.get("/inbox", response_model=AdminInboxResponse)
def admin_inbox(
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Pending access requests and change requests, oldest first (admin only)."""
    now = datetime.utcnow()
    return AdminInboxResponse(
        access_requests=[AccessRequestResponse.model_validate(r) for r in access_requests.list_pending(db)],
        change_requests=[summarize_request(r, now) for r in change_requests.list_pending(db)],
    )
