"""
Change requests: staff propose edits here (or implicitly through the edit gate), admins approve
or reject. Workflow errors (not found, already decided, bad payload) are TableMasterError and are
turned into HTTP responses by the app's exception handler.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from tablemaster.auth import get_current_user, get_current_user_admin
from tablemaster.database import get_db
from tablemaster.errors import PermissionDeniedError
from tablemaster.models.user import User
from tablemaster.schemas.change_request import ChangeRequestCreate, ChangeRequestDecision, ChangeRequestResponse
from tablemaster.services import change_requests

router = APIRouter(prefix="/api/change-requests", tags=["change-requests"])


@router.post("", response_model=ChangeRequestResponse, status_code=status.HTTP_201_CREATED)
def submit_change_request(
    body: ChangeRequestCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return change_requests.submit(
        db,
        user,
        body.entity_type.value,
        body.entity_id,
        body.action.value,
        body.before_data,
        body.after_data,
        body.notes,
    )


@router.get("/pending", response_model=list[ChangeRequestResponse])
def list_pending_change_requests(
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Pending requests, oldest first (admin only)."""
    return change_requests.list_pending(db)


@router.get("/{request_id}", response_model=ChangeRequestResponse)
def get_change_request(
    request_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Admins see any request; staff see their own."""
    req = change_requests.get_by_id(db, request_id)
    if not user.is_admin and req.user_id != user.id:
        raise PermissionDeniedError("Not your change request.")
    return req


@router.post("/{request_id}/approve", response_model=ChangeRequestResponse)
def approve_change_request(
    request_id: str,
    body: ChangeRequestDecision | None = None,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Apply the proposed edit, then mark the request approved. A failed write leaves it pending."""
    notes = body.notes if body else None
    return change_requests.approve_and_apply(db, request_id, admin, notes)


@router.post("/{request_id}/reject", response_model=ChangeRequestResponse)
def reject_change_request(
    request_id: str,
    body: ChangeRequestDecision | None = None,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    notes = body.notes if body else None
    return change_requests.reject(db, request_id, admin, notes)
