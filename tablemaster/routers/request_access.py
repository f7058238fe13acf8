"""
Submit access request: user must be logged in (Bearer token). Email and name are taken from the
user record. Body: { "reason": "optional" }.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tablemaster.auth import get_current_user
from tablemaster.database import get_db
from tablemaster.models.access_request import AccessRequestStatus
from tablemaster.models.user import User
from tablemaster.schemas.access_request import AccessRequestResponse, RequestAccessBody
from tablemaster.services import access_requests

router = APIRouter(prefix="/api", tags=["request-access"])


@router.post("/request-access", response_model=AccessRequestResponse, status_code=status.HTTP_201_CREATED)
def submit_request_access(
    body: RequestAccessBody,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Ask an admin for edit access. Admins already have it; a user with a pending request
    must wait for it to be reviewed.
    """
    if user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins already have edit access.",
        )
    latest = access_requests.get_latest_for_user(db, user.id)
    if latest and latest.status == AccessRequestStatus.PENDING.value:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Your access request has been sent. Awaiting admin review.",
        )
    return access_requests.submit(db, user, body.reason)


@router.get("/request-access/me", response_model=AccessRequestResponse | None)
def my_request_access(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Latest access request of the current user, or null."""
    return access_requests.get_latest_for_user(db, user.id)
