from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tablemaster.auth import get_current_user_admin
from tablemaster.database import get_db
from tablemaster.models.access_request import AccessRequest, AccessRequestStatus
from tablemaster.models.user import User
from tablemaster.schemas.access_request import AccessRequestResponse, AccessRequestReview
from tablemaster.schemas.user import UserResponse, UserUpdate
from tablemaster.services import access_requests

router = APIRouter(prefix="/api/users", tags=["users"])


# ---------- Request Access (admin) ----------


@router.get("/request-access", response_model=list[AccessRequestResponse])
def list_request_access(
    status_filter: str | None = None,
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Pending access requests, oldest first (admin only). ?status_filter=approved|rejected lists decided ones."""
    if not status_filter or status_filter.lower() == AccessRequestStatus.PENDING.value:
        return access_requests.list_pending(db)
    if status_filter.lower() not in (AccessRequestStatus.APPROVED.value, AccessRequestStatus.REJECTED.value):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unknown status filter")
    return (
        db.query(AccessRequest)
        .filter(AccessRequest.status == status_filter.lower())
        .order_by(AccessRequest.reviewed_at.desc())
        .all()
    )


@router.patch("/request-access/{request_id}", response_model=AccessRequestResponse)
def review_request_access(
    request_id: str,
    body: AccessRequestReview,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Approve or reject access request (admin only)."""
    return access_requests.decide(db, request_id, body.status, admin, body.notes)


# ---------- Users ----------


@router.get("", response_model=list[UserResponse])
def get_all_users(
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """List all users (admin only)."""
    return db.query(User).order_by(User.created_at.desc()).all()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: str,
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    body: UserUpdate,
    admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Update user (admin only). An admin cannot demote themselves."""
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if body.role is not None and user.id == admin.id and body.role.value != user.role:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot change your own role")
    if body.full_name is not None:
        user.full_name = body.full_name
    if body.role is not None:
        user.role = body.role.value
    db.commit()
    db.refresh(user)
    return user
