"""
Access request workflow: a staff member asks for standing edit permission; an admin approves or
rejects. Approval has no side effect here; auth.is_privileged reads the latest request instead.
Callers check get_latest_for_user before submitting so a user has one pending request at a time.
"""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from tablemaster.errors import AuthenticationError, NotFoundError, StateError, ValidationError
from tablemaster.models.access_request import AccessRequest, AccessRequestStatus

logger = logging.getLogger(__name__)

DECISIONS = (AccessRequestStatus.APPROVED, AccessRequestStatus.REJECTED)


def get_latest_for_user(db: Session, user_id: str | None) -> AccessRequest | None:
    if not user_id:
        return None
    return (
        db.query(AccessRequest)
        .filter(AccessRequest.user_id == user_id)
        .order_by(AccessRequest.created_at.desc())
        .first()
    )


def submit(db: Session, actor: Any, reason: str | None = "") -> AccessRequest:
    if actor is None or not getattr(actor, "id", None):
        raise AuthenticationError("Must be signed in to request access")
    req = AccessRequest(
        user_id=actor.id,
        email=getattr(actor, "email", None),
        full_name=getattr(actor, "full_name", None) or None,
        reason=(reason or "").strip() or None,
        status=AccessRequestStatus.PENDING.value,
    )
    db.add(req)
    db.commit()
    db.refresh(req)
    logger.info("Access request %s submitted by %s", req.id, actor.id)
    return req


def list_pending(db: Session) -> list[AccessRequest]:
    return (
        db.query(AccessRequest)
        .filter(AccessRequest.status == AccessRequestStatus.PENDING.value)
        .order_by(AccessRequest.created_at.asc())
        .all()
    )


def decide(
    db: Session,
    request_id: str,
    status: str | AccessRequestStatus,
    reviewer: Any,
    notes: str | None = None,
) -> AccessRequest:
    try:
        decision = AccessRequestStatus(status)
    except ValueError:
        raise ValidationError("status must be approved or rejected") from None
    if decision not in DECISIONS:
        raise ValidationError("status must be approved or rejected")
    req = db.query(AccessRequest).filter(AccessRequest.id == request_id).first() if request_id else None
    if req is None:
        raise NotFoundError("Access request", request_id)
    if req.status != AccessRequestStatus.PENDING.value:
        raise StateError("This request has already been reviewed.")
    req.status = decision.value
    req.reviewer_id = getattr(reviewer, "id", None)
    req.reviewer_email = getattr(reviewer, "email", None)
    req.decision_notes = notes
    req.reviewed_at = datetime.utcnow()
    db.commit()
    db.refresh(req)
    logger.info("Access request %s %s by %s", req.id, req.status, req.reviewer_id)
    return req
