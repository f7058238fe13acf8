"""
Change request workflow: non-admin edits are captured as pending proposals with before/after
snapshots; an admin rejects them (no mutation) or approves them, which applies the mutation
through the Record Store and only then marks the request approved.

    pending -> approved   (terminal)
    pending -> rejected   (terminal)

Concurrent approvals touching the same entity are last-write-wins; entities carry no version.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from sqlalchemy.orm import Session

from tablemaster.errors import AuthenticationError, NotFoundError, StateError, UnsupportedEntityError, ValidationError
from tablemaster.models.change_request import ChangeAction, ChangeRequest, ChangeRequestStatus, EntityType
from tablemaster.repositories.record_store import RecordStore
from tablemaster.services.menu_payload import normalize_menu_item

logger = logging.getLogger(__name__)

AVAILABILITY_FIELD = "is_unavailable"


@dataclass(frozen=True)
class EntityHandler:
    """Where an entity type is written, and how its payload is normalized at commit time."""
    collection: str
    normalize: Callable[[Session, dict | None, dict | None], dict] | None = None


ENTITY_HANDLERS: dict[EntityType, EntityHandler] = {
    EntityType.TABLE: EntityHandler("tables"),
    EntityType.MENU_ITEM: EntityHandler("menu_items", normalize_menu_item),
    EntityType.PREFIXED_MENU: EntityHandler("prefixed_menus"),
}


def parse_entity_type(value: str | None) -> EntityType:
    try:
        return EntityType((value or "").strip().lower())
    except ValueError:
        raise UnsupportedEntityError(value) from None


def parse_action(value: str | None) -> ChangeAction:
    try:
        return ChangeAction((value or "").strip().lower())
    except ValueError:
        raise ValidationError(f"Unsupported action: {value or 'missing'}") from None


def handler_for(entity_type: str | None) -> EntityHandler:
    return ENTITY_HANDLERS[parse_entity_type(entity_type)]


def _check_snapshots(action: ChangeAction, entity_type: EntityType, entity_id: Any, before: Any, after: Any) -> None:
    if action == ChangeAction.CREATE:
        if after is None or before is not None:
            raise ValidationError("create needs after_data and no before_data")
    elif action == ChangeAction.DELETE:
        if after is not None:
            raise ValidationError("delete must not carry after_data")
        if not entity_id and not (before or {}).get("id"):
            raise ValidationError("delete needs the entity id")
    else:
        if before is None or after is None:
            raise ValidationError(f"{action.value} needs both before_data and after_data")
    if action == ChangeAction.AVAILABILITY:
        if entity_type != EntityType.MENU_ITEM:
            raise ValidationError("availability applies to menu items only")
        if AVAILABILITY_FIELD not in after:
            raise ValidationError(f"availability change needs {AVAILABILITY_FIELD}")


def submit(
    db: Session,
    actor: Any,
    entity_type: str,
    entity_id: str | None,
    action: str,
    before_data: dict | None,
    after_data: dict | None,
    notes: str | None = None,
) -> ChangeRequest:
    """Persist a pending proposal. Does not touch the target entity."""
    if actor is None or not getattr(actor, "id", None):
        raise AuthenticationError("Must be signed in to submit change")
    kind = parse_entity_type(entity_type)
    verb = parse_action(action)
    _check_snapshots(verb, kind, entity_id, before_data, after_data)

    req = ChangeRequest(
        user_id=actor.id,
        email=getattr(actor, "email", None),
        full_name=getattr(actor, "full_name", None) or None,
        entity_type=kind.value,
        entity_id=str(entity_id) if entity_id else None,
        action=verb.value,
        before_data=before_data,
        after_data=after_data,
        decision_notes=notes,
        status=ChangeRequestStatus.PENDING.value,
    )
    db.add(req)
    db.commit()
    db.refresh(req)
    logger.info(
        "Change request %s submitted by %s: %s %s %s",
        req.id, actor.id, req.action, req.entity_type, req.entity_id or "(new)",
    )
    return req


def list_pending(db: Session) -> list[ChangeRequest]:
    """Pending requests, oldest first so nothing starves at the bottom of the inbox."""
    return (
        db.query(ChangeRequest)
        .filter(ChangeRequest.status == ChangeRequestStatus.PENDING.value)
        .order_by(ChangeRequest.created_at.asc())
        .all()
    )


def get_by_id(db: Session, request_id: str) -> ChangeRequest:
    req = db.query(ChangeRequest).filter(ChangeRequest.id == request_id).first() if request_id else None
    if req is None:
        raise NotFoundError("Change request", request_id)
    return req


def _require_pending(req: ChangeRequest) -> None:
    if req.status != ChangeRequestStatus.PENDING.value:
        raise StateError(f"Change request {req.id} has already been {req.status}")


def _stamp(req: ChangeRequest, status: ChangeRequestStatus, reviewer: Any, notes: str | None) -> None:
    req.status = status.value
    req.reviewer_id = getattr(reviewer, "id", None)
    req.reviewer_email = getattr(reviewer, "email", None)
    req.decision_notes = notes
    req.reviewed_at = datetime.utcnow()


def build_payload(db: Session, req: ChangeRequest) -> dict | None:
    """The record written for a request: after_data normalized for its entity type."""
    action = parse_action(req.action)
    if action == ChangeAction.DELETE:
        return None
    after = req.after_data or {}
    if action == ChangeAction.AVAILABILITY:
        return {AVAILABILITY_FIELD: bool(after.get(AVAILABILITY_FIELD))}
    handler = handler_for(req.entity_type)
    if handler.normalize is not None:
        return handler.normalize(db, after, req.before_data)
    return dict(after)


def apply_change(db: Session, req: ChangeRequest) -> Any:
    """Write the proposed mutation. Returns the written record (None for delete)."""
    handler = handler_for(req.entity_type)
    action = parse_action(req.action)
    store = RecordStore.for_collection(db, handler.collection)
    payload = build_payload(db, req)
    target_id = req.entity_id or (req.after_data or {}).get("id") or (req.before_data or {}).get("id")

    if action == ChangeAction.CREATE:
        payload.pop("id", None)
        record = store.insert(payload)
        req.entity_id = record.id
        return record
    if not target_id:
        raise ValidationError("Missing entity id")
    if action == ChangeAction.DELETE:
        store.delete(str(target_id))
        return None
    return store.update(str(target_id), payload)


def reject(db: Session, request_id: str, reviewer: Any, notes: str | None = None) -> ChangeRequest:
    req = get_by_id(db, request_id)
    _require_pending(req)
    _stamp(req, ChangeRequestStatus.REJECTED, reviewer, notes)
    db.commit()
    db.refresh(req)
    logger.info("Change request %s rejected by %s", req.id, req.reviewer_id)
    return req


def approve_and_apply(db: Session, request_id: str, reviewer: Any, notes: str | None = None) -> ChangeRequest:
    """
    Apply the proposal, then mark it approved. If the write fails the request stays
    pending and the error propagates unchanged.
    """
    req = get_by_id(db, request_id)
    _require_pending(req)
    try:
        apply_change(db, req)
    except Exception:
        db.rollback()
        logger.warning("Change request %s not applied; left pending", request_id)
        raise
    _stamp(req, ChangeRequestStatus.APPROVED, reviewer, notes)
    db.commit()
    db.refresh(req)
    logger.info("Change request %s approved by %s and applied to %s %s", req.id, req.reviewer_id, req.entity_type, req.entity_id)
    return req
