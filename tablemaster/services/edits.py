"""
Edit gate for tables, menu items and pre-fixed menus: privileged actors write straight to the
Record Store, everyone else gets a pending change request with the same before/after snapshots.
"""
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from tablemaster.auth import is_privileged
from tablemaster.models.change_request import ChangeAction, ChangeRequest
from tablemaster.repositories.record_store import RecordStore, to_dict
from tablemaster.services import change_requests

logger = logging.getLogger(__name__)


@dataclass
class EditOutcome:
    """Either the written record (applied) or the pending proposal."""
    record: Any = None
    change_request: ChangeRequest | None = None

    @property
    def applied(self) -> bool:
        return self.change_request is None


def snapshot(record: Any) -> dict | None:
    """JSON-safe copy of a record for before_data."""
    if record is None:
        return None
    data = to_dict(record)
    for key, value in data.items():
        if hasattr(value, "isoformat"):
            data[key] = value.isoformat()
    return data


def apply_or_propose(
    db: Session,
    actor: Any,
    entity_type: str,
    action: str,
    entity_id: str | None,
    before_data: dict | None,
    after_data: dict | None,
    notes: str | None = None,
) -> EditOutcome:
    if not is_privileged(db, actor):
        req = change_requests.submit(
            db, actor, entity_type, entity_id, action, before_data, after_data, notes,
        )
        return EditOutcome(change_request=req)

    handler = change_requests.handler_for(entity_type)
    verb = change_requests.parse_action(action)
    store = RecordStore.for_collection(db, handler.collection)
    if verb == ChangeAction.DELETE:
        store.delete(entity_id)
        logger.info("%s %s deleted directly by %s", entity_type, entity_id, actor.id)
        return EditOutcome()

    if verb == ChangeAction.AVAILABILITY:
        payload = {change_requests.AVAILABILITY_FIELD: bool((after_data or {}).get(change_requests.AVAILABILITY_FIELD))}
    elif handler.normalize is not None:
        payload = handler.normalize(db, after_data, before_data)
    else:
        payload = dict(after_data or {})

    if verb == ChangeAction.CREATE:
        payload.pop("id", None)
        record = store.insert(payload)
    else:
        record = store.update(entity_id, payload)
    logger.info("%s %s %s directly by %s", entity_type, record.id, verb.value, actor.id)
    return EditOutcome(record=record)
