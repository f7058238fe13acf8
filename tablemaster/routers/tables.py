"""
Floor tables. Reads are open to any signed-in user; create/update/delete go through the edit
gate, so staff without edit access get a pending change request (202) instead of a write.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session
from tablemaster.auth import get_current_user
from tablemaster.database import get_db
from tablemaster.models.change_request import EntityType
from tablemaster.models.guest import Guest
from tablemaster.models.table import DiningTable
from tablemaster.models.user import User
from tablemaster.repositories.record_store import RecordStore
from tablemaster.routers.common import pending_response
from tablemaster.schemas.guest import GuestResponse
from tablemaster.schemas.table import SeatGuestsBody, TableCreate, TableResponse, TableUpdate
from tablemaster.services.edits import apply_or_propose, snapshot

router = APIRouter(prefix="/api/tables", tags=["tables"])


def _get_table_or_404(db: Session, table_id: str) -> DiningTable:
    table = RecordStore(db, DiningTable).get(table_id)
    if not table:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Table not found")
    return table


def _check_table_number(db: Session, table_number: str, exclude_id: str | None = None) -> None:
    """Table numbers are unique ignoring case and surrounding spaces."""
    q = db.query(DiningTable).filter(func.lower(DiningTable.table_number) == table_number.strip().lower())
    if exclude_id:
        q = q.filter(DiningTable.id != exclude_id)
    if q.first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Table number already exists")


@router.get("", response_model=list[TableResponse])
def list_tables(
    section: str | None = None,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """All tables, oldest first. Optional ?section=Patio."""
    filters = {"section": section} if section else None
    return RecordStore(db, DiningTable).list(filters=filters, order_by="created_at")


@router.get("/{table_id}", response_model=TableResponse)
def get_table(
    table_id: str,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _get_table_or_404(db, table_id)


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
def create_table(
    body: TableCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _check_table_number(db, body.table_number)
    after = body.model_dump(mode="json")
    after["owner_id"] = user.id
    outcome = apply_or_propose(db, user, EntityType.TABLE.value, "create", None, None, after)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Table creation submitted for approval.")
    return outcome.record


@router.patch("/{table_id}", response_model=TableResponse)
def update_table(
    table_id: str,
    body: TableUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    table = _get_table_or_404(db, table_id)
    changes = body.model_dump(mode="json", exclude_unset=True)
    if changes.get("table_number"):
        _check_table_number(db, changes["table_number"], exclude_id=table.id)
    before = snapshot(table)
    after = {**before, **changes}
    outcome = apply_or_propose(db, user, EntityType.TABLE.value, "update", table.id, before, after)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Table update submitted for approval.")
    return outcome.record


@router.delete("/{table_id}")
def delete_table(
    table_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    table = _get_table_or_404(db, table_id)
    outcome = apply_or_propose(db, user, EntityType.TABLE.value, "delete", table.id, snapshot(table), None)
    if not outcome.applied:
        return pending_response(
            outcome.change_request,
            "Deletion submitted for approval. Table will be removed after admin review.",
        )
    return {"message": "Table deleted"}


@router.post("/{table_id}/guests", response_model=list[GuestResponse], status_code=status.HTTP_201_CREATED)
def seat_guests(
    table_id: str,
    body: SeatGuestsBody,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create guests 1..guest_count at the table (numbering continues after existing guests)."""
    table = _get_table_or_404(db, table_id)
    store = RecordStore(db, Guest)
    existing = store.list(filters={"table_id": table.id}, order_by="guest_number")
    start = max((g.guest_number for g in existing), default=0) + 1
    return [
        store.insert({"table_id": table.id, "guest_number": n, "allergies": []})
        for n in range(start, start + body.guest_count)
    ]
