"""Guests seated at tables. Direct writes for any signed-in user; no approval step."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tablemaster.auth import get_current_user
from tablemaster.database import get_db
from tablemaster.models.guest import Guest
from tablemaster.models.table import DiningTable
from tablemaster.models.user import User
from tablemaster.repositories.record_store import RecordStore
from tablemaster.schemas.guest import GuestCreate, GuestResponse, GuestUpdate

router = APIRouter(prefix="/api/guests", tags=["guests"])


@router.get("", response_model=list[GuestResponse])
def list_guests(
    table_id: str | None = None,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Guests of one table ordered by guest number, or every guest oldest first."""
    store = RecordStore(db, Guest)
    if table_id:
        return store.list(filters={"table_id": table_id}, order_by="guest_number")
    return store.list(order_by="created_at")


@router.post("", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
def create_guest(
    body: GuestCreate,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not RecordStore(db, DiningTable).get(body.table_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Table not found")
    return RecordStore(db, Guest).insert(body.model_dump())


@router.patch("/{guest_id}", response_model=GuestResponse)
def update_guest(
    guest_id: str,
    body: GuestUpdate,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RecordStore(db, Guest).update(guest_id, body.model_dump(exclude_unset=True))


@router.delete("/{guest_id}")
def delete_guest(
    guest_id: str,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    RecordStore(db, Guest).delete(guest_id)
    return {"message": "Guest removed"}
