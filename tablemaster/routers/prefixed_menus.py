"""Pre-fixed (tasting) menus: a named list of courses, each referencing menu items."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tablemaster.auth import get_current_user
from tablemaster.database import get_db
from tablemaster.models.change_request import EntityType
from tablemaster.models.prefixed_menu import PrefixedMenu
from tablemaster.models.user import User
from tablemaster.repositories.record_store import RecordStore
from tablemaster.routers.common import pending_response
from tablemaster.schemas.prefixed_menu import PrefixedMenuCreate, PrefixedMenuResponse, PrefixedMenuUpdate
from tablemaster.services.edits import apply_or_propose, snapshot
from tablemaster.services.menu_cache import PREFIXED_MENUS_KEY, MenuCache, get_menu_cache, read_through

router = APIRouter(prefix="/api/prefixed-menus", tags=["prefixed-menus"])


def _get_menu_or_404(db: Session, menu_id: str) -> PrefixedMenu:
    menu = RecordStore(db, PrefixedMenu).get(menu_id)
    if not menu:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Pre-fixed menu not found")
    return menu


@router.get("", response_model=list[PrefixedMenuResponse])
def list_prefixed_menus(
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    cache: MenuCache = Depends(get_menu_cache),
):
    def load() -> list[PrefixedMenuResponse]:
        rows = RecordStore(db, PrefixedMenu).list(order_by="created_at", descending=True)
        return [PrefixedMenuResponse.model_validate(m) for m in rows]

    return read_through(cache, PREFIXED_MENUS_KEY, load)


@router.get("/{menu_id}", response_model=PrefixedMenuResponse)
def get_prefixed_menu(
    menu_id: str,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _get_menu_or_404(db, menu_id)


@router.post("", response_model=PrefixedMenuResponse, status_code=status.HTTP_201_CREATED)
def create_prefixed_menu(
    body: PrefixedMenuCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    after = body.model_dump(mode="json")
    after["name"] = after["name"].strip() or "Pre-Fixed Menu"
    outcome = apply_or_propose(db, user, EntityType.PREFIXED_MENU.value, "create", None, None, after)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Pre-fixed menu submitted for approval.")
    return outcome.record


@router.patch("/{menu_id}", response_model=PrefixedMenuResponse)
def update_prefixed_menu(
    menu_id: str,
    body: PrefixedMenuUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    menu = _get_menu_or_404(db, menu_id)
    changes = body.model_dump(mode="json", exclude_unset=True, exclude_none=True)
    before = snapshot(menu)
    after = {**before, **changes}
    outcome = apply_or_propose(db, user, EntityType.PREFIXED_MENU.value, "update", menu.id, before, after)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Pre-fixed menu update submitted for approval.")
    return outcome.record


@router.delete("/{menu_id}")
def delete_prefixed_menu(
    menu_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    menu = _get_menu_or_404(db, menu_id)
    outcome = apply_or_propose(db, user, EntityType.PREFIXED_MENU.value, "delete", menu.id, snapshot(menu), None)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Deletion submitted for approval.")
    return {"message": "Pre-fixed menu deleted"}
