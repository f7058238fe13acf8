"""
Menu categories and items. Item writes go through the edit gate; privileged writes and
approved change requests get the same payload normalization (category, steak fields).
Item reads fall back to the Redis copy when the database read fails.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy.orm import Session, joinedload
from tablemaster.auth import get_current_user, get_current_user_admin
from tablemaster.config import get_settings
from tablemaster.database import get_db
from tablemaster.models.change_request import EntityType
from tablemaster.models.menu import MenuCategory, MenuItem
from tablemaster.models.user import User
from tablemaster.repositories.record_store import RecordStore, to_dict
from tablemaster.routers.common import pending_response
from tablemaster.schemas.menu import (
    AvailabilityUpdate,
    MenuCategoryResponse,
    MenuItemCreate,
    MenuItemResponse,
    MenuItemUpdate,
)
from tablemaster.services.edits import apply_or_propose, snapshot
from tablemaster.services.menu_cache import MENU_ITEMS_KEY, MenuCache, get_menu_cache, read_through
from tablemaster.services.menu_payload import find_category

router = APIRouter(prefix="/api/menu", tags=["menu"])


class CategoryCreate(BaseModel):
    slug: str
    name: str | None = None
    sort_order: int = 0


def _item_response(item: MenuItem) -> MenuItemResponse:
    data = to_dict(item)
    data["category"] = item.category.slug if item.category else None
    data["category_name"] = item.category.name if item.category else None
    return MenuItemResponse(**data)


def _item_snapshot(item: MenuItem) -> dict:
    """before_data for an item: its columns plus the category slug, so a review can see a category change."""
    data = snapshot(item)
    if item.category:
        data["category"] = item.category.slug
    return data


def _get_item_or_404(db: Session, item_id: str) -> MenuItem:
    item = RecordStore(db, MenuItem).get(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
    return item


# ---------- Categories ----------


@router.get("/categories", response_model=list[MenuCategoryResponse])
def list_categories(
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return RecordStore(db, MenuCategory).list(order_by="sort_order")


@router.post("/categories", response_model=MenuCategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    _admin: User = Depends(get_current_user_admin),
    db: Session = Depends(get_db),
):
    """Create a menu category (admin only)."""
    slug = body.slug.strip().lower()
    if not slug:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="slug is required")
    if find_category(db, slug):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Category already exists")
    name = (body.name or "").strip() or slug.replace("_", " ").title()
    return RecordStore(db, MenuCategory).insert({"slug": slug, "name": name, "sort_order": body.sort_order})


# ---------- Items ----------


@router.get("/items", response_model=list[MenuItemResponse])
def list_menu_items(
    category: str | None = None,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    cache: MenuCache = Depends(get_menu_cache),
):
    """All menu items, newest first. Optional ?category=steaks (slug)."""
    def load() -> list[MenuItemResponse]:
        rows = (
            db.query(MenuItem)
            .options(joinedload(MenuItem.category))
            .order_by(MenuItem.created_at.desc())
            .all()
        )
        return [_item_response(item) for item in rows]

    items = read_through(cache, MENU_ITEMS_KEY, load)
    if category:
        slug = category.strip().lower()
        items = [
            i for i in items
            if ((i.category if isinstance(i, MenuItemResponse) else i.get("category")) or "").lower() == slug
        ]
    return items


@router.get("/items/{item_id}", response_model=MenuItemResponse)
def get_menu_item(
    item_id: str,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return _item_response(_get_item_or_404(db, item_id))


@router.post("/items", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def create_menu_item(
    body: MenuItemCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    after = body.model_dump(mode="json", exclude_unset=True)
    after.setdefault("currency", get_settings().default_currency)
    outcome = apply_or_propose(db, user, EntityType.MENU_ITEM.value, "create", None, None, after)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Menu item submitted for approval.")
    return _item_response(outcome.record)


@router.patch("/items/{item_id}", response_model=MenuItemResponse)
def update_menu_item(
    item_id: str,
    body: MenuItemUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = _get_item_or_404(db, item_id)
    changes = body.model_dump(mode="json", exclude_unset=True)
    before = _item_snapshot(item)
    after = {**before, **changes}
    if "category" in changes and "category_id" not in changes:
        # a new category named by slug must not be overridden by the old id
        after.pop("category_id", None)
    elif "category_id" in changes and "category" not in changes:
        after.pop("category", None)
    outcome = apply_or_propose(db, user, EntityType.MENU_ITEM.value, "update", item.id, before, after)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Menu item update submitted for approval.")
    return _item_response(outcome.record)


@router.patch("/items/{item_id}/availability", response_model=MenuItemResponse)
def set_availability(
    item_id: str,
    body: AvailabilityUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Mark an item unavailable (86'd) or back on. Touches only the availability flag."""
    item = _get_item_or_404(db, item_id)
    before = _item_snapshot(item)
    after = {**before, "is_unavailable": body.is_unavailable}
    outcome = apply_or_propose(db, user, EntityType.MENU_ITEM.value, "availability", item.id, before, after)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Availability change submitted for approval.")
    return _item_response(outcome.record)


@router.delete("/items/{item_id}")
def delete_menu_item(
    item_id: str,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = _get_item_or_404(db, item_id)
    outcome = apply_or_propose(db, user, EntityType.MENU_ITEM.value, "delete", item.id, _item_snapshot(item), None)
    if not outcome.applied:
        return pending_response(outcome.change_request, "Deletion submitted for approval.")
    return {"message": "Menu item deleted"}
