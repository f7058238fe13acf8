"""
Menu item payload normalization applied when a menu item is actually written.
- category: resolve category_id from the payload, its slug/name, or the prior snapshot
- steaks: uppercase country, trimmed origin/cut, numeric weight/aging
- everything else: steak-only fields cleared so a category change cannot leave stale data
"""
import logging
import math
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from tablemaster.config import get_settings
from tablemaster.errors import ValidationError
from tablemaster.models.menu import MenuCategory

logger = logging.getLogger(__name__)

CATEGORY_TEXT_FIELDS = ("category", "category_slug", "category_name")
DEFAULT_CUT = "Unspecified"


def _category_text(data: dict | None) -> str | None:
    for field in CATEGORY_TEXT_FIELDS:
        value = (data or {}).get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def find_category(db: Session, text: str | None) -> MenuCategory | None:
    """Case-insensitive lookup by slug, then by display name."""
    if not text:
        return None
    needle = text.strip().lower()
    return (
        db.query(MenuCategory).filter(func.lower(MenuCategory.slug) == needle).first()
        or db.query(MenuCategory).filter(func.lower(MenuCategory.name) == needle).first()
    )


def _create_category(db: Session, slug: str) -> MenuCategory:
    slug = slug.strip().lower().replace(" ", "_")
    name = slug.replace("_", " ").title()
    logger.info("Creating missing menu category %s", slug)
    # flushed, not committed: it lands with the item write or rolls back with it
    category = MenuCategory(slug=slug, name=name)
    db.add(category)
    db.flush()
    return category


def resolve_category(db: Session, after: dict, before: dict | None) -> MenuCategory | str:
    """
    Category for the written record: after.category_id, else after's slug/name, else
    before.category_id, else before's slug/name. Returns the category row when it was
    looked up, or the bare id when the payload carried one. Raises ValidationError if none.
    """
    before = before or {}
    if after.get("category_id"):
        return str(after["category_id"])
    text = _category_text(after)
    category = find_category(db, text)
    if category is not None:
        return category
    if before.get("category_id"):
        return str(before["category_id"])
    before_text = _category_text(before)
    category = find_category(db, before_text)
    if category is not None:
        return category
    slug = text or before_text
    if slug and get_settings().auto_create_menu_categories:
        return _create_category(db, slug)
    raise ValidationError("category is required")


def _category_slug(db: Session, resolved: MenuCategory | str) -> str | None:
    if isinstance(resolved, MenuCategory):
        return resolved.slug
    category = db.query(MenuCategory).filter(MenuCategory.id == resolved).first()
    return category.slug if category else None


def is_steak(db: Session, after: dict, before: dict | None, resolved: MenuCategory | str) -> bool:
    """The category the record is written under decides; payload text only when it has no row."""
    steak_slug = get_settings().steak_category_slug.lower()
    text = _category_slug(db, resolved)
    if text is None:
        text = _category_text(after) or _category_text(before)
    return (text or "").strip().lower() == steak_slug


def clean_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def to_number(value: Any, integer: bool = False) -> int | float | None:
    """Number or None. Empty strings and unparseable values become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    if integer or number.is_integer():
        return int(number)
    return number


def normalize_steak_fields(payload: dict) -> dict:
    country = clean_text(payload.get("country"))
    if country is not None:
        country = country.upper()
        if country not in get_settings().steak_country_code_set:
            logger.warning("Steak country %s is not in the known list; keeping it", country)
    payload["country"] = country
    payload["origin"] = clean_text(payload.get("origin"))
    payload["cut"] = clean_text(payload.get("cut")) or DEFAULT_CUT
    payload["weight_oz"] = to_number(payload.get("weight_oz"))
    payload["aging_days"] = to_number(payload.get("aging_days"), integer=True)
    return payload


def clear_steak_fields(payload: dict) -> dict:
    payload["country"] = None
    payload["origin"] = None
    payload["weight_oz"] = None
    for field in ("cut", "aging_days", "notes"):
        if field in payload:
            payload[field] = None
    return payload


def normalize_menu_item(db: Session, after: dict | None, before: dict | None = None) -> dict:
    """Payload ready for the menu_items collection. Does not mutate the snapshots."""
    payload = dict(after or {})
    resolved = resolve_category(db, payload, before)
    payload["category_id"] = resolved.id if isinstance(resolved, MenuCategory) else resolved
    if is_steak(db, payload, before, resolved):
        normalize_steak_fields(payload)
    else:
        clear_steak_fields(payload)
    if "price" in payload:
        payload["price"] = to_number(payload["price"])
    return payload
