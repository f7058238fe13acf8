"""
Generic CRUD access to domain records. One RecordStore per collection (table of rows).
Every write commits; database errors roll back and surface as WriteError.
Payload keys that are not columns are dropped, so snapshots can carry display-only fields.
"""
import logging
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from tablemaster.database import Base
from tablemaster.errors import NotFoundError, WriteError
from tablemaster.models import DiningTable, Guest, MenuCategory, MenuItem, PrefixedMenu, Order, OrderItem

logger = logging.getLogger(__name__)

COLLECTIONS: dict[str, type[Base]] = {
    "tables": DiningTable,
    "guests": Guest,
    "menu_categories": MenuCategory,
    "menu_items": MenuItem,
    "prefixed_menus": PrefixedMenu,
    "orders": Order,
    "order_items": OrderItem,
}

# Never written from a payload; timestamps are set by the database layer
TIMESTAMPS = frozenset({"created_at", "updated_at"})
PROTECTED_ON_UPDATE = TIMESTAMPS | {"id"}


def to_dict(record: Any) -> dict:
    """Column values of a record as a plain dict (datetimes left as-is)."""
    return {c.key: getattr(record, c.key) for c in inspect(record).mapper.column_attrs}


class RecordStore:
    """insert / update / delete / get / list over one model."""

    def __init__(self, db: Session, model: type[Base]):
        self._db = db
        self._model = model
        self._columns = {c.key for c in inspect(model).column_attrs}

    @classmethod
    def for_collection(cls, db: Session, name: str) -> "RecordStore":
        return cls(db, COLLECTIONS[name])

    @property
    def model(self) -> type[Base]:
        return self._model

    def _clean(self, payload: dict | None, *, protected: frozenset = frozenset()) -> dict:
        data = {}
        dropped = []
        for key, value in (payload or {}).items():
            if key in self._columns and key not in protected:
                data[key] = value
            else:
                dropped.append(key)
        if dropped:
            logger.debug("%s: dropping non-column keys %s", self._model.__tablename__, dropped)
        return data

    def _commit(self, action: str) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("%s %s failed: %s", self._model.__tablename__, action, e)
            raise WriteError(f"Could not {action} {self._model.__tablename__} record") from e

    def get(self, record_id: str | None) -> Any | None:
        if not record_id:
            return None
        return self._db.query(self._model).filter(self._model.id == str(record_id)).first()

    def _require(self, record_id: str | None) -> Any:
        record = self.get(record_id)
        if record is None:
            raise NotFoundError(self._model.__tablename__, record_id)
        return record

    def list(
        self,
        filters: dict | None = None,
        order_by: str | None = "created_at",
        descending: bool = False,
    ) -> list:
        q = self._db.query(self._model)
        for key, value in (filters or {}).items():
            q = q.filter(getattr(self._model, key) == value)
        if order_by and order_by in self._columns:
            column = getattr(self._model, order_by)
            q = q.order_by(column.desc() if descending else column.asc())
        return q.all()

    def insert(self, payload: dict) -> Any:
        record = self._model(**self._clean(payload, protected=TIMESTAMPS))
        self._db.add(record)
        self._commit("insert")
        self._db.refresh(record)
        return record

    def update(self, record_id: str, payload: dict) -> Any:
        record = self._require(record_id)
        for key, value in self._clean(payload, protected=PROTECTED_ON_UPDATE).items():
            setattr(record, key, value)
        self._commit("update")
        self._db.refresh(record)
        return record

    def delete(self, record_id: str) -> None:
        record = self._require(record_id)
        self._db.delete(record)
        self._commit("delete")
