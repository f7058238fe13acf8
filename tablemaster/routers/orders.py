"""
Per-guest ordering. Orders belong to a table; each order item is placed for a guest (or the
table when guest_id is empty). Writes are direct for any signed-in user.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tablemaster.auth import get_current_user
from tablemaster.database import get_db
from tablemaster.models.guest import Guest
from tablemaster.models.menu import MenuItem
from tablemaster.models.order import Order, OrderItem, OrderStatus
from tablemaster.models.table import DiningTable
from tablemaster.models.user import User
from tablemaster.repositories.record_store import RecordStore
from tablemaster.schemas.order import (
    GuestOrders,
    OrderCreate,
    OrderItemCreate,
    OrderItemResponse,
    OrderItemUpdate,
    OrderResponse,
)

router = APIRouter(tags=["orders"])


def _require_table(db: Session, table_id: str) -> DiningTable:
    table = RecordStore(db, DiningTable).get(table_id)
    if not table:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Table not found")
    return table


def _get_order_item_or_404(db: Session, item_id: str) -> OrderItem:
    item = RecordStore(db, OrderItem).get(item_id)
    if not item:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order item not found")
    return item


def _check_guest(db: Session, guest_id: str | None, table_id: str) -> None:
    if not guest_id:
        return
    guest = RecordStore(db, Guest).get(guest_id)
    if not guest or guest.table_id != table_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Guest is not seated at this table")


@router.get("/api/orders", response_model=list[OrderResponse])
def list_orders(
    table_id: str | None = None,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    filters = {"table_id": table_id} if table_id else None
    return RecordStore(db, Order).list(filters=filters, order_by="created_at")


@router.post("/api/orders", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    _require_table(db, body.table_id)
    return RecordStore(db, Order).insert({"table_id": body.table_id, "status": OrderStatus.OPEN.value})


@router.get("/api/orders/summary", response_model=list[GuestOrders])
def orders_summary(
    table_id: str,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Order items at a table grouped by guest, in seat order; table-level items last."""
    _require_table(db, table_id)
    guests = RecordStore(db, Guest).list(filters={"table_id": table_id}, order_by="guest_number")
    items = RecordStore(db, OrderItem).list(filters={"table_id": table_id}, order_by="created_at")
    by_guest: dict[str | None, list[OrderItem]] = {}
    for item in items:
        by_guest.setdefault(item.guest_id, []).append(item)
    summary = [
        GuestOrders(
            guest_id=g.id,
            guest_number=g.guest_number,
            items=[OrderItemResponse.model_validate(i) for i in by_guest.pop(g.id, [])],
        )
        for g in guests
    ]
    # guest rows deleted after ordering fall back to the shared group
    shared = [i for rows in by_guest.values() for i in rows]
    if shared:
        summary.append(GuestOrders(
            guest_id=None,
            guest_number=None,
            items=[OrderItemResponse.model_validate(i) for i in shared],
        ))
    return summary


@router.post("/api/orders/{order_id}/items", response_model=OrderItemResponse, status_code=status.HTTP_201_CREATED)
def add_order_item(
    order_id: str,
    body: OrderItemCreate,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    order = RecordStore(db, Order).get(order_id)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    if order.status == OrderStatus.CLOSED.value:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Order is closed")
    _check_guest(db, body.guest_id, order.table_id)

    name = (body.name or "").strip()
    if body.menu_item_id:
        menu_item = RecordStore(db, MenuItem).get(body.menu_item_id)
        if not menu_item:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Menu item not found")
        if menu_item.is_unavailable:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=f"{menu_item.name} is unavailable")
        name = name or menu_item.name
    if not name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="name or menu_item_id is required")

    payload = body.model_dump(mode="json")
    payload.update({"order_id": order.id, "table_id": order.table_id, "name": name})
    return RecordStore(db, OrderItem).insert(payload)


@router.patch("/api/order-items/{item_id}", response_model=OrderItemResponse)
def update_order_item(
    item_id: str,
    body: OrderItemUpdate,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = _get_order_item_or_404(db, item_id)
    changes = body.model_dump(mode="json", exclude_unset=True)
    if "guest_id" in changes:
        _check_guest(db, changes["guest_id"], item.table_id)
    return RecordStore(db, OrderItem).update(item.id, changes)


@router.delete("/api/order-items/{item_id}")
def delete_order_item(
    item_id: str,
    _user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    item = _get_order_item_or_404(db, item_id)
    RecordStore(db, OrderItem).delete(item.id)
    return {"message": "Order item deleted"}
