import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, JSON
from tablemaster.database import Base


class OrderStatus(str, enum.Enum):
    OPEN = "open"
    SENT = "sent"
    CLOSED = "closed"


class OrderItemStatus(str, enum.Enum):
    PENDING = "pending"
    FIRED = "fired"
    SERVED = "served"
    VOID = "void"


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    table_id = Column(String(36), ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=OrderStatus.OPEN.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


class OrderItem(Base):
    """One line of an order, placed for a specific guest."""
    __tablename__ = "order_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    table_id = Column(String(36), ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)
    guest_id = Column(String(36), ForeignKey("guests.id", ondelete="SET NULL"), nullable=True, index=True)
    menu_item_id = Column(String(36), ForeignKey("menu_items.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(200), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    course = Column(String(50), nullable=True)
    modifiers = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=OrderItemStatus.PENDING.value)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
