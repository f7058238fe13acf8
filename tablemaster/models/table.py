import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, Float, DateTime, ForeignKey
from tablemaster.database import Base


class TableStatus(str, enum.Enum):
    AVAILABLE = "available"
    SEATED = "seated"
    ORDERING = "ordering"
    SERVED = "served"
    CLOSED = "closed"


class DiningTable(Base):
    """A table on the floor map. table_number is unique case-insensitively (checked in the router)."""
    __tablename__ = "tables"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    table_number = Column(String(20), nullable=False, index=True)
    section = Column(String(50), nullable=True, index=True)
    guest_count = Column(Integer, nullable=False, default=0)
    status = Column(String(20), nullable=False, default=TableStatus.AVAILABLE.value)
    notes = Column(Text, nullable=True)
    pos_x = Column(Float, nullable=True)
    pos_y = Column(Float, nullable=True)
    owner_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
