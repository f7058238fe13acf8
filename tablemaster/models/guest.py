import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, JSON
from tablemaster.database import Base


class Guest(Base):
    __tablename__ = "guests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    table_id = Column(String(36), ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)
    guest_number = Column(Integer, nullable=False, default=1)
    name = Column(String(100), nullable=True)
    seat = Column(String(20), nullable=True)
    allergies = Column(JSON, nullable=True)  # list of allergen names
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
