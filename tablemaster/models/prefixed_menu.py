import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, JSON
from tablemaster.database import Base


class PrefixedMenu(Base):
    """Tasting menu: courses is a list of {"course": str, "items": [{"id", "name"}]}."""
    __tablename__ = "prefixed_menus"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False, default="Pre-Fixed Menu")
    courses = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)
