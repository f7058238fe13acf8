import uuid
from datetime import datetime
from sqlalchemy import Column, String, Text, Integer, Float, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from tablemaster.database import Base


class MenuCategory(Base):
    __tablename__ = "menu_categories"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    slug = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(100), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)

    items = relationship("MenuItem", back_populates="category")


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    category_id = Column(String(36), ForeignKey("menu_categories.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=True)
    currency = Column(String(3), nullable=False, default="CAD")
    allergens = Column(JSON, nullable=True)
    common_mods = Column(JSON, nullable=True)
    notes = Column(Text, nullable=True)
    program = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_unavailable = Column(Boolean, nullable=False, default=False)  # 86'd for the night
    sort_order = Column(Integer, nullable=False, default=0)
    # Steak-only fields; null for every other category
    country = Column(String(10), nullable=True)
    origin = Column(String(200), nullable=True)
    cut = Column(String(100), nullable=True)
    weight_oz = Column(Float, nullable=True)
    aging_days = Column(Integer, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    category = relationship("MenuCategory", back_populates="items")
