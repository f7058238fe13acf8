import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from tablemaster.database import Base


class ChangeRequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ChangeAction(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    AVAILABILITY = "availability"  # update restricted to the availability flag


class EntityType(str, enum.Enum):
    TABLE = "table"
    MENU_ITEM = "menu_item"
    PREFIXED_MENU = "prefixed_menu"


class ChangeRequest(Base):
    """
    Proposed create/update/delete of a table, menu item or pre-fixed menu by a non-admin.
    Snapshots, action and entity_type never change after status leaves pending.
    """
    __tablename__ = "change_requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    full_name = Column(String(100), nullable=True)
    entity_type = Column(String(30), nullable=False)
    entity_id = Column(String(36), nullable=True)  # None for create until applied
    action = Column(String(20), nullable=False)
    before_data = Column(JSON, nullable=True)
    after_data = Column(JSON, nullable=True)
    decision_notes = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=ChangeRequestStatus.PENDING.value, index=True)
    reviewer_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    reviewer_email = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    reviewed_at = Column(DateTime, nullable=True)
