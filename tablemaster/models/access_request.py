import uuid
import enum
from datetime import datetime
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from tablemaster.database import Base


class AccessRequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AccessRequest(Base):
    """Request for standing edit permission. Admin approves or rejects; kept as audit trail."""
    __tablename__ = "access_requests"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    email = Column(String(255), nullable=True)
    full_name = Column(String(100), nullable=True)
    reason = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=AccessRequestStatus.PENDING.value, index=True)
    reviewer_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    reviewer_email = Column(String(255), nullable=True)
    decision_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    reviewed_at = Column(DateTime, nullable=True)
