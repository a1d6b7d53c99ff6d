import enum

from sqlalchemy import Boolean, Column, String, Text, DateTime, ForeignKey, false
from sqlalchemy.orm import relationship
from taskboard.db.base import Base
from taskboard.db.models.board import new_id, now_utc


class Priority(str, enum.Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Ticket(Base):
    __tablename__ = "tickets"

    required_fields = ("ticketName", "priority")

    id = Column(String(36), primary_key=True, default=new_id)
    column_id = Column(String(36), ForeignKey("columns.id", ondelete="CASCADE"), nullable=True, index=True)
    ticket_name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(String(8), nullable=False, default=Priority.MEDIUM.value)
    done = Column(Boolean, nullable=False, default=False, server_default=false())
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    column = relationship("BoardColumn", back_populates="tickets")
