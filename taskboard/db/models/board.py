import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from taskboard.db.base import Base


def new_id() -> str:
    return str(uuid.uuid4())


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


class Board(Base):
    __tablename__ = "boards"

    required_fields = ("boardName",)

    id = Column(String(36), primary_key=True, default=new_id)
    board_name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)
    columns = relationship("BoardColumn", back_populates="board", cascade="all, delete")
