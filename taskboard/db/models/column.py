from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from taskboard.db.base import Base
from taskboard.db.models.board import new_id, now_utc


class BoardColumn(Base):
    __tablename__ = "columns"

    required_fields = ("columnName",)

    id = Column(String(36), primary_key=True, default=new_id)
    # nullable: a column may exist without a board
    board_id = Column(String(36), ForeignKey("boards.id", ondelete="CASCADE"), nullable=True, index=True)
    column_name = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc, nullable=False)

    board = relationship("Board", back_populates="columns")
    tickets = relationship("Ticket", back_populates="column", cascade="all, delete")
