from taskboard.db.models.board import Board
from taskboard.db.models.column import BoardColumn
from taskboard.db.models.ticket import Priority, Ticket

__all__ = ["Board", "BoardColumn", "Priority", "Ticket"]
