from datetime import datetime
from typing import Optional

from taskboard.db.models.ticket import Priority
from taskboard.schemas.common import CamelModel, ParentId, UpdateResult

class TicketCreate(CamelModel):
    ticket_name: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM
    done: bool = False
    column_id: ParentId = None

class TicketUpdate(CamelModel):
    """Column reassignment is not accepted here; it goes through /tickets/move."""

    ticket_name: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None
    done: Optional[bool] = None

class TicketRead(CamelModel):
    id: str
    column_id: Optional[str] = None
    ticket_name: str
    description: Optional[str] = None
    priority: Priority
    done: bool
    created_at: datetime
    updated_at: datetime

# the column as embedded in a moved ticket, without its own tickets
class TicketColumn(CamelModel):
    id: str
    board_id: Optional[str] = None
    column_name: str
    created_at: datetime
    updated_at: datetime

class TicketWithColumn(TicketRead):
    column: Optional[TicketColumn] = None

class TicketUpdateResponse(CamelModel):
    update_result: UpdateResult
    updated_ticket: Optional[TicketRead]
