from datetime import datetime
from typing import List, Optional

from taskboard.schemas.ticket import TicketRead
from taskboard.schemas.common import CamelModel, ParentId, UpdateResult

class ColumnCreate(CamelModel):
    column_name: str
    board_id: ParentId = None

class ColumnUpdate(CamelModel):
    column_name: Optional[str] = None
    board_id: ParentId = None

class ColumnRead(CamelModel):
    id: str
    board_id: Optional[str] = None
    column_name: str
    created_at: datetime
    updated_at: datetime

class ColumnWithTickets(ColumnRead):
    tickets: List[TicketRead]

class ColumnUpdateResponse(CamelModel):
    update_result: UpdateResult
    updated_column: Optional[ColumnRead]
