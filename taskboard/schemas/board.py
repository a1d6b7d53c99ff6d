from datetime import datetime
from typing import List, Optional

from taskboard.schemas.column import ColumnRead
from taskboard.schemas.common import CamelModel, UpdateResult

class BoardCreate(CamelModel):
    board_name: str

class BoardUpdate(CamelModel):
    board_name: Optional[str] = None

class BoardRead(CamelModel):
    id: str
    board_name: str
    created_at: datetime
    updated_at: datetime

class BoardSummary(BoardRead):
    column_count: int

class BoardWithColumns(BoardRead):
    columns: List[ColumnRead]

class BoardUpdateResponse(CamelModel):
    update_result: UpdateResult
    updated_board: Optional[BoardRead]
