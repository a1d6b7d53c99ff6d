import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db import crud
from taskboard.db.session import get_db
from taskboard.db.models import Board, BoardColumn
from taskboard.core.validation import parse_payload
from taskboard.schemas.column import (
    ColumnCreate,
    ColumnRead,
    ColumnUpdate,
    ColumnUpdateResponse,
    ColumnWithTickets,
)
from taskboard.schemas.common import UpdateResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/columns", tags=["columns"])

ENTITY = "Column"

# may be set to null to detach a column from its board
NULLABLE_FIELDS = {"board_id"}


@router.get("", response_model=List[ColumnRead])
async def list_columns(db: AsyncSession = Depends(get_db)):
    columns = await crud.list_all(db, BoardColumn)
    return [ColumnRead.model_validate(c) for c in columns]


@router.get("/tickets/{column_id}", response_model=ColumnWithTickets)
async def get_column_tickets(column_id: str, db: AsyncSession = Depends(get_db)):
    """Fetch a column together with its tickets."""
    column = await crud.get_or_404(db, BoardColumn, ENTITY, column_id, with_related="tickets")
    return ColumnWithTickets.model_validate(column)


@router.get("/{column_id}", response_model=ColumnRead)
async def get_column(column_id: str, db: AsyncSession = Depends(get_db)):
    column = await crud.get_or_404(db, BoardColumn, ENTITY, column_id)
    return ColumnRead.model_validate(column)


@router.post("", response_model=ColumnRead, status_code=status.HTTP_201_CREATED)
async def create_column(
    body: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    crud.check_create_payload(BoardColumn, ENTITY, body)
    payload = parse_payload(ColumnCreate, body)
    await crud.ensure_exists(db, Board, "Board", payload.board_id)

    column = await crud.create(db, BoardColumn, payload.model_dump(mode="json"))
    logger.info(f"Created column {column.id} on board {column.board_id}")
    return ColumnRead.model_validate(column)


@router.put("/{column_id}", response_model=ColumnUpdateResponse)
async def update_column(
    column_id: str,
    body: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    crud.check_update_payload(BoardColumn, ENTITY, body)
    payload = parse_payload(ColumnUpdate, body)
    values = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True, mode="json").items()
        if v is not None or k in NULLABLE_FIELDS
    }
    if values.get("board_id") is not None:
        # the column is reported before a dangling board
        await crud.get_or_404(db, BoardColumn, ENTITY, column_id)
        await crud.ensure_exists(db, Board, "Board", values["board_id"])

    affected, column = await crud.update_by_id(db, BoardColumn, ENTITY, column_id, values)
    return ColumnUpdateResponse(
        update_result=UpdateResult(affected=affected),
        updated_column=ColumnRead.model_validate(column) if column else None,
    )


@router.delete("/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_column(column_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a column along with its tickets."""
    await crud.delete_by_id(db, BoardColumn, ENTITY, column_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
