import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.db import crud
from taskboard.db.session import get_db
from taskboard.db.models import Board, BoardColumn
from taskboard.core.validation import parse_payload
from taskboard.schemas.board import (
    BoardCreate,
    BoardRead,
    BoardSummary,
    BoardUpdate,
    BoardUpdateResponse,
    BoardWithColumns,
)
from taskboard.schemas.common import UpdateResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/boards", tags=["boards"])

ENTITY = "Board"


@router.get("", response_model=List[BoardSummary])
async def list_boards(db: AsyncSession = Depends(get_db)):
    """List all boards, each with the number of columns it owns."""
    result = await db.execute(
        select(Board, func.count(BoardColumn.id))
        .outerjoin(BoardColumn, BoardColumn.board_id == Board.id)
        .group_by(Board.id)
        .order_by(Board.created_at)
    )

    response = []
    for board, column_count in result.all():
        # derived at query time, never persisted
        board.column_count = column_count
        response.append(BoardSummary.model_validate(board))
    return response


@router.get("/columns/{board_id}", response_model=BoardWithColumns)
async def get_board_columns(board_id: str, db: AsyncSession = Depends(get_db)):
    """Fetch a board together with its columns."""
    board = await crud.get_or_404(db, Board, ENTITY, board_id, with_related="columns")
    return BoardWithColumns.model_validate(board)


@router.get("/{board_id}", response_model=BoardRead)
async def get_board(board_id: str, db: AsyncSession = Depends(get_db)):
    board = await crud.get_or_404(db, Board, ENTITY, board_id)
    return BoardRead.model_validate(board)


@router.post("", response_model=BoardRead, status_code=status.HTTP_201_CREATED)
async def create_board(
    body: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    crud.check_create_payload(Board, ENTITY, body)
    payload = parse_payload(BoardCreate, body)

    board = await crud.create(db, Board, payload.model_dump(mode="json"))
    logger.info(f"Created board {board.id}")
    return BoardRead.model_validate(board)


@router.put("/{board_id}", response_model=BoardUpdateResponse)
async def update_board(
    board_id: str,
    body: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    crud.check_update_payload(Board, ENTITY, body)
    payload = parse_payload(BoardUpdate, body)
    values = {k: v for k, v in payload.model_dump(exclude_unset=True, mode="json").items() if v is not None}

    affected, board = await crud.update_by_id(db, Board, ENTITY, board_id, values)
    return BoardUpdateResponse(
        update_result=UpdateResult(affected=affected),
        updated_board=BoardRead.model_validate(board) if board else None,
    )


@router.delete("/{board_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_board(board_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a board along with its columns and their tickets."""
    await crud.delete_by_id(db, Board, ENTITY, board_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
