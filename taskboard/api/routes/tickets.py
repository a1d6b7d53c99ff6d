import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskboard.db import crud
from taskboard.db.session import get_db
from taskboard.db.models import BoardColumn, Ticket
from taskboard.core.errors import EntityNotFound, RequestValidationFailed
from taskboard.core.validation import is_blank, parse_payload
from taskboard.schemas.ticket import (
    TicketCreate,
    TicketRead,
    TicketUpdate,
    TicketUpdateResponse,
    TicketWithColumn,
)
from taskboard.schemas.common import UpdateResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tickets", tags=["tickets"])

ENTITY = "Ticket"

NULLABLE_FIELDS = {"description"}


@router.get("", response_model=List[TicketRead])
async def list_tickets(db: AsyncSession = Depends(get_db)):
    tickets = await crud.list_all(db, Ticket)
    return [TicketRead.model_validate(t) for t in tickets]


@router.get("/{ticket_id}", response_model=TicketRead)
async def get_ticket(ticket_id: str, db: AsyncSession = Depends(get_db)):
    ticket = await crud.get_or_404(db, Ticket, ENTITY, ticket_id)
    return TicketRead.model_validate(ticket)


@router.post("", response_model=TicketRead, status_code=status.HTTP_201_CREATED)
async def create_ticket(
    body: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    crud.check_create_payload(Ticket, ENTITY, body)
    payload = parse_payload(TicketCreate, body)
    await crud.ensure_exists(db, BoardColumn, "Column", payload.column_id)

    ticket = await crud.create(db, Ticket, payload.model_dump(mode="json"))
    logger.info(f"Created ticket {ticket.id} in column {ticket.column_id}")
    return TicketRead.model_validate(ticket)


# registered before PUT /{ticket_id} so "move" is not taken for an id
@router.put("/move", response_model=TicketWithColumn)
async def move_ticket(
    body: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    """
    Reassign a ticket to another column.

    The ticket is looked up before the column so that a request where both
    are missing reports the ticket. Nothing else on the ticket changes.
    """
    body = body or {}
    ticket_id = body.get("ticketId")
    destination_column_id = body.get("destinationColumnId")

    if is_blank(ticket_id):
        raise RequestValidationFailed("ticketId is required")
    if is_blank(destination_column_id):
        raise RequestValidationFailed("destinationColumnId is required")
    if not isinstance(ticket_id, str):
        raise RequestValidationFailed("ticketId must be a string")
    if not isinstance(destination_column_id, str):
        raise RequestValidationFailed("destinationColumnId must be a string")

    ticket = await db.get(Ticket, ticket_id)
    if ticket is None:
        raise EntityNotFound.for_entity(ENTITY, ticket_id)

    column = await db.get(BoardColumn, destination_column_id)
    if column is None:
        raise EntityNotFound.for_entity("Column", destination_column_id)

    source_column_id = ticket.column_id
    ticket.column_id = column.id
    await db.commit()

    result = await db.execute(
        select(Ticket)
        .where(Ticket.id == ticket.id)
        .options(selectinload(Ticket.column))
        .execution_options(populate_existing=True)
    )
    moved = result.scalar_one()
    logger.info(f"Moved ticket {moved.id} from column {source_column_id} to {column.id}")
    return TicketWithColumn.model_validate(moved)


@router.put("/{ticket_id}", response_model=TicketUpdateResponse)
async def update_ticket(
    ticket_id: str,
    body: Optional[Dict[str, Any]] = Body(default=None),
    db: AsyncSession = Depends(get_db),
):
    crud.check_update_payload(Ticket, ENTITY, body)
    payload = parse_payload(TicketUpdate, body)
    values = {
        k: v
        for k, v in payload.model_dump(exclude_unset=True, mode="json").items()
        if v is not None or k in NULLABLE_FIELDS
    }

    affected, ticket = await crud.update_by_id(db, Ticket, ENTITY, ticket_id, values)
    return TicketUpdateResponse(
        update_result=UpdateResult(affected=affected),
        updated_ticket=TicketRead.model_validate(ticket) if ticket else None,
    )


@router.delete("/{ticket_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ticket(ticket_id: str, db: AsyncSession = Depends(get_db)):
    await crud.delete_by_id(db, Ticket, ENTITY, ticket_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
