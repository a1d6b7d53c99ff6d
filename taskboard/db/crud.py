"""Repository operations shared by the board, column and ticket routes.

Each function takes the model class plus the display name used in error
messages, so the three resources stay identical in shape.
"""
import logging
from typing import Any, Dict, Optional, Sequence, Type

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from taskboard.core.errors import EntityNotFound, RequestValidationFailed
from taskboard.core.validation import cleared_required_fields, missing_required_fields

logger = logging.getLogger(__name__)

EMPTY_BODY_MESSAGE = "Please specify a request body"


async def list_all(db: AsyncSession, model: Type[Any]) -> Sequence[Any]:
    result = await db.execute(select(model).order_by(model.created_at))
    return result.scalars().all()


async def get_or_404(
    db: AsyncSession,
    model: Type[Any],
    entity_name: str,
    entity_id: str,
    with_related: Optional[str] = None,
) -> Any:
    """Load one row by id, optionally with a child collection eagerly loaded."""
    stmt = select(model).where(model.id == entity_id)
    if with_related:
        stmt = stmt.options(selectinload(getattr(model, with_related)))
    result = await db.execute(stmt)
    entity = result.scalar_one_or_none()

    if not entity:
        raise EntityNotFound.for_entity(entity_name, entity_id)
    return entity


async def ensure_exists(
    db: AsyncSession, model: Type[Any], entity_name: str, entity_id: Optional[str]
) -> None:
    """Raise NOT_FOUND for a dangling parent reference; ``None`` is allowed."""
    if entity_id is None:
        return
    if await db.get(model, entity_id) is None:
        raise EntityNotFound.for_entity(entity_name, entity_id)


def check_create_payload(model: Type[Any], entity_name: str, body: Optional[Dict[str, Any]]) -> None:
    missing = missing_required_fields(model, body)
    if missing:
        raise RequestValidationFailed(
            f"Creating a {entity_name} requires the following mandatory fields: {', '.join(missing)}"
        )


def check_update_payload(model: Type[Any], entity_name: str, body: Optional[Dict[str, Any]]) -> None:
    if not body:
        raise RequestValidationFailed(EMPTY_BODY_MESSAGE)
    cleared = cleared_required_fields(model, body)
    if cleared:
        raise RequestValidationFailed(
            f"Updating a {entity_name} cannot clear the following mandatory fields: {', '.join(cleared)}"
        )


async def create(db: AsyncSession, model: Type[Any], values: Dict[str, Any]) -> Any:
    entity = model(**values)
    db.add(entity)
    await db.commit()
    await db.refresh(entity)
    return entity


async def update_by_id(
    db: AsyncSession,
    model: Type[Any],
    entity_name: str,
    entity_id: str,
    values: Dict[str, Any],
) -> tuple[int, Any]:
    """Apply a partial update and return ``(rows affected, reloaded entity)``."""
    if not values:
        raise RequestValidationFailed(EMPTY_BODY_MESSAGE)

    result = await db.execute(
        update(model)
        .where(model.id == entity_id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    affected = result.rowcount or 0
    if not affected:
        await db.rollback()
        raise EntityNotFound.for_entity(entity_name, entity_id)

    await db.commit()
    entity = await db.get(model, entity_id, populate_existing=True)
    logger.info(f"Updated {entity_name} {entity_id}: {sorted(values)}")
    return affected, entity


async def delete_by_id(db: AsyncSession, model: Type[Any], entity_name: str, entity_id: str) -> None:
    """Delete one row; the ORM cascades the delete to owned children."""
    entity = await db.get(model, entity_id)
    if entity is None:
        raise EntityNotFound.for_entity(entity_name, entity_id)

    await db.delete(entity)
    await db.commit()
    logger.info(f"Deleted {entity_name} {entity_id}")
