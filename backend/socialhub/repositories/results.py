"""
SocialHub Backend — Repository Write Outcomes
==============================================

What:  Explicit results for writes that can collide with a unique constraint.
How:   add_or_conflict() and assign_or_conflict() apply one write inside a
       SAVEPOINT. An IntegrityError rolls back to that savepoint only and is
       reported as CONFLICT instead of propagating; the surrounding
       transaction and its earlier writes are untouched.

The store's constraint decides. Callers do not pre-check existence before
inserting; two concurrent requests for the same username both INSERT and
the loser sees CONFLICT.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WriteOutcome(str, enum.Enum):
    CREATED = "created"
    UPDATED = "updated"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class WriteResult(Generic[T]):
    outcome: WriteOutcome
    entity: Optional[T] = None

    @property
    def conflict(self) -> bool:
        return self.outcome is WriteOutcome.CONFLICT

    @classmethod
    def created(cls, entity: T) -> "WriteResult[T]":
        return cls(WriteOutcome.CREATED, entity)

    @classmethod
    def updated(cls, entity: T) -> "WriteResult[T]":
        return cls(WriteOutcome.UPDATED, entity)

    @classmethod
    def conflicted(cls) -> "WriteResult[T]":
        return cls(WriteOutcome.CONFLICT, None)


async def _in_savepoint(session: AsyncSession, change: Callable[[], None]) -> bool:
    """
    Apply `change` inside a SAVEPOINT and flush it.

    begin_nested() flushes whatever is already pending before the SAVEPOINT,
    so the change must be applied inside the block to be the only thing
    undone. A constraint violation rolls back to the savepoint: the rejected
    row is expunged and earlier writes in the transaction survive.
    """
    try:
        async with session.begin_nested():
            change()
    except IntegrityError as e:
        logger.info("Write rejected by constraint: %s", type(e.orig).__name__)
        return False
    return True


async def add_or_conflict(session: AsyncSession, entity: Any) -> bool:
    """Insert `entity`; False when a unique constraint rejects it."""
    return await _in_savepoint(session, lambda: session.add(entity))


async def assign_or_conflict(session: AsyncSession, entity: Any, fields: Dict[str, Any]) -> bool:
    """Set `fields` on a persistent `entity`; False (and entity reloaded) on conflict."""

    def change() -> None:
        for name, value in fields.items():
            setattr(entity, name, value)

    if await _in_savepoint(session, change):
        return True
    # The rollback expired the rejected values; reload while awaiting is allowed
    await session.refresh(entity)
    return False
