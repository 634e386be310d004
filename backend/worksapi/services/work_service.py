"""
Works API - Work Service (Storage Operations)
==============================================

What:  The five storage operations behind the works router.
How:   Each method receives the request's AsyncSession, runs its query, and
       returns pydantic WorkResponse snapshots (never live ORM objects).
Who:   Called by the route handlers in routes/works.py.

Operations:
    find_all()                          → List[WorkResponse], insertion order (id breaks ties)
    find_by_id(id)                      → WorkResponse | None
    create(title, description)          → WorkResponse (new id)
    update_by_id(id, title, description) → WorkResponse as it was BEFORE the update
    delete_by_id(id)                    → WorkResponse as it was before removal

Error Handling Strategy:
    ValidationError, NotFoundError and MalformedIdentifierError are raised
    as-is. Any SQLAlchemy failure is wrapped in DatabaseError; the original
    error type goes into the context for logging.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from worksapi.exceptions import (
    DatabaseError,
    MalformedIdentifierError,
    NotFoundError,
    ValidationError,
)
from worksapi.models.work import Work
from worksapi.schemas.work import WorkResponse

logger = logging.getLogger(__name__)


def parse_work_id(work_id: str) -> uuid.UUID:
    """Convert a path id into a UUID or raise MalformedIdentifierError."""
    try:
        return uuid.UUID(str(work_id))
    except (ValueError, TypeError, AttributeError):
        raise MalformedIdentifierError(identifier=str(work_id))


def _require(field: str, value: Optional[str]) -> str:
    if value is None or value == "":
        raise ValidationError(message=f"Path `{field}` is required.", field=field)
    return value


class WorkService:
    """
    Storage layer for work items.

    Stateless: every call gets the session it should use, so one instance
    serves all requests.
    """

    async def find_all(self, db: AsyncSession) -> List[WorkResponse]:
        try:
            result = await db.execute(
                select(Work).order_by(Work.created_at.asc(), Work.id.asc())
            )
            works = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing works: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve works.",
                context={"error_type": type(e).__name__},
            )
        return [WorkResponse.model_validate(work) for work in works]

    async def find_by_id(self, db: AsyncSession, work_id: str) -> Optional[WorkResponse]:
        """
        Fetch one work.

        Returns None for a well-formed id that is not stored; a malformed id
        raises MalformedIdentifierError before any query is sent.
        """
        work = await self._get(db, parse_work_id(work_id))
        if work is None:
            return None
        return WorkResponse.model_validate(work)

    async def create(
        self,
        db: AsyncSession,
        title: Optional[str],
        description: Optional[str],
    ) -> WorkResponse:
        """
        Persist a new work.

        Raises:
            ValidationError: title or description missing or empty
            DatabaseError: insert failed
        """
        work = Work(
            title=_require("title", title),
            description=_require("description", description),
        )
        try:
            db.add(work)
            await db.flush()  # assigns defaults (id, created_at)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating work: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the work.",
                context={"error_type": type(e).__name__},
            )
        logger.info("Work created: %s", work.id)
        return WorkResponse.model_validate(work)

    async def update_by_id(
        self,
        db: AsyncSession,
        work_id: str,
        title: Optional[str],
        description: Optional[str],
    ) -> WorkResponse:
        """
        Replace title/description of an existing work.

        Fields passed as None are left untouched. The returned snapshot is
        the work as it was read before the update was applied.

        Raises:
            NotFoundError: no work with this id
            MalformedIdentifierError: id is not a UUID
            DatabaseError: update failed
        """
        work = await self._get(db, parse_work_id(work_id))
        if work is None:
            raise NotFoundError(resource="work", resource_id=str(work_id))

        previous = WorkResponse.model_validate(work)

        if title is not None:
            work.title = title
        if description is not None:
            work.description = description

        try:
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating work %s: %s", work_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the work.",
                context={"work_id": str(work_id), "error_type": type(e).__name__},
            )
        logger.info("Work updated: %s", previous.id)
        return previous

    async def delete_by_id(self, db: AsyncSession, work_id: str) -> WorkResponse:
        """
        Remove a work and return what was removed.

        Raises:
            NotFoundError: no work with this id
            MalformedIdentifierError: id is not a UUID
            DatabaseError: delete failed
        """
        work = await self._get(db, parse_work_id(work_id))
        if work is None:
            raise NotFoundError(resource="work", resource_id=str(work_id))

        removed = WorkResponse.model_validate(work)
        try:
            await db.delete(work)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting work %s: %s", work_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the work.",
                context={"work_id": str(work_id), "error_type": type(e).__name__},
            )
        logger.info("Work deleted: %s", removed.id)
        return removed

    async def _get(self, db: AsyncSession, work_uuid: uuid.UUID) -> Optional[Work]:
        try:
            result = await db.execute(select(Work).where(Work.id == work_uuid))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching work %s: %s", work_uuid, str(e))
            raise DatabaseError(
                message="Could not retrieve the work.",
                context={"work_id": str(work_uuid), "error_type": type(e).__name__},
            )


work_service = WorkService()
