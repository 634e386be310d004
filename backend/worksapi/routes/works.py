"""
Works API - Works Route Handlers
=================================

What:  GET/POST /api/works and GET/PUT/DELETE /api/works/{work_id}.
How:   Each handler pulls the body/path values, calls WorkService, and shapes
       the JSON response. Store failures are caught here, logged with the
       request id, and re-raised as OperationFailedError with a fixed
       message; NotFoundError passes through to the 404 handler.

Responses (all successes are 200):
    GET    /api/works        → [Work, ...]
    GET    /api/works/{id}   → Work, or null when the id is not stored
    POST   /api/works        → {"message": "new work created", "newWork": Work}
    PUT    /api/works/{id}   → Work as it was before the update
    DELETE /api/works/{id}   → {"message": "work deleted", "work": Work}
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from worksapi.database import get_db_session
from worksapi.exceptions import NotFoundError, OperationFailedError, WorksAPIError
from worksapi.middleware.request_id import request_id_var
from worksapi.schemas.work import (
    MessageResponse,
    WorkCreatedResponse,
    WorkDeletedResponse,
    WorkPayload,
    WorkResponse,
)
from worksapi.services.work_service import work_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Works"])

# Fixed client message per endpoint when its operation fails; also used by
# the request-validation handler in main.py for unparseable bodies
FAILURE_MESSAGES = {
    "create_work": "unable to create new work",
    "update_work": "unable to update work",
    "delete_work": "unable to delete work",
}


def _operation_failed(message: str, exc: WorksAPIError) -> OperationFailedError:
    rid = request_id_var.get("")
    logger.error("[%s] %s: %s | Context: %s", rid, message, exc.message, exc.context)
    return OperationFailedError(
        message=message,
        context={"error_type": type(exc).__name__, **exc.context},
    )


@router.get(
    "/works",
    response_model=List[WorkResponse],
    summary="Get all works",
    responses={200: {"description": "The list of the works"}},
)
async def list_works(db: AsyncSession = Depends(get_db_session)) -> List[WorkResponse]:
    return await work_service.find_all(db)


@router.get(
    "/works/{work_id}",
    response_model=Optional[WorkResponse],
    summary="Get the work by id",
    responses={
        200: {"description": "The work with this id, or null if it is not stored"},
        500: {"description": "Malformed id or server error", "model": MessageResponse},
    },
)
async def get_work(
    work_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Optional[WorkResponse]:
    """
    Get a single work.

    A well-formed id that matches nothing answers 200 with a null body.
    """
    return await work_service.find_by_id(db, work_id)


@router.post(
    "/works",
    response_model=WorkCreatedResponse,
    summary="Create a new work",
    responses={
        200: {"description": "The work was successfully created"},
        500: {"description": "Some server error", "model": MessageResponse},
    },
)
async def create_work(
    payload: Optional[WorkPayload] = None,
    db: AsyncSession = Depends(get_db_session),
) -> WorkCreatedResponse:
    payload = payload or WorkPayload()
    try:
        work = await work_service.create(db, payload.title, payload.description)
    except WorksAPIError as e:
        raise _operation_failed(FAILURE_MESSAGES["create_work"], e)
    return WorkCreatedResponse(message="new work created", new_work=work)


@router.put(
    "/works/{work_id}",
    response_model=WorkResponse,
    summary="Update the work by id",
    responses={
        200: {"description": "The work as it was before the update"},
        404: {"description": "The work was not found", "model": MessageResponse},
        500: {"description": "Some server error", "model": MessageResponse},
    },
)
async def update_work(
    work_id: str,
    payload: Optional[WorkPayload] = None,
    db: AsyncSession = Depends(get_db_session),
) -> WorkResponse:
    """
    Update title and/or description.

    The response body is the stored work read before the change; fetch the
    work again to see the new values.
    """
    payload = payload or WorkPayload()
    try:
        return await work_service.update_by_id(
            db, work_id, payload.title, payload.description
        )
    except NotFoundError:
        raise
    except WorksAPIError as e:
        raise _operation_failed(FAILURE_MESSAGES["update_work"], e)


@router.delete(
    "/works/{work_id}",
    response_model=WorkDeletedResponse,
    summary="Remove the work by id",
    responses={
        200: {"description": "The work was deleted"},
        404: {"description": "The work was not found", "model": MessageResponse},
        500: {"description": "Some server error", "model": MessageResponse},
    },
)
async def delete_work(
    work_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> WorkDeletedResponse:
    try:
        work = await work_service.delete_by_id(db, work_id)
    except NotFoundError:
        raise
    except WorksAPIError as e:
        raise _operation_failed(FAILURE_MESSAGES["delete_work"], e)
    return WorkDeletedResponse(message="work deleted", work=work)
