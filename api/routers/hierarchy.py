"""
Program hierarchy router.

This router exposes the cascade engine:
- Delete previews (descendant counts) for weeks, workouts and exercises
- Cascade deletes for weeks, workouts and exercises
- Week duplication
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_cascade_service, get_current_user
from application.exceptions import (
    BatchCommitError,
    DocumentNotFoundError,
    PermissionDeniedError,
    StoreError,
    WeekDuplicationError,
)
from models.cascade import (
    CascadeDeletePreview,
    CascadeDeleteResponse,
    DuplicateWeekResponse,
)
from models.hierarchy import DocumentRef
from services.hierarchy_service import HierarchyCascadeService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/programs/{program_id}/weeks/{week_id}",
    tags=["Hierarchy"],
)

WORKOUT_PATH = "/workouts/{workout_id}"
EXERCISE_PATH = "/workouts/{workout_id}/exercises/{exercise_id}"


# =============================================================================
# Error Translation
# =============================================================================


def _to_http_error(error: Exception) -> HTTPException:
    """
    Map cascade engine errors to HTTP errors.

    Commit failures report whether earlier batches already landed so the
    client can tell "nothing happened" from "partially completed".
    """
    if isinstance(error, PermissionDeniedError):
        return HTTPException(status_code=403, detail=str(error))
    if isinstance(error, DocumentNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, BatchCommitError):
        detail = {
            "message": str(error),
            "partial": error.partial,
            "committed_batches": error.committed_batches,
            "total_batches": error.total_batches,
        }
        if isinstance(error, WeekDuplicationError) and error.new_week is not None:
            detail["new_week_id"] = error.new_week.id
        return HTTPException(status_code=500, detail=detail)
    if isinstance(error, StoreError):
        return HTTPException(status_code=503, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


async def _preview(
    scope: DocumentRef,
    user_id: str,
    service: HierarchyCascadeService,
) -> CascadeDeletePreview:
    counts = await service.get_cascade_delete_counts(scope, user_id)
    return CascadeDeletePreview(counts=counts, summary=counts.summary())


async def _delete(
    scope: DocumentRef,
    user_id: str,
    service: HierarchyCascadeService,
) -> CascadeDeleteResponse:
    logger.info(f"Cascade delete of {scope} requested by {user_id}")
    try:
        result = await service.delete_cascade(scope, user_id)
    except (PermissionDeniedError, StoreError) as e:
        raise _to_http_error(e) from e
    return result.to_response()


# =============================================================================
# Delete Previews
# =============================================================================


@router.get("/delete-preview", response_model=CascadeDeletePreview)
async def preview_week_delete(
    program_id: str,
    week_id: str,
    user_id: str = Depends(get_current_user),
    service: HierarchyCascadeService = Depends(get_cascade_service),
) -> CascadeDeletePreview:
    """Count the workouts, exercises and sets deleting a week would remove."""
    return await _preview(DocumentRef.week(program_id, week_id), user_id, service)


@router.get(f"{WORKOUT_PATH}/delete-preview", response_model=CascadeDeletePreview)
async def preview_workout_delete(
    program_id: str,
    week_id: str,
    workout_id: str,
    user_id: str = Depends(get_current_user),
    service: HierarchyCascadeService = Depends(get_cascade_service),
) -> CascadeDeletePreview:
    """Count the exercises and sets deleting a workout would remove."""
    scope = DocumentRef.workout(program_id, week_id, workout_id)
    return await _preview(scope, user_id, service)


@router.get(f"{EXERCISE_PATH}/delete-preview", response_model=CascadeDeletePreview)
async def preview_exercise_delete(
    program_id: str,
    week_id: str,
    workout_id: str,
    exercise_id: str,
    user_id: str = Depends(get_current_user),
    service: HierarchyCascadeService = Depends(get_cascade_service),
) -> CascadeDeletePreview:
    """Count the sets deleting an exercise would remove."""
    scope = DocumentRef.exercise(program_id, week_id, workout_id, exercise_id)
    return await _preview(scope, user_id, service)


# =============================================================================
# Cascade Deletes
# =============================================================================


@router.delete("", response_model=CascadeDeleteResponse)
async def delete_week(
    program_id: str,
    week_id: str,
    user_id: str = Depends(get_current_user),
    service: HierarchyCascadeService = Depends(get_cascade_service),
) -> CascadeDeleteResponse:
    """
    Delete a week with all of its workouts, exercises and sets.

    Safe to retry after a failure.
    """
    return await _delete(DocumentRef.week(program_id, week_id), user_id, service)


@router.delete(WORKOUT_PATH, response_model=CascadeDeleteResponse)
async def delete_workout(
    program_id: str,
    week_id: str,
    workout_id: str,
    user_id: str = Depends(get_current_user),
    service: HierarchyCascadeService = Depends(get_cascade_service),
) -> CascadeDeleteResponse:
    """Delete a workout with all of its exercises and sets."""
    scope = DocumentRef.workout(program_id, week_id, workout_id)
    return await _delete(scope, user_id, service)


@router.delete(EXERCISE_PATH, response_model=CascadeDeleteResponse)
async def delete_exercise(
    program_id: str,
    week_id: str,
    workout_id: str,
    exercise_id: str,
    user_id: str = Depends(get_current_user),
    service: HierarchyCascadeService = Depends(get_cascade_service),
) -> CascadeDeleteResponse:
    """Delete an exercise with all of its sets."""
    scope = DocumentRef.exercise(program_id, week_id, workout_id, exercise_id)
    return await _delete(scope, user_id, service)


# =============================================================================
# Duplication
# =============================================================================


@router.post("/duplicate", response_model=DuplicateWeekResponse, status_code=201)
async def duplicate_week(
    program_id: str,
    week_id: str,
    user_id: str = Depends(get_current_user),
    service: HierarchyCascadeService = Depends(get_cascade_service),
) -> DuplicateWeekResponse:
    """
    Duplicate a week with all of its workouts, exercises and sets.

    The copy is named "<name> Copy <N>". Do not retry blindly on failure:
    a retry creates a second copy.
    """
    week = DocumentRef.week(program_id, week_id)
    logger.info(f"Duplication of {week} requested by {user_id}")
    try:
        result = await service.duplicate_week(week, user_id)
    except (PermissionDeniedError, DocumentNotFoundError, StoreError) as e:
        raise _to_http_error(e) from e
    return result.to_response()
