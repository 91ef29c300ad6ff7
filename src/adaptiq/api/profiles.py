"""Learner profile API endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_async_db
from ..logging_config import bind_user_context
from ..schemas.learner import LearnerProfileCreate, LearnerProfileResponse, LearnerProfileUpdate
from ..services.profile_service import ProfileService

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.post(
    "/{user_id}",
    response_model=LearnerProfileResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(bind_user_context)],
)
async def create_profile(
    user_id: str,
    profile_data: LearnerProfileCreate,
    db: AsyncSession = Depends(get_async_db)
) -> LearnerProfileResponse:
    """Create a learner profile."""
    record = await ProfileService(db).create_profile(user_id, profile_data)
    return LearnerProfileResponse.model_validate(record)


@router.get(
    "/{user_id}",
    response_model=LearnerProfileResponse,
    dependencies=[Depends(bind_user_context)],
)
async def get_profile(
    user_id: str,
    db: AsyncSession = Depends(get_async_db)
) -> LearnerProfileResponse:
    """Get a learner profile."""
    record = await ProfileService(db).require_profile_record(user_id)
    return LearnerProfileResponse.model_validate(record)


@router.patch(
    "/{user_id}",
    response_model=LearnerProfileResponse,
    dependencies=[Depends(bind_user_context)],
)
async def update_profile(
    user_id: str,
    updates: LearnerProfileUpdate,
    db: AsyncSession = Depends(get_async_db)
) -> LearnerProfileResponse:
    """Update parts of a learner profile."""
    record = await ProfileService(db).update_profile(user_id, updates)
    return LearnerProfileResponse.model_validate(record)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(bind_user_context)],
)
async def delete_profile(
    user_id: str,
    db: AsyncSession = Depends(get_async_db)
) -> Response:
    """Delete a learner profile."""
    await ProfileService(db).delete_profile(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
