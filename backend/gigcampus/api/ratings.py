"""
Ratings API - Read and update a user's skill rating ledger.

Mutating endpoints hold the per-user lock for the duration of the
ledger's read-modify-write cycle.
"""

from typing import List
from fastapi import APIRouter, Depends, Query, Response, status

from gigcampus.api.deps import get_rating_ledger, get_user_locks
from gigcampus.schemas import (
    ProjectOutcomeRequest,
    RatingStats,
    SkillImportRequest,
    SkillRating,
    UserRatingData,
)
from gigcampus.services.rating_ledger import RatingLedger
from gigcampus.services.user_locks import UserLockRegistry

router = APIRouter()


@router.get("/{user_id}", response_model=UserRatingData)
async def get_rating_data(
    user_id: str,
    ledger: RatingLedger = Depends(get_rating_ledger),
):
    return await ledger.get_rating_data(user_id)


@router.get("/{user_id}/stats", response_model=RatingStats)
async def get_rating_stats(
    user_id: str,
    ledger: RatingLedger = Depends(get_rating_ledger),
):
    return await ledger.get_stats(user_id)


@router.get("/{user_id}/top-skills", response_model=List[SkillRating])
async def get_top_skills(
    user_id: str,
    limit: int = Query(5, ge=1, le=100),
    ledger: RatingLedger = Depends(get_rating_ledger),
):
    return await ledger.get_top_skills(user_id, limit)


@router.post("/{user_id}/skills", response_model=UserRatingData)
async def import_skills(
    user_id: str,
    request: SkillImportRequest,
    ledger: RatingLedger = Depends(get_rating_ledger),
    locks: UserLockRegistry = Depends(get_user_locks),
):
    async with locks.hold(user_id):
        return await ledger.import_skills_from_resume(user_id, request.skills)


@router.post("/{user_id}/projects", response_model=UserRatingData)
async def record_project_outcome(
    user_id: str,
    request: ProjectOutcomeRequest,
    ledger: RatingLedger = Depends(get_rating_ledger),
    locks: UserLockRegistry = Depends(get_user_locks),
):
    async with locks.hold(user_id):
        return await ledger.record_project_outcome(user_id, request.outcome, request.skills)


@router.delete("/{user_id}/history", response_model=UserRatingData)
async def clear_history(
    user_id: str,
    ledger: RatingLedger = Depends(get_rating_ledger),
    locks: UserLockRegistry = Depends(get_user_locks),
):
    async with locks.hold(user_id):
        return await ledger.clear_history(user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rating_data(
    user_id: str,
    ledger: RatingLedger = Depends(get_rating_ledger),
    locks: UserLockRegistry = Depends(get_user_locks),
):
    async with locks.hold(user_id):
        await ledger.delete_all(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
