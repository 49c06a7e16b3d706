"""
Rating Ledger - Per-User Skill Ratings, Counters and History

Owns the UserRatingData record for each user and applies the events that
change it: skills imported from a resume, and projects that completed,
failed or were cancelled.

Rating Rules:
    - Skill ratings live on a 0.0-5.0 scale
    - Resume import adds unseen skills at 0.0 (case-insensitive identity)
    - Project success: +min(0.5, 5.0 - rating) per known skill,
      unknown skills are created at 1.0
    - Project failure: -min(0.3, rating) per known skill,
      unknown skills are ignored
    - Project cancellation: like failure with a 0.2 step, counted as a
      failure and logged with the project_failed reason
    - overall_rating = mean of skill ratings rounded to 1 decimal (0 if none)

Every mutation appends exactly one history entry and recomputes all
derived fields before the single write-back, so a failed write leaves
the stored record untouched.

Concurrency:
    The ledger does read-modify-write without locking. Callers must
    serialize mutations per user id (see UserLockRegistry).

Usage:
    ledger = RatingLedger(InMemoryRatingRepository())
    await ledger.import_skills_from_resume("user-1", ["Python", "React"])
    await ledger.record_project_success("user-1", ["React"])
    stats = await ledger.get_stats("user-1")
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

from gigcampus.middleware.metrics import record_ledger_mutation
from gigcampus.schemas.rating import (
    ProjectOutcome,
    RatingHistoryEntry,
    RatingReason,
    RatingStats,
    SkillRating,
    UserRatingData,
    utcnow,
)
from gigcampus.services.rating_repository import RatingRepository
from gigcampus.services.rounding import round_half_up

logger = logging.getLogger(__name__)

MAX_SKILL_RATING = 5.0
NEW_PROJECT_SKILL_RATING = 1.0
SUCCESS_STEP = 0.5
FAILURE_STEP = 0.3
CANCELLATION_STEP = 0.2
TOP_SKILLS_IN_STATS = 3


# ==============================================================================
# Derived values
# ==============================================================================

def calculate_overall_rating(skills: List[SkillRating]) -> float:
    if not skills:
        return 0.0
    return round_half_up(sum(skill.rating for skill in skills) / len(skills), 1)


def calculate_success_rate(completed: int, failed: int) -> float:
    total = completed + failed
    if total == 0:
        return 0.0
    return round_half_up(completed / total * 100, 1)


def calculate_skill_level(overall_rating: float, projects_completed: int) -> str:
    """Map overall rating and completed project count to a coarse level."""
    if projects_completed == 0 or overall_rating < 2:
        return "Novice"
    if projects_completed < 5 or overall_rating < 3:
        return "Intermediate"
    if projects_completed < 15 or overall_rating < 4:
        return "Advanced"
    return "Expert"


def top_skills(data: UserRatingData, limit: int) -> List[SkillRating]:
    """Highest rated skills first; equal ratings keep insertion order."""
    ranked = sorted(data.skills, key=lambda skill: skill.rating, reverse=True)
    return ranked[:max(0, limit)]


# ==============================================================================
# Pure mutations (return an updated copy, never touch storage)
# ==============================================================================

def _finish(
    data: UserRatingData,
    user_id: str,
    change: float,
    reason: RatingReason,
    description: str,
    now: datetime,
) -> UserRatingData:
    data.overall_rating = calculate_overall_rating(data.skills)
    data.last_updated = now
    data.rating_history.append(
        RatingHistoryEntry(
            id=uuid.uuid4().hex,
            user_id=user_id,
            change=change,
            reason=reason,
            description=description,
            timestamp=now,
        )
    )
    return data


def apply_resume_skills(
    data: UserRatingData,
    user_id: str,
    skills: List[str],
    now: Optional[datetime] = None,
) -> UserRatingData:
    now = now or utcnow()
    updated = data.model_copy(deep=True)

    for name in skills:
        if updated.find_skill(name) is None:
            updated.skills.append(SkillRating(skill=name, rating=0.0, last_updated=now))

    return _finish(
        updated,
        user_id,
        0.0,
        RatingReason.RESUME_UPLOAD,
        f"Skills extracted from resume: {', '.join(skills)}",
        now,
    )


def apply_project_success(
    data: UserRatingData,
    user_id: str,
    project_skills: List[str],
    now: Optional[datetime] = None,
) -> UserRatingData:
    now = now or utcnow()
    updated = data.model_copy(deep=True)
    total_increase = 0.0

    for name in project_skills:
        skill = updated.find_skill(name)
        if skill is None:
            updated.skills.append(
                SkillRating(
                    skill=name,
                    rating=NEW_PROJECT_SKILL_RATING,
                    projects_completed=1,
                    last_updated=now,
                )
            )
            total_increase += NEW_PROJECT_SKILL_RATING
            continue

        increase = max(0.0, min(SUCCESS_STEP, MAX_SKILL_RATING - skill.rating))
        skill.rating = min(MAX_SKILL_RATING, skill.rating + increase)
        skill.projects_completed += 1
        skill.last_updated = now
        total_increase += increase

    updated.total_projects_completed += 1
    return _finish(
        updated,
        user_id,
        total_increase,
        RatingReason.PROJECT_COMPLETED,
        f"Project completed successfully. Skills: {', '.join(project_skills)}",
        now,
    )


def _apply_setback(
    data: UserRatingData,
    user_id: str,
    project_skills: List[str],
    step: float,
    description: str,
    now: Optional[datetime],
) -> UserRatingData:
    now = now or utcnow()
    updated = data.model_copy(deep=True)
    total_decrease = 0.0

    for name in project_skills:
        skill = updated.find_skill(name)
        if skill is None:
            continue

        decrease = max(0.0, min(step, skill.rating))
        skill.rating = max(0.0, skill.rating - decrease)
        skill.projects_failed += 1
        skill.last_updated = now
        total_decrease += decrease

    updated.total_projects_failed += 1
    return _finish(
        updated,
        user_id,
        -total_decrease,
        RatingReason.PROJECT_FAILED,
        description,
        now,
    )


def apply_project_failure(
    data: UserRatingData,
    user_id: str,
    project_skills: List[str],
    now: Optional[datetime] = None,
) -> UserRatingData:
    return _apply_setback(
        data,
        user_id,
        project_skills,
        FAILURE_STEP,
        f"Project failed. Skills: {', '.join(project_skills)}",
        now,
    )


def apply_project_cancellation(
    data: UserRatingData,
    user_id: str,
    project_skills: List[str],
    now: Optional[datetime] = None,
) -> UserRatingData:
    # Logged as project_failed; stored history has no cancelled reason
    return _apply_setback(
        data,
        user_id,
        project_skills,
        CANCELLATION_STEP,
        f"Project cancelled. Skills: {', '.join(project_skills)}",
        now,
    )


def apply_clear_history(data: UserRatingData, now: Optional[datetime] = None) -> UserRatingData:
    updated = data.model_copy(deep=True)
    updated.rating_history = []
    updated.last_updated = now or utcnow()
    return updated


# ==============================================================================
# Ledger service
# ==============================================================================

class RatingLedger:
    """
    Read-modify-write service over a RatingRepository.

    Missing users are treated as the zero-state record and materialized
    on their first mutation. Repository errors (PersistenceError)
    propagate to the caller.

    Attributes:
        repository: Keyed store holding one UserRatingData per user
    """

    def __init__(self, repository: RatingRepository):
        self.repository = repository

    async def get_rating_data(self, user_id: str) -> UserRatingData:
        """Return the user's ledger, or an unsaved zero-state record."""
        data = await self.repository.get(user_id)
        return data if data is not None else UserRatingData()

    async def _commit(self, user_id: str, operation: str, updated: UserRatingData) -> UserRatingData:
        await self.repository.put(user_id, updated)
        record_ledger_mutation(operation)
        change = updated.rating_history[-1].change if updated.rating_history else 0.0
        logger.info(
            f"Rating ledger {operation} for {user_id}: change {change:+.2f}, "
            f"overall {updated.overall_rating}"
        )
        return updated

    async def import_skills_from_resume(self, user_id: str, skills: List[str]) -> UserRatingData:
        """Add unseen skills at 0.0 and log a resume_upload entry."""
        current = await self.get_rating_data(user_id)
        updated = apply_resume_skills(current, user_id, skills)
        return await self._commit(user_id, "resume_upload", updated)

    async def record_project_success(self, user_id: str, project_skills: List[str]) -> UserRatingData:
        current = await self.get_rating_data(user_id)
        updated = apply_project_success(current, user_id, project_skills)
        return await self._commit(user_id, "project_completed", updated)

    async def record_project_failure(self, user_id: str, project_skills: List[str]) -> UserRatingData:
        current = await self.get_rating_data(user_id)
        updated = apply_project_failure(current, user_id, project_skills)
        return await self._commit(user_id, "project_failed", updated)

    async def record_project_cancellation(self, user_id: str, project_skills: List[str]) -> UserRatingData:
        current = await self.get_rating_data(user_id)
        updated = apply_project_cancellation(current, user_id, project_skills)
        return await self._commit(user_id, "project_cancelled", updated)

    async def record_project_outcome(
        self,
        user_id: str,
        outcome: ProjectOutcome,
        project_skills: List[str],
    ) -> UserRatingData:
        """Dispatch a project lifecycle event to the matching rule."""
        if outcome == ProjectOutcome.COMPLETED:
            return await self.record_project_success(user_id, project_skills)
        if outcome == ProjectOutcome.FAILED:
            return await self.record_project_failure(user_id, project_skills)
        return await self.record_project_cancellation(user_id, project_skills)

    async def get_top_skills(self, user_id: str, limit: int = 5) -> List[SkillRating]:
        data = await self.get_rating_data(user_id)
        return top_skills(data, limit)

    async def get_stats(self, user_id: str) -> RatingStats:
        data = await self.get_rating_data(user_id)
        return RatingStats(
            overall_rating=data.overall_rating,
            total_skills=len(data.skills),
            total_projects_completed=data.total_projects_completed,
            total_projects_failed=data.total_projects_failed,
            success_rate=calculate_success_rate(
                data.total_projects_completed, data.total_projects_failed
            ),
            skill_level=calculate_skill_level(data.overall_rating, data.total_projects_completed),
            top_skills=top_skills(data, TOP_SKILLS_IN_STATS),
        )

    async def clear_history(self, user_id: str) -> UserRatingData:
        """Empty the history log, keeping skills and counters."""
        current = await self.get_rating_data(user_id)
        updated = apply_clear_history(current)
        await self.repository.put(user_id, updated)
        record_ledger_mutation("clear_history")
        logger.info(f"Cleared rating history for {user_id}")
        return updated

    async def delete_all(self, user_id: str) -> None:
        """Remove the user's ledger entirely."""
        await self.repository.delete(user_id)
        record_ledger_mutation("delete_all")
        logger.info(f"Deleted rating data for {user_id}")
