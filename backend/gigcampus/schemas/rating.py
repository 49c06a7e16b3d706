from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from gigcampus.schemas.resume import ResumeAnalysis


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RatingReason(str, Enum):
    PROJECT_COMPLETED = "project_completed"
    PROJECT_FAILED = "project_failed"
    SKILL_IMPROVEMENT = "skill_improvement"
    RESUME_UPLOAD = "resume_upload"


class ProjectOutcome(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


class SkillRating(BaseModel):
    skill: str
    rating: float = Field(0.0, ge=0.0, le=5.0)
    projects_completed: int = Field(0, ge=0)
    projects_failed: int = Field(0, ge=0)
    last_updated: datetime = Field(default_factory=utcnow)


class RatingHistoryEntry(BaseModel):
    id: str
    user_id: str
    change: float
    reason: RatingReason
    description: str
    timestamp: datetime = Field(default_factory=utcnow)


class UserRatingData(BaseModel):
    """
    Per-user rating ledger record.

    skills keeps insertion order; identity is the lower-cased skill name.
    overall_rating is derived from the skill ratings and recomputed by
    every ledger mutation.
    """
    overall_rating: float = 0.0
    skills: List[SkillRating] = Field(default_factory=list)
    rating_history: List[RatingHistoryEntry] = Field(default_factory=list)
    total_projects_completed: int = Field(0, ge=0)
    total_projects_failed: int = Field(0, ge=0)
    last_updated: datetime = Field(default_factory=utcnow)

    def find_skill(self, name: str) -> Optional[SkillRating]:
        key = name.lower()
        for skill in self.skills:
            if skill.skill.lower() == key:
                return skill
        return None


class RatingStats(BaseModel):
    overall_rating: float
    total_skills: int
    total_projects_completed: int
    total_projects_failed: int
    success_rate: float
    skill_level: str
    top_skills: List[SkillRating]


class SkillImportRequest(BaseModel):
    skills: List[str] = Field(..., description="Skill names extracted from a resume")


class ProjectOutcomeRequest(BaseModel):
    outcome: ProjectOutcome
    skills: List[str] = Field(default_factory=list)


class ResumeUploadResponse(BaseModel):
    analysis: ResumeAnalysis
    rating_data: Optional[UserRatingData] = None
