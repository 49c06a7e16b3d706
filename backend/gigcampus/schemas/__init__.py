from gigcampus.schemas.resume import (
    AnalyzeTextRequest,
    BoundingBox,
    ExtractionResult,
    KeywordHits,
    ResumeAnalysis,
)
from gigcampus.schemas.rating import (
    ProjectOutcome,
    ProjectOutcomeRequest,
    RatingHistoryEntry,
    RatingReason,
    RatingStats,
    ResumeUploadResponse,
    SkillImportRequest,
    SkillRating,
    UserRatingData,
)

__all__ = [
    "AnalyzeTextRequest",
    "BoundingBox",
    "ExtractionResult",
    "KeywordHits",
    "ResumeAnalysis",
    "ProjectOutcome",
    "ProjectOutcomeRequest",
    "RatingHistoryEntry",
    "RatingReason",
    "RatingStats",
    "ResumeUploadResponse",
    "SkillImportRequest",
    "SkillRating",
    "UserRatingData",
]
