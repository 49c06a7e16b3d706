"""
Shared service instances for FastAPI dependency injection.

Services are stateless apart from the repository connection and the
per-user lock registry, so one instance of each is reused across
requests. Tests swap them out with app.dependency_overrides.
"""

import logging
from typing import Optional

from gigcampus.config import get_settings
from gigcampus.services.rating_ledger import RatingLedger
from gigcampus.services.rating_repository import get_rating_repository
from gigcampus.services.resume_analyzer import ResumeAnalyzer
from gigcampus.services.resume_pipeline import ResumePipeline
from gigcampus.services.text_extraction import ExtractionClient, OCRSpaceClient
from gigcampus.services.user_locks import UserLockRegistry

logger = logging.getLogger(__name__)

_user_locks = UserLockRegistry()
_extraction_client: Optional[ExtractionClient] = None


def get_user_locks() -> UserLockRegistry:
    return _user_locks


def get_rating_ledger() -> RatingLedger:
    return RatingLedger(get_rating_repository())


def get_resume_analyzer() -> ResumeAnalyzer:
    return ResumeAnalyzer(min_text_length=get_settings().min_text_length)


def get_extraction_client() -> ExtractionClient:
    """Get the shared OCR.space client."""
    global _extraction_client
    if _extraction_client is None:
        settings = get_settings()
        if not settings.ocr_space_api_key:
            logger.warning("OCR_SPACE_API_KEY is not set, uploads will fail at the OCR service")
        _extraction_client = OCRSpaceClient(
            api_key=settings.ocr_space_api_key,
            api_url=settings.ocr_space_url,
            language=settings.ocr_language,
            engine=settings.ocr_engine,
        )
    return _extraction_client
