"""
Resume Pipeline - Upload → Extract → Analyze → Ledger

Flow:
    1. validate_document     (type / size)
    2. extraction client     (bounded by extraction_timeout_seconds)
    3. ensure_readable       (>= 10 characters of text)
    4. ResumeAnalyzer        (pure scoring)
    5. RatingLedger          (import skills, only when a user id is given)

Any failure aborts the whole flow; no partial analysis or invented
scores are returned.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from gigcampus.exceptions import ExtractionUnavailableError
from gigcampus.middleware.metrics import record_extraction_failure
from gigcampus.schemas.rating import UserRatingData
from gigcampus.schemas.resume import ResumeAnalysis
from gigcampus.services.rating_ledger import RatingLedger
from gigcampus.services.resume_analyzer import ResumeAnalyzer
from gigcampus.services.text_extraction import (
    Document,
    ExtractionClient,
    ensure_readable,
    validate_document,
)
from gigcampus.services.user_locks import UserLockRegistry

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    analysis: ResumeAnalysis
    rating_data: Optional[UserRatingData] = None


class ResumePipeline:
    """
    Orchestrates resume processing for the upload flow.

    Attributes:
        extractor: Text extraction backend
        analyzer: Resume scorer
        ledger: Rating ledger receiving imported skills
        locks: Per-user locks serializing ledger writes
        timeout_seconds: Upper bound for the extraction call
    """

    def __init__(
        self,
        extractor: ExtractionClient,
        analyzer: ResumeAnalyzer,
        ledger: RatingLedger,
        locks: UserLockRegistry,
        allowed_types: List[str],
        max_bytes: int,
        timeout_seconds: float = 60.0,
    ):
        self.extractor = extractor
        self.analyzer = analyzer
        self.ledger = ledger
        self.locks = locks
        self.allowed_types = allowed_types
        self.max_bytes = max_bytes
        self.timeout_seconds = timeout_seconds

    async def extract(self, document: Document) -> str:
        """Validate the document and return its readable text."""
        validate_document(document, self.allowed_types, self.max_bytes)

        try:
            result = await asyncio.wait_for(
                self.extractor.extract_text(document),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            record_extraction_failure("timeout")
            logger.warning(f"Text extraction timed out after {self.timeout_seconds}s")
            raise ExtractionUnavailableError(
                "Text extraction timed out. Please try again with a smaller or clearer file."
            ) from e

        return ensure_readable(result).text

    async def process(self, document: Document, user_id: Optional[str] = None) -> PipelineResult:
        """
        Run the full upload flow.

        Args:
            document: Uploaded resume
            user_id: When given, the extracted skills are imported into
                this user's rating ledger

        Returns:
            PipelineResult with the analysis and, for a user, the updated ledger
        """
        text = await self.extract(document)
        analysis = self.analyzer.analyze(text)

        if user_id is None:
            return PipelineResult(analysis=analysis)

        async with self.locks.hold(user_id):
            rating_data = await self.ledger.import_skills_from_resume(user_id, analysis.skills)

        logger.info(f"Processed resume {document.filename} for {user_id}")
        return PipelineResult(analysis=analysis, rating_data=rating_data)
