"""
Resume API - Analyze resume text or uploaded resume files.

Endpoints:
- POST /resume/analyze  plain text → ResumeAnalysis
- POST /resume/upload   PDF/JPEG/PNG → ResumeAnalysis (+ ledger update)
"""

from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile

from gigcampus.api.deps import (
    get_extraction_client,
    get_rating_ledger,
    get_resume_analyzer,
    get_user_locks,
)
from gigcampus.config import get_settings
from gigcampus.schemas import AnalyzeTextRequest, ResumeAnalysis, ResumeUploadResponse
from gigcampus.services.rating_ledger import RatingLedger
from gigcampus.services.resume_analyzer import ResumeAnalyzer
from gigcampus.services.resume_pipeline import ResumePipeline
from gigcampus.services.text_extraction import Document, ExtractionClient
from gigcampus.services.user_locks import UserLockRegistry

router = APIRouter()


def get_resume_pipeline(
    extractor: ExtractionClient = Depends(get_extraction_client),
    analyzer: ResumeAnalyzer = Depends(get_resume_analyzer),
    ledger: RatingLedger = Depends(get_rating_ledger),
    locks: UserLockRegistry = Depends(get_user_locks),
) -> ResumePipeline:
    settings = get_settings()
    return ResumePipeline(
        extractor=extractor,
        analyzer=analyzer,
        ledger=ledger,
        locks=locks,
        allowed_types=settings.allowed_upload_types,
        max_bytes=settings.max_upload_bytes,
        timeout_seconds=settings.extraction_timeout_seconds,
    )


@router.post("/analyze", response_model=ResumeAnalysis)
async def analyze_text(
    request: AnalyzeTextRequest,
    analyzer: ResumeAnalyzer = Depends(get_resume_analyzer),
):
    return analyzer.analyze(request.text)


@router.post("/upload", response_model=ResumeUploadResponse)
async def upload_resume(
    file: UploadFile = File(...),
    user_id: Optional[str] = Query(None, description="Import extracted skills for this user"),
    pipeline: ResumePipeline = Depends(get_resume_pipeline),
):
    document = Document(
        filename=file.filename or "resume",
        content_type=file.content_type or "application/octet-stream",
        content=await file.read(),
    )
    result = await pipeline.process(document, user_id=user_id)
    return ResumeUploadResponse(analysis=result.analysis, rating_data=result.rating_data)
