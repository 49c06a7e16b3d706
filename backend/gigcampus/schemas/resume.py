from pydantic import BaseModel, Field
from typing import List


class KeywordHits(BaseModel):
    technical: List[str] = Field(default_factory=list)
    professional: List[str] = Field(default_factory=list)
    education: List[str] = Field(default_factory=list)
    experience: List[str] = Field(default_factory=list)
    all: List[str] = Field(default_factory=list)


class BoundingBox(BaseModel):
    text: str
    x: float
    y: float
    width: float
    height: float


class ExtractionResult(BaseModel):
    """Output contract of the text extraction collaborator."""
    text: str
    confidence: float
    language: str = "en"
    keywords: KeywordHits = Field(default_factory=KeywordHits)
    bounding_boxes: List[BoundingBox] = Field(default_factory=list)


class ResumeAnalysis(BaseModel):
    """
    Structured result of analyzing one resume.

    All four ratings lie on the 100-3000 scale. overall_rating is the
    rounded mean of the other three at construction time.
    """
    extracted_text: str
    skills: List[str]
    experience: List[str]
    education: List[str]
    overall_rating: int = Field(..., ge=100, le=3000)
    skill_rating: int = Field(..., ge=100, le=3000)
    experience_rating: int = Field(..., ge=100, le=3000)
    education_rating: int = Field(..., ge=100, le=3000)
    suggestions: List[str] = Field(default_factory=list, max_length=5)
    confidence: float
    summary: str
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    industry_fit: List[str] = Field(default_factory=list)
    keyword_matches: int
    technical_depth: int = Field(..., ge=0, le=1000)
    professional_level: int = Field(..., ge=0, le=1000)


class AnalyzeTextRequest(BaseModel):
    text: str = Field(..., description="Plain resume text to analyze")
