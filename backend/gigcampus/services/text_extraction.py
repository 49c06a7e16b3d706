"""
Text Extraction - OCR.space client and extraction contract helpers

The resume analyzer only consumes plain text. This module is the boundary
to the external OCR service that produces it:

- Document / validate_document: upload checks (type, size)
- ExtractionClient: protocol every extraction backend implements
- OCRSpaceClient: httpx client for https://ocr.space
- categorize_keywords: word-boundary keyword hits grouped by category
- ensure_readable: rejects near-empty OCR output before analysis

The client has no timeout or retry of its own; callers bound the call
(see ResumePipeline) and decide whether to retry.

Usage:
    client = OCRSpaceClient(api_key=settings.ocr_space_api_key)
    result = await client.extract_text(Document("cv.pdf", "application/pdf", data))
    result.text, result.confidence, result.keywords.technical
"""

import base64
import logging
import re
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence

import httpx

from gigcampus.exceptions import (
    ExtractionUnavailableError,
    NoReadableTextError,
    UnsupportedDocumentError,
)
from gigcampus.middleware.metrics import record_extraction_failure, record_extraction_latency
from gigcampus.schemas.resume import BoundingBox, ExtractionResult, KeywordHits
from gigcampus.services.skill_catalog import (
    EDUCATION_KEYWORDS,
    EXPERIENCE_KEYWORDS,
    PROFESSIONAL_KEYWORDS,
    TECHNICAL_KEYWORDS,
)

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
MIN_READABLE_CHARS = 10


@dataclass
class Document:
    """
    An uploaded resume file.

    Attributes:
        filename: Original file name (informational only)
        content_type: MIME type reported by the uploader
        content: Raw file bytes
    """
    filename: str
    content_type: str
    content: bytes

    @property
    def kind(self) -> str:
        """'pdf' or 'image'; raises UnsupportedDocumentError otherwise."""
        if self.content_type == PDF_CONTENT_TYPE:
            return "pdf"
        if self.content_type.startswith("image/"):
            return "image"
        raise UnsupportedDocumentError(f"Unsupported file type for OCR: {self.content_type}")


def validate_document(document: Document, allowed_types: Sequence[str], max_bytes: int) -> None:
    """
    Check an upload before spending an OCR call on it.

    Raises:
        UnsupportedDocumentError: Wrong type, empty, or larger than max_bytes
    """
    if document.content_type not in allowed_types:
        raise UnsupportedDocumentError("Please upload a PDF, JPEG, or PNG file.")
    if not document.content:
        raise UnsupportedDocumentError("The uploaded file is empty.")
    if len(document.content) > max_bytes:
        raise UnsupportedDocumentError(
            f"File size must be less than {max_bytes // (1024 * 1024)}MB."
        )


def ensure_readable(result: ExtractionResult, min_chars: int = MIN_READABLE_CHARS) -> ExtractionResult:
    """Raise NoReadableTextError when the extracted text is near-empty."""
    if len(result.text.strip()) < min_chars:
        raise NoReadableTextError()
    return result


# ==============================================================================
# Keyword categorization
# ==============================================================================

_keyword_patterns: Dict[str, re.Pattern] = {}


def _keyword_pattern(keyword: str) -> re.Pattern:
    pattern = _keyword_patterns.get(keyword)
    if pattern is None:
        # Lookarounds instead of \b so "c++" and "c#" match before spaces
        pattern = re.compile(rf"(?<!\w){re.escape(keyword)}(?!\w)", re.IGNORECASE)
        _keyword_patterns[keyword] = pattern
    return pattern


def _find_keywords(text: str, keywords: List[str]) -> List[str]:
    return [keyword for keyword in keywords if _keyword_pattern(keyword).search(text)]


def categorize_keywords(text: str) -> KeywordHits:
    """
    Group keyword hits by category.

    Args:
        text: Extracted document text

    Returns:
        KeywordHits with per-category lists and a de-duplicated `all`
        (technical, professional, education, experience order)
    """
    technical = _find_keywords(text, TECHNICAL_KEYWORDS)
    professional = _find_keywords(text, PROFESSIONAL_KEYWORDS)
    education = _find_keywords(text, EDUCATION_KEYWORDS)
    experience = _find_keywords(text, EXPERIENCE_KEYWORDS)

    combined = list(dict.fromkeys(technical + professional + education + experience))
    return KeywordHits(
        technical=technical,
        professional=professional,
        education=education,
        experience=experience,
        all=combined,
    )


# ==============================================================================
# Extraction clients
# ==============================================================================

class ExtractionClient(Protocol):
    """Protocol for text extraction backends."""

    async def extract_text(self, document: Document) -> ExtractionResult:
        """Extract plain text, confidence and keyword hits from a document."""
        ...


class OCRSpaceClient:
    """
    OCR.space API client.

    Attributes:
        api_key: OCR.space API key
        api_url: Parse endpoint URL
        language: OCR language code (default: eng)
        engine: OCR engine number (default: 2)
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.ocr.space/parse/image",
        language: str = "eng",
        engine: int = 2,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the OCR client.

        Args:
            api_key: OCR.space API key
            api_url: Parse endpoint URL
            language: OCR language code
            engine: OCR engine number
            http_client: Optional shared httpx client (a short-lived one is
                created per call otherwise)
        """
        self.api_key = api_key
        self.api_url = api_url
        self.language = language
        self.engine = engine
        self.http_client = http_client

    def _build_form(self, document: Document) -> Dict[str, str]:
        encoded = base64.b64encode(document.content).decode("ascii")
        form = {
            "apikey": self.api_key,
            "base64Image": f"data:{document.content_type};base64,{encoded}",
            "language": self.language,
            "isOverlayRequired": "false",
            "detectOrientation": "true",
            "scale": "true",
            "OCREngine": str(self.engine),
        }
        if document.kind == "pdf":
            form["filetype"] = "PDF"
        return form

    async def _post(self, form: Dict[str, str]) -> httpx.Response:
        if self.http_client is not None:
            return await self.http_client.post(self.api_url, data=form)
        async with httpx.AsyncClient(timeout=None) as client:
            return await client.post(self.api_url, data=form)

    async def extract_text(self, document: Document) -> ExtractionResult:
        """
        Run OCR on a PDF or image.

        Raises:
            UnsupportedDocumentError: Document is neither PDF nor image
            ExtractionUnavailableError: Network failure, HTTP error status,
                malformed response or an OCR processing error
            NoReadableTextError: Fewer than 10 characters of text recovered
        """
        kind = document.kind
        form = self._build_form(document)
        start_time = time.perf_counter()

        try:
            response = await self._post(form)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            record_extraction_failure("unavailable")
            logger.error(f"OCR.space returned {e.response.status_code}: {e.response.text[:200]}")
            raise ExtractionUnavailableError(
                f"OCR service error: {e.response.status_code}. Please try again later."
            ) from e
        except httpx.HTTPError as e:
            record_extraction_failure("unavailable")
            logger.error(f"OCR.space request failed: {e}")
            raise ExtractionUnavailableError(
                "OCR service is currently unavailable. Please try again later or contact support."
            ) from e
        except ValueError as e:
            record_extraction_failure("unavailable")
            logger.error(f"OCR.space returned a non-JSON body: {e}")
            raise ExtractionUnavailableError("OCR service returned an invalid response.") from e
        finally:
            record_extraction_latency(kind, time.perf_counter() - start_time)

        # Rate-limit and quota notices arrive as a bare JSON string
        if not isinstance(data, dict):
            record_extraction_failure("unavailable")
            logger.warning(f"OCR.space returned a non-object body: {str(data)[:200]}")
            message = data if isinstance(data, str) and data else "OCR service returned an invalid response."
            raise ExtractionUnavailableError(message)

        if data.get("IsErroredOnProcessing"):
            record_extraction_failure("unavailable")
            message = data.get("ErrorMessage") or "OCR processing failed."
            if isinstance(message, list):
                message = " ".join(str(part) for part in message)
            logger.warning(f"OCR.space processing error for {document.filename}: {message}")
            raise ExtractionUnavailableError(message)

        parsed = (data.get("ParsedResults") or [{}])[0]
        text = parsed.get("ParsedText") or ""
        lines = (parsed.get("TextOverlay") or {}).get("Lines") or []

        result = ExtractionResult(
            text=text,
            confidence=0.9 if lines else 0.7,
            language="en",
            keywords=categorize_keywords(text),
            bounding_boxes=[
                BoundingBox(
                    text=line.get("LineText", ""),
                    x=line.get("MinLeft", 0),
                    y=line.get("MinTop", 0),
                    width=line.get("MaxRight", 0) - line.get("MinLeft", 0),
                    height=line.get("MaxBottom", 0) - line.get("MinTop", 0),
                )
                for line in lines
            ],
        )

        try:
            ensure_readable(result)
        except NoReadableTextError:
            record_extraction_failure("unreadable")
            raise

        logger.info(
            f"Extracted {len(text)} characters from {document.filename} "
            f"({len(result.keywords.all)} keywords)"
        )
        return result
