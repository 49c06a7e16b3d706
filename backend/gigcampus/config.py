from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/gigcampus.db"
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Rating ledger store: "sql", "redis" or "memory"
    rating_store: str = "sql"
    rating_key_prefix: str = "gigcampus_rating_data"

    # Redis configuration (used when rating_store=redis)
    redis_url: str = "redis://localhost:6379/0"

    # OCR.space text extraction
    ocr_space_api_key: str = ""
    ocr_space_url: str = "https://api.ocr.space/parse/image"
    ocr_language: str = "eng"
    ocr_engine: int = 2
    # Callers bound the extraction call, the client has no timeout of its own
    extraction_timeout_seconds: float = 60.0

    # Upload limits
    max_upload_bytes: int = 10 * 1024 * 1024
    allowed_upload_types: list[str] = ["application/pdf", "image/jpeg", "image/png"]

    # Minimum non-whitespace text accepted from extraction
    min_text_length: int = 10

    class Config:
        env_file = ".env"


@lru_cache
def get_settings() -> Settings:
    return Settings()
