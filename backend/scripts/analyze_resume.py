#!/usr/bin/env python3
"""
Resume Analysis Script

Scores a plain-text resume with the same analyzer the API uses and prints
the ResumeAnalysis as JSON. Optionally imports the extracted skills into
the configured rating store for a user.

Usage:
    # Analyze a resume
    python scripts/analyze_resume.py resume.txt

    # Analyze and import skills into a user's rating ledger
    python scripts/analyze_resume.py resume.txt --user-id user-123

    # Read from stdin
    cat resume.txt | python scripts/analyze_resume.py -
"""

import asyncio
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gigcampus.config import get_settings
from gigcampus.database import init_db
from gigcampus.exceptions import GigCampusError
from gigcampus.services.rating_ledger import RatingLedger
from gigcampus.services.rating_repository import get_rating_repository
from gigcampus.services.resume_analyzer import ResumeAnalyzer

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

settings = get_settings()


def read_resume(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


async def import_skills(user_id: str, skills: list) -> None:
    if settings.rating_store == "sql":
        await init_db()

    ledger = RatingLedger(get_rating_repository())
    data = await ledger.import_skills_from_resume(user_id, skills)
    logger.info(f"Ledger for {user_id} now tracks {len(data.skills)} skills")


async def main() -> int:
    parser = argparse.ArgumentParser(description="Analyze a plain-text resume")
    parser.add_argument("resume", help="Path to a .txt resume, or - for stdin")
    parser.add_argument("--user-id", help="Import extracted skills into this user's ledger")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation")

    args = parser.parse_args()

    try:
        text = read_resume(args.resume)
        analysis = ResumeAnalyzer(min_text_length=settings.min_text_length).analyze(text)
        print(analysis.model_dump_json(indent=args.indent))

        if args.user_id:
            await import_skills(args.user_id, analysis.skills)
    except OSError as e:
        logger.error(f"Could not read {args.resume}: {e}")
        return 1
    except GigCampusError as e:
        logger.error(e.message)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
