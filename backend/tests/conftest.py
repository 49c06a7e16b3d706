import os

# Keep the shared repository in memory unless a test swaps it out
os.environ.setdefault("RATING_STORE", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite:///./data/test_gigcampus.db")

import pytest

from gigcampus.services.rating_ledger import RatingLedger
from gigcampus.services.rating_repository import InMemoryRatingRepository


@pytest.fixture
def repository():
    return InMemoryRatingRepository()


@pytest.fixture
def ledger(repository):
    return RatingLedger(repository)
