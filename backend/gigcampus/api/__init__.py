from fastapi import APIRouter
from gigcampus.api import ratings, resume

api_router = APIRouter()
api_router.include_router(resume.router, prefix="/resume", tags=["resume"])
api_router.include_router(ratings.router, prefix="/ratings", tags=["ratings"])
