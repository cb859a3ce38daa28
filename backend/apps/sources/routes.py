"""Source routes - registers all source endpoints."""

from fastapi import APIRouter

from apps.sources.handlers import submit_sources

router = APIRouter(prefix="/sources", tags=["Sources"])

# POST /sources - Submit files and URLs
router.post("")(submit_sources)
