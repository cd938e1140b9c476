"""HTTP routes."""
from __future__ import annotations

from fastapi import APIRouter

from .analysis import router as analysis_router
from .reports import router as reports_router

router = APIRouter()
router.include_router(analysis_router)
router.include_router(reports_router)
