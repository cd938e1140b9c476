"""Stored reports and follow-up questions."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse

from ...analyzers.catalog import RULES
from ...errors import ReportNotFoundError
from ...report import render_html, render_markdown
from .input_models import AskRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/")
async def index():
    return JSONResponse(
        {
            "status": "ok",
            "message": "Code Quality Intelligence Agent API",
            "endpoints": {
                "health": "GET /",
                "analyzeFiles": "POST /api/analyze/files",
                "analyzeDirectory": "POST /api/analyze/directory",
                "askQuestion": "POST /api/ask",
                "getReport": "GET /api/report/:id",
                "getMarkdown": "GET /api/report/:id/markdown",
                "getHtml": "GET /api/report/:id/html",
            },
            "rules": [
                {"id": r.id, "category": r.category, "severity": r.severity, "title": r.title}
                for r in RULES
            ],
        }
    )


@router.get("/api/report/{run_id}")
async def get_report(request: Request, run_id: str):
    try:
        result = request.app.state.store.get(run_id)
    except ReportNotFoundError:
        return JSONResponse({"error": "Report not found"}, status_code=404)
    return JSONResponse(result.to_dict())


@router.get("/api/report/{run_id}/markdown")
async def get_markdown(request: Request, run_id: str):
    try:
        result = request.app.state.store.get(run_id)
    except ReportNotFoundError:
        return JSONResponse({"error": "Report not found"}, status_code=404)
    return PlainTextResponse(render_markdown(result), media_type="text/markdown")


@router.get("/api/report/{run_id}/html")
async def get_html(request: Request, run_id: str):
    try:
        result = request.app.state.store.get(run_id)
    except ReportNotFoundError:
        return JSONResponse({"error": "Report not found"}, status_code=404)
    return HTMLResponse(render_html(result))


@router.post("/api/ask")
async def ask(request: Request, body: AskRequest):
    """Answer a question about a stored analysis."""
    try:
        result = request.app.state.store.get(body.report_id)
    except ReportNotFoundError:
        return JSONResponse({"error": "Report not found"}, status_code=404)

    try:
        answer = await request.app.state.agent.answer_question(body.question, result)
    except Exception as e:
        logger.error("Error answering question: %s", e)
        return JSONResponse(
            {"error": "Failed to answer question", "details": str(e)}, status_code=500
        )
    return JSONResponse({"success": True, "question": body.question, "answer": answer})
