"""Analysis endpoints: directory scans and file uploads."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import JSONResponse

from ...errors import NoSourceFilesError
from ...models import AnalysisResult, SourceFile
from ...sources import detect_language, load_directory
from .input_models import AnalyzeDirectoryRequest

router = APIRouter()
logger = logging.getLogger(__name__)

MAX_UPLOAD_FILES = 50


def _created(request: Request, result: AnalysisResult) -> JSONResponse:
    run_id = request.app.state.store.put(result)
    return JSONResponse(
        {
            "success": True,
            "reportId": run_id,
            "reportUrl": f"/api/report/{run_id}",
            "markdownUrl": f"/api/report/{run_id}/markdown",
            "htmlUrl": f"/api/report/{run_id}/html",
            "summary": result.summary.to_dict(),
            "metrics": result.metrics.to_dict(),
        }
    )


@router.post("/api/analyze/directory")
async def analyze_directory(request: Request, body: AnalyzeDirectoryRequest):
    """Analyze every supported file under a server-side directory."""
    cfg = request.app.state.config
    root = Path(body.directory_path)
    if not root.is_dir():
        return JSONResponse({"error": "Directory does not exist"}, status_code=400)

    logger.info("Analyzing directory: %s", root)
    files = await asyncio.to_thread(load_directory, root, cfg.analysis)
    try:
        result = await request.app.state.agent.analyze(files)
    except NoSourceFilesError:
        return JSONResponse({"error": "No supported code files found in directory"}, status_code=400)
    return _created(request, result)


@router.post("/api/analyze/files")
async def analyze_files(request: Request, files: list[UploadFile] = File(...)):
    """Analyze uploaded files (multipart field ``files``)."""
    cfg = request.app.state.config
    if not files:
        return JSONResponse({"error": "No files uploaded"}, status_code=400)
    if len(files) > MAX_UPLOAD_FILES:
        return JSONResponse(
            {"error": f"Too many files (max {MAX_UPLOAD_FILES})"}, status_code=400
        )

    logger.info("Received %d files for analysis", len(files))
    sources = []
    for upload in files:
        name = Path(upload.filename or "").name
        language = detect_language(name)
        if not language:
            continue
        data = await upload.read()
        if len(data) > cfg.analysis.max_file_size:
            logger.info("Skipping large upload: %s (%d bytes)", name, len(data))
            continue
        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("Skipping non-UTF-8 upload: %s", name)
            continue
        sources.append(SourceFile(path=name, content=content, language=language, size=len(data)))

    try:
        result = await request.app.state.agent.analyze(sources)
    except NoSourceFilesError:
        return JSONResponse({"error": "No supported code files found"}, status_code=400)
    return _created(request, result)
