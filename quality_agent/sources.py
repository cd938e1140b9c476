"""File source: turns paths on disk into SourceFile records.

Language comes from the file extension; dependency manifests are picked up
by name. Oversized, undecodable and unsupported files are skipped.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import AnalysisConfig
from .models import SourceFile

logger = logging.getLogger(__name__)

LANGUAGES = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".java": "java",
    ".cpp": "cpp",
    ".c": "c",
    ".cs": "csharp",
    ".go": "go",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
    ".kt": "kotlin",
    ".rs": "rust",
}

MANIFESTS = {
    "package.json": "json",
    "requirements.txt": "text",
}


def detect_language(path: str | Path) -> Optional[str]:
    """Language tag for ``path``, or None when it is not analyzed."""
    p = Path(path)
    return MANIFESTS.get(p.name) or LANGUAGES.get(p.suffix.lower())


def _read(path: Path, display: str, language: str, max_size: int) -> Optional[SourceFile]:
    try:
        size = path.stat().st_size
        if size > max_size:
            logger.info("Skipping large file: %s (%d bytes)", path, size)
            return None
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Error reading file %s: %s", path, e)
        return None
    return SourceFile(path=display, content=content, language=language, size=size)


def load_directory(root: str | Path, cfg: Optional[AnalysisConfig] = None) -> list[SourceFile]:
    """Walk ``root``; paths are reported relative to it, in sorted order."""
    cfg = cfg or AnalysisConfig()
    root = Path(root)
    if not root.is_dir():
        raise NotADirectoryError(str(root))
    ignored = set(cfg.ignore_dirs)

    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in ignored)
        for name in sorted(filenames):
            language = detect_language(name)
            if not language:
                continue
            path = Path(dirpath) / name
            sf = _read(path, path.relative_to(root).as_posix(), language, cfg.max_file_size)
            if sf:
                files.append(sf)
    logger.info("Loaded %d files from %s", len(files), root)
    return files


def load_files(paths: list[str | Path], cfg: Optional[AnalysisConfig] = None) -> list[SourceFile]:
    """Load explicit files; paths are reported by basename."""
    cfg = cfg or AnalysisConfig()
    files = []
    for raw in paths:
        path = Path(raw)
        language = detect_language(path)
        if not language:
            logger.debug("Unsupported file skipped: %s", path)
            continue
        sf = _read(path, path.name, language, cfg.max_file_size)
        if sf:
            files.append(sf)
    return files


def load_path(target: str | Path, cfg: Optional[AnalysisConfig] = None) -> list[SourceFile]:
    """Directory or single file, whichever ``target`` is."""
    target = Path(target)
    if target.is_dir():
        return load_directory(target, cfg)
    if not target.exists():
        raise FileNotFoundError(str(target))
    return load_files([target], cfg)
