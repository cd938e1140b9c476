"""Quality Agent: pattern-based code quality analysis with LLM augmentation."""
from __future__ import annotations

from .engine import QualityAgent, analyze
from .metrics.scoring import score
from .models import AnalysisResult, Finding, Location, Scores, SourceFile

__version__ = "1.0.0"

__all__ = [
    "AnalysisResult",
    "Finding",
    "Location",
    "QualityAgent",
    "Scores",
    "SourceFile",
    "analyze",
    "score",
]
