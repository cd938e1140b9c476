"""Pattern analyzers: security, performance and complexity scanners."""
from __future__ import annotations

from .base import Analyzer
from .complexity import ComplexityAnalyzer
from .performance import PerformanceAnalyzer
from .security import SecurityAnalyzer

__all__ = ["Analyzer", "ComplexityAnalyzer", "PerformanceAnalyzer", "SecurityAnalyzer"]
