"""Exception hierarchy for the analysis engine."""
from __future__ import annotations


class QualityAgentError(Exception):
    """Base class for all engine errors."""


class NoSourceFilesError(QualityAgentError, ValueError):
    """Raised when an analysis is requested without any supported file."""

    def __init__(self, message: str = "No supported code files found"):
        super().__init__(message)


class AdvisorError(QualityAgentError):
    """The advisory service failed or returned something unusable."""


class ReportNotFoundError(QualityAgentError, KeyError):
    """No stored result for the given run id."""

    def __init__(self, run_id: str):
        super().__init__(run_id)
        self.run_id = run_id

    def __str__(self) -> str:
        return f"Report not found: {self.run_id}"
