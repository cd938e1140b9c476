"""Core data model: source files, findings, scores and analysis results.

All records are frozen dataclasses: a SourceFile is created once per input
file, a Finding once per detection, and an AnalysisResult once per run.
``to_dict`` produces the JSON wire shape used by the HTTP API and reports.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

# Finding taxonomy
CATEGORIES = (
    "security",
    "performance",
    "complexity",
    "duplication",
    "testing",
    "documentation",
)

# Ordered from most to least severe
SEVERITIES = ("critical", "high", "medium", "low")

SEVERITY_WEIGHTS = {
    "critical": 10,
    "high": 5,
    "medium": 2,
    "low": 1,
}


@dataclass(frozen=True)
class SourceFile:
    """One input file, content already read and language already classified."""

    path: str
    content: str
    language: str
    size: int = 0

    @classmethod
    def from_text(cls, path: str, content: str, language: str) -> SourceFile:
        return cls(path=path, content=content, language=language, size=len(content.encode("utf-8")))

    def lines(self) -> list[str]:
        return self.content.split("\n")


@dataclass(frozen=True)
class Location:
    file: str
    line: Optional[int] = None
    snippet: Optional[str] = None

    def to_dict(self) -> dict:
        d: dict[str, Any] = {"file": self.file}
        if self.line is not None:
            d["line"] = self.line
        if self.snippet is not None:
            d["snippet"] = self.snippet
        return d


@dataclass(frozen=True)
class Finding:
    """A single reported issue."""

    category: str
    severity: str
    title: str
    description: str
    location: Location
    impact: str = ""
    recommendation: str = ""

    def __post_init__(self):
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown category: {self.category!r}")
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity!r}")

    @property
    def weight(self) -> int:
        return SEVERITY_WEIGHTS[self.severity]

    def to_dict(self) -> dict:
        return {
            "category": self.category,
            "severity": self.severity,
            "title": self.title,
            "description": self.description,
            "location": self.location.to_dict(),
            "impact": self.impact,
            "recommendation": self.recommendation,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Finding:
        """Build a Finding from an issue-shaped mapping.

        Raises ValueError when the mapping is not well-formed: unknown
        category or severity, empty title, or a location without a file.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        title = data.get("title")
        if not isinstance(title, str) or not title.strip():
            raise ValueError("Missing title")
        loc = data.get("location")
        if not isinstance(loc, dict) or not isinstance(loc.get("file"), str):
            raise ValueError("Missing location.file")
        line = loc.get("line")
        if isinstance(line, bool) or not isinstance(line, int):
            line = None
        snippet = loc.get("snippet")
        return cls(
            category=str(data.get("category", "")),
            severity=str(data.get("severity", "")),
            title=title.strip(),
            description=str(data.get("description") or ""),
            location=Location(
                file=loc["file"],
                line=line,
                snippet=snippet if isinstance(snippet, str) else None,
            ),
            impact=str(data.get("impact") or ""),
            recommendation=str(data.get("recommendation") or ""),
        )


@dataclass(frozen=True)
class Scores:
    """Normalized 0-100 quality metrics."""

    code_quality_score: int = 100
    security_score: int = 100
    maintainability_score: int = 100

    def to_dict(self) -> dict:
        return {
            "codeQualityScore": self.code_quality_score,
            "securityScore": self.security_score,
            "maintainabilityScore": self.maintainability_score,
        }


@dataclass(frozen=True)
class Summary:
    total_files: int
    total_issues: int
    critical_issues: int
    languages: tuple[str, ...] = ()
    analysis_date: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "totalIssues": self.total_issues,
            "criticalIssues": self.critical_issues,
            "languages": list(self.languages),
            "analysisDate": self.analysis_date,
        }


@dataclass(frozen=True)
class AnalysisResult:
    summary: Summary
    issues: tuple[Finding, ...]
    metrics: Scores

    @classmethod
    def build(cls, files: list[SourceFile], issues: list[Finding], metrics: Scores) -> AnalysisResult:
        """Assemble a result; summary counters are derived from ``issues``."""
        languages = tuple(dict.fromkeys(f.language for f in files))
        summary = Summary(
            total_files=len(files),
            total_issues=len(issues),
            critical_issues=sum(1 for i in issues if i.severity == "critical"),
            languages=languages,
        )
        return cls(summary=summary, issues=tuple(issues), metrics=metrics)

    def to_dict(self) -> dict:
        return {
            "summary": self.summary.to_dict(),
            "issues": [i.to_dict() for i in self.issues],
            "metrics": self.metrics.to_dict(),
        }
