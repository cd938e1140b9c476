"""Scoring: maps a finding list to three 0-100 quality scores.

    code quality    = 100 - Σ weight(all findings)
    security        = 100 - 2   · Σ weight(security findings)
    maintainability = 100 - 1.5 · Σ weight(complexity findings)

Each score is floored at 0 and rounded half up. Weights come from
``SEVERITY_WEIGHTS`` (critical=10, high=5, medium=2, low=1).
"""
from __future__ import annotations

import math
from collections.abc import Iterable

from ..models import SEVERITY_WEIGHTS, Finding, Scores

BASE_SCORE = 100
SECURITY_FACTOR = 2
MAINTAINABILITY_FACTOR = 1.5


def _weight(findings: Iterable[Finding], category: str = "") -> int:
    return sum(
        SEVERITY_WEIGHTS[f.severity]
        for f in findings
        if not category or f.category == category
    )


def _normalize(value: float) -> int:
    return int(math.floor(max(0, value) + 0.5))


def score(findings: Iterable[Finding]) -> Scores:
    """Pure function of ``findings``; categories are scored independently."""
    findings = list(findings)
    return Scores(
        code_quality_score=_normalize(BASE_SCORE - _weight(findings)),
        security_score=_normalize(BASE_SCORE - SECURITY_FACTOR * _weight(findings, "security")),
        maintainability_score=_normalize(
            BASE_SCORE - MAINTAINABILITY_FACTOR * _weight(findings, "complexity")
        ),
    )
