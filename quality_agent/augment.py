"""Augmentation: folds advisory findings into the locally detected list.

The advisor sees a bounded context (first files with a short preview, first
findings) and is asked for a JSON array of extra issues about testing,
documentation and architecture (complexity) concerns. Anything going wrong
on that path leaves the local findings untouched.
"""
from __future__ import annotations

import asyncio
import json
import logging
import re
from typing import Optional

from .config import AnalysisConfig
from .errors import AdvisorError
from .llm.advisor import Advisor
from .models import Finding, SourceFile

logger = logging.getLogger(__name__)

ADVISORY_CATEGORIES = ("testing", "documentation", "complexity")

# First "[" to last "]"; the response carries a single array payload.
_ARRAY_RE = re.compile(r"\[.*\]", re.S)

_PROMPT = """You are a code quality expert. Review the following analysis and provide additional insights.

Code Context:
{context}

Current Issues Found:
{issues}

Based on this analysis, identify any additional quality concerns related to:
1. Testing gaps (missing tests, low coverage areas)
2. Documentation issues (missing comments, unclear APIs)
3. Architecture concerns (tight coupling, violations of SOLID principles)

Return your findings as a JSON array of issues following this structure:
{{
  "category": "testing" | "documentation" | "complexity",
  "severity": "critical" | "high" | "medium" | "low",
  "title": "Brief title",
  "description": "Detailed description",
  "location": {{"file": "path"}},
  "impact": "What problems this causes",
  "recommendation": "How to fix it"
}}"""


def build_context(
    files: list[SourceFile],
    findings: list[Finding],
    cfg: Optional[AnalysisConfig] = None,
) -> tuple[list[dict], list[dict]]:
    """Bounded view of the run: (file previews, leading findings)."""
    cfg = cfg or AnalysisConfig()
    previews = [
        {"path": f.path, "language": f.language, "preview": f.content[: cfg.preview_chars]}
        for f in files[: cfg.context_files]
    ]
    issues = [i.to_dict() for i in findings[: cfg.context_issues]]
    return previews, issues


def build_prompt(
    files: list[SourceFile],
    findings: list[Finding],
    cfg: Optional[AnalysisConfig] = None,
) -> str:
    previews, issues = build_context(files, findings, cfg)
    return _PROMPT.format(
        context=json.dumps(previews, indent=2),
        issues=json.dumps(issues, indent=2),
    )


def parse_findings(text: str) -> list[Finding]:
    """Extract the JSON array from ``text`` and keep its well-formed issues.

    Raises AdvisorError when no array can be found or decoded. Malformed
    elements are dropped one by one; any valid category is kept.
    """
    match = _ARRAY_RE.search(text or "")
    if not match:
        raise AdvisorError("No JSON array in advisory response")
    try:
        payload = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        raise AdvisorError(f"Invalid JSON array in advisory response: {exc}") from exc
    if not isinstance(payload, list):
        raise AdvisorError("Advisory payload is not an array")

    found = []
    for index, item in enumerate(payload):
        try:
            finding = Finding.from_dict(item)
        except ValueError as exc:
            logger.warning("Advisory issue #%d rejected: %s", index, exc)
            continue
        if finding.category not in ADVISORY_CATEGORIES:
            logger.debug("Advisory issue #%d outside the requested categories: %s", index, finding.category)
        found.append(finding)
    return found


async def augment(
    files: list[SourceFile],
    findings: list[Finding],
    advisor: Optional[Advisor],
    cfg: Optional[AnalysisConfig] = None,
) -> list[Finding]:
    """Return ``findings`` plus any advisory findings; never fewer, never raises."""
    cfg = cfg or AnalysisConfig()
    if advisor is None or not cfg.augment:
        return list(findings)

    prompt = build_prompt(files, findings, cfg)
    try:
        text = await asyncio.wait_for(advisor.generate(prompt), timeout=cfg.augment_timeout_sec)
        extra = parse_findings(text)
    except asyncio.TimeoutError:
        logger.warning("Augmentation timed out after %ss, keeping local findings", cfg.augment_timeout_sec)
        return list(findings)
    except Exception as exc:
        logger.warning("Augmentation failed, keeping local findings: %s", exc)
        return list(findings)

    if extra:
        logger.info("Augmentation added %d findings", len(extra))
    return [*findings, *extra]
