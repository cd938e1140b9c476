"""Analysis engine: analyzers → augmentation → scoring → result.

Usage:
    agent = QualityAgent(advisor=LLMAdvisor())
    result = await agent.analyze(files)
    print(result.metrics.code_quality_score)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from .analyzers import ComplexityAnalyzer, PerformanceAnalyzer, SecurityAnalyzer
from .augment import augment
from .config import AnalysisConfig
from .errors import NoSourceFilesError
from .llm.advisor import Advisor
from .metrics.scoring import score
from .models import AnalysisResult, SourceFile

logger = logging.getLogger(__name__)

# Emission order of the local findings
ANALYZERS = (SecurityAnalyzer(), PerformanceAnalyzer(), ComplexityAnalyzer())


async def analyze(
    files: list[SourceFile],
    advisor: Optional[Advisor] = None,
    cfg: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Run every analyzer over ``files``, augment, score and summarize.

    Raises NoSourceFilesError for an empty file list. Analyzer failures
    propagate; advisory failures only cost the augmentation.
    """
    files = list(files)
    if not files:
        raise NoSourceFilesError()
    logger.info("Analyzing %d files...", len(files))

    # Analyzers share nothing mutable; run them side by side.
    per_analyzer = await asyncio.gather(
        *(asyncio.to_thread(a.analyze, files) for a in ANALYZERS)
    )
    local = [issue for issues in per_analyzer for issue in issues]

    issues = await augment(files, local, advisor, cfg)
    result = AnalysisResult.build(files, issues, score(issues))
    logger.info(
        "Analysis done: %d issues (%d critical, %d from advisor)",
        result.summary.total_issues,
        result.summary.critical_issues,
        len(issues) - len(local),
    )
    return result


class QualityAgent:
    """Binds an advisor and config to the engine and answers follow-up questions."""

    def __init__(self, advisor: Optional[Advisor] = None, cfg: Optional[AnalysisConfig] = None):
        self.advisor = advisor
        self.cfg = cfg or AnalysisConfig()

    async def analyze(self, files: list[SourceFile]) -> AnalysisResult:
        return await analyze(files, self.advisor, self.cfg)

    async def answer_question(
        self,
        question: str,
        result: AnalysisResult,
        files: Optional[list[SourceFile]] = None,
    ) -> str:
        """Ask the advisor about a finished analysis. Errors propagate."""
        if self.advisor is None:
            raise RuntimeError("No advisor configured")
        prompt = (
            "You are a helpful code quality assistant. Answer the following question "
            "about the codebase analysis.\n\n"
            f"Context:\n{question_context(result, files or [])}\n"
            f"Question: {question}\n\n"
            "Provide a clear, conversational answer that helps the developer "
            "understand the codebase better."
        )
        answer = await self.advisor.generate(prompt)
        return answer or "Unable to generate response"


def question_context(result: AnalysisResult, files: list[SourceFile]) -> str:
    s, m = result.summary, result.metrics
    lines = [
        "Analysis Summary:",
        f"- Total Files: {s.total_files}",
        f"- Total Issues: {s.total_issues}",
        f"- Critical Issues: {s.critical_issues}",
        f"- Languages: {', '.join(s.languages)}",
        f"- Code Quality Score: {m.code_quality_score}/100",
        f"- Security Score: {m.security_score}/100",
        f"- Maintainability Score: {m.maintainability_score}/100",
        "",
        "Top Issues:",
    ]
    lines += [
        f"- [{i.severity.upper()}] {i.title} in {i.location.file}" for i in result.issues[:5]
    ]
    if files:
        lines += ["", "Files Overview:"]
        lines += [f"- {f.path} ({f.language}, {f.size} bytes)" for f in files[:3]]
    return "\n".join(lines) + "\n"
