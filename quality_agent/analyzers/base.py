"""Analyzer base: runs a fixed sequence of per-file checks."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..models import Finding, SourceFile

logger = logging.getLogger(__name__)

Check = Callable[[SourceFile], list[Finding]]


class Analyzer:
    """Applies ``checks`` to every file, file by file, check by check.

    Checks are plain functions holding only local state, so one analyzer
    instance can be shared across threads. A check that raises loses that
    file for this analyzer only; the remaining files are still scanned.
    """

    name: str = "base"
    checks: tuple[Check, ...] = ()

    def analyze(self, files: Iterable[SourceFile]) -> list[Finding]:
        issues: list[Finding] = []
        for file in files:
            issues.extend(self.analyze_file(file))
        return issues

    def analyze_file(self, file: SourceFile) -> list[Finding]:
        found: list[Finding] = []
        try:
            for check in self.checks:
                found.extend(check(file))
        except Exception:
            logger.exception("%s analyzer failed on %s, file skipped", self.name, file.path)
            return []
        return found
