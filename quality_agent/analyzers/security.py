"""Security analyzer: secrets, SQL injection, XSS and unpinned dependencies."""
from __future__ import annotations

from ..models import Finding, SourceFile
from .base import Analyzer
from .catalog import (
    DEPENDENCY_MANIFESTS,
    HARDCODED_SECRET,
    LOOSE_VERSION_MARKERS,
    SQL_INJECTION,
    UNPINNED_DEPENDENCIES,
    XSS,
    Rule,
)


def _scan_lines(rule: Rule, file: SourceFile) -> list[Finding]:
    """One finding per (matching pattern, line); no dedup across lines."""
    if not rule.applies_to(file):
        return []
    issues = []
    for index, line in enumerate(file.lines()):
        for _ in rule.matches(line):
            issues.append(rule.finding(file, index + 1, line.strip()))
    return issues


def check_hardcoded_secrets(file: SourceFile) -> list[Finding]:
    return _scan_lines(HARDCODED_SECRET, file)


def check_sql_injection(file: SourceFile) -> list[Finding]:
    return _scan_lines(SQL_INJECTION, file)


def check_xss(file: SourceFile) -> list[Finding]:
    return _scan_lines(XSS, file)


def check_unpinned_dependencies(file: SourceFile) -> list[Finding]:
    """File-level finding when a manifest uses any loose version range."""
    if not any(name in file.path for name in DEPENDENCY_MANIFESTS):
        return []
    if any(marker in file.content for marker in LOOSE_VERSION_MARKERS):
        return [UNPINNED_DEPENDENCIES.finding(file)]
    return []


class SecurityAnalyzer(Analyzer):
    name = "security"
    checks = (
        check_hardcoded_secrets,
        check_sql_injection,
        check_xss,
        check_unpinned_dependencies,
    )
