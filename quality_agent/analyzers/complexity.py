"""Complexity analyzer: cyclomatic complexity, long functions, duplication.

All three checks are line-oriented approximations, not syntax-aware
measures: function boundaries come from declaration-shaped lines, branch
points from raw substring counts, and function extent from brace balance.
"""
from __future__ import annotations

from ..models import Finding, SourceFile
from .base import Analyzer
from .catalog import (
    BRANCH_TOKENS,
    COMMENT_PREFIXES,
    COMPLEXITY_HIGH,
    COMPLEXITY_THRESHOLD,
    CYCLOMATIC_COMPLEXITY,
    DUPLICATION,
    DUPLICATION_MIN_CHARS,
    DUPLICATION_SNIPPET_CHARS,
    DUPLICATION_WINDOW,
    LONG_FUNCTION,
    LONG_FUNCTION_HIGH,
    LONG_FUNCTION_LINES,
    is_function_declaration,
)


def check_cyclomatic_complexity(file: SourceFile) -> list[Finding]:
    """Report a function when the next declaration closes it.

    The last function of a file is never reported: only a following
    declaration boundary triggers the check.
    """
    issues = []
    current = ""
    start = 0
    complexity = 1
    for index, line in enumerate(file.lines()):
        trimmed = line.strip()
        if is_function_declaration(trimmed):
            if current and complexity > COMPLEXITY_THRESHOLD:
                issues.append(
                    CYCLOMATIC_COMPLEXITY.finding(
                        file,
                        start,
                        current,
                        severity="high" if complexity > COMPLEXITY_HIGH else "medium",
                        description=f"Function has cyclomatic complexity of {complexity}",
                    )
                )
            current = trimmed
            start = index + 1
            complexity = 1
        for token in BRANCH_TOKENS:
            complexity += trimmed.count(token)
    return issues


def _long_function(file: SourceFile, start: int, declaration: str, length: int) -> Finding:
    return LONG_FUNCTION.finding(
        file,
        start,
        declaration,
        severity="high" if length > LONG_FUNCTION_HIGH else "medium",
        description=f"Function is {length} lines long",
    )


def check_function_length(file: SourceFile) -> list[Finding]:
    """Measure from a declaration until its brace balance returns to zero.

    A function still open when another declaration appears ends there.
    Brace-less bodies (Python) end on their second line.
    """
    issues = []
    current = ""
    start = 0
    length = 0
    braces = 0
    for index, line in enumerate(file.lines()):
        trimmed = line.strip()
        if is_function_declaration(trimmed):
            if current and length > LONG_FUNCTION_LINES:
                issues.append(_long_function(file, start, current, length))
            current = trimmed
            start = index + 1
            length = 0
            braces = 0
        if current:
            length += 1
            braces += trimmed.count("{") - trimmed.count("}")
            if braces == 0 and length > 1:
                if length > LONG_FUNCTION_LINES:
                    issues.append(_long_function(file, start, current, length))
                current = ""
    return issues


def check_duplication(file: SourceFile) -> list[Finding]:
    """One finding per distinct normalized window seen at least twice."""
    lines = file.lines()
    blocks: dict[str, list[int]] = {}
    for i in range(len(lines) - DUPLICATION_WINDOW + 1):
        kept = []
        for raw in lines[i : i + DUPLICATION_WINDOW]:
            stripped = raw.strip()
            if stripped and not stripped.startswith(COMMENT_PREFIXES):
                kept.append(stripped)
        block = "\n".join(kept)
        if len(block) > DUPLICATION_MIN_CHARS:
            blocks.setdefault(block, []).append(i + 1)

    issues = []
    for block, starts in blocks.items():
        if len(starts) > 1:
            issues.append(
                DUPLICATION.finding(
                    file,
                    starts[0],
                    block[:DUPLICATION_SNIPPET_CHARS] + "...",
                    description=f"Similar code block found in {len(starts)} locations",
                )
            )
    return issues


class ComplexityAnalyzer(Analyzer):
    name = "complexity"
    checks = (
        check_cyclomatic_complexity,
        check_function_length,
        check_duplication,
    )
