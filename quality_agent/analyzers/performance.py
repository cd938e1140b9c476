"""Performance analyzer: nested loops, chained operations, leaked timers/listeners."""
from __future__ import annotations

from ..models import Finding, SourceFile
from .base import Analyzer
from .catalog import (
    INEFFICIENT_OPERATIONS,
    LEAK_PAIRS,
    LOOP_KEYWORDS,
    NESTED_LOOP_THRESHOLD,
    NESTED_LOOPS,
)


def check_nested_loops(file: SourceFile) -> list[Finding]:
    """Textual nesting heuristic.

    Every loop keyword present on a line bumps the counter (a ``forEach``
    line bumps it twice, once for ``for`` and once for ``forEach``). A line
    containing ``}`` lowers it by one, never below zero. Each bump reaching
    the threshold is reported.
    """
    issues = []
    level = 0
    for index, line in enumerate(file.lines()):
        trimmed = line.strip()
        for keyword in LOOP_KEYWORDS:
            if keyword in trimmed and ("(" in trimmed or " " in trimmed):
                level += 1
                if level >= NESTED_LOOP_THRESHOLD:
                    issues.append(
                        NESTED_LOOPS.finding(
                            file,
                            index + 1,
                            trimmed,
                            description=f"Found {level} levels of nested loops",
                        )
                    )
        if "}" in trimmed:
            level = max(0, level - 1)
    return issues


def check_inefficient_operations(file: SourceFile) -> list[Finding]:
    issues = []
    for index, line in enumerate(file.lines()):
        for rule in INEFFICIENT_OPERATIONS:
            if rule.matches(line):
                issues.append(rule.finding(file, index + 1, line.strip()))
    return issues


def check_memory_leaks(file: SourceFile) -> list[Finding]:
    """Registration calls in a file that never calls the matching cleanup."""
    # Cleanup anywhere in the file silences every registration in it.
    pairs = [
        (register, rule)
        for register, cleanup, rule in LEAK_PAIRS
        if rule.applies_to(file) and cleanup not in file.content
    ]
    if not pairs:
        return []
    issues = []
    for index, line in enumerate(file.lines()):
        for register, rule in pairs:
            if register in line:
                issues.append(rule.finding(file, index + 1, line.strip()))
    return issues


class PerformanceAnalyzer(Analyzer):
    name = "performance"
    checks = (
        check_nested_loops,
        check_inefficient_operations,
        check_memory_leaks,
    )
