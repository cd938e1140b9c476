"""Pattern catalog: detection rules per category.

A rule pairs a matcher (compiled patterns, or nothing when the analyzer
applies a structural heuristic) with the metadata copied into every finding
it produces. The catalog is static data; the analyzers own the scanning.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..models import Finding, Location, SourceFile


@dataclass(frozen=True)
class Rule:
    id: str
    category: str
    severity: str
    title: str
    description: str
    impact: str
    recommendation: str
    patterns: tuple[re.Pattern, ...] = ()
    languages: Optional[frozenset[str]] = None  # None = every language

    def applies_to(self, file: SourceFile) -> bool:
        return self.languages is None or file.language in self.languages

    def matches(self, line: str) -> list[re.Pattern]:
        """Patterns of this rule that match ``line``, in catalog order."""
        return [p for p in self.patterns if p.search(line)]

    def finding(
        self,
        file: SourceFile,
        line: Optional[int] = None,
        snippet: Optional[str] = None,
        *,
        severity: str = "",
        title: str = "",
        description: str = "",
    ) -> Finding:
        return Finding(
            category=self.category,
            severity=severity or self.severity,
            title=title or self.title,
            description=description or self.description,
            location=Location(file=file.path, line=line, snippet=snippet),
            impact=self.impact,
            recommendation=self.recommendation,
        )


_WEB = frozenset({"javascript", "typescript"})
_SQL_HOSTS = frozenset({"javascript", "typescript", "python", "php"})

# ── Security ──

HARDCODED_SECRET = Rule(
    id="security.hardcoded-secret",
    category="security",
    severity="critical",
    title="Hardcoded Secret Detected",
    description="Potential hardcoded secret or credential found in source code",
    impact="Exposed credentials can lead to unauthorized access and data breaches",
    recommendation=(
        "Use environment variables or secure secret management services "
        "(e.g., AWS Secrets Manager, HashiCorp Vault)"
    ),
    patterns=(
        re.compile(r"""password\s*=\s*["'](?!.*\$\{)(.{3,})["']""", re.I),
        re.compile(r"""api[_-]?key\s*=\s*["'](?!.*\$\{)(.{8,})["']""", re.I),
        re.compile(r"""secret\s*=\s*["'](?!.*\$\{)(.{8,})["']""", re.I),
        re.compile(r"""token\s*=\s*["'](?!.*\$\{)(.{8,})["']""", re.I),
        re.compile(r"""aws_access_key_id\s*=\s*["'](.{16,})["']""", re.I),
    ),
)

SQL_INJECTION = Rule(
    id="security.sql-injection",
    category="security",
    severity="critical",
    title="Potential SQL Injection Vulnerability",
    description="SQL query appears to use string concatenation with user input",
    impact="SQL injection can allow attackers to access, modify, or delete database data",
    recommendation="Use parameterized queries or prepared statements instead of string concatenation",
    patterns=(
        re.compile(r"""execute\s*\(\s*["'`].*\+.*["'`]""", re.I),
        re.compile(r"""query\s*\(\s*["'`].*\+.*["'`]""", re.I),
        re.compile(r"SELECT.*FROM.*WHERE.*\+", re.I),
        re.compile(r"""f["']SELECT.*FROM.*\{""", re.I),
    ),
    languages=_SQL_HOSTS,
)

XSS = Rule(
    id="security.xss",
    category="security",
    severity="high",
    title="Potential XSS Vulnerability",
    description="Direct DOM manipulation detected that could allow XSS attacks",
    impact="Cross-site scripting can allow attackers to inject malicious scripts",
    recommendation=(
        "Sanitize user input and use safe DOM manipulation methods "
        "or framework-specific safe rendering"
    ),
    patterns=(
        re.compile(r"""innerHTML\s*=\s*[^"'`]""", re.I),
        re.compile(r"dangerouslySetInnerHTML", re.I),
        re.compile(r"document\.write\s*\(", re.I),
    ),
    languages=_WEB,
)

UNPINNED_DEPENDENCIES = Rule(
    id="security.unpinned-dependencies",
    category="security",
    severity="medium",
    title="Unpinned Dependencies",
    description="Dependencies use version ranges instead of exact versions",
    impact="Version ranges can lead to unexpected breaking changes or security vulnerabilities",
    recommendation="Pin dependencies to specific versions and use automated tools for updates",
)

DEPENDENCY_MANIFESTS = ("package.json", "requirements.txt")
LOOSE_VERSION_MARKERS = ("*", "^", "~")

SECURITY_RULES = (HARDCODED_SECRET, SQL_INJECTION, XSS, UNPINNED_DEPENDENCIES)

# ── Performance ──

NESTED_LOOPS = Rule(
    id="performance.nested-loops",
    category="performance",
    severity="high",
    title="Deeply Nested Loops Detected",
    description="Found nested loops",
    impact=(
        "Nested loops can result in O(n²) or O(n³) time complexity, "
        "causing performance degradation"
    ),
    recommendation="Consider using hash maps, sets, or restructuring the algorithm to reduce nesting",
)

LOOP_KEYWORDS = ("for", "while", "forEach", "map", "filter")
NESTED_LOOP_THRESHOLD = 3


def _inefficient(slug: str, label: str, pattern: str) -> Rule:
    return Rule(
        id=f"performance.{slug}",
        category="performance",
        severity="medium",
        title=f"Inefficient Operation: {label}",
        description="Operation can be optimized by combining operations",
        impact="Multiple iterations over the same data structure reduce performance",
        recommendation="Combine operations into a single pass or use more efficient data structures",
        patterns=(re.compile(pattern),),
    )


INEFFICIENT_OPERATIONS = (
    _inefficient("chained-find", "Chained Array Find Operations", r"\.find\s*\(.*\)\.find\s*\("),
    _inefficient("chained-filter", "Chained Filter Operations", r"\.filter\s*\(.*\)\.filter\s*\("),
    _inefficient("chained-map", "Chained Map Operations", r"\.map\s*\(.*\)\.map\s*\("),
    _inefficient("string-concat", "String Concatenation in Loop", r"""\+\s*=\s*["'`].*["'`]"""),
)

EVENT_LISTENER_LEAK = Rule(
    id="performance.event-listener-leak",
    category="performance",
    severity="medium",
    title="Potential Memory Leak: Event Listener",
    description="Event listener added without corresponding cleanup",
    impact="Uncleaned event listeners can cause memory leaks",
    recommendation="Add removeEventListener in cleanup function or useEffect return",
    languages=_WEB,
)

INTERVAL_LEAK = Rule(
    id="performance.interval-leak",
    category="performance",
    severity="high",
    title="Potential Memory Leak: Interval",
    description="setInterval used without corresponding clearInterval",
    impact="Uncleaned intervals continue running and consuming resources",
    recommendation="Store interval ID and call clearInterval when component unmounts",
    languages=_WEB,
)

# (registration call, cleanup call, rule)
LEAK_PAIRS = (
    ("addEventListener", "removeEventListener", EVENT_LISTENER_LEAK),
    ("setInterval", "clearInterval", INTERVAL_LEAK),
)

PERFORMANCE_RULES = (NESTED_LOOPS, *INEFFICIENT_OPERATIONS, EVENT_LISTENER_LEAK, INTERVAL_LEAK)

# ── Complexity ──

CYCLOMATIC_COMPLEXITY = Rule(
    id="complexity.cyclomatic",
    category="complexity",
    severity="medium",
    title="High Cyclomatic Complexity",
    description="Function has high cyclomatic complexity",
    impact="High complexity makes code harder to understand, test, and maintain",
    recommendation="Break down into smaller functions, reduce conditional logic, or use strategy pattern",
)

# Counted as raw substrings: "if" inside "notify" counts too.
BRANCH_TOKENS = ("if", "else if", "for", "while", "case", "&&", "||", "?", "catch")
COMPLEXITY_THRESHOLD = 10
COMPLEXITY_HIGH = 20

LONG_FUNCTION = Rule(
    id="complexity.long-function",
    category="complexity",
    severity="medium",
    title="Long Function",
    description="Function is too long",
    impact="Long functions are harder to understand, test, and maintain",
    recommendation="Extract logical blocks into smaller, focused functions with clear responsibilities",
)

LONG_FUNCTION_LINES = 50
LONG_FUNCTION_HIGH = 100

DUPLICATION = Rule(
    id="complexity.duplication",
    category="complexity",
    severity="medium",
    title="Code Duplication Detected",
    description="Similar code block found in several locations",
    impact="Duplicated code increases maintenance burden and risk of inconsistent updates",
    recommendation="Extract common code into a reusable function or module",
)

DUPLICATION_WINDOW = 5
DUPLICATION_MIN_CHARS = 50
DUPLICATION_SNIPPET_CHARS = 100
COMMENT_PREFIXES = ("//", "/*")

# Declaration shapes: JS/TS functions and arrow assignments, Python def,
# Go func, and C-family "type name(" method signatures.
FUNCTION_DECLARATIONS = tuple(
    re.compile(p, re.ASCII)
    for p in (
        r"function\s+\w+\s*\(",
        r"\w+\s*=\s*function\s*\(",
        r"\w+\s*=\s*\(.*\)\s*=>",
        r"async\s+function\s+\w+",
        r"def\s+\w+\s*\(",
        r"func\s+\w+\s*\(",
        r"(public|private|protected)?\s*(static)?\s*\w+\s+\w+\s*\(",
    )
)

COMPLEXITY_RULES = (CYCLOMATIC_COMPLEXITY, LONG_FUNCTION, DUPLICATION)

RULES = (*SECURITY_RULES, *PERFORMANCE_RULES, *COMPLEXITY_RULES)


def is_function_declaration(line: str) -> bool:
    return any(p.search(line) for p in FUNCTION_DECLARATIONS)
