"""Tests for the complexity analyzer."""
from quality_agent.analyzers.catalog import is_function_declaration
from quality_agent.analyzers.complexity import (
    ComplexityAnalyzer,
    check_cyclomatic_complexity,
    check_duplication,
    check_function_length,
)

from conftest import make_file


def _function(name: str, body: list[str]) -> list[str]:
    return [f"function {name}(a, b) {{", *body, "}"]


class TestFunctionDeclarations:
    def test_shapes(self):
        for line in (
            "function run(x) {",
            "handler = function (e) {",
            "const add = (a, b) => a + b;",
            "async function load",
            "def compute(self):",
            "func main() {",
            "public static void main(String[] args) {",
        ):
            assert is_function_declaration(line), line

    def test_plain_statements(self):
        for line in ("const x = 1;", "x();", "if (a) {", "}"):
            assert not is_function_declaration(line), line


class TestCyclomaticComplexity:
    def test_reported_at_next_declaration(self):
        lines = _function("busy", ["  if (a) { x(); }"] * 10) + _function("next", [])
        issues = check_cyclomatic_complexity(make_file("\n".join(lines)))
        assert len(issues) == 1
        issue = issues[0]
        assert issue.title == "High Cyclomatic Complexity"
        assert issue.severity == "medium"
        assert issue.description == "Function has cyclomatic complexity of 11"
        assert issue.location.line == 1
        assert issue.location.snippet == "function busy(a, b) {"

    def test_high_above_twenty(self):
        lines = _function("busy", ["  if (a && b) { x(); }"] * 10) + _function("next", [])
        issues = check_cyclomatic_complexity(make_file("\n".join(lines)))
        assert [i.severity for i in issues] == ["high"]
        assert issues[0].description == "Function has cyclomatic complexity of 21"

    def test_threshold_is_exclusive(self):
        lines = _function("busy", ["  if (a) { x(); }"] * 9) + _function("next", [])
        assert check_cyclomatic_complexity(make_file("\n".join(lines))) == []

    def test_tokens_inside_identifiers_count(self):
        lines = _function("noisy", ["  notify();"] * 11) + _function("next", [])
        issues = check_cyclomatic_complexity(make_file("\n".join(lines)))
        assert issues[0].description == "Function has cyclomatic complexity of 12"

    def test_last_function_not_reported(self):
        lines = _function("busy", ["  if (a && b) { x(); }"] * 10)
        assert check_cyclomatic_complexity(make_file("\n".join(lines))) == []


class TestFunctionLength:
    def test_over_one_hundred_lines_is_high(self):
        lines = _function("big", ["  total += 1;"] * 99)
        assert len(lines) == 101
        issues = check_function_length(make_file("\n".join(lines)))
        assert len(issues) == 1
        issue = issues[0]
        assert issue.title == "Long Function"
        assert issue.severity == "high"
        assert issue.description == "Function is 101 lines long"
        assert issue.location.line == 1

    def test_over_fifty_lines_is_medium(self):
        lines = ["// header", *_function("mid", ["  total += 1;"] * 58)]
        issues = check_function_length(make_file("\n".join(lines)))
        assert [(i.severity, i.location.line) for i in issues] == [("medium", 2)]

    def test_fifty_lines_clean(self):
        lines = _function("ok", ["  total += 1;"] * 48)
        assert check_function_length(make_file("\n".join(lines))) == []

    def test_nested_blocks_keep_function_open(self):
        body = ["  while (busy) {", *["    total += 1;"] * 60, "  }"]
        issues = check_function_length(make_file("\n".join(_function("loop", body))))
        assert issues[0].description == "Function is 64 lines long"

    def test_braceless_body_ends_after_two_lines(self):
        code = "def f():\n" + "    x = 1\n" * 60
        assert check_function_length(make_file(code, "f.py", "python")) == []


BLOCK = [
    "const alpha = compute(1);",
    "const beta = compute(2);",
    "const gamma = alpha + beta;",
    "const delta = gamma * 2;",
    "const epsilon = delta - 1;",
]
FILLER = [
    "log('first separator');",
    "log('second separator');",
    "log('third separator');",
    "log('fourth separator');",
    "log('fifth separator');",
]


class TestDuplication:
    def test_repeated_block_reported_once(self):
        issues = check_duplication(make_file("\n".join(BLOCK + FILLER + BLOCK)))
        assert len(issues) == 1
        issue = issues[0]
        assert issue.title == "Code Duplication Detected"
        assert issue.severity == "medium"
        assert issue.location.line == 1
        assert issue.description == "Similar code block found in 2 locations"
        assert issue.location.snippet == "\n".join(BLOCK)[:100] + "..."

    def test_three_copies(self):
        issues = check_duplication(make_file("\n".join(BLOCK + FILLER + BLOCK + FILLER[::-1] + BLOCK)))
        assert [i.description for i in issues] == ["Similar code block found in 3 locations"]

    def test_blank_and_comment_lines_ignored(self):
        spaced = [BLOCK[0], "", BLOCK[1], BLOCK[2], "// note"]
        compact = [BLOCK[0], BLOCK[1], "/* x */", BLOCK[2], ""]
        issues = check_duplication(make_file("\n".join(spaced + FILLER + compact)))
        assert len(issues) == 1
        assert issues[0].location.line == 1

    def test_short_blocks_ignored(self):
        short = ["a = 1;", "b = 2;", "c = 3;", "d = 4;", "e = 5;"]
        assert check_duplication(make_file("\n".join(short + FILLER + short))) == []

    def test_file_shorter_than_window(self):
        assert check_duplication(make_file("a\nb\nc")) == []


class TestComplexityAnalyzer:
    def test_all_findings_are_complexity(self):
        body = [f"  total += {n};" for n in range(99)]
        code = "\n".join(_function("big", body) + BLOCK + FILLER + BLOCK)
        issues = ComplexityAnalyzer().analyze([make_file(code)])
        assert {i.category for i in issues} == {"complexity"}
        assert [i.title for i in issues] == ["Long Function", "Code Duplication Detected"]
