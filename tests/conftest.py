"""Shared fixtures."""
import pytest

from quality_agent.models import Finding, Location, SourceFile


def make_file(content: str, path: str = "app.js", language: str = "javascript") -> SourceFile:
    return SourceFile.from_text(path, content, language)


def make_finding(category: str = "security", severity: str = "medium", title: str = "T") -> Finding:
    return Finding(
        category=category,
        severity=severity,
        title=title,
        description="d",
        location=Location(file="app.js", line=1),
    )


@pytest.fixture
def js_file():
    return make_file
