"""Report rendering: Markdown and standalone HTML."""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from jinja2 import Environment

from .models import AnalysisResult, Finding

logger = logging.getLogger(__name__)

_TEMPLATE = """\
# Code Quality Report

**Generated:** {{ generated }}

## Summary

- **Total Files:** {{ summary.total_files }}
- **Total Issues:** {{ summary.total_issues }}
- **Critical Issues:** {{ summary.critical_issues }}
- **Languages:** {{ summary.languages | join(", ") }}

## Metrics

| Metric | Score |
|--------|-------|
| Code Quality | {{ metrics.code_quality_score }}/100 |
| Security | {{ metrics.security_score }}/100 |
| Maintainability | {{ metrics.maintainability_score }}/100 |

## Issues
{% for issue in issues %}
### {{ issue.title }}

**Severity:** {{ issue.severity | upper }}
**Category:** {{ issue.category }}
**Location:** {{ issue.location.file }}{% if issue.location.line %}:{{ issue.location.line }}{% endif %}

**Description:** {{ issue.description }}
{% if issue.location.snippet %}
```
{{ issue.location.snippet }}
```
{% endif %}
**Impact:** {{ issue.impact }}

**Recommendation:** {{ issue.recommendation }}

---
{% else %}
No issues found.
{% endfor %}"""

_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Code Quality Report</title>
<style>
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; background: #f5f5f5; }
.container { max-width: 1200px; margin: 0 auto; padding: 20px; }
header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 40px 20px; border-radius: 10px; margin-bottom: 30px; }
h1 { font-size: 2.5em; margin-bottom: 10px; }
.summary, .metrics { display: grid; grid-template-columns: repeat(auto-fit, minmax(220px, 1fr)); gap: 20px; margin-bottom: 30px; }
.card, .metric, .issues-section { background: white; padding: 20px; border-radius: 8px; box-shadow: 0 2px 4px rgba(0,0,0,0.1); }
.card h3 { color: #666; font-size: 0.9em; text-transform: uppercase; margin-bottom: 10px; }
.card .value, .metric .value { font-size: 2em; font-weight: bold; }
.progress-bar { width: 100%; height: 20px; background: #e0e0e0; border-radius: 10px; overflow: hidden; margin-top: 10px; }
.progress-fill { height: 100%; }
.score-high { background: linear-gradient(90deg, #4caf50, #8bc34a); }
.score-medium { background: linear-gradient(90deg, #ff9800, #ffc107); }
.score-low { background: linear-gradient(90deg, #f44336, #e91e63); }
.category { margin: 30px 0 15px; text-transform: capitalize; }
.issue { border-left: 4px solid #ccc; padding: 15px; margin-bottom: 20px; background: #f9f9f9; border-radius: 4px; }
.issue.critical { border-left-color: #d32f2f; }
.issue.high { border-left-color: #f57c00; }
.issue.medium { border-left-color: #fbc02d; }
.issue.low { border-left-color: #388e3c; }
.issue-header { display: flex; justify-content: space-between; align-items: center; margin-bottom: 10px; }
.issue-title { font-size: 1.2em; font-weight: bold; }
.badge { padding: 4px 12px; border-radius: 12px; font-size: 0.85em; font-weight: bold; text-transform: uppercase; }
.badge.critical { background: #ffebee; color: #c62828; }
.badge.high { background: #fff3e0; color: #e65100; }
.badge.medium { background: #fffde7; color: #f57f17; }
.badge.low { background: #e8f5e9; color: #2e7d32; }
.issue-location { color: #666; font-size: 0.9em; margin-bottom: 10px; }
.issue-description { margin-bottom: 10px; }
.issue-impact { background: #fff3cd; padding: 10px; border-radius: 4px; margin-bottom: 10px; }
.issue-recommendation { background: #d1ecf1; padding: 10px; border-radius: 4px; }
.snippet { background: #2d2d2d; color: #f8f8f2; padding: 10px; border-radius: 4px; overflow-x: auto; margin: 10px 0; font-family: 'Courier New', monospace; }
</style>
</head>
<body>
<div class="container">
  <header>
    <h1>Code Quality Report</h1>
    <p>Generated on {{ generated }}</p>
  </header>
  <div class="summary">
    <div class="card"><h3>Total Files</h3><div class="value">{{ summary.total_files }}</div></div>
    <div class="card"><h3>Total Issues</h3><div class="value">{{ summary.total_issues }}</div></div>
    <div class="card"><h3>Critical Issues</h3><div class="value" style="color: #d32f2f;">{{ summary.critical_issues }}</div></div>
    <div class="card"><h3>Languages</h3><div class="value" style="font-size: 1.2em;">{{ summary.languages | join(", ") }}</div></div>
  </div>
  <div class="metrics">
  {% for label, value in scores %}
    <div class="metric">
      <h3>{{ label }}</h3>
      <div class="value">{{ value }}/100</div>
      <div class="progress-bar"><div class="progress-fill {{ value | score_class }}" style="width: {{ value }}%"></div></div>
    </div>
  {% endfor %}
  </div>
  <div class="issues-section">
    <h2>Issues Found</h2>
  {% for category, group in groups.items() %}
    <h3 class="category">{{ category }} ({{ group | length }})</h3>
    {% for issue in group %}
    <div class="issue {{ issue.severity }}">
      <div class="issue-header">
        <div class="issue-title">{{ issue.title }}</div>
        <span class="badge {{ issue.severity }}">{{ issue.severity }}</span>
      </div>
      <div class="issue-location">{{ issue.location.file }}{% if issue.location.line %} : Line {{ issue.location.line }}{% endif %}</div>
      <div class="issue-description">{{ issue.description }}</div>
      {% if issue.location.snippet %}<pre class="snippet"><code>{{ issue.location.snippet }}</code></pre>{% endif %}
      <div class="issue-impact"><strong>Impact:</strong> {{ issue.impact }}</div>
      <div class="issue-recommendation"><strong>Recommendation:</strong> {{ issue.recommendation }}</div>
    </div>
    {% endfor %}
  {% else %}
    <p>No issues found.</p>
  {% endfor %}
  </div>
</div>
</body>
</html>
"""

_env = Environment(autoescape=False, keep_trailing_newline=True)


def _format_date(iso: str) -> str:
    try:
        return datetime.fromisoformat(iso).strftime("%Y-%m-%d %H:%M:%S %Z").strip()
    except ValueError:
        return iso


def render_markdown(result: AnalysisResult) -> str:
    return _env.from_string(_TEMPLATE).render(
        generated=_format_date(result.summary.analysis_date),
        summary=result.summary,
        metrics=result.metrics,
        issues=result.issues,
    )


def write_markdown(result: AnalysisResult, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_markdown(result), encoding="utf-8")
    logger.info("Report generated: %s", path)
    return path


def score_class(value: int) -> str:
    if value >= 70:
        return "score-high"
    if value >= 40:
        return "score-medium"
    return "score-low"


def group_by_category(issues) -> dict[str, list[Finding]]:
    """Issues keyed by category, in first-seen order."""
    groups: dict[str, list[Finding]] = {}
    for issue in issues:
        groups.setdefault(issue.category, []).append(issue)
    return groups


_html_env = Environment(autoescape=True)
_html_env.filters["score_class"] = score_class


def render_html(result: AnalysisResult) -> str:
    m = result.metrics
    return _html_env.from_string(_HTML_TEMPLATE).render(
        generated=_format_date(result.summary.analysis_date),
        summary=result.summary,
        scores=[
            ("Code Quality Score", m.code_quality_score),
            ("Security Score", m.security_score),
            ("Maintainability Score", m.maintainability_score),
        ],
        groups=group_by_category(result.issues),
    )


def write_html(result: AnalysisResult, path: str | Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_html(result), encoding="utf-8")
    logger.info("Report generated: %s", path)
    return path
