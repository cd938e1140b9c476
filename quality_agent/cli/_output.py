"""CLI output formatting: colors, tables, JSON mode."""
import json
import os
import re
import sys
from typing import Any

NO_COLOR = bool(os.environ.get("NO_COLOR")) or "--no-color" in sys.argv

# ANSI codes
_RESET = "\033[0m"
_BOLD = "\033[1m"
_DIM = "\033[2m"
_RED = "\033[31m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_BLUE = "\033[34m"


def c(text: str, code: str) -> str:
    if NO_COLOR:
        return text
    return f"{code}{text}{_RESET}"


def bold(t: str) -> str: return c(t, _BOLD)
def dim(t: str) -> str: return c(t, _DIM)
def red(t: str) -> str: return c(t, _RED)
def green(t: str) -> str: return c(t, _GREEN)
def yellow(t: str) -> str: return c(t, _YELLOW)
def blue(t: str) -> str: return c(t, _BLUE)


def severity_color(severity: str) -> str:
    s = (severity or "").lower()
    if s == "critical":
        return c(severity.upper(), _BOLD + _RED)
    if s == "high":
        return red(severity.upper())
    if s == "medium":
        return yellow(severity.upper())
    return blue(severity.upper())


def score_color(value: int) -> str:
    text = f"{value}/100"
    if value >= 70:
        return green(text)
    if value >= 40:
        return yellow(text)
    return red(text)


def table(rows: list[dict], columns: list[str]) -> str:
    """Render a list of dicts as aligned columns."""
    if not rows:
        return dim("(empty)")
    widths = {col: len(col) for col in columns}
    for row in rows:
        for col in columns:
            widths[col] = max(widths[col], len(_strip_ansi(str(row.get(col, "")))))
    hdr = "  ".join(bold(col.upper().ljust(widths[col])) for col in columns)
    sep = "  ".join("─" * widths[col] for col in columns)
    lines = [hdr, sep]
    for row in rows:
        parts = []
        for col in columns:
            val = str(row.get(col, ""))
            parts.append(val + " " * (widths[col] - len(_strip_ansi(val))))
        lines.append("  ".join(parts).rstrip())
    return "\n".join(lines)


def out_json(data: Any) -> None:
    """Print raw JSON to stdout."""
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def info(msg: str) -> None:
    print(f"{green('✓')} {msg}", file=sys.stderr)


def warn(msg: str) -> None:
    print(f"{yellow('⚠')} {msg}", file=sys.stderr)


def error(msg: str) -> None:
    print(f"{red('✗')} {msg}", file=sys.stderr)


def _strip_ansi(s: str) -> str:
    return re.sub(r"\033\[[0-9;]*m", "", s)
