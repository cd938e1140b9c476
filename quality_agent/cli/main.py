#!/usr/bin/env python3
"""quality-agent: analyze a codebase from the command line.

Usage:
    quality-agent analyze ./src
    quality-agent analyze ./src -o ./reports --no-ai
    quality-agent analyze app.js --json
"""

import argparse
import asyncio
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

from . import _output as out
from ..config import get_config
from ..engine import QualityAgent
from ..errors import NoSourceFilesError
from ..llm.advisor import LLMAdvisor
from ..models import AnalysisResult
from ..report import write_html, write_markdown
from ..sources import load_path


def print_result(result: AnalysisResult, html_path: Path, md_path: Path) -> None:
    s, m = result.summary, result.metrics
    print()
    out.info("Analysis complete!")
    print(f"  {out.bold('Files')}            {s.total_files} ({', '.join(s.languages)})")
    print(f"  {out.bold('Total Issues')}     {s.total_issues}")
    print(f"  {out.bold('Critical')}         {out.red(str(s.critical_issues))}")
    print(f"  {out.bold('Quality Score')}    {out.score_color(m.code_quality_score)}")
    print(f"  {out.bold('Security')}         {out.score_color(m.security_score)}")
    print(f"  {out.bold('Maintainability')}  {out.score_color(m.maintainability_score)}")
    if result.issues:
        print()
        rows = [
            {
                "severity": out.severity_color(i.severity),
                "category": i.category,
                "location": i.location.file + (f":{i.location.line}" if i.location.line else ""),
                "title": i.title,
            }
            for i in result.issues
        ]
        print(out.table(rows, ["severity", "category", "location", "title"]))
    print()
    print(f"  {out.dim('HTML report:')}     {html_path}")
    print(f"  {out.dim('Markdown report:')} {md_path}")


async def _run_analysis(args) -> AnalysisResult:
    cfg = get_config()
    analysis = replace(cfg.analysis, augment=False) if args.no_ai else cfg.analysis
    if analysis.augment and cfg.llm.provider == "demo" and not args.json_output:
        out.warn("LLM provider is demo: no advisory findings will be added")
    advisor = LLMAdvisor(cfg.llm)
    try:
        files = load_path(args.path, analysis)
        if not args.json_output:
            out.info(f"Found {len(files)} code files")
        return await QualityAgent(advisor=advisor, cfg=analysis).analyze(files)
    finally:
        await advisor.close()


def cmd_analyze(args):
    if not args.json_output:
        out.info(f"Analyzing: {args.path}")
    try:
        result = asyncio.run(_run_analysis(args))
    except NoSourceFilesError:
        out.error("No supported code files found")
        sys.exit(1)

    stem = Path(args.output) / f"report-{int(time.time() * 1000)}"
    html_path = write_html(result, stem.with_suffix(".html"))
    md_path = write_markdown(result, stem.with_suffix(".md"))
    if args.json_output:
        out.out_json(result.to_dict())
    else:
        print_result(result, html_path, md_path)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="quality-agent",
        description="AI-powered Code Quality Intelligence Agent",
    )
    p.add_argument("--no-color", action="store_true", help="Disable colors")
    p.add_argument("-v", "--verbose", action="store_true")
    sub = p.add_subparsers(dest="command")

    pa = sub.add_parser("analyze", help="Analyze a directory or a single file")
    pa.add_argument("path", help="Path to directory or file")
    pa.add_argument("-o", "--output", default="./reports", help="Output directory for reports")
    pa.add_argument("--no-ai", action="store_true", help="Skip LLM augmentation")
    pa.add_argument("--json", dest="json_output", action="store_true", help="Print JSON result")
    pa.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS)
    pa.set_defaults(func=cmd_analyze)

    ps = sub.add_parser("serve", help="Run the HTTP API")
    ps.set_defaults(func=cmd_serve)
    return p


def cmd_serve(args):
    from ..server import main as serve

    serve()


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "no_color", False):
        out.NO_COLOR = True
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not hasattr(args, "func") or args.func is None:
        parser.print_help()
        sys.exit(0)

    try:
        args.func(args)
    except KeyboardInterrupt:
        print()
        sys.exit(130)
    except Exception as e:
        if getattr(args, "verbose", False):
            import traceback

            traceback.print_exc()
        else:
            out.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
