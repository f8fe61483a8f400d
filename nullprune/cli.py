#!/usr/bin/env python3
"""
nullprune command line.

Reports (and optionally removes) if-statements whose condition is a
redundant null-check of method parameters, assuming reference-typed
parameters are never null.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from nullprune.analyzer import analyze_file
from nullprune.rewriter import fix_source
from nullprune.valuation import MAX_RECURSION_DEPTH

log = logging.getLogger(__name__)

ANALYSIS_NAME = "nullprune"
ANALYSIS_VERSION = "1.0"
DEFAULT_MAX_DEPTH = MAX_RECURSION_DEPTH

EXIT_CLEAN = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


def find_java_files(paths: Iterable[Path]) -> List[Path]:
    """Expand directories to the Java files below them, keeping order, dropping duplicates."""
    java_files: List[Path] = []
    for path in paths:
        if path.is_dir():
            java_files.extend(sorted(path.rglob("*.java")))
        elif path.suffix == ".java" or path.is_file():
            java_files.append(path)
        else:
            log.error("Not a Java file or directory: %s", path)
    return list(dict.fromkeys(java_files))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=ANALYSIS_NAME,
        description="Find (and remove) redundant null-checks of method parameters in Java sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Report findings in a file
  nullprune src/main/java/app/Program.java

  # Rewrite every Java file below a directory
  nullprune --fix src/main/java
        """,
    )
    parser.add_argument("paths", nargs="+", type=Path, metavar="PATH",
                        help="Java source files or directories")
    parser.add_argument("--fix", action="store_true",
                        help="Rewrite files in place, removing redundant checks")
    parser.add_argument("--json", action="store_true",
                        help="Print findings as JSON")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help=f"Recursion bound of the valuation (default: {DEFAULT_MAX_DEPTH})")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only log warnings and errors")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log debugging output")
    parser.add_argument("--version", action="version",
                        version=f"{ANALYSIS_NAME} {ANALYSIS_VERSION}")
    return parser


def fix_file(path: Path, max_depth: int) -> int:
    source = path.read_bytes()
    rewritten, fixed = fix_source(source, unit=str(path), max_depth=max_depth)
    if rewritten != source:
        path.write_bytes(rewritten)
        log.info("%s: removed %d null-check(s)", path, fixed)
    return fixed


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure logging
    if args.verbose:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO
    logging.basicConfig(level=log_level, format="%(message)s")

    if args.max_depth < 1:
        parser.error("--max-depth must be positive")

    files = find_java_files(args.paths)
    if not files:
        log.error("No Java files found")
        return EXIT_USAGE

    findings = []
    analysed = 0
    for path in files:
        if args.fix:
            try:
                fix_file(path, args.max_depth)
            except OSError as e:
                log.error("Cannot rewrite %s: %s", path, e)
                continue

        finder = analyze_file(path, max_depth=args.max_depth)
        if finder is None:
            continue
        analysed += 1
        findings.extend((path, issue) for issue in finder.issues)

    if analysed == 0:
        return EXIT_USAGE

    if args.json:
        payload = [dict(issue.to_dict(), path=str(path)) for path, issue in findings]
        print(json.dumps(payload, indent=2))
    else:
        for path, issue in findings:
            print(f"{path}:{issue.line}:{issue.col}: {issue.kind}: {issue.message}")

    log.info("%d file(s) analysed, %d finding(s)", analysed, len(findings))
    return EXIT_FINDINGS if findings else EXIT_CLEAN


if __name__ == "__main__":
    sys.exit(main())
