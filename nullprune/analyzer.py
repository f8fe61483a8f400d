"""Entry points for the redundant parameter null-check analysis."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Hashable, Optional

from nullprune.syntaxer import NullCheckFinder, SourceParser
from nullprune.syntaxer.checks.null_checks import find_param_null_check
from nullprune.valuation import MAX_RECURSION_DEPTH

log = logging.getLogger(__name__)

__all__ = ["analyze_source", "analyze_file", "find_param_null_check"]


def analyze_source(
    source: bytes | str,
    unit: Hashable = None,
    max_depth: int = MAX_RECURSION_DEPTH,
) -> NullCheckFinder:
    ctx = SourceParser(max_depth=max_depth).parse_source(source, unit=unit)
    return NullCheckFinder(ctx)


def analyze_file(path: str | Path, max_depth: int = MAX_RECURSION_DEPTH) -> Optional[NullCheckFinder]:
    """Analyze one Java file; None if it cannot be read."""
    ctx = SourceParser(max_depth=max_depth).parse_file(path)
    if ctx is None:
        return None
    log.debug("analyze %s", path)
    return NullCheckFinder(ctx)
