"""Registry of analysis checks."""

from __future__ import annotations

from typing import Callable, List

from ..context import AnalysisContext
from ..issues import Issue

from . import null_checks

Check = Callable[[AnalysisContext], List[Issue]]

CHECKS: list[Check] = [
    null_checks.run_param_null_checks,
]

__all__ = ["CHECKS"]
