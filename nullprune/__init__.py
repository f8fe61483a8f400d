"""
nullprune

Finds if-statements guarded by a redundant null-check of method parameters
in Java sources, and removes them.

- ``valuation``: tri-state valuation engine for boolean conditions, with
  interprocedural inlining of boolean helper methods
- ``syntaxer``: tree-sitter Java front end and checks
- ``rewriter``: source rewriting (code fix)
- ``cli``: command line
"""

from nullprune.analyzer import analyze_file, analyze_source, find_param_null_check
from nullprune.valuation import NullCheck, find_null_check

__version__ = "1.0"

__all__ = [
    "analyze_file",
    "analyze_source",
    "find_param_null_check",
    "find_null_check",
    "NullCheck",
]
