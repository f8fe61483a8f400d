"""
nullprune/syntaxer/__init__.py

Java front end for the valuation engine.

- Source parsing with tree-sitter (method and parameter symbols)
- Lowering of conditions to the valuation expression model
- Symbol resolution of parameters and boolean helper methods
- Checks reporting redundant parameter null-checks
"""

from nullprune.syntaxer.context import AnalysisContext
from nullprune.syntaxer.finder import NullCheckFinder
from nullprune.syntaxer.issues import Issue, make_issue
from nullprune.syntaxer.lowering import ExpressionLowering
from nullprune.syntaxer.resolver import JavaSymbolResolver
from nullprune.syntaxer.source_parser import SourceParser, parse_java_source
from nullprune.syntaxer.symbols import JavaParameter, SourceMethod

__all__ = [
    "AnalysisContext",
    "NullCheckFinder",
    "Issue",
    "make_issue",
    "ExpressionLowering",
    "JavaSymbolResolver",
    "SourceParser",
    "parse_java_source",
    "JavaParameter",
    "SourceMethod",
]
