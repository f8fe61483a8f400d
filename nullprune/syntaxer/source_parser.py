"""
nullprune/syntaxer/source_parser.py

Tree-sitter based Java source code parser.

Parses a compilation unit and builds the ``AnalysisContext`` the checks
run on (syntax tree, source bytes and the method index).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Hashable, Optional

from nullprune.valuation import MAX_RECURSION_DEPTH

from .context import AnalysisContext
from .utils import create_java_parser


class SourceParser:
    """
    Java source parser using tree-sitter.

    Example:
        parser = SourceParser()
        ctx = parser.parse_file("Program.java")
        for method in ctx.methods.values():
            print(method.name, [p.name for p in method.parameters])
    """

    def __init__(self, max_depth: int = MAX_RECURSION_DEPTH):
        """
        Initialize the parser.

        Args:
            max_depth: Recursion bound handed to every context it builds
        """
        self.parser = create_java_parser()
        self.max_depth = max_depth
        self.log = logging.getLogger(__name__)

    def parse_file(self, file_path: str | Path) -> Optional[AnalysisContext]:
        """
        Parse a Java source file.

        Args:
            file_path: Path to Java source file

        Returns:
            AnalysisContext for the file, or None if it cannot be read
        """
        file_path = Path(file_path)

        if not file_path.is_file():
            self.log.error("Source file not found: %s", file_path)
            return None

        try:
            source = file_path.read_bytes()
        except OSError as e:
            self.log.error("Cannot read %s: %s", file_path, e)
            return None

        return self.parse_source(source, unit=str(file_path))

    def parse_source(self, source: bytes | str, unit: Hashable = None) -> AnalysisContext:
        """
        Parse Java source code.

        Args:
            source: Java source code
            unit: Key of the compilation unit (the file path for files)

        Returns:
            AnalysisContext with the parsed tree and method index
        """
        if isinstance(source, str):
            source = source.encode("utf-8")

        tree = self.parser.parse(source)
        if tree.root_node.has_error:
            self.log.debug("syntax errors in %s", unit or "<source>")

        ctx = AnalysisContext(tree, source, unit=unit, max_depth=self.max_depth)
        self.log.debug("parsed %s: %d method(s)", unit or "<source>", len(ctx.methods))
        return ctx


def parse_java_source(file_path: str | Path) -> Optional[AnalysisContext]:
    """Convenience function to parse a Java source file."""
    parser = SourceParser()
    return parser.parse_file(file_path)
