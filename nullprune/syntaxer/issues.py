"""Issue data model for syntaxer findings."""

from __future__ import annotations

from dataclasses import dataclass

import tree_sitter


@dataclass(frozen=True)
class Issue:
    """
    Structured representation of a redundant null-check.

    ``is_inverted`` is the condition's constant value: True means the
    then-branch always runs, False means it never does.
    """

    kind: str
    line: int
    col: int
    message: str
    start_byte: int = 0
    end_byte: int = 0
    is_inverted: bool | None = None
    parameters: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "line": self.line,
            "col": self.col,
            "message": self.message,
            "is_inverted": self.is_inverted,
            "parameters": list(self.parameters),
        }


def make_issue(kind: str, node: tree_sitter.Node, message: str, **details) -> Issue:
    """Create an Issue using the node's start point (converted to 1-based)."""
    line, col = node.start_point
    return Issue(
        kind=kind,
        line=line + 1,
        col=col + 1,
        message=message,
        start_byte=node.start_byte,
        end_byte=node.end_byte,
        **details,
    )
