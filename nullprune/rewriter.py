"""
nullprune/rewriter.py

Source rewriting that removes redundant parameter null-checks.

For a reported ``if`` statement the branch that always runs is kept and the
rest dropped:

    if (args == null) {          // never true
        log("missing");
    } else {
        run(args);               // kept, braces removed
    }

A kept block is spliced into the enclosing statement list and re-indented
to the ``if``'s indentation; any other kept statement replaces the ``if``
as-is. With nothing to keep the ``if`` is deleted, or replaced by ``{}``
where a statement is syntactically required (``else if``, unbraced nested
``if``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Hashable, List, Optional, Sequence, Tuple

import tree_sitter

from nullprune.analyzer import analyze_source
from nullprune.syntaxer import AnalysisContext, Issue
from nullprune.syntaxer.utils import iter_nodes
from nullprune.valuation import MAX_RECURSION_DEPTH

log = logging.getLogger(__name__)

STATEMENT_LISTS = frozenset({"block", "constructor_body", "switch_block_statement_group"})

# multi-line string literals (text blocks)
VERBATIM_TYPES = frozenset({"string_literal", "text_block"})

MAX_FIX_PASSES = 16


@dataclass(frozen=True)
class Edit:
    """Replace ``source[start:end]`` with ``replacement``."""
    start: int
    end: int
    replacement: bytes


def _line_indent(source: bytes, pos: int) -> bytes:
    line_start = source.rfind(b"\n", 0, pos) + 1
    line = source[line_start:pos]
    return line[:len(line) - len(line.lstrip())]


def _verbatim_spans(node: tree_sitter.Node) -> List[Tuple[int, int]]:
    """Byte spans of multi-line literals below ``node``; their lines are part of the value."""
    return [
        (n.start_byte, n.end_byte)
        for n in iter_nodes(node)
        if n.type in VERBATIM_TYPES and n.start_point[0] != n.end_point[0]
    ]


def _reindent(
    source: bytes,
    start: int,
    end: int,
    base: bytes,
    indent: bytes,
    verbatim: Sequence[Tuple[int, int]] = (),
) -> bytes:
    """
    Move continuation lines of ``source[start:end]`` from ``base`` indentation
    to ``indent``. Lines starting inside a ``verbatim`` span are left as they are.
    """
    lines = source[start:end].split(b"\n")
    out = [lines[0]]
    pos = start + len(lines[0]) + 1
    for line in lines[1:]:
        if any(s < pos < e for s, e in verbatim):
            out.append(line)
        elif not line.strip():
            out.append(b"")
        elif line.startswith(base):
            out.append(indent + line[len(base):])
        else:
            # shallower than base, or indented differently: shift by the difference
            lead = len(line) - len(line.lstrip())
            width = max(lead + len(indent) - len(base), 0)
            out.append(b" " * width + line[lead:])
        pos += len(line) + 1
    return b"\n".join(out)


def _removal(source: bytes, node: tree_sitter.Node) -> Edit:
    """Delete a statement, taking its whole lines when nothing else is on them."""
    start, end = node.start_byte, node.end_byte
    line_start = source.rfind(b"\n", 0, start) + 1
    line_end = source.find(b"\n", end)
    if line_end < 0:
        line_end = len(source)

    if source[line_start:start].strip() or source[end:line_end].strip():
        return Edit(start, end, b"")
    stop = min(line_end + 1, len(source))
    return Edit(line_start, stop, b"")


def find_if_statement(ctx: AnalysisContext, issue: Issue) -> Optional[tree_sitter.Node]:
    for node in ctx.iter_nodes():
        if (
            node.type == "if_statement"
            and node.start_byte == issue.start_byte
            and node.end_byte == issue.end_byte
        ):
            return node
    return None


def plan_fix(ctx: AnalysisContext, issue: Issue) -> Optional[Edit]:
    """
    Compute the edit removing the null-check reported by ``issue``.

    Args:
        ctx: Context the issue was reported on
        issue: A redundant null-check finding

    Returns:
        The edit, or None if the if-statement is no longer in the tree
    """
    node = find_if_statement(ctx, issue)
    if node is None or issue.is_inverted is None:
        return None

    source = ctx.source_bytes
    keep = node.child_by_field_name("consequence" if issue.is_inverted else "alternative")
    in_list = node.parent is not None and node.parent.type in STATEMENT_LISTS
    indent = _line_indent(source, node.start_byte)

    if keep is not None and keep.type == "block" and in_list:
        statements = keep.named_children
        if not statements:
            keep = None  # empty block, same as nothing to keep
        else:
            start, end = statements[0].start_byte, statements[-1].end_byte
            base = _line_indent(source, start)
            text = _reindent(source, start, end, base, indent, _verbatim_spans(keep))
            return Edit(node.start_byte, node.end_byte, text)

    if keep is not None:
        base = _line_indent(source, keep.start_byte)
        text = _reindent(source, keep.start_byte, keep.end_byte, base, indent, _verbatim_spans(keep))
        return Edit(node.start_byte, node.end_byte, text)

    if not in_list:
        return Edit(node.start_byte, node.end_byte, b"{}")
    return _removal(source, node)


def select_edits(edits: List[Edit]) -> List[Edit]:
    """Non-overlapping edits in source order; an edit inside an earlier, outer one is dropped."""
    accepted: List[Edit] = []
    for edit in sorted(edits, key=lambda e: (e.start, -e.end)):
        if accepted and edit.start < accepted[-1].end:
            continue
        accepted.append(edit)
    return accepted


def apply_edits(source: bytes, edits: List[Edit]) -> bytes:
    for edit in reversed(select_edits(edits)):
        source = source[:edit.start] + edit.replacement + source[edit.end:]
    return source


def fix_source(
    source: bytes | str,
    unit: Hashable = None,
    max_depth: int = MAX_RECURSION_DEPTH,
    max_passes: int = MAX_FIX_PASSES,
) -> Tuple[bytes, int]:
    """
    Remove every redundant null-check from a compilation unit.

    Nested findings are fixed over several passes, re-analysing after each.

    Returns:
        (rewritten source, number of if-statements removed)
    """
    if isinstance(source, str):
        source = source.encode("utf-8")

    fixed = 0
    for _ in range(max_passes):
        finder = analyze_source(source, unit=unit, max_depth=max_depth)
        edits = select_edits(
            [e for e in (plan_fix(finder.context, i) for i in finder.issues) if e is not None]
        )
        if not edits:
            break
        rewritten = apply_edits(source, edits)
        if rewritten == source:
            break
        fixed += len(edits)
        source = rewritten
    else:
        log.warning("%s: stopped fixing after %d passes", unit or "<source>", max_passes)
    return source, fixed
