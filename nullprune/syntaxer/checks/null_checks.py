"""Detect if-statements whose condition is a redundant parameter null-check."""

from __future__ import annotations

import tree_sitter

from nullprune.valuation import NullCheck, find_null_check

from ..context import AnalysisContext
from ..issues import Issue, make_issue

KIND = "redundant_null_check"


def find_param_null_check(ctx: AnalysisContext, condition: tree_sitter.Node) -> NullCheck | None:
    """Valuate a condition knowing that reference-typed parameters are non-null."""
    expression = ctx.resolver.lowering.lower(condition)
    return find_null_check(expression, ctx.resolver, unit=ctx.unit, max_depth=ctx.max_depth)


def run_param_null_checks(ctx: AnalysisContext) -> list[Issue]:
    issues: list[Issue] = []
    for node in ctx.iter_nodes():
        if node.type != "if_statement":
            continue
        cond = node.child_by_field_name("condition")
        if cond is None:
            continue

        check = find_param_null_check(ctx, cond)
        if check is None:
            continue

        names = tuple(dict.fromkeys(str(p) for p in check.parameters))
        shown = ", ".join(f"'{n}'" for n in names)
        outcome = "always" if check.value else "never"
        issues.append(
            make_issue(
                KIND,
                node,
                f"Null-check of parameter {shown} is redundant; the branch {outcome} runs.",
                is_inverted=check.value,
                parameters=names,
            )
        )
    return issues
