"""
nullprune/syntaxer/lowering.py

Lowering of Tree-sitter Java expressions to the valuation expression model.

Only the shapes the valuation engine understands are lowered structurally:

    (expr)              -> Parenthesized
    !expr               -> LogicalNot
    a && b, a || b      -> LogicalAnd, LogicalOr
    a == b, a != b      -> EqualityCompare
    null                -> NullLiteral
    param               -> ParameterReference  (reference-typed parameters)
    m(args)             -> Invocation          (callee resolved lazily)

Everything else becomes ``Other``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import tree_sitter

from nullprune.valuation.model import (
    EqualityCompare,
    ExpressionNode,
    Invocation,
    LogicalAnd,
    LogicalNot,
    LogicalOr,
    NullLiteral,
    Other,
    Parenthesized,
    ParameterReference,
)

from .utils import code_children

if TYPE_CHECKING:
    from .context import AnalysisContext


class ExpressionLowering:

    def __init__(self, ctx: "AnalysisContext"):
        self.ctx = ctx

    def lower(self, node: tree_sitter.Node) -> ExpressionNode:
        kind = node.type

        if kind == "parenthesized_expression":
            inner = code_children(node)
            if len(inner) == 1:
                return Parenthesized(self.lower(inner[0]), origin=node)

        elif kind == "unary_expression":
            operator = node.child_by_field_name("operator")
            operand = node.child_by_field_name("operand")
            if operator is not None and operator.type == "!" and operand is not None:
                return LogicalNot(self.lower(operand), origin=node)

        elif kind == "binary_expression":
            lowered = self._lower_binary(node)
            if lowered is not None:
                return lowered

        elif kind == "null_literal":
            return NullLiteral(origin=node)

        elif kind == "identifier":
            param = self.ctx.parameter_named(node)
            if param is not None and param.is_reference:
                return ParameterReference(param, origin=node)

        elif kind == "method_invocation":
            args_node = node.child_by_field_name("arguments")
            args = code_children(args_node) if args_node is not None else []
            return Invocation(
                callee=node,
                arguments=tuple(self.lower(a) for a in args),
                origin=node,
            )

        return Other(self.ctx.text(node), origin=node)

    def _lower_binary(self, node: tree_sitter.Node) -> ExpressionNode | None:
        operator = node.child_by_field_name("operator")
        left = node.child_by_field_name("left")
        right = node.child_by_field_name("right")
        if operator is None or left is None or right is None:
            return None

        op = operator.type
        if op == "&&":
            return LogicalAnd(self.lower(left), self.lower(right), origin=node)
        if op == "||":
            return LogicalOr(self.lower(left), self.lower(right), origin=node)
        if op in ("==", "!="):
            return EqualityCompare(
                self.lower(left),
                self.lower(right),
                negated=(op == "!="),
                origin=node,
            )
        return None
