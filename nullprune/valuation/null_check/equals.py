"""Valuation of an explicit ``param == null`` / ``param != null`` check."""

from __future__ import annotations

from typing import Optional

from nullprune.valuation.model import EqualityCompare, ExpressionNode
from nullprune.valuation.null_check.state import (
    NullCheckContext,
    NullCheckState,
    ParameterRefValidator,
)


class EqualsValuationProvider:
    """
    Valuates a parameter compared to null, assuming the parameter is never
    null: ``p != null`` is true and ``p == null`` is false.
    """

    def valuate(
        self,
        context: NullCheckContext,
        expression: ExpressionNode,
        state: NullCheckState,
    ) -> Optional[bool]:
        if not state.has_filters:
            return None
        if not isinstance(expression, EqualityCompare):
            return None  # not <expr> ==(!=) <expr>

        is_null = context.resolver.is_null_literal
        for operand, other in (
            (expression.left, expression.right),
            (expression.right, expression.left),
        ):
            if not is_null(other):
                continue
            param = ParameterRefValidator.validate(context, operand, state)
            if param is not None:
                state.affected_params.append(param)
                return expression.negated
        return None
