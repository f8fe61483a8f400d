"""
nullprune/valuation/boolean.py

Valuation of boolean logic expressions (logical and, logical or, logical
not, parentheses) on top of a leaf valuation.
"""

from __future__ import annotations

import logging
from typing import Generic, Optional, TypeVar

from nullprune.valuation.base import StateObject, ValuationContext, ValuationProvider
from nullprune.valuation.model import (
    ExpressionNode,
    LogicalAnd,
    LogicalNot,
    LogicalOr,
    Parenthesized,
)

log = logging.getLogger(__name__)

S = TypeVar("S", bound=StateObject)


class BoolValuationProvider(Generic[S]):
    """
    Tri-state valuation of a boolean expression tree.

    Connectives are handled here; every other node is a leaf and is handed
    to ``leaf_valuation``.

    Example:
        provider = BoolValuationProvider(EitherValuationProvider([...]))
        value = provider.valuate(context, expression, state)
    """

    def __init__(self, leaf_valuation: ValuationProvider):
        self.leaf_valuation = leaf_valuation

    def valuate(
        self,
        context: ValuationContext,
        expression: ExpressionNode,
        state: S,
    ) -> Optional[bool]:
        """
        Valuate a boolean logic expression.

        Args:
            context: Valuation context (owns the recursion counter)
            expression: Expression to valuate
            state: State to mutate: cleared on failure, passed through on
                negation and merged with the right operand's state on a
                binary connective

        Returns:
            The valuation, or None if it is unknown
        """
        with context.counter.enter():
            if context.counter.exceeded:
                log.debug("recursion bound %d hit", context.counter.limit)
                state.clear()
                return None

            if isinstance(expression, Parenthesized):
                return self.valuate(context, expression.inner, state)

            if isinstance(expression, LogicalNot):
                operand = self.valuate(context, expression.operand, state)
                return None if operand is None else not operand

            if isinstance(expression, (LogicalAnd, LogicalOr)):
                return self._valuate_binary(context, expression, state)

            result = self.leaf_valuation.valuate(context, expression, state)
            if result is None:
                state.clear()
            return result

    def _valuate_binary(
        self,
        context: ValuationContext,
        expression: LogicalAnd | LogicalOr,
        state: S,
    ) -> Optional[bool]:
        # left mutates in place, right works on a copy
        right_state = state.clone()
        left = self.valuate(context, expression.left, state)
        right = self.valuate(context, expression.right, right_state)

        # false decides an and, true decides an or
        dominant = isinstance(expression, LogicalOr)
        if left is dominant or right is dominant:
            result = dominant
        elif left is not None and right is not None:
            result = (left or right) if dominant else (left and right)
        else:
            state.clear()
            return None

        state.merge(right_state)
        return result
