"""Composition of leaf valuation providers: first known valuation wins."""

from __future__ import annotations

from typing import Iterable, Optional

from nullprune.valuation.base import ValuationContext, ValuationProvider
from nullprune.valuation.model import ExpressionNode


class EitherValuationProvider:

    def __init__(self, providers: Iterable[ValuationProvider]):
        self.providers = list(providers)

    def valuate(self, context: ValuationContext, expression: ExpressionNode, state) -> Optional[bool]:
        for provider in self.providers:
            result = provider.valuate(context, expression, state)
            if result is not None:
                return result
        return None
