"""
Parameter null-check valuation.

Decides whether a condition is a redundant null-check of method
parameters, knowing that reference-typed parameters are never null.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional, Tuple

from nullprune.valuation.base import MAX_RECURSION_DEPTH
from nullprune.valuation.boolean import BoolValuationProvider
from nullprune.valuation.either import EitherValuationProvider
from nullprune.valuation.model import ExpressionNode, ParameterIdentity
from nullprune.valuation.null_check.call import CallValuationProvider
from nullprune.valuation.null_check.equals import EqualsValuationProvider
from nullprune.valuation.null_check.state import (
    NullCheckContext,
    NullCheckState,
    ParameterRefValidator,
)
from nullprune.valuation.resolver import SymbolResolver


@dataclass(frozen=True)
class NullCheck:
    """
    A resolved parameter null-check.

    Attributes:
        value: What the condition always evaluates to. True means the
            branch taken when the condition is true always runs.
        parameters: Parameters compared to null, in order of appearance
    """
    value: bool
    parameters: Tuple[ParameterIdentity, ...]


def build_provider() -> BoolValuationProvider:
    return BoolValuationProvider(
        EitherValuationProvider([CallValuationProvider(), EqualsValuationProvider()])
    )


def find_null_check(
    condition: ExpressionNode,
    resolver: SymbolResolver,
    unit: Hashable = None,
    max_depth: int = MAX_RECURSION_DEPTH,
) -> Optional[NullCheck]:
    """
    Check whether a condition is resolved knowing that parameters are non-null.

    Args:
        condition: Lowered condition of a branch
        resolver: Host symbol resolver
        unit: Analysis unit the condition belongs to
        max_depth: Recursion bound of the valuation

    Returns:
        The valuation and the parameters it relies on, or None
    """
    provider = build_provider()
    context = NullCheckContext(resolver, provider, unit=unit, max_depth=max_depth)
    state = NullCheckState()
    value = provider.valuate(context, condition, state)
    if value is None:
        return None
    return NullCheck(value, tuple(state.affected_params))


__all__ = [
    "CallValuationProvider",
    "EqualsValuationProvider",
    "NullCheck",
    "NullCheckContext",
    "NullCheckState",
    "ParameterRefValidator",
    "build_provider",
    "find_null_check",
]
