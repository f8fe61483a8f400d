"""
nullprune/valuation/null_check/state.py

State, context and parameter validation for parameter null-check valuation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Hashable, Iterable, List, Optional, Set, Tuple

from nullprune.valuation.base import MAX_RECURSION_DEPTH, ValuationContext, ValuationProvider
from nullprune.valuation.model import CalleeDefinition, ExpressionNode, ParameterIdentity
from nullprune.valuation.resolver import SymbolResolver


@dataclass
class NullCheckState:
    """
    Valuation state for a parameter null-check.

    Attributes:
        affected_params: Parameters compared to null so far, in discovery
            order (a parameter named by two sub-checks appears twice)
        filter_params: Only parameters in this set are considered.
            None means no restriction, an empty set means nothing is
            eligible.
    """
    affected_params: List[ParameterIdentity] = field(default_factory=list)
    filter_params: Optional[FrozenSet[ParameterIdentity]] = None

    @classmethod
    def filtered(cls, params: Iterable[ParameterIdentity]) -> "NullCheckState":
        return cls(filter_params=frozenset(params))

    def clone(self) -> "NullCheckState":
        # the filter is frozen, sharing it is fine
        return NullCheckState(list(self.affected_params), self.filter_params)

    def merge(self, other: "NullCheckState") -> None:
        self.affected_params.extend(other.affected_params)

    def clear(self) -> None:
        self.affected_params.clear()

    @property
    def has_filters(self) -> bool:
        """False iff no parameter can pass the filter, so searching further is pointless."""
        return self.filter_params is None or bool(self.filter_params)

    def passes_filter(self, param: ParameterIdentity) -> bool:
        return self.filter_params is None or param in self.filter_params


class NullCheckContext(ValuationContext):
    """
    Valuation context that also knows the root provider to recurse into.

    ``inlining`` holds the (callee definition, parameter filter) pairs of the
    helper calls currently being inlined.
    """

    def __init__(
        self,
        resolver: SymbolResolver,
        valuation_provider: ValuationProvider,
        unit: Hashable = None,
        max_depth: int = MAX_RECURSION_DEPTH,
    ):
        super().__init__(resolver, unit=unit, max_depth=max_depth)
        self.valuation_provider = valuation_provider
        self.inlining: Set[Tuple[CalleeDefinition, FrozenSet[ParameterIdentity]]] = set()


class ParameterRefValidator:
    """Checks whether an expression names an eligible reference-typed parameter."""

    @staticmethod
    def validate(
        context: NullCheckContext,
        expression: ExpressionNode,
        state: NullCheckState,
    ) -> Optional[ParameterIdentity]:
        """
        Args:
            context: Valuation context holding the symbol resolver
            expression: Expression to check
            state: State with the parameter filter

        Returns:
            The parameter identity if ``expression`` is a reference-typed
            parameter passing the filter, None otherwise
        """
        if not state.has_filters:
            return None

        param = context.resolver.identity_of(expression)
        if param is None or not state.passes_filter(param):
            return None  # not a reference parameter, or filtered out
        return param
