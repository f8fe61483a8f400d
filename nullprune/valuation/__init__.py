"""
nullprune/valuation/__init__.py

Tri-state (true / false / unknown) valuation of boolean expression trees.

- ``model``: expression tree and callee definitions
- ``base``: state and provider protocols, context, recursion counter
- ``boolean``: logical connectives over pluggable leaves
- ``either``: first-success composition of leaf providers
- ``null_check``: leaves for parameter null-checks and helper calls
"""

from nullprune.valuation.base import (
    MAX_RECURSION_DEPTH,
    RecursionDepthCounter,
    StateObject,
    ValuationContext,
    ValuationProvider,
)
from nullprune.valuation.boolean import BoolValuationProvider
from nullprune.valuation.either import EitherValuationProvider
from nullprune.valuation.null_check import NullCheck, NullCheckState, find_null_check
from nullprune.valuation.resolver import StaticSymbolResolver, SymbolResolver

__all__ = [
    "MAX_RECURSION_DEPTH",
    "RecursionDepthCounter",
    "StateObject",
    "ValuationContext",
    "ValuationProvider",
    "BoolValuationProvider",
    "EitherValuationProvider",
    "NullCheck",
    "NullCheckState",
    "find_null_check",
    "StaticSymbolResolver",
    "SymbolResolver",
]
