"""
nullprune/valuation/base.py

Building blocks shared by every valuation layer: the state-object protocol,
the valuation-provider protocol, the valuation context and the scoped
recursion-depth counter.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Hashable, Iterator, Optional, Protocol, TypeVar

from nullprune.valuation.model import ExpressionNode
from nullprune.valuation.resolver import SymbolResolver

MAX_RECURSION_DEPTH = 30

S = TypeVar("S", bound="StateObject")
C_contra = TypeVar("C_contra", bound="ValuationContext", contravariant=True)
S_contra = TypeVar("S_contra", contravariant=True)


class StateObject(Protocol):
    """
    State threaded through a valuation.

    ``a.merge(b)`` must behave the same as ``b.merge(a)``, and a cleared
    state must be the identity element of ``merge``.
    """

    def clone(self: S) -> S:
        ...

    def merge(self: S, other: S) -> None:
        ...

    def clear(self) -> None:
        ...


class ValuationProvider(Protocol[C_contra, S_contra]):
    """
    Optional valuation of an expression.

    Returns the valuation (possibly recording information in ``state``), or
    None when the expression cannot be valuated, in which case ``state`` is
    left cleared.
    """

    def valuate(self, context: C_contra, expression: ExpressionNode, state: S_contra) -> Optional[bool]:
        ...


class RecursionDepthCounter:
    """
    Depth counter for one top-level valuation.

    Usage:
        with counter.enter() as depth:
            if depth > counter.limit:
                ...
    """

    def __init__(self, limit: int = MAX_RECURSION_DEPTH):
        self.limit = limit
        self.depth = 0

    @contextmanager
    def enter(self) -> Iterator[int]:
        self.depth += 1
        try:
            yield self.depth
        finally:
            self.depth -= 1

    @property
    def exceeded(self) -> bool:
        return self.depth > self.limit


class ValuationContext:
    """
    Context passed unchanged through a whole valuation.

    Attributes:
        resolver: Symbol resolver of the host
        unit: Analysis unit the valuated expression belongs to
        counter: Recursion-depth counter owned by this valuation
    """

    def __init__(
        self,
        resolver: SymbolResolver,
        unit: Hashable = None,
        max_depth: int = MAX_RECURSION_DEPTH,
    ):
        self.resolver = resolver
        self.unit = unit
        self.counter = RecursionDepthCounter(max_depth)
