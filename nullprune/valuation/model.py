"""
nullprune/valuation/model.py

Expression tree consumed by the valuation engine.

The host front end (see ``nullprune.syntaxer.lowering``) maps its syntax
nodes onto these variants. Shapes the engine does not understand become
``Other``. Nodes are immutable; the engine never rewrites them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Optional, Tuple, Union

# Identity of a reference-typed formal parameter. Owned by the symbol
# resolver; the engine only hashes and compares it.
ParameterIdentity = Hashable


@dataclass(frozen=True)
class Parenthesized:
    inner: "ExpressionNode"
    origin: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class LogicalNot:
    operand: "ExpressionNode"
    origin: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class LogicalAnd:
    left: "ExpressionNode"
    right: "ExpressionNode"
    origin: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class LogicalOr:
    left: "ExpressionNode"
    right: "ExpressionNode"
    origin: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class EqualityCompare:
    """``left == right`` or, when ``negated``, ``left != right``."""
    left: "ExpressionNode"
    right: "ExpressionNode"
    negated: bool = False
    origin: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class NullLiteral:
    origin: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ParameterReference:
    identity: ParameterIdentity
    origin: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Invocation:
    """
    Call of some function.

    ``callee`` is an opaque reference understood by the symbol resolver
    (a syntax node for the Java front end, a plain key in tests). It is
    resolved lazily so that mutually recursive helpers can be represented.
    """
    callee: Any
    arguments: Tuple["ExpressionNode", ...] = ()
    origin: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Other:
    """Any expression kind that is not modeled."""
    text: str = ""
    origin: Any = field(default=None, compare=False, repr=False)


ExpressionNode = Union[
    Parenthesized,
    LogicalNot,
    LogicalAnd,
    LogicalOr,
    EqualityCompare,
    NullLiteral,
    ParameterReference,
    Invocation,
    Other,
]


@dataclass(frozen=True)
class CalleeDefinition:
    """
    Resolved target of an ``Invocation``.

    Attributes:
        name: Callee name (diagnostics only)
        parameters: Formal parameter identities, in declaration order
        body: The single returned expression, or None if not inlineable
        unit: Analysis unit (compilation unit) the callee is declared in
    """
    name: str
    parameters: Tuple[ParameterIdentity, ...]
    body: Optional[ExpressionNode] = None
    unit: Hashable = None

    @property
    def is_inlineable(self) -> bool:
        return self.body is not None
