"""Symbol resolution contract between the valuation engine and its host."""

from __future__ import annotations

from typing import Any, Hashable, Mapping, Optional, Protocol

from nullprune.valuation.model import (
    CalleeDefinition,
    ExpressionNode,
    Invocation,
    NullLiteral,
    ParameterIdentity,
    ParameterReference,
    Parenthesized,
)


def unparenthesized(expression: ExpressionNode) -> ExpressionNode:
    while isinstance(expression, Parenthesized):
        expression = expression.inner
    return expression


class SymbolResolver(Protocol):

    def identity_of(self, expression: ExpressionNode) -> Optional[ParameterIdentity]:
        """Identity of a reference-typed formal parameter named by ``expression``, parentheses included."""
        ...

    def resolve_callee(self, invocation: Invocation) -> Optional[CalleeDefinition]:
        """Definition of a boolean helper with a single-expression body, if any."""
        ...

    def is_null_literal(self, expression: ExpressionNode) -> bool:
        ...


class StaticSymbolResolver:
    """
    Resolver over an already-lowered expression tree.

    ``ParameterReference`` nodes carry their identity, and invocation
    callees are looked up in a fixed table of definitions. Hosts that
    resolve lazily (see ``nullprune.syntaxer.resolver``) subclass this and
    override ``resolve_callee``.
    """

    def __init__(self, definitions: Optional[Mapping[Any, CalleeDefinition]] = None):
        self.definitions: dict[Any, CalleeDefinition] = dict(definitions or {})

    def define(self, callee: Hashable, definition: CalleeDefinition) -> None:
        self.definitions[callee] = definition

    def identity_of(self, expression: ExpressionNode) -> Optional[ParameterIdentity]:
        expression = unparenthesized(expression)
        if isinstance(expression, ParameterReference):
            return expression.identity
        return None

    def resolve_callee(self, invocation: Invocation) -> Optional[CalleeDefinition]:
        return self.definitions.get(invocation.callee)

    def is_null_literal(self, expression: ExpressionNode) -> bool:
        return isinstance(unparenthesized(expression), NullLiteral)
