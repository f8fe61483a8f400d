"""
nullprune/syntaxer/resolver.py

Symbol resolution for one Java compilation unit.

Helper calls are resolved the way Java resolves unqualified method names:
the innermost enclosing type that declares a method of that name decides,
and among its methods exactly one must match the call's arity. ``this.m()``
looks only at the innermost type, ``Owner.m()`` at the enclosing type named
``Owner``. Anything else (other objects, ``super``, other files) does not
resolve.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Optional

from nullprune.valuation.model import CalleeDefinition, Invocation
from nullprune.valuation.resolver import StaticSymbolResolver

from .lowering import ExpressionLowering
from .symbols import JavaParameter, SourceMethod

if TYPE_CHECKING:
    from .context import AnalysisContext

log = logging.getLogger(__name__)

__all__ = ["JavaParameter", "JavaSymbolResolver"]


class JavaSymbolResolver(StaticSymbolResolver):

    def __init__(self, ctx: "AnalysisContext"):
        super().__init__()
        self.ctx = ctx
        self.lowering = ExpressionLowering(ctx)
        self._cache: Dict[tuple[int, int], Optional[CalleeDefinition]] = {}

    def resolve_callee(self, invocation: Invocation) -> Optional[CalleeDefinition]:
        node = invocation.callee
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None
        name = self.ctx.text(name_node)

        scopes = list(self.ctx.enclosing_scopes(node))
        receiver = node.child_by_field_name("object")
        if receiver is not None:
            if receiver.type == "this":
                scopes = scopes[:1]
            elif receiver.type == "identifier":
                owner = self.ctx.text(receiver)
                scopes = [s for s in scopes if s[1] == owner][:1]
            else:
                return None

        arity = len(invocation.arguments)
        for scope, _ in scopes:
            candidates = self.ctx.methods_named(scope, name)
            if not candidates:
                continue
            matching = [
                m for m in candidates
                if m.kind == "method_declaration" and len(m.parameters) == arity
            ]
            if len(matching) != 1:
                log.debug("call to %s: %d candidate(s) of arity %d", name, len(matching), arity)
                return None
            return self.definition_of(matching[0])
        return None

    def definition_of(self, method: SourceMethod) -> Optional[CalleeDefinition]:
        """Inlineable definition of a boolean helper, lowered once and cached."""
        if method.key not in self._cache:
            self._cache[method.key] = self._build_definition(method)
        return self._cache[method.key]

    def _build_definition(self, method: SourceMethod) -> Optional[CalleeDefinition]:
        if not method.returns_boolean:
            return None
        returned = method.returned_expression()
        if returned is None:
            return None  # no body, or not a single return statement
        return CalleeDefinition(
            name=method.name,
            parameters=tuple(method.parameters),
            body=self.lowering.lower(returned),
            unit=self.ctx.unit,
        )
