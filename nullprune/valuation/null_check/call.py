"""
nullprune/valuation/null_check/call.py

Valuation of a call to a boolean helper whose body null-checks parameters
passed straight through from the caller, e.g.

    static boolean isNull(Object o) { return o == null; }
    ...
    if (isNull(args)) { ... }

The helper body is valuated in place of the call with the callee's
parameters renamed back to the caller's.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from nullprune.valuation.model import (
    CalleeDefinition,
    ExpressionNode,
    Invocation,
    ParameterIdentity,
)
from nullprune.valuation.null_check.state import (
    NullCheckContext,
    NullCheckState,
    ParameterRefValidator,
)

log = logging.getLogger(__name__)


class CallValuationProvider:

    def _definition(
        self,
        context: NullCheckContext,
        invocation: Invocation,
    ) -> Optional[CalleeDefinition]:
        """Inlineable definition of the callee declared in the caller's unit, or None."""
        definition = context.resolver.resolve_callee(invocation)
        if definition is None or not definition.is_inlineable:
            return None
        if definition.unit != context.unit:
            return None
        return definition

    def valuate(
        self,
        context: NullCheckContext,
        expression: ExpressionNode,
        state: NullCheckState,
    ) -> Optional[bool]:
        """
        Valuate a helper call by valuating the helper's body.

        Only callee parameters receiving a caller parameter unchanged
        (``f(p)``, not ``f(p.q)`` or ``f(local)``) may be checked by the
        body. The parameters the body checks are stored into ``state`` as
        the matching caller parameters.

        Args:
            context: Valuation context
            expression: Expression to check
            state: State to mutate

        Returns:
            The body's valuation, or None if the call is not such a helper
            call or the body cannot be valuated
        """
        if not state.has_filters:
            state.clear()
            return None  # everything is filtered out

        if not isinstance(expression, Invocation):
            return None
        definition = self._definition(context, expression)
        if definition is None:
            return None

        # (caller argument parameter, callee parameter) for pass-through arguments
        passthru: List[Tuple[ParameterIdentity, ParameterIdentity]] = []
        for arg, param in zip(expression.arguments, definition.parameters):
            caller_param = ParameterRefValidator.validate(context, arg, state)
            if caller_param is not None:
                passthru.append((caller_param, param))

        log.debug(
            "inlining %s with %d pass-through argument(s)",
            definition.name,
            len(passthru),
        )
        local_state = NullCheckState.filtered(param for _, param in passthru)

        # the same helper on the same parameters again can only repeat itself
        key = (definition, local_state.filter_params)
        if key in context.inlining:
            log.debug("recursive call to %s", definition.name)
            state.clear()
            return None

        context.inlining.add(key)
        try:
            valuation = context.valuation_provider.valuate(context, definition.body, local_state)
        finally:
            context.inlining.discard(key)

        # failed valuations leave local_state cleared, which clears ours too
        state.affected_params = [
            next(arg for arg, param in passthru if param == local)
            for local in local_state.affected_params
        ]
        return valuation
