"""
Test suite for the valuation engine.

Tests cover the state object, the recursion counter, the boolean logic
evaluator, the leaf providers for parameter null-checks and helper calls,
and the entry point. Expression trees are built by hand; parameter
identities are plain strings.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nullprune.valuation import (
    NullCheck,
    NullCheckState,
    RecursionDepthCounter,
    StaticSymbolResolver,
    find_null_check,
)
from nullprune.valuation.model import (
    CalleeDefinition,
    EqualityCompare,
    Invocation,
    LogicalAnd,
    LogicalNot,
    LogicalOr,
    NullLiteral,
    Other,
    Parenthesized,
    ParameterReference,
)
from nullprune.valuation.null_check import (
    CallValuationProvider,
    EqualsValuationProvider,
    NullCheckContext,
    build_provider,
)


NULL = NullLiteral()
UNKNOWN = EqualityCompare(Other("someVar"), Other("1"))


def p(name):
    return ParameterReference(name)


def eq(left, right):
    return EqualityCompare(left, right)


def ne(left, right):
    return EqualityCompare(left, right, negated=True)


def call(name, *args):
    return Invocation(name, tuple(args))


def valuate(expression, resolver=None, state=None, max_depth=30):
    """Run the full provider stack; returns (result, affected params)."""
    provider = build_provider()
    context = NullCheckContext(resolver or StaticSymbolResolver(), provider, max_depth=max_depth)
    state = state if state is not None else NullCheckState()
    result = provider.valuate(context, expression, state)
    return result, state.affected_params


@pytest.fixture
def helpers():
    """Boolean helpers, as in ``static boolean isNull(Object input) { return input == null; }``."""
    resolver = StaticSymbolResolver({
        "isNull": CalleeDefinition("isNull", ("isNull.input",), eq(p("isNull.input"), NULL)),
        "isNotNull": CalleeDefinition("isNotNull", ("isNotNull.o",), ne(NULL, p("isNotNull.o"))),
        "first": CalleeDefinition("first", ("first.a", "first.b"), eq(p("first.a"), NULL)),
        "second": CalleeDefinition("second", ("second.a", "second.b"), ne(p("second.b"), NULL)),
        "twice": CalleeDefinition(
            "twice", ("twice.o",), LogicalOr(eq(p("twice.o"), NULL), eq(p("twice.o"), NULL))
        ),
    })
    resolver.define("opaque", CalleeDefinition("opaque", ("opaque.o",), None))
    resolver.define(
        "elsewhere",
        CalleeDefinition("elsewhere", ("elsewhere.o",), eq(p("elsewhere.o"), NULL), unit="Other.java"),
    )
    return resolver


class TestNullCheckState:
    """State algebra: clone, merge, clear and filtering."""

    def test_clone_is_independent(self):
        state = NullCheckState(["a"], frozenset({"a", "b"}))
        copy = state.clone()
        copy.affected_params.append("b")
        assert state.affected_params == ["a"]
        assert copy.filter_params == state.filter_params

    def test_merge_is_commutative(self):
        left = NullCheckState(["a", "b"])
        right = NullCheckState(["b", "c"])
        lr, rl = left.clone(), right.clone()
        lr.merge(right)
        rl.merge(left)
        assert sorted(lr.affected_params) == sorted(rl.affected_params)

    def test_cleared_state_is_merge_identity(self):
        cleared = NullCheckState(["x", "y"])
        cleared.clear()
        other = NullCheckState(["a"])

        merged = other.clone()
        merged.merge(cleared)
        assert merged.affected_params == ["a"]

        cleared.merge(other)
        assert cleared.affected_params == ["a"]

    def test_no_filter_lets_everything_through(self):
        state = NullCheckState()
        assert state.has_filters
        assert state.passes_filter("anything")

    def test_empty_filter_blocks_everything(self):
        state = NullCheckState.filtered([])
        assert not state.has_filters
        assert not state.passes_filter("a")

    def test_filter_membership(self):
        state = NullCheckState.filtered(["a"])
        assert state.passes_filter("a")
        assert not state.passes_filter("b")


class TestRecursionDepthCounter:

    def test_enter_and_leave(self):
        counter = RecursionDepthCounter(limit=1)
        with counter.enter() as depth:
            assert depth == 1
            assert not counter.exceeded
            with counter.enter():
                assert counter.exceeded
        assert counter.depth == 0

    def test_decrement_on_exception(self):
        counter = RecursionDepthCounter()
        with pytest.raises(RuntimeError):
            with counter.enter():
                raise RuntimeError("boom")
        assert counter.depth == 0


class TestEqualsValuation:
    """Direct ``param == null`` / ``param != null`` checks."""

    def _run(self, expression, state):
        context = NullCheckContext(StaticSymbolResolver(), build_provider())
        return EqualsValuationProvider().valuate(context, expression, state)

    def test_equals_null_is_false(self):
        assert valuate(eq(p("args"), NULL)) == (False, ["args"])

    def test_not_equals_null_is_true(self):
        assert valuate(ne(p("args"), NULL)) == (True, ["args"])

    @pytest.mark.parametrize("negated", [False, True])
    def test_operand_order_is_irrelevant(self, negated):
        direct = valuate(EqualityCompare(p("x"), NULL, negated))
        swapped = valuate(EqualityCompare(NULL, p("x"), negated))
        assert direct == swapped

    def test_two_parameters_are_not_a_null_check(self):
        state = NullCheckState()
        assert self._run(eq(p("a"), p("b")), state) is None
        assert state.affected_params == []

    def test_non_parameter_is_not_a_null_check(self):
        assert valuate(eq(Other("local"), NULL)) == (None, [])

    def test_null_equals_null(self):
        assert valuate(eq(NULL, NULL)) == (None, [])

    def test_failure_leaves_state_untouched(self):
        state = NullCheckState(["z"])
        assert self._run(eq(p("a"), Other("1")), state) is None
        assert state.affected_params == ["z"]

    def test_filtered_out_parameter(self):
        state = NullCheckState.filtered(["y"])
        assert self._run(eq(p("x"), NULL), state) is None

    def test_empty_filter(self):
        state = NullCheckState.filtered([])
        assert self._run(ne(p("x"), NULL), state) is None

    def test_not_a_comparison(self):
        assert self._run(p("x"), NullCheckState()) is None

    def test_parenthesized_operands(self):
        assert valuate(eq(Parenthesized(p("x")), NULL)) == (False, ["x"])
        assert valuate(ne(NULL, Parenthesized(Parenthesized(p("x"))))) == (True, ["x"])
        assert valuate(eq(p("x"), Parenthesized(NULL))) == (False, ["x"])


class TestBoolValuation:
    """Logical connectives over leaf valuations."""

    def test_parentheses(self):
        assert valuate(Parenthesized(Parenthesized(eq(p("x"), NULL)))) == (False, ["x"])

    def test_negation(self):
        assert valuate(LogicalNot(eq(p("x"), NULL))) == (True, ["x"])

    def test_negation_of_unknown(self):
        assert valuate(LogicalNot(UNKNOWN)) == (None, [])

    @pytest.mark.parametrize("expression", [
        eq(p("x"), NULL),
        ne(p("x"), NULL),
        LogicalAnd(ne(p("a"), NULL), ne(p("b"), NULL)),
        LogicalOr(eq(p("a"), NULL), UNKNOWN),
        UNKNOWN,
    ])
    def test_negation_law(self, expression):
        value, _ = valuate(expression)
        negated, _ = valuate(LogicalNot(expression))
        assert negated == (None if value is None else not value)

    def test_false_decides_and(self):
        assert valuate(LogicalAnd(eq(p("x"), NULL), UNKNOWN)) == (False, ["x"])
        assert valuate(LogicalAnd(UNKNOWN, eq(p("x"), NULL))) == (False, ["x"])

    def test_true_decides_or(self):
        assert valuate(LogicalOr(ne(p("x"), NULL), UNKNOWN)) == (True, ["x"])
        assert valuate(LogicalOr(UNKNOWN, ne(p("x"), NULL))) == (True, ["x"])

    def test_both_known(self):
        assert valuate(LogicalAnd(ne(p("a"), NULL), ne(p("b"), NULL))) == (True, ["a", "b"])
        assert valuate(LogicalOr(eq(p("a"), NULL), eq(p("b"), NULL))) == (False, ["a", "b"])

    def test_both_deciding_operands_contribute(self):
        assert valuate(LogicalAnd(eq(p("a"), NULL), eq(p("b"), NULL))) == (False, ["a", "b"])

    def test_unknown_is_not_explained_partially(self):
        state = NullCheckState()
        result, affected = valuate(LogicalAnd(ne(p("x"), NULL), UNKNOWN), state=state)
        assert result is None
        assert affected == []

        result, affected = valuate(LogicalOr(eq(p("x"), NULL), UNKNOWN))
        assert (result, affected) == (None, [])

    def test_neither_operand_known(self):
        assert valuate(LogicalOr(UNKNOWN, UNKNOWN)) == (None, [])

    def test_dominant_conjunction_decides_or(self):
        """``a != null && b != null || someVar == 1`` is always true."""
        expression = LogicalOr(
            LogicalAnd(ne(p("a"), NULL), ne(p("b"), NULL)),
            UNKNOWN,
        )
        assert valuate(expression) == (True, ["a", "b"])

    def test_mixed_logic(self):
        """``!(args != null) && (arg1 != null || arg2 != null) && arg2 != null && !(someVar == 1)``."""
        expression = LogicalAnd(
            LogicalAnd(
                LogicalAnd(
                    LogicalNot(Parenthesized(ne(p("args"), NULL))),
                    Parenthesized(LogicalOr(ne(p("arg1"), NULL), ne(p("arg2"), NULL))),
                ),
                ne(p("arg2"), NULL),
            ),
            LogicalNot(Parenthesized(UNKNOWN)),
        )
        result, affected = valuate(expression)
        assert result is False
        assert affected == ["args", "arg1", "arg2", "arg2"]

    def test_operand_order_does_not_change_affected_set(self):
        ab = valuate(LogicalAnd(ne(p("a"), NULL), ne(p("b"), NULL)))
        ba = valuate(LogicalAnd(ne(p("b"), NULL), ne(p("a"), NULL)))
        assert ab[0] == ba[0]
        assert sorted(ab[1]) == sorted(ba[1])

    def test_deterministic(self):
        expression = LogicalOr(LogicalAnd(ne(p("a"), NULL), UNKNOWN), eq(p("b"), NULL))
        assert valuate(expression) == valuate(expression)

    def test_depth_bound(self):
        def nest(n):
            expression = eq(p("x"), NULL)
            for _ in range(n):
                expression = Parenthesized(expression)
            return expression

        assert valuate(nest(29)) == (False, ["x"])
        assert valuate(nest(30)) == (None, [])
        assert valuate(nest(3), max_depth=3) == (None, [])

    def test_counter_released_after_valuation(self):
        provider = build_provider()
        context = NullCheckContext(StaticSymbolResolver(), provider)
        provider.valuate(context, LogicalAnd(ne(p("a"), NULL), UNKNOWN), NullCheckState())
        assert context.counter.depth == 0


class TestCallValuation:
    """Inlining of boolean helper calls."""

    def test_helper_call(self, helpers):
        assert valuate(call("isNull", p("y")), helpers) == (False, ["y"])
        assert valuate(call("isNotNull", p("y")), helpers) == (True, ["y"])

    def test_helper_call_equals_inline_check(self, helpers):
        assert valuate(call("isNull", p("x")), helpers) == valuate(eq(p("x"), NULL), helpers)

    def test_parenthesized_argument(self, helpers):
        assert valuate(call("isNull", Parenthesized(p("y"))), helpers) == (False, ["y"])

    def test_non_passthrough_argument(self, helpers):
        assert valuate(call("first", Other("localVar"), p("x")), helpers) == (None, [])

    def test_parameter_positions(self, helpers):
        assert valuate(call("second", Other("localVar"), p("x")), helpers) == (True, ["x"])
        assert valuate(call("first", p("x"), p("y")), helpers) == (False, ["x"])

    def test_duplicates_are_remapped(self, helpers):
        assert valuate(call("twice", p("x")), helpers) == (False, ["x", "x"])

    def test_not_inlineable(self, helpers):
        assert valuate(call("opaque", p("x")), helpers) == (None, [])

    def test_declared_in_other_unit(self, helpers):
        assert valuate(call("elsewhere", p("x")), helpers) == (None, [])

    def test_unresolved(self, helpers):
        assert valuate(call("missing", p("x")), helpers) == (None, [])

    def test_empty_filter_clears_state(self, helpers):
        context = NullCheckContext(helpers, build_provider())
        state = NullCheckState(["z"], frozenset())
        assert CallValuationProvider().valuate(context, call("isNull", p("x")), state) is None
        assert state.affected_params == []

    def test_chain_of_helpers(self):
        """isNull4 -> isNull2 -> isNull3 -> isNull1, shuffling arguments."""
        resolver = StaticSymbolResolver({
            "isNull1": CalleeDefinition("isNull1", ("1.v", "1.y"), eq(p("1.v"), NULL)),
            "isNull2": CalleeDefinition("isNull2", ("2.y", "2.t"), call("isNull3", p("2.t"), p("2.y"))),
            "isNull3": CalleeDefinition("isNull3", ("3.t", "3.y"), call("isNull1", p("3.t"), p("3.y"))),
            "isNull4": CalleeDefinition("isNull4", ("4.a", "4.b"), call("isNull2", p("4.a"), p("4.b"))),
        })
        assert valuate(call("isNull1", p("arg0"), p("arg0")), resolver) == (False, ["arg0"])
        assert valuate(call("isNull4", Other("abc"), p("arg2")), resolver) == (False, ["arg2"])
        assert valuate(call("isNull4", p("arg2"), Other("abc")), resolver) == (None, [])

    def test_mutual_recursion_terminates(self):
        resolver = StaticSymbolResolver({
            "isNull1": CalleeDefinition("isNull1", ("1.o",), call("isNull2", p("1.o"))),
            "isNull2": CalleeDefinition("isNull2", ("2.o",), call("isNull1", p("2.o"))),
        })
        assert valuate(call("isNull1", p("arg0")), resolver) == (None, [])

    def test_branching_self_recursion(self):
        """Every recursive call repeats the call being inlined, so it is cut at once."""
        body = call("f", p("f.o"))
        for _ in range(5):
            body = LogicalOr(body, call("f", p("f.o")))
        resolver = StaticSymbolResolver({"f": CalleeDefinition("f", ("f.o",), body)})

        provider = build_provider()
        context = NullCheckContext(resolver, provider)
        state = NullCheckState()
        assert provider.valuate(context, call("f", p("arg0")), state) is None
        assert state.affected_params == []
        assert context.inlining == set()

    def test_recursion_behind_a_deciding_operand(self):
        resolver = StaticSymbolResolver({
            "f": CalleeDefinition("f", ("f.o",), LogicalAnd(eq(p("f.o"), NULL), call("f", p("f.o")))),
        })
        assert valuate(call("f", p("arg0")), resolver) == (False, ["arg0"])

    def test_helper_inside_logic(self, helpers):
        expression = LogicalOr(
            LogicalOr(call("isNull", p("arg0")), eq(p("arg1"), NULL)),
            call("isNull", p("arg2")),
        )
        assert valuate(expression, helpers) == (False, ["arg0", "arg1", "arg2"])


class TestFindNullCheck:
    """Entry point."""

    def test_finding(self):
        assert find_null_check(eq(p("args"), NULL), StaticSymbolResolver()) == NullCheck(False, ("args",))

    def test_no_finding(self):
        assert find_null_check(UNKNOWN, StaticSymbolResolver()) is None

    def test_helper(self, helpers):
        assert find_null_check(call("isNull", p("y")), helpers) == NullCheck(False, ("y",))

    def test_unit_is_respected(self, helpers):
        result = find_null_check(call("elsewhere", p("y")), helpers, unit="Other.java")
        assert result == NullCheck(False, ("y",))

    def test_max_depth(self, helpers):
        assert find_null_check(call("isNull", p("y")), helpers, max_depth=1) is None
        assert find_null_check(call("isNull", p("y")), helpers, max_depth=2) is not None
