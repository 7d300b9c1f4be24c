from __future__ import annotations

import math

import pytest

from adapters.evaluator.ast_evaluator import ASTEvaluator
from adapters.expression_parser.recursive_descent_parser import RecursiveDescentParser
from contracts import (
    BinOpNode,
    CalcOverflowError,
    CalcZeroDivisionError,
    DepthLimitError,
    FloatValue,
    IntValue,
    NegNode,
    UnsupportedOperandError,
    ValueNode,
)
from ports.evaluator import Evaluator


def _eval(text: str):
    return ASTEvaluator().eval_expr(RecursiveDescentParser().parse(text)).value


def test_evaluator_satisfies_evaluator_port():
    assert isinstance(ASTEvaluator(), Evaluator)


def test_value_node_returns_held_value():
    node = ValueNode(value=IntValue(value=42))

    assert ASTEvaluator().eval_expr(node).value == IntValue(value=42)


def test_integer_arithmetic_stays_integer():
    assert _eval("2+3*4") == IntValue(value=14)
    assert _eval("(1+2)*3") == IntValue(value=9)
    assert _eval("10-20") == IntValue(value=-10)


def test_mixed_operands_promote_to_float():
    assert _eval("1+2.0") == FloatValue(value=3.0)
    assert _eval("2.5*2") == FloatValue(value=5.0)
    assert _eval("1e1-1") == FloatValue(value=9.0)


def test_integer_division_truncates():
    assert _eval("10/3") == IntValue(value=3)
    assert _eval("-7/2") == IntValue(value=-3)


def test_float_division():
    value = _eval("10.0/3")

    assert isinstance(value, FloatValue)
    assert value.value == pytest.approx(3.3333333333333335)


def test_float_division_by_zero_is_infinite():
    assert _eval("1.0/0") == FloatValue(value=math.inf)
    assert _eval("-1/0.0") == FloatValue(value=-math.inf)


def test_integer_division_by_zero_raises():
    with pytest.raises(CalcZeroDivisionError):
        _eval("1/0")
    with pytest.raises(CalcZeroDivisionError):
        _eval("1%0")


def test_modulo_on_integers():
    assert _eval("7%2") == IntValue(value=1)
    assert _eval("-7%2") == IntValue(value=-1)
    assert _eval("7%-2") == IntValue(value=1)


def test_modulo_with_float_operand_is_unsupported():
    with pytest.raises(UnsupportedOperandError):
        _eval("7.0%2")
    with pytest.raises(UnsupportedOperandError):
        _eval("7%2.0")


def test_power_is_left_associative():
    assert _eval("2^3^2") == IntValue(value=64)


def test_unary_minus_binds_tighter_than_power():
    assert _eval("-2^2") == IntValue(value=4)


def test_integer_power_with_non_negative_exponent_is_exact():
    assert _eval("3^0") == IntValue(value=1)
    assert _eval("3^39") == IntValue(value=3 ** 39)
    assert _eval("(0-2)^63") == IntValue(value=-(2 ** 63))


def test_negative_or_float_exponent_gives_float():
    assert _eval("2^-1") == FloatValue(value=0.5)
    assert _eval("4^0.5") == FloatValue(value=2.0)
    assert _eval("2.0^3") == FloatValue(value=8.0)


def test_negation_preserves_kind():
    assert _eval("-5") == IntValue(value=-5)
    assert _eval("--5") == IntValue(value=5)
    assert _eval("-1.5") == FloatValue(value=-1.5)


def test_integer_overflow_raises():
    with pytest.raises(CalcOverflowError):
        _eval("9223372036854775807+1")
    with pytest.raises(CalcOverflowError):
        _eval("2^63")
    with pytest.raises(CalcOverflowError):
        _eval("-(0-9223372036854775807-1)")


def test_float_arithmetic_overflows_to_infinity():
    assert _eval("1e308*10") == FloatValue(value=math.inf)


def test_steps_follow_evaluation_order():
    result = ASTEvaluator().eval_expr(RecursiveDescentParser().parse("-(1+2)*3"))

    assert result.value == IntValue(value=-9)
    assert result.steps == ["1 + 2 = 3", "-(3) = -3", "-3 * 3 = -9"]


def test_tree_deeper_than_limit_raises():
    node = ValueNode(value=IntValue(value=1))
    for _ in range(6):
        node = NegNode(operand=node)

    assert ASTEvaluator(max_depth=6).eval_expr(node).value == IntValue(value=1)
    with pytest.raises(DepthLimitError):
        ASTEvaluator(max_depth=5).eval_expr(node)


def test_long_left_chain_is_not_limited_by_depth():
    ast = RecursiveDescentParser().parse("+".join(["1"] * 1000))

    result = ASTEvaluator(max_depth=5).eval_expr(ast)

    assert result.value == IntValue(value=1000)
    assert len(result.steps) == 999


def test_right_nesting_counts_towards_limit():
    node = ValueNode(value=IntValue(value=1))
    for _ in range(4):
        node = BinOpNode(op="-", left=ValueNode(value=IntValue(value=0)), right=node)

    assert ASTEvaluator(max_depth=4).eval_expr(node).value == IntValue(value=1)
    with pytest.raises(DepthLimitError):
        ASTEvaluator(max_depth=3).eval_expr(node)


def test_evaluation_does_not_mutate_tree():
    ast = BinOpNode(op="+", left=ValueNode(value=IntValue(value=1)), right=ValueNode(value=IntValue(value=2)))
    before = ast.model_dump()

    ASTEvaluator().eval_expr(ast)

    assert ast.model_dump() == before
