import math

import pytest
from hypothesis import given, settings, strategies as st

from core.errors import (
    DivisionByZeroError, ErrorKind, MalformedExpressionError, ModuloByZeroError,
    StackOverflowError, UnknownOperatorError
)
from core.infix_evaluator import InfixEvaluator, evaluate, try_evaluate
from core.stack import BoundedStack


@pytest.mark.parametrize("expression, expected", [
    ("2+3*4", 14),
    ("(2+3)*4", 20),
    ("2^3^2", 512),
    ("(2^3)^2", 64),
    ("8-3-2", 3),
    ("16/4/2", 2),
    ("-5+3", -2),
    ("3*-2", -6),
    ("2^-3", 0.125),
    ("-2^2", -4),
    ("8/-2*3", -12),
    ("2--3", 5),
    ("-(2+3)", -5),
    ("((1))", 1),
    ("10 % 4", 2),
    ("7.5 % 2", 1.5),
    ("-7 % 3", -1),
    ("1.5 * 4", 6),
    ("  12  ", 12),
    ("2 * (3 + 4) ^ 2 - 1", 97),
])
def test_evaluate(expression, expected):
    assert evaluate(expression) == pytest.approx(expected)


def test_division_by_zero():
    with pytest.raises(DivisionByZeroError) as excinfo:
        evaluate("5/0")
    assert excinfo.value.kind == ErrorKind.DIVISION_BY_ZERO


def test_modulo_by_zero():
    with pytest.raises(ModuloByZeroError) as excinfo:
        evaluate("5%0")
    assert excinfo.value.kind == ErrorKind.MODULO_BY_ZERO


def test_division_by_computed_zero_aborts():
    with pytest.raises(DivisionByZeroError):
        evaluate("1/(2-2) + 5")


def test_tiny_divisor_is_treated_as_zero():
    with pytest.raises(DivisionByZeroError):
        evaluate("1/0.00000000001")


@pytest.mark.parametrize("expression", [
    "",
    "   ",
    "2+",
    "*2",
    "(2+3",
    "2+3)",
    "2 3",
    "2 $ 3",
    "()",
    "2()",
    "()2",
    "2+()3",
    "(()2)",
])
def test_malformed_in_strict_mode(expression):
    with pytest.raises(MalformedExpressionError):
        evaluate(expression)


def test_none_is_malformed():
    with pytest.raises(MalformedExpressionError):
        evaluate(None)


@pytest.mark.parametrize("expression, expected", [
    ("2+3)", 5),
    ("2 a + 3", 5),
    ("2+", 2),
    ("5-", -5),
])
def test_lenient_mode_absorbs_malformed_input(expression, expected):
    assert evaluate(expression, strict=False) == pytest.approx(expected)


def test_lenient_unclosed_paren_reaches_reducer():
    with pytest.raises(UnknownOperatorError):
        evaluate("(2+3", strict=False)


def test_empty_parentheses_message():
    with pytest.raises(MalformedExpressionError, match="Empty parentheses"):
        evaluate("2+()3")
    assert evaluate("(2)+((3))") == 5


def test_lenient_empty_value_stack_is_still_malformed():
    with pytest.raises(MalformedExpressionError):
        evaluate("()", strict=False)


def test_operator_stack_overflow():
    expression = "(" * 101 + "1" + ")" * 101
    with pytest.raises(StackOverflowError):
        evaluate(expression)
    assert evaluate(expression, strict=False) == 1


def test_custom_stack_capacity():
    evaluator = InfixEvaluator(stack_capacity=2)
    assert evaluator.evaluate("1*2+3") == 5
    with pytest.raises(StackOverflowError):
        evaluator.evaluate("1+2*3")


def test_stack_capacity_must_be_positive():
    with pytest.raises(ValueError):
        InfixEvaluator(stack_capacity=0)


def test_custom_epsilon():
    evaluator = InfixEvaluator(epsilon=0.01)
    with pytest.raises(DivisionByZeroError):
        evaluator.evaluate("1/0.001")


def test_power_results_are_not_errors():
    assert math.isnan(evaluate("(0-8)^0.5"))
    assert evaluate("10^400") == math.inf


def test_try_evaluate():
    ok = try_evaluate("1+1")
    assert ok.ok
    assert ok.value == 2
    assert ok.display == "2"

    failed = try_evaluate("1/0")
    assert not failed.ok
    assert failed.value is None
    assert failed.error == ErrorKind.DIVISION_BY_ZERO
    assert failed.display == "Error: Division by zero"


def test_evaluator_is_reusable_after_error():
    evaluator = InfixEvaluator()
    with pytest.raises(DivisionByZeroError):
        evaluator.evaluate("1/0*3+2")
    assert evaluator.evaluate("1+2") == 3


def _recording_factory(created):
    def factory(**kwargs):
        stack = BoundedStack(**kwargs)
        created.append(stack)
        return stack
    return factory


@pytest.mark.parametrize("expression", ["2+3*4", "-(2^3^2)/4", "((1+2)*(3-4))%5"])
def test_no_residue_left_on_stacks(expression):
    created = []
    InfixEvaluator(stack_factory=_recording_factory(created)).evaluate(expression)
    assert len(created) == 2
    assert all(stack.is_empty() for stack in created)


# 随机全括号表达式，与朴素递归求值对照
_trees = st.recursive(
    st.integers(min_value=0, max_value=1000),
    lambda children: st.tuples(st.sampled_from("+-*/"), children, children),
    max_leaves=20,
)


def _render(tree):
    if isinstance(tree, int):
        return str(tree)
    op, left, right = tree
    return f"({_render(left)}{op}{_render(right)})"


def _naive(tree):
    if isinstance(tree, int):
        return float(tree)
    op, left, right = tree
    a, b = _naive(left), _naive(right)
    if op == '+':
        return a + b
    if op == '-':
        return a - b
    if op == '*':
        return a * b
    if abs(b) < 1e-10:
        raise ZeroDivisionError
    return a / b


@settings(max_examples=200)
@given(_trees)
def test_matches_naive_recursive_evaluator(tree):
    expression = _render(tree)
    try:
        expected = _naive(tree)
    except ZeroDivisionError:
        with pytest.raises(DivisionByZeroError):
            evaluate(expression)
        return
    assert evaluate(expression) == expected
