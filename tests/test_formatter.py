import math

import pytest

from core.errors import ErrorKind
from core.formatter import format_error, format_result


@pytest.mark.parametrize("value, expected", [
    (14.0, "14"),
    (0.0, "0"),
    (-2.5, "-2.5"),
    (0.1, "0.1"),
    (1 / 3, "0.3333333333"),
    (123456789.0, "123456789"),
    (9999999999.0, "9999999999"),
    (1e10, "1.000000000e+10"),
    (-12345678901.0, "-1.234567890e+10"),
    (1e-11, "1.000000000e-11"),
    (1e-10, "1e-10"),
])
def test_format_result(value, expected):
    assert format_result(value) == expected


def test_non_finite_markers():
    assert format_result(math.nan) == "Error: Invalid input"
    assert format_result(math.inf) == "Infinity"
    assert format_result(-math.inf) == "-Infinity"


@pytest.mark.parametrize("value", [0.0, 2.0, 1e-12, 1e12, math.pi, math.nan, -math.inf])
def test_format_result_is_idempotent(value):
    assert format_result(value) == format_result(value)


def test_format_error_covers_every_kind():
    for kind in ErrorKind:
        assert format_error(kind).startswith("Error: ")
    assert format_error(ErrorKind.MODULO_BY_ZERO) == "Error: Modulo by zero"
