import pytest

from stacker_core.units import (
    format_exponential,
    format_fixed,
    format_number,
    parse_float,
    parse_number,
)


def test_parse_float_accepts_comma():
    assert parse_float("12,5") == 12.5


def test_parse_float_strips_whitespace():
    assert parse_float("  10.0 ") == 10.0


def test_parse_float_rejects_empty():
    with pytest.raises(ValueError):
        parse_float("")


@pytest.mark.parametrize("raw", ["", "   ", "abc", "inf", "nan", "1.2.3"])
def test_parse_number_falls_back_to_zero(raw):
    assert parse_number(raw) == 0.0


def test_parse_number_keeps_negative_values():
    assert parse_number("-91") == -91.0


def test_format_number_drops_integral_fraction():
    assert format_number(127.0) == "127"
    assert format_number(-0.0) == "0"
    assert format_number(12.5) == "12.5"


def test_format_fixed_rounds_to_digits():
    assert format_fixed(3048.0, 4) == "3048.0000"
    assert format_fixed(2.0 / 3.0, 2) == "0.67"


def test_format_exponential_has_unpadded_exponent():
    assert format_exponential(0.0031415926, 6) == "3.141593e-3"
    assert format_exponential(1.0, 6) == "1.000000e+0"
    assert format_exponential(0.0, 2) == "0.00e+0"
    assert format_exponential(1570796.3267948966, 3) == "1.571e+6"


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.00005, "0.00005"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (1e20, "100000000000000000000"),
        (1.5e21, "1.5e+21"),
        (-2.5e-8, "-2.5e-8"),
    ],
)
def test_format_number_switches_to_exponent_outside_decimal_range(value, expected):
    assert format_number(value) == expected


def test_format_fixed_rounds_ties_away_from_zero():
    assert format_fixed(0.03125, 4) == "0.0313"
    assert format_fixed(-0.03125, 4) == "-0.0313"
    assert format_fixed(0.5, 0) == "1"
    assert format_fixed(-0.0, 2) == "0.00"


def test_format_exponential_rounds_ties_away_from_zero():
    assert format_exponential(0.125, 1) == "1.3e-1"
    assert format_exponential(9.99, 1) == "1.0e+1"
