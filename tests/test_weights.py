"""Tests for weight and number parsing."""

import pytest

from diet_analyzer.services.weights import parse_number, parse_weight, round_half_up


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("1.2kg", 1200),
        ("1.2 KG", 1200),
        ("150g", 150),
        ("约200克", 200),
        ("0.5公斤", 500),
        ("1千克", 1000),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (200, 200),
        (12.5, 12.5),
    ],
)
def test_parse_weight(value: object, expected: float) -> None:
    assert parse_weight(value) == pytest.approx(expected)


def test_parse_weight_ignores_non_string_objects() -> None:
    assert parse_weight(["150g"]) == 0
    assert parse_weight(True) == 0


def test_parse_number_takes_first_number() -> None:
    assert parse_number("约 12.5g，另加 3g") == 12.5
    assert parse_number("320kcal") == 320
    assert parse_number(float("nan")) == 0


def test_round_half_up_rounds_halves_up() -> None:
    assert round_half_up(0.45) == 0.5
    assert round_half_up(0.3 * 1.5) == 0.5
    assert round_half_up(0.44) == 0.4
    assert round_half_up(21.0) == 21.0


def test_oversized_numbers_read_as_zero() -> None:
    assert parse_number(10**400) == 0
    assert parse_number("9" * 400 + "g") == 0
    assert parse_weight("9" * 306 + "kg") == 0
    assert parse_weight(10**400) == 0


def test_round_half_up_keeps_integral_floats() -> None:
    assert round_half_up(1e20) == 1e20
