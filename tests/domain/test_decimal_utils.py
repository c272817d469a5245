"""Tests for stock_kernel.domain.decimal_utils."""

from decimal import Decimal, InvalidOperation, getcontext

import pytest

from stock_kernel.domain.decimal_utils import (
    ZERO,
    as_quantity,
    ceil_to_multiple,
    exact_context,
    is_valid_decimal,
    round_money,
    to_decimal,
)


class TestToDecimal:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, Decimal("0")),
            (7, Decimal("7")),
            (Decimal("1.25"), Decimal("1.25")),
            (" 3.5 ", Decimal("3.5")),
            ("-2", Decimal("-2")),
        ],
    )
    def test_supported_inputs(self, raw, expected):
        assert to_decimal(raw) == expected

    def test_float_goes_through_str(self):
        assert to_decimal(0.1) == Decimal("0.1")
        assert to_decimal(0.111111) == Decimal("0.111111")

    def test_non_finite_passes_through(self):
        assert to_decimal(float("inf")).is_infinite()
        assert to_decimal("NaN").is_nan()

    def test_unparseable_string(self):
        with pytest.raises(InvalidOperation):
            to_decimal("twelve")

    def test_bool_rejected(self):
        with pytest.raises(TypeError):
            to_decimal(True)

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            to_decimal([1])


class TestValidity:

    @pytest.mark.parametrize("raw", [0, "12.5", Decimal("-1"), None])
    def test_valid(self, raw):
        assert is_valid_decimal(raw) is True

    @pytest.mark.parametrize("raw", ["abc", float("nan"), float("inf"), "-Infinity", True, object()])
    def test_invalid(self, raw):
        assert is_valid_decimal(raw) is False


class TestAsQuantity:

    @pytest.mark.parametrize("raw", [None, "abc", float("nan"), {"stock": 1}])
    def test_unusable_reads_as_zero(self, raw):
        assert as_quantity(raw) == ZERO

    def test_infinity_is_kept(self):
        assert as_quantity(float("inf")) == Decimal("Infinity")
        assert as_quantity("-Infinity") == Decimal("-Infinity")

    def test_negative_is_kept(self):
        assert as_quantity(-4) == Decimal("-4")


class TestRoundMoney:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("0.005", "0.01"),
            ("0.015", "0.02"),
            ("2.345", "2.35"),
            ("-2.345", "-2.35"),
            ("10", "10.00"),
        ],
    )
    def test_half_up(self, raw, expected):
        assert str(round_money(Decimal(raw))) == expected

    def test_other_places(self):
        assert round_money(Decimal("1.23456"), places=4) == Decimal("1.2346")

    def test_beyond_default_precision(self):
        assert str(round_money(Decimal(10 ** 27))) == "1" + "0" * 27 + ".00"
        assert round_money(Decimal("123456789012345678901234567890.125")) == Decimal(
            "123456789012345678901234567890.13"
        )


class TestCeilToMultiple:

    @pytest.mark.parametrize(
        "value, multiple, expected",
        [
            ("28", "10", "30"),
            ("30", "10", "30"),
            ("0.5", "5", "5"),
            ("25", "12", "36"),
            ("7", "2.5", "7.5"),
            ("0", "10", "0"),
        ],
    )
    def test_rounds_up(self, value, multiple, expected):
        assert ceil_to_multiple(Decimal(value), Decimal(multiple)) == Decimal(expected)

    @pytest.mark.parametrize(
        "value, expected", [("-5", "0"), ("-15", "-10"), ("-10", "-10")]
    )
    def test_negative_values_round_toward_positive(self, value, expected):
        assert ceil_to_multiple(Decimal(value), Decimal("10")) == Decimal(expected)

    def test_beyond_default_precision(self):
        value = Decimal(10 ** 40 + 1)
        assert ceil_to_multiple(value, Decimal("12")) >= value
        assert ceil_to_multiple(value, Decimal("10")) == Decimal(10 ** 40 + 10)

    @pytest.mark.parametrize("multiple", ["0", "-5", "Infinity", "NaN"])
    def test_non_positive_multiple(self, multiple):
        with pytest.raises(ValueError):
            ceil_to_multiple(Decimal("3"), Decimal(multiple))


class TestExactContext:

    def test_keeps_default_for_small_values(self):
        with exact_context(Decimal("12.5"), Decimal("3")) as ctx:
            assert ctx.prec == getcontext().prec

    def test_widens_for_spread(self):
        with exact_context(Decimal(10 ** 40), Decimal("0.01")) as ctx:
            assert ctx.prec >= 43
            assert Decimal(10 ** 40) + Decimal("0.01") == Decimal(str(10 ** 40) + ".01")

    def test_ignores_non_finite(self):
        with exact_context(Decimal("Infinity"), Decimal("NaN")) as ctx:
            assert ctx.prec == getcontext().prec

    def test_restores_previous_precision(self):
        before = getcontext().prec
        with exact_context(Decimal(10 ** 60)):
            pass
        assert getcontext().prec == before
