"""
Unit tests for payments.money module.

Totals are handed to Stripe in minor units; these guard against penny drift.
"""
from decimal import Decimal

import pytest

from payments.money import currency_exponent, from_minor, quantize, sum_amounts, to_minor


class TestCurrencyExponent:

    def test_aud_exponent(self):
        assert currency_exponent("AUD") == 2

    def test_jpy_exponent(self):
        assert currency_exponent("JPY") == 0

    def test_case_insensitive(self):
        assert currency_exponent("aud") == 2

    def test_unknown_currency_defaults_to_2(self):
        assert currency_exponent("XXX") == 2


class TestQuantize:
    """Banker's rounding (ROUND_HALF_EVEN)"""

    def test_normal(self):
        assert quantize("AUD", "10.127") == Decimal("10.13")

    def test_half_rounds_to_even_down(self):
        assert quantize("AUD", "10.125") == Decimal("10.12")

    def test_half_rounds_to_even_up(self):
        assert quantize("AUD", "10.135") == Decimal("10.14")

    def test_zero_decimal_currency(self):
        assert quantize("JPY", "1234.5") == Decimal("1234")

    def test_float_rejected(self):
        with pytest.raises(TypeError):
            quantize("AUD", 10.5)


class TestMinorUnits:

    def test_to_minor(self):
        assert to_minor("AUD", Decimal("25.00")) == 2500
        assert to_minor("AUD", "0.10") == 10
        assert to_minor("JPY", "1500") == 1500

    def test_from_minor(self):
        assert from_minor("AUD", 1250) == Decimal("12.50")
        assert from_minor("JPY", 1500) == Decimal("1500")

    def test_sum_then_quantize_once(self):
        assert sum_amounts("AUD", ["0.105", "0.105", "0.105"]) == Decimal("0.32")
