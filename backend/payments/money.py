"""
Monetary precision helpers.

Order totals are Decimals quantized to the currency's minor unit; the
payment gateway is always handed integer minor units (cents). Never use
float for money.
"""

from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable, Union

# Currency minor unit exponents (how many decimal places)
CURRENCY_EXPONENT = {
    "AUD": 2,  # Australian Dollar (cents)
    "NZD": 2,  # New Zealand Dollar (cents)
    "USD": 2,  # United States Dollar (cents)
    "EUR": 2,  # Euro (cents)
    "GBP": 2,  # British Pound (pence)
    "SGD": 2,  # Singapore Dollar (cents)
    "JPY": 0,  # Japanese Yen (no subunit)
    "KRW": 0,  # South Korean Won (no subunit)
}

Amount = Union[Decimal, str, int]


def currency_exponent(currency: str) -> int:
    """
    Number of decimal places for a currency, defaulting to 2.

        >>> currency_exponent("AUD")
        2
        >>> currency_exponent("JPY")
        0
    """
    return CURRENCY_EXPONENT.get(currency.upper(), 2)


def quantize_decimal(currency: str) -> Decimal:
    return Decimal(10) ** -currency_exponent(currency)


def quantize(currency: str, amount: Amount) -> Decimal:
    """
    Round to currency decimals using banker's rounding (ROUND_HALF_EVEN).

        >>> quantize("AUD", "10.127")
        Decimal('10.13')
        >>> quantize("AUD", "10.125")
        Decimal('10.12')
    """
    if isinstance(amount, float):
        raise TypeError("Monetary amounts must not be floats")
    return Decimal(amount).quantize(quantize_decimal(currency), rounding=ROUND_HALF_EVEN)


def to_minor(currency: str, amount: Amount) -> int:
    """
    Convert to minor units (e.g., cents) after quantization.

        >>> to_minor("AUD", "25.00")
        2500
    """
    quantized = quantize(currency, amount)
    return int((quantized * (10 ** currency_exponent(currency))).to_integral_value())


def from_minor(currency: str, minor: int) -> Decimal:
    """
    Convert from minor units back to a Decimal amount.

        >>> from_minor("AUD", 1250)
        Decimal('12.5')
    """
    return Decimal(minor) / (10 ** currency_exponent(currency))


def sum_amounts(currency: str, amounts: Iterable[Amount]) -> Decimal:
    """Sum amounts exactly, then quantize once."""
    return quantize(currency, sum((Decimal(a) for a in amounts), Decimal("0")))
