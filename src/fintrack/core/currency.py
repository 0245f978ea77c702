#!/usr/bin/env python3
"""
Currency Handling Utilities

All financial calculations use integer cents to avoid floating-point errors.

Currency Representations:
- Internal calculations and storage use cents: 100 cents = 1.00
- User input accepts either decimal separator: "1234.56", "1.234,56", "R$ 10,50"
- Display uses the configured symbol with thousands grouping: "R$ 1.234,56"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Percentages are applied with Decimal and rounded half-up to whole cents
- Splits are validated to sum exactly to their total
"""

from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation

DEFAULT_SYMBOL = "R$"


class CurrencyParseError(ValueError):
    """Raised when a string cannot be read as a currency amount"""

    pass


def _normalize_amount_text(amount_str: str, symbol: str | None = None) -> str:
    """Strip symbols and grouping, leaving a plain '-1234.56' style string."""
    clean = amount_str.strip()
    symbols = (symbol,) if symbol else ()
    for token in (*symbols, DEFAULT_SYMBOL, "$", " ", "\u00a0"):
        clean = clean.replace(token, "")

    if "," in clean and "." in clean:
        # Whichever separator comes last is the decimal separator
        if clean.rfind(",") > clean.rfind("."):
            clean = clean.replace(".", "").replace(",", ".")
        else:
            clean = clean.replace(",", "")
    elif "," in clean:
        clean = clean.replace(",", ".")

    return clean


def parse_amount_to_cents(amount_str: str, symbol: str | None = None) -> int:
    """
    Parse a user-entered amount to cents.

    Args:
        amount_str: String like "12.34", "1.234,56", "R$ 10,50" or "-3"
        symbol: Extra currency symbol to strip besides "R$" and "$"

    Returns:
        Amount in cents, truncated beyond two decimal places

    Raises:
        CurrencyParseError: If the string is not a number

    Examples:
        parse_amount_to_cents("12.34") -> 1234
        parse_amount_to_cents("1.234,56") -> 123456
        parse_amount_to_cents("R$ 10,5") -> 1050
        parse_amount_to_cents("€ 7,25", symbol="€") -> 725
    """
    clean = _normalize_amount_text(amount_str, symbol)
    if not clean:
        raise CurrencyParseError(f"Empty amount: {amount_str!r}")

    try:
        value = Decimal(clean)
    except InvalidOperation as e:
        raise CurrencyParseError(f"Invalid amount: {amount_str!r}") from e

    if not value.is_finite():
        raise CurrencyParseError(f"Invalid amount: {amount_str!r}")

    return int((value * 100).to_integral_value(rounding=ROUND_DOWN))


def decimal_to_cents(value: Decimal | int | float | str) -> int:
    """
    Convert a decimal amount in currency units to cents, rounding half-up.

    Floats are routed through their string form so 0.1 stays 10 cents.
    """
    amount = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def cents_to_decimal(cents: int) -> Decimal:
    """Convert cents to a Decimal amount in currency units."""
    return Decimal(cents) / Decimal(100)


def cents_to_amount_str(cents: int) -> str:
    """
    Convert cents to a plain amount string using integer arithmetic.

    Example:
        cents_to_amount_str(-4599) -> "-45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))
    units = abs_cents // 100
    remainder = abs_cents % 100

    if is_negative:
        return f"-{units}.{remainder:02d}"
    return f"{units}.{remainder:02d}"


def format_cents(cents: int, symbol: str = DEFAULT_SYMBOL) -> str:
    """
    Format cents for display with thousands grouping and decimal comma.

    Examples:
        format_cents(123456) -> "R$ 1.234,56"
        format_cents(-500) -> "-R$ 5,00"
    """
    abs_cents = abs(int(cents))
    grouped = f"{abs_cents // 100:,}".replace(",", ".")
    text = f"{symbol} {grouped},{abs_cents % 100:02d}"
    return f"-{text}" if cents < 0 else text


def apply_rate(cents: int, rate_percent: Decimal | float | int) -> int:
    """
    Grow an amount by a percentage rate, rounding half-up to whole cents.

    Example:
        apply_rate(100000, 10) -> 110000
    """
    rate = Decimal(str(rate_percent))
    grown = Decimal(cents) * (Decimal(1) + rate / Decimal(100))
    return int(grown.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percent_of(part: int, whole: int) -> float:
    """Return part as a percentage of whole, or 0.0 when whole is zero."""
    if whole == 0:
        return 0.0
    return (part / whole) * 100


def allocate_remainder(amounts: list[int], total: int) -> list[int]:
    """
    Allocate remainder from integer division to ensure exact sum.

    The last item gets any remainder to guarantee the sum equals the total.
    Used when a debt is split into equal installments.

    Args:
        amounts: List of calculated amounts before remainder allocation
        total: Target total that amounts should sum to

    Returns:
        List of amounts with remainder allocated to last item
    """
    if not amounts:
        return amounts

    amounts_copy = amounts.copy()
    current_sum = sum(amounts_copy[:-1])
    amounts_copy[-1] = total - current_sum
    return amounts_copy


def validate_sum_equals_total(amounts: list[int], total: int, tolerance: int = 0) -> bool:
    """Validate that amounts sum to total within a tolerance in cents."""
    return abs(sum(amounts) - total) <= tolerance
