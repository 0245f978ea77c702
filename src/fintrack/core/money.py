#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    apply_rate,
    cents_to_amount_str,
    cents_to_decimal,
    decimal_to_cents,
    format_cents,
    parse_amount_to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Wallet balances may go negative (overdrawn); transaction, bill and debt
    amounts are stored positive and signed by their record type.

    Examples:
        >>> salary = Money.from_cents(500000)
        >>> str(salary)
        'R$ 5.000,00'

        >>> rent = Money.parse("1.250,90")
        >>> rent.to_cents()
        125090

        >>> (salary - rent).to_amount_str()
        '3749.10'
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """Create a zero amount."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_decimal(cls, amount: Decimal | int | float | str) -> "Money":
        """
        Create Money from an amount in currency units.

        Args:
            amount: Decimal, int, float or plain numeric string ("12.34")

        Returns:
            Money object rounded half-up to whole cents
        """
        return cls(cents=decimal_to_cents(amount))

    @classmethod
    def parse(cls, text: str, symbol: str | None = None) -> "Money":
        """
        Parse user input like "R$ 1.234,56" or "12.50".

        A configured display symbol such as "€" is stripped when given.

        Raises:
            CurrencyParseError: If the text is not an amount
        """
        return cls(cents=parse_amount_to_cents(text, symbol))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value in currency units as a Decimal."""
        return cents_to_decimal(self.cents)

    def to_amount_str(self) -> str:
        """Get plain amount string with a decimal point, as used in exports."""
        return cents_to_amount_str(self.cents)

    def format(self, symbol: str | None = None) -> str:
        """Format for display, optionally overriding the currency symbol."""
        if symbol is None:
            return format_cents(self.cents)
        return format_cents(self.cents, symbol=symbol)

    def with_interest(self, rate_percent: Decimal | float | int) -> "Money":
        """Return this amount grown by a simple percentage rate."""
        return Money(cents=apply_rate(self.cents, rate_percent))

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_zero(self) -> bool:
        return self.cents == 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __neg__(self) -> "Money":
        return Money(cents=-self.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __floordiv__(self, divisor: int) -> "Money":
        """Split Money into equal whole-cent parts, rounding down."""
        return Money(cents=self.cents // divisor)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __hash__(self) -> int:
        return hash(self.cents)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as display string."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"
