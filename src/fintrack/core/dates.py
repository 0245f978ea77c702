#!/usr/bin/env python3
"""
FinancialDate Primitive Type

Immutable date wrapper with consistent formatting for financial operations.
Transactions, bills, goals and debts all carry calendar dates; stored data
may hold plain ISO dates or full ISO timestamps and both parse to the day.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, date_format: str | None = None) -> "FinancialDate":
        """
        Parse from string.

        Args:
            date_str: Date string to parse
            date_format: strptime format; when omitted, ISO dates
                ("2024-01-15") and ISO timestamps ("2024-01-15T10:30:00.000Z")
                are both accepted

        Returns:
            FinancialDate object
        """
        if date_format is not None:
            return cls(date=datetime.strptime(date_str, date_format).date())

        text = date_str.strip()
        if len(text) > 10:
            # JavaScript toISOString() output ends in 'Z'
            return cls(date=datetime.fromisoformat(text.replace("Z", "+00:00")).date())
        return cls(date=date.fromisoformat(text))

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def month_key(self) -> str:
        """Format as YYYY-MM for monthly grouping."""
        return f"{self.date.year:04d}-{self.date.month:02d}"

    def same_month(self, other: "FinancialDate") -> bool:
        return self.date.year == other.date.year and self.date.month == other.date.month

    def add_days(self, days: int) -> "FinancialDate":
        return FinancialDate(date=self.date + timedelta(days=days))

    def add_months(self, months: int, day: int | None = None) -> "FinancialDate":
        """
        Shift by whole months, keeping the day (or the given day) where possible.

        Days past the end of the target month clamp to its last day, so
        January 31 plus one month is February 28 (or 29).
        """
        month_index = self.date.month - 1 + months
        year = self.date.year + month_index // 12
        month = month_index % 12 + 1
        target_day = self.date.day if day is None else day
        last_day = calendar.monthrange(year, month)[1]
        return FinancialDate(date=date(year, month, min(target_day, last_day)))

    def start_of_month(self) -> "FinancialDate":
        return FinancialDate(date=self.date.replace(day=1))

    def previous_month(self) -> "FinancialDate":
        """First day of the preceding calendar month."""
        return self.start_of_month().add_months(-1)

    def age_days(self, other: "FinancialDate | None" = None) -> int:
        """
        Calculate days between this date and another (or today).

        Args:
            other: Other date to compare to (default: today)

        Returns:
            Number of days difference
        """
        if other is None:
            other = FinancialDate.today()
        return (other.date - self.date).days

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, FinancialDate):
            return NotImplemented
        return self.date == other.date

    def __hash__(self) -> int:
        return hash(self.date)

    def __lt__(self, other: "FinancialDate") -> bool:
        """Less than comparison."""
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        """Less than or equal comparison."""
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        """Greater than comparison."""
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        """Greater than or equal comparison."""
        return self.date >= other.date

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"
