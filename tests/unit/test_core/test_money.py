#!/usr/bin/env python3
"""Tests for Money primitive type."""

from decimal import Decimal

import pytest

from fintrack.core.currency import CurrencyParseError
from fintrack.core.money import Money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_from_cents(self):
        """Test creating Money from cents."""
        assert Money.from_cents(1234).to_cents() == 1234

    @pytest.mark.currency
    def test_from_decimal(self):
        """Test creating Money from currency units."""
        assert Money.from_decimal(Decimal("12.34")).to_cents() == 1234
        assert Money.from_decimal(12).to_cents() == 1200

    @pytest.mark.currency
    def test_parse(self):
        """Test parsing user input."""
        assert Money.parse("R$ 1.234,56").to_cents() == 123456
        assert Money.parse("45.90").to_cents() == 4590

        with pytest.raises(CurrencyParseError):
            Money.parse("lots")

    @pytest.mark.currency
    def test_zero(self):
        """Test the zero constructor."""
        assert Money.zero().is_zero()
        assert not Money.from_cents(1).is_zero()


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition_and_subtraction(self):
        """Test adding and subtracting Money objects."""
        a = Money.from_cents(100)
        b = Money.from_cents(30)
        assert (a + b).to_cents() == 130
        assert (a - b).to_cents() == 70
        assert (b - a).to_cents() == -70

    @pytest.mark.currency
    def test_negation_and_abs(self):
        """Test sign operations."""
        m = Money.from_cents(250)
        assert (-m).to_cents() == -250
        assert (-m).abs() == m

    @pytest.mark.currency
    def test_scalar_operations(self):
        """Test integer multiplication and floor division."""
        m = Money.from_cents(1000)
        assert (m * 3).to_cents() == 3000
        assert (m // 3).to_cents() == 333

    @pytest.mark.currency
    def test_with_interest(self):
        """Test simple interest growth."""
        assert Money.from_cents(100000).with_interest(Decimal("10")).to_cents() == 110000


class TestMoneyComparison:
    """Test Money comparison and hashing."""

    @pytest.mark.currency
    def test_equality_and_ordering(self):
        """Test comparison operators."""
        assert Money.from_cents(100) == Money.from_cents(100)
        assert Money.from_cents(100) != Money.from_cents(101)
        assert Money.from_cents(50) < Money.from_cents(100)
        assert Money.from_cents(100) >= Money.from_cents(100)

    @pytest.mark.currency
    def test_hashable(self):
        """Test Money can be used in sets."""
        assert len({Money.from_cents(5), Money.from_cents(5), Money.from_cents(6)}) == 2


class TestMoneyFormatting:
    """Test Money display."""

    @pytest.mark.currency
    def test_str_uses_default_symbol(self):
        """Test default formatting."""
        assert str(Money.from_cents(123456)) == "R$ 1.234,56"
        assert str(Money.from_cents(-500)) == "-R$ 5,00"

    @pytest.mark.currency
    def test_format_with_symbol(self):
        """Test custom symbol."""
        assert Money.from_cents(4599).format("€") == "€ 45,99"

    @pytest.mark.currency
    def test_to_amount_str(self):
        """Test plain export format."""
        assert Money.from_cents(4599).to_amount_str() == "45.99"
