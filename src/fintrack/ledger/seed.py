#!/usr/bin/env python3
"""
Seed Data

Categories and wallets a fresh book starts with, and that a reset restores.
Each call returns new objects so books never share mutable records.
"""

from ..core.models import Category, TransactionType, Wallet
from ..core.money import Money


def default_categories() -> list[Category]:
    """Two income and four expense categories."""
    return [
        Category(id="1", name="Salary", color="#10b981", icon="💰", type=TransactionType.INCOME),
        Category(id="2", name="Freelance", color="#3b82f6", icon="💼", type=TransactionType.INCOME),
        Category(id="3", name="Food", color="#ef4444", icon="🍔", type=TransactionType.EXPENSE),
        Category(id="4", name="Transport", color="#f59e0b", icon="🚗", type=TransactionType.EXPENSE),
        Category(id="5", name="Leisure", color="#8b5cf6", icon="🎮", type=TransactionType.EXPENSE),
        Category(id="6", name="Health", color="#ec4899", icon="🏥", type=TransactionType.EXPENSE),
    ]


def default_wallets() -> list[Wallet]:
    """A checking account and a cash wallet with opening balances."""
    return [
        Wallet(id="1", name="Checking Account", balance=Money.from_cents(500000), type="Bank", color="#3b82f6"),
        Wallet(id="2", name="Cash", balance=Money.from_cents(50000), type="Cash", color="#10b981"),
    ]
