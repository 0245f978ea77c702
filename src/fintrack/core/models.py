#!/usr/bin/env python3
"""
Core Data Models for fintrack

Flat records for every entity in a finance book. Each record carries a
generated string id and refers to related records by id. Amounts are Money
(integer cents) and dates are FinancialDate.

Every model round-trips through to_dict()/from_dict() using snake_case keys,
integer cents, ISO dates and enum values, which is the on-disk format of the
state file and of backups.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from .dates import FinancialDate
from .money import Money


class TransactionType(Enum):
    """Direction of a transaction, also used to classify categories."""

    INCOME = "income"
    EXPENSE = "expense"


class PaymentMethod(Enum):
    """How a transaction was settled."""

    PIX = "pix"
    CARD = "card"
    CASH = "cash"
    BOLETO = "boleto"
    TRANSFER = "transfer"


class BillType(Enum):
    PAYABLE = "payable"
    RECEIVABLE = "receivable"


class BillStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"


class PersonType(Enum):
    CLIENT = "client"
    SUPPLIER = "supplier"


class GoalPeriod(Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


class DebtType(Enum):
    LOAN = "loan"
    FINANCING = "financing"
    CREDIT_CARD = "credit_card"
    OTHER = "other"


def _money(value: Any) -> Money:
    """Read a stored amount; integers are cents."""
    if isinstance(value, Money):
        return value
    return Money.from_cents(int(value))


def _date(value: Any) -> FinancialDate:
    if isinstance(value, FinancialDate):
        return value
    return FinancialDate.from_string(str(value))


@dataclass
class Transaction:
    """
    A single income or expense routed through one wallet.

    The amount is always positive; `type` decides whether it adds to or
    subtracts from the wallet balance.
    """

    id: str
    type: TransactionType
    description: str
    amount: Money
    category_id: str
    wallet_id: str
    date: FinancialDate
    payment_method: PaymentMethod
    person_id: str | None = None

    @property
    def signed_amount(self) -> Money:
        """Effect of this transaction on its wallet balance."""
        if self.type == TransactionType.INCOME:
            return self.amount
        return -self.amount

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "description": self.description,
            "amount": self.amount.to_cents(),
            "category_id": self.category_id,
            "wallet_id": self.wallet_id,
            "date": self.date.to_iso_string(),
            "payment_method": self.payment_method.value,
            "person_id": self.person_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Transaction":
        """Create Transaction from dictionary."""
        return cls(
            id=str(data["id"]),
            type=TransactionType(data["type"]),
            description=data.get("description", ""),
            amount=_money(data["amount"]),
            category_id=str(data["category_id"]),
            wallet_id=str(data["wallet_id"]),
            date=_date(data["date"]),
            payment_method=PaymentMethod(data.get("payment_method", PaymentMethod.CASH.value)),
            person_id=data.get("person_id"),
        )


@dataclass
class Wallet:
    """
    A place money is held: bank account, cash, card.

    `balance` is a cached running total kept consistent with the signed
    amounts of the transactions routed through the wallet.
    """

    id: str
    name: str
    balance: Money
    type: str
    color: str = "#3b82f6"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "balance": self.balance.to_cents(),
            "type": self.type,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Wallet":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            balance=_money(data.get("balance", 0)),
            type=data.get("type", ""),
            color=data.get("color", "#3b82f6"),
        )


@dataclass
class Category:
    """Label for transactions, scoped to income or expense."""

    id: str
    name: str
    color: str
    icon: str
    type: TransactionType

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "icon": self.icon,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            color=data.get("color", "#6b7280"),
            icon=data.get("icon", ""),
            type=TransactionType(data["type"]),
        )


@dataclass
class Goal:
    """
    A spending target for one category, measured from a start date.

    `current_amount` caches the expense spend counted toward the goal.
    """

    id: str
    name: str
    category_id: str
    target_amount: Money
    start_date: FinancialDate
    period: GoalPeriod = GoalPeriod.MONTHLY
    current_amount: Money = Money.zero()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category_id": self.category_id,
            "target_amount": self.target_amount.to_cents(),
            "current_amount": self.current_amount.to_cents(),
            "period": self.period.value,
            "start_date": self.start_date.to_iso_string(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Goal":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            category_id=str(data["category_id"]),
            target_amount=_money(data["target_amount"]),
            start_date=_date(data["start_date"]),
            period=GoalPeriod(data.get("period", GoalPeriod.MONTHLY.value)),
            current_amount=_money(data.get("current_amount", 0)),
        )


@dataclass
class Bill:
    """An amount to pay or to receive on a due date."""

    id: str
    type: BillType
    description: str
    amount: Money
    category_id: str
    due_date: FinancialDate
    status: BillStatus = BillStatus.PENDING
    person_id: str | None = None

    @property
    def is_open(self) -> bool:
        """Pending or overdue; anything not yet settled."""
        return self.status != BillStatus.PAID

    @property
    def transaction_type(self) -> TransactionType:
        """Transaction type recorded when this bill is settled."""
        if self.type == BillType.PAYABLE:
            return TransactionType.EXPENSE
        return TransactionType.INCOME

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "description": self.description,
            "amount": self.amount.to_cents(),
            "category_id": self.category_id,
            "due_date": self.due_date.to_iso_string(),
            "status": self.status.value,
            "person_id": self.person_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bill":
        return cls(
            id=str(data["id"]),
            type=BillType(data["type"]),
            description=data.get("description", ""),
            amount=_money(data["amount"]),
            category_id=str(data["category_id"]),
            due_date=_date(data["due_date"]),
            status=BillStatus(data.get("status", BillStatus.PENDING.value)),
            person_id=data.get("person_id"),
        )


@dataclass
class Person:
    """A client or supplier that transactions and bills can refer to."""

    id: str
    name: str
    contact: str
    type: PersonType

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "contact": self.contact, "type": self.type.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Person":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            contact=data.get("contact", ""),
            type=PersonType(data["type"]),
        )


@dataclass
class Debt:
    """
    A loan, financing or card balance repaid in fixed monthly installments.

    Interest is simple: the full rate applies once to the principal, and the
    total with interest is divided over the installments.
    """

    id: str
    description: str
    total_amount: Money
    remaining_amount: Money
    interest_rate: Decimal
    installments: int
    paid_installments: int
    installment_value: Money
    start_date: FinancialDate
    due_day: int
    creditor: str
    type: DebtType = DebtType.OTHER

    @property
    def total_with_interest(self) -> Money:
        return self.total_amount.with_interest(self.interest_rate)

    @property
    def amount_paid(self) -> Money:
        return self.total_with_interest - self.remaining_amount

    @property
    def remaining_installments(self) -> int:
        return max(0, self.installments - self.paid_installments)

    @property
    def is_settled(self) -> bool:
        return self.paid_installments >= self.installments

    @property
    def progress_percent(self) -> float:
        if self.installments <= 0:
            return 0.0
        return (self.paid_installments / self.installments) * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "description": self.description,
            "total_amount": self.total_amount.to_cents(),
            "remaining_amount": self.remaining_amount.to_cents(),
            "interest_rate": str(self.interest_rate),
            "installments": self.installments,
            "paid_installments": self.paid_installments,
            "installment_value": self.installment_value.to_cents(),
            "start_date": self.start_date.to_iso_string(),
            "due_day": self.due_day,
            "creditor": self.creditor,
            "type": self.type.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Debt":
        return cls(
            id=str(data["id"]),
            description=data.get("description", ""),
            total_amount=_money(data["total_amount"]),
            remaining_amount=_money(data["remaining_amount"]),
            interest_rate=Decimal(str(data.get("interest_rate", "0"))),
            installments=int(data["installments"]),
            paid_installments=int(data.get("paid_installments", 0)),
            installment_value=_money(data["installment_value"]),
            start_date=_date(data["start_date"]),
            due_day=int(data.get("due_day", 10)),
            creditor=data.get("creditor", ""),
            type=DebtType(data.get("type", DebtType.OTHER.value)),
        )

