#!/usr/bin/env python3
"""
Finance Book

The in-memory state of a finance tracker: transactions, wallets, categories,
goals, bills, people and debts, plus every mutation on them.

Wallet balances are cached running totals. Each transaction mutation applies
or reverts its signed amount (income adds, expense subtracts) on the wallet it
is routed through, so a balance always equals its opening value plus the
signed amounts of its transactions. Goal `current_amount` values are
refreshed from the transaction log after every transaction mutation.

Mutations change records in place and log what they did; persistence is the
caller's job (see fintrack.storage).
"""

import logging
from dataclasses import dataclass, field, fields, replace
from decimal import Decimal
from typing import Any, TypeVar

from ..analysis.dashboard import goal_spent
from ..core.dates import FinancialDate
from ..core.models import (
    Bill,
    BillStatus,
    BillType,
    Category,
    Debt,
    DebtType,
    Goal,
    GoalPeriod,
    PaymentMethod,
    Person,
    PersonType,
    Transaction,
    TransactionType,
    Wallet,
)
from ..core.money import Money
from ..debts.schedule import build_schedule, installment_amounts, installment_value
from .errors import (
    BillAlreadyPaidError,
    DebtSettledError,
    InsufficientFundsError,
    LedgerError,
    RecordNotFoundError,
)
from .ids import IdGenerator
from .seed import default_categories, default_wallets

logger = logging.getLogger(__name__)

R = TypeVar("R")

COLLECTIONS = ("transactions", "wallets", "categories", "goals", "bills", "persons", "debts")

# Fields whose change moves money between wallets
_BALANCE_FIELDS = frozenset({"amount", "wallet_id", "type"})

# Fields whose change alters a debt's installment plan
_DEBT_TERM_FIELDS = frozenset({"total_amount", "interest_rate", "installments"})


@dataclass
class FinanceBook:
    """All records of one finance tracker and the operations that keep them consistent."""

    transactions: list[Transaction] = field(default_factory=list)
    wallets: list[Wallet] = field(default_factory=default_wallets)
    categories: list[Category] = field(default_factory=default_categories)
    goals: list[Goal] = field(default_factory=list)
    bills: list[Bill] = field(default_factory=list)
    persons: list[Person] = field(default_factory=list)
    debts: list[Debt] = field(default_factory=list)
    id_generator: IdGenerator = field(default_factory=IdGenerator, repr=False, compare=False)

    # ------------------------------------------------------------------
    # Serialization

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Whole-book snapshot with one list per collection."""
        return {name: [record.to_dict() for record in getattr(self, name)] for name in COLLECTIONS}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FinanceBook":
        """
        Build a book from a snapshot.

        Missing wallets or categories fall back to the seed data; every other
        missing collection starts empty.
        """
        return cls(
            transactions=[Transaction.from_dict(d) for d in data.get("transactions") or []],
            wallets=[Wallet.from_dict(d) for d in data["wallets"]] if data.get("wallets") else default_wallets(),
            categories=(
                [Category.from_dict(d) for d in data["categories"]]
                if data.get("categories")
                else default_categories()
            ),
            goals=[Goal.from_dict(d) for d in data.get("goals") or []],
            bills=[Bill.from_dict(d) for d in data.get("bills") or []],
            persons=[Person.from_dict(d) for d in data.get("persons") or []],
            debts=[Debt.from_dict(d) for d in data.get("debts") or []],
        )

    def record_count(self) -> int:
        """Total number of records across every collection."""
        return sum(len(getattr(self, name)) for name in COLLECTIONS)

    # ------------------------------------------------------------------
    # Lookup helpers

    def _new_id(self) -> str:
        taken = {record.id for name in COLLECTIONS for record in getattr(self, name)}
        return self.id_generator.next_id(taken)

    @staticmethod
    def _find(records: list[R], record_id: str, kind: str) -> R:
        for record in records:
            if record.id == record_id:  # type: ignore[attr-defined]
                return record
        raise RecordNotFoundError(kind, record_id)

    def _find_wallet_or_none(self, wallet_id: str) -> Wallet | None:
        return next((w for w in self.wallets if w.id == wallet_id), None)

    def get_transaction(self, transaction_id: str) -> Transaction:
        return self._find(self.transactions, transaction_id, "Transaction")

    def get_wallet(self, wallet_id: str) -> Wallet:
        return self._find(self.wallets, wallet_id, "Wallet")

    def get_category(self, category_id: str) -> Category:
        return self._find(self.categories, category_id, "Category")

    def get_goal(self, goal_id: str) -> Goal:
        return self._find(self.goals, goal_id, "Goal")

    def get_bill(self, bill_id: str) -> Bill:
        return self._find(self.bills, bill_id, "Bill")

    def get_person(self, person_id: str) -> Person:
        return self._find(self.persons, person_id, "Person")

    def get_debt(self, debt_id: str) -> Debt:
        return self._find(self.debts, debt_id, "Debt")

    @staticmethod
    def _apply_changes(record: Any, changes: dict[str, Any]) -> None:
        """Merge field changes into a record, rejecting unknown names and the id."""
        allowed = {f.name for f in fields(record)} - {"id"}
        unknown = set(changes) - allowed
        if unknown:
            raise LedgerError(f"Cannot update {type(record).__name__} fields: {', '.join(sorted(unknown))}")
        for name, value in changes.items():
            setattr(record, name, value)

    @staticmethod
    def _remove(records: list[R], record: R) -> None:
        records[:] = [r for r in records if r is not record]

    def _default_wallet(self, wallet_id: str | None) -> Wallet:
        if wallet_id is not None:
            return self.get_wallet(wallet_id)
        if not self.wallets:
            raise LedgerError("No wallet available to record the payment")
        return self.wallets[0]

    def _move_balance(self, wallet_id: str, amount: Money) -> None:
        wallet = self._find_wallet_or_none(wallet_id)
        if wallet is None:
            logger.warning(f"Wallet {wallet_id} no longer exists; balance change of {amount} skipped")
            return
        wallet.balance += amount

    def _refresh_goals(self) -> None:
        for goal in self.goals:
            goal.current_amount = goal_spent(goal, self.transactions)

    # ------------------------------------------------------------------
    # Transactions

    def add_transaction(
        self,
        type: TransactionType,
        description: str,
        amount: Money,
        category_id: str,
        wallet_id: str,
        date: FinancialDate | None = None,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        person_id: str | None = None,
        transaction_id: str | None = None,
    ) -> Transaction:
        """
        Record a transaction and apply it to its wallet balance.

        Raises:
            RecordNotFoundError: If the wallet does not exist
            LedgerError: If the amount is negative
        """
        if amount < Money.zero():
            raise LedgerError(f"Transaction amount must not be negative: {amount}")
        self.get_wallet(wallet_id)

        transaction = Transaction(
            id=transaction_id or self._new_id(),
            type=type,
            description=description,
            amount=amount,
            category_id=category_id,
            wallet_id=wallet_id,
            date=date or FinancialDate.today(),
            payment_method=payment_method,
            person_id=person_id,
        )
        self.transactions.append(transaction)
        self._move_balance(wallet_id, transaction.signed_amount)
        self._refresh_goals()

        logger.info(f"Added {type.value} {transaction.id}: {description} {amount}")
        return transaction

    def update_transaction(self, transaction_id: str, **changes: Any) -> Transaction:
        """
        Merge changes into a transaction.

        When the amount, wallet or type changes, the old signed amount is
        reverted on the old wallet and the new one applied on the new wallet.
        """
        transaction = self.get_transaction(transaction_id)
        if "amount" in changes and changes["amount"] < Money.zero():
            raise LedgerError(f"Transaction amount must not be negative: {changes['amount']}")
        if "wallet_id" in changes:
            self.get_wallet(changes["wallet_id"])

        old_wallet_id = transaction.wallet_id
        old_signed = transaction.signed_amount

        self._apply_changes(transaction, changes)

        if _BALANCE_FIELDS & changes.keys():
            self._move_balance(old_wallet_id, -old_signed)
            self._move_balance(transaction.wallet_id, transaction.signed_amount)
        self._refresh_goals()

        logger.info(f"Updated transaction {transaction_id}")
        return transaction

    def delete_transaction(self, transaction_id: str) -> Transaction:
        """Remove a transaction and revert its effect on the wallet balance."""
        transaction = self.get_transaction(transaction_id)
        self._remove(self.transactions, transaction)
        self._move_balance(transaction.wallet_id, -transaction.signed_amount)
        self._refresh_goals()

        logger.info(f"Deleted transaction {transaction_id}")
        return transaction

    # ------------------------------------------------------------------
    # Wallets

    def add_wallet(self, name: str, balance: Money, type: str, color: str = "#3b82f6") -> Wallet:
        wallet = Wallet(id=self._new_id(), name=name, balance=balance, type=type, color=color)
        self.wallets.append(wallet)
        logger.info(f"Added wallet {wallet.id}: {name}")
        return wallet

    def update_wallet(self, wallet_id: str, **changes: Any) -> Wallet:
        wallet = self.get_wallet(wallet_id)
        self._apply_changes(wallet, changes)
        logger.info(f"Updated wallet {wallet_id}")
        return wallet

    def delete_wallet(self, wallet_id: str) -> Wallet:
        """Remove a wallet. Transactions routed through it are kept."""
        wallet = self.get_wallet(wallet_id)
        self._remove(self.wallets, wallet)

        orphaned = sum(1 for t in self.transactions if t.wallet_id == wallet_id)
        if orphaned:
            logger.warning(f"Deleted wallet {wallet_id} is still referenced by {orphaned} transaction(s)")
        logger.info(f"Deleted wallet {wallet_id}")
        return wallet

    def transfer_between_wallets(
        self,
        from_wallet_id: str,
        to_wallet_id: str,
        amount: Money,
        description: str,
        date: FinancialDate | None = None,
        category_id: str | None = None,
    ) -> tuple[Transaction, Transaction]:
        """
        Move money between wallets as a paired expense and income.

        Returns:
            The (outgoing, incoming) transactions

        Raises:
            InsufficientFundsError: If the source is missing or cannot cover the amount
            RecordNotFoundError: If the destination does not exist
            LedgerError: If source and destination are the same or the amount is not positive
        """
        source = self._find_wallet_or_none(from_wallet_id)
        if source is None or source.balance < amount:
            raise InsufficientFundsError(f"Insufficient balance in wallet {from_wallet_id} to transfer {amount}")
        self.get_wallet(to_wallet_id)
        if from_wallet_id == to_wallet_id:
            raise LedgerError("Cannot transfer a wallet to itself")
        if amount <= Money.zero():
            raise LedgerError(f"Transfer amount must be positive: {amount}")

        if category_id is None:
            if not self.categories:
                raise LedgerError("No category available to label the transfer")
            category_id = self.categories[0].id

        base_id = self._new_id()
        when = date or FinancialDate.today()
        legs = []
        for suffix, leg_type, wallet_id in (
            ("out", TransactionType.EXPENSE, from_wallet_id),
            ("in", TransactionType.INCOME, to_wallet_id),
        ):
            leg = Transaction(
                id=f"{base_id}-{suffix}",
                type=leg_type,
                description=f"Transfer: {description}",
                amount=amount,
                category_id=category_id,
                wallet_id=wallet_id,
                date=when,
                payment_method=PaymentMethod.TRANSFER,
            )
            self.transactions.append(leg)
            self._move_balance(wallet_id, leg.signed_amount)
            legs.append(leg)

        self._refresh_goals()
        logger.info(f"Transferred {amount} from wallet {from_wallet_id} to {to_wallet_id}")
        return legs[0], legs[1]

    # ------------------------------------------------------------------
    # Categories

    def add_category(self, name: str, type: TransactionType, color: str = "#6b7280", icon: str = "") -> Category:
        category = Category(id=self._new_id(), name=name, color=color, icon=icon, type=type)
        self.categories.append(category)
        logger.info(f"Added category {category.id}: {name}")
        return category

    def update_category(self, category_id: str, **changes: Any) -> Category:
        category = self.get_category(category_id)
        self._apply_changes(category, changes)
        logger.info(f"Updated category {category_id}")
        return category

    def delete_category(self, category_id: str) -> Category:
        """Remove a category. Records labelled with it keep the dangling id."""
        category = self.get_category(category_id)
        self._remove(self.categories, category)

        in_use = sum(1 for t in self.transactions if t.category_id == category_id)
        if in_use:
            logger.warning(f"Deleted category {category_id} is still used by {in_use} transaction(s)")
        logger.info(f"Deleted category {category_id}")
        return category

    # ------------------------------------------------------------------
    # Goals

    def add_goal(
        self,
        name: str,
        category_id: str,
        target_amount: Money,
        start_date: FinancialDate | None = None,
        period: GoalPeriod = GoalPeriod.MONTHLY,
    ) -> Goal:
        """Create a goal; its current amount is computed from the existing transactions."""
        self.get_category(category_id)
        goal = Goal(
            id=self._new_id(),
            name=name,
            category_id=category_id,
            target_amount=target_amount,
            start_date=start_date or FinancialDate.today(),
            period=period,
        )
        self.goals.append(goal)
        goal.current_amount = goal_spent(goal, self.transactions)
        logger.info(f"Added goal {goal.id}: {name}")
        return goal

    def update_goal(self, goal_id: str, **changes: Any) -> Goal:
        goal = self.get_goal(goal_id)
        self._apply_changes(goal, changes)
        goal.current_amount = goal_spent(goal, self.transactions)
        logger.info(f"Updated goal {goal_id}")
        return goal

    def delete_goal(self, goal_id: str) -> Goal:
        goal = self.get_goal(goal_id)
        self._remove(self.goals, goal)
        logger.info(f"Deleted goal {goal_id}")
        return goal

    # ------------------------------------------------------------------
    # Bills

    def add_bill(
        self,
        type: BillType,
        description: str,
        amount: Money,
        category_id: str,
        due_date: FinancialDate,
        status: BillStatus = BillStatus.PENDING,
        person_id: str | None = None,
    ) -> Bill:
        bill = Bill(
            id=self._new_id(),
            type=type,
            description=description,
            amount=amount,
            category_id=category_id,
            due_date=due_date,
            status=status,
            person_id=person_id,
        )
        self.bills.append(bill)
        logger.info(f"Added {type.value} bill {bill.id}: {description} {amount}")
        return bill

    def update_bill(self, bill_id: str, **changes: Any) -> Bill:
        bill = self.get_bill(bill_id)
        self._apply_changes(bill, changes)
        logger.info(f"Updated bill {bill_id}")
        return bill

    def delete_bill(self, bill_id: str) -> Bill:
        bill = self.get_bill(bill_id)
        self._remove(self.bills, bill)
        logger.info(f"Deleted bill {bill_id}")
        return bill

    def mark_bill_as_paid(
        self, bill_id: str, wallet_id: str | None = None, date: FinancialDate | None = None
    ) -> Transaction:
        """
        Settle a bill by recording its transaction and marking it paid.

        Payables become expenses and receivables become income, in the given
        wallet or the first wallet of the book.

        Raises:
            BillAlreadyPaidError: If the bill is already paid
        """
        bill = self.get_bill(bill_id)
        if bill.status == BillStatus.PAID:
            raise BillAlreadyPaidError(f"Bill {bill_id} is already paid")
        wallet = self._default_wallet(wallet_id)

        transaction = self.add_transaction(
            type=bill.transaction_type,
            description=bill.description,
            amount=bill.amount,
            category_id=bill.category_id,
            wallet_id=wallet.id,
            date=date,
            payment_method=PaymentMethod.TRANSFER,
            person_id=bill.person_id,
        )
        bill.status = BillStatus.PAID

        logger.info(f"Marked bill {bill_id} as paid")
        return transaction

    def refresh_bill_statuses(self, today: FinancialDate | None = None) -> list[Bill]:
        """Flag pending bills whose due date has passed as overdue."""
        current = today or FinancialDate.today()
        flagged = []
        for bill in self.bills:
            if bill.status == BillStatus.PENDING and bill.due_date < current:
                bill.status = BillStatus.OVERDUE
                flagged.append(bill)

        if flagged:
            logger.info(f"Flagged {len(flagged)} bill(s) as overdue")
        return flagged

    # ------------------------------------------------------------------
    # People

    def add_person(self, name: str, type: PersonType, contact: str = "") -> Person:
        person = Person(id=self._new_id(), name=name, contact=contact, type=type)
        self.persons.append(person)
        logger.info(f"Added {type.value} {person.id}: {name}")
        return person

    def update_person(self, person_id: str, **changes: Any) -> Person:
        person = self.get_person(person_id)
        self._apply_changes(person, changes)
        logger.info(f"Updated person {person_id}")
        return person

    def delete_person(self, person_id: str) -> Person:
        person = self.get_person(person_id)
        self._remove(self.persons, person)
        logger.info(f"Deleted person {person_id}")
        return person

    # ------------------------------------------------------------------
    # Debts

    def add_debt(
        self,
        description: str,
        total_amount: Money,
        installments: int,
        interest_rate: Decimal = Decimal("0"),
        start_date: FinancialDate | None = None,
        due_day: int = 10,
        creditor: str = "",
        type: DebtType = DebtType.OTHER,
    ) -> Debt:
        """
        Register a debt; the installment value and remaining amount come from its terms.

        Raises:
            ScheduleError: If installments or due day are out of range
        """
        debt = Debt(
            id=self._new_id(),
            description=description,
            total_amount=total_amount,
            remaining_amount=total_amount.with_interest(interest_rate),
            interest_rate=interest_rate,
            installments=installments,
            paid_installments=0,
            installment_value=installment_value(total_amount, interest_rate, installments),
            start_date=start_date or FinancialDate.today(),
            due_day=due_day,
            creditor=creditor,
            type=type,
        )
        build_schedule(debt)
        self.debts.append(debt)
        logger.info(f"Added debt {debt.id}: {description} {debt.total_with_interest} in {installments}x")
        return debt

    def update_debt(self, debt_id: str, **changes: Any) -> Debt:
        """
        Merge changes into a debt.

        Changing the principal, rate or installment count recomputes the
        installment value and the remaining amount from the installments
        already paid.

        Raises:
            ScheduleError: If the merged terms cannot be scheduled; the debt
                is left unchanged
        """
        debt = self.get_debt(debt_id)
        candidate = replace(debt)
        self._apply_changes(candidate, changes)
        build_schedule(candidate)
        self._apply_changes(debt, changes)

        if _DEBT_TERM_FIELDS & changes.keys():
            debt.installment_value = installment_value(debt.total_amount, debt.interest_rate, debt.installments)
            amounts = installment_amounts(debt.total_amount, debt.interest_rate, debt.installments)
            paid = Money.zero()
            for amount in amounts[: debt.paid_installments]:
                paid += amount
            remaining = debt.total_with_interest - paid
            debt.remaining_amount = remaining if remaining > Money.zero() else Money.zero()

        logger.info(f"Updated debt {debt_id}")
        return debt

    def delete_debt(self, debt_id: str) -> Debt:
        debt = self.get_debt(debt_id)
        self._remove(self.debts, debt)
        logger.info(f"Deleted debt {debt_id}")
        return debt

    def pay_debt_installment(
        self, debt_id: str, wallet_id: str | None = None, date: FinancialDate | None = None
    ) -> Transaction:
        """
        Pay the next installment of a debt.

        Records an expense for the scheduled installment amount in the first
        expense category, then advances the paid count and lowers the
        remaining amount (never below zero).

        Raises:
            DebtSettledError: If every installment is already paid
        """
        debt = self.get_debt(debt_id)
        if debt.is_settled:
            raise DebtSettledError(f"Debt {debt_id} has no installments left")
        wallet = self._default_wallet(wallet_id)

        category = next((c for c in self.categories if c.type == TransactionType.EXPENSE), None)
        if category is None:
            if not self.categories:
                raise LedgerError("No category available to label the installment")
            category = self.categories[0]

        number = debt.paid_installments + 1
        amount = build_schedule(debt)[debt.paid_installments].amount

        transaction = self.add_transaction(
            type=TransactionType.EXPENSE,
            description=f"Installment {number}/{debt.installments} - {debt.description}",
            amount=amount,
            category_id=category.id,
            wallet_id=wallet.id,
            date=date,
            payment_method=PaymentMethod.TRANSFER,
        )

        debt.paid_installments = number
        remaining = debt.remaining_amount - amount
        debt.remaining_amount = remaining if remaining > Money.zero() else Money.zero()

        logger.info(f"Paid installment {number}/{debt.installments} of debt {debt_id}")
        return transaction

    # ------------------------------------------------------------------
    # Whole-book operations

    def reset_all_data(self) -> None:
        """Drop every record and restore the seed wallets and categories."""
        self.transactions = []
        self.wallets = default_wallets()
        self.categories = default_categories()
        self.goals = []
        self.bills = []
        self.persons = []
        self.debts = []
        logger.info("Reset all data to defaults")

    def replace_with(self, other: "FinanceBook") -> None:
        """Adopt every collection of another book, as a restore does."""
        for name in COLLECTIONS:
            setattr(self, name, getattr(other, name))
        logger.info(f"Replaced book contents ({self.record_count()} records)")
