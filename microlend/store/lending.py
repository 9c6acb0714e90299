"""Lending data store with referential integrity and loan lifecycle rules."""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from microlend.calculators.ledger import reconcile_loan
from microlend.calculators.schedule import build_schedule
from microlend.exceptions import (
    EntityNotFoundError,
    InvalidEntityStateError,
    ReferentialIntegrityError,
)
from microlend.models import Customer, Expense, Fund, Loan, LoanStatus, Payment
from microlend.money import ZERO, quantize_money, sum_money

logger = logging.getLogger(__name__)

LOAN_NUMBER_PATTERN = re.compile(r"L(\d+)")

# Statuses that block a customer from taking another loan
OPEN_STATUSES = frozenset({LoanStatus.APPLIED, LoanStatus.APPROVED, LoanStatus.ACTIVE})

ALLOWED_TRANSITIONS = {
    LoanStatus.APPLIED: frozenset({LoanStatus.APPROVED, LoanStatus.ACTIVE}),
    LoanStatus.APPROVED: frozenset({LoanStatus.ACTIVE}),
    LoanStatus.ACTIVE: frozenset(
        {
            LoanStatus.COMPLETED,
            LoanStatus.SETTLED,
            LoanStatus.RENEWED,
            LoanStatus.DEFAULTED,
        }
    ),
    LoanStatus.COMPLETED: frozenset(),
    LoanStatus.SETTLED: frozenset(),
    LoanStatus.RENEWED: frozenset(),
    LoanStatus.DEFAULTED: frozenset(),
}


@dataclass
class LendingDataStore:
    """In-memory store for lending entities with relationship tracking."""

    customers: dict[str, Customer] = field(default_factory=dict)
    loans: dict[str, Loan] = field(default_factory=dict)
    funds: dict[str, Fund] = field(default_factory=dict)
    expenses: dict[str, Expense] = field(default_factory=dict)
    payments: list[Payment] = field(default_factory=list)

    # Relationship indexes
    _customer_loans: dict[str, list[str]] = field(default_factory=dict)

    def add_customer(self, customer: Customer) -> None:
        """Add a customer to the store."""
        self.customers[customer.customer_id] = customer
        self._customer_loans.setdefault(customer.customer_id, [])

    def add_loan(self, loan: Loan) -> Loan:
        """Add a loan application to the store.

        The applicant and every guarantor must exist, and the applicant
        may not already hold an APPLIED, APPROVED or ACTIVE loan. Loans
        without a number get one past the highest ``L<digits>`` number
        already used (``L0001`` for the first).

        Raises
        ------
        ReferentialIntegrityError
            If the applicant or a guarantor is unknown.
        InvalidEntityStateError
            If the applicant already has an open loan.
        InvalidLoanTermsError
            If the loan's terms are malformed.
        """
        if loan.customer_id not in self.customers:
            raise ReferentialIntegrityError(f"Customer {loan.customer_id} not found")
        for guarantor_id in loan.guarantor_ids:
            if guarantor_id not in self.customers:
                raise ReferentialIntegrityError(f"Guarantor {guarantor_id} not found")

        if any(l.status in OPEN_STATUSES for l in self.get_customer_loans(loan.customer_id)):
            raise InvalidEntityStateError(
                f"Customer {loan.customer_id} already has an open loan"
            )

        build_schedule(loan.terms)

        if not loan.loan_number:
            loan.loan_number = self._next_loan_number()
        if loan.created_at is None:
            loan.created_at = datetime.now()
        loan.applicant = self.customers[loan.customer_id]

        self.loans[loan.loan_id] = loan
        self._customer_loans[loan.customer_id].append(loan.loan_id)

        logger.info(
            "Created loan %s for customer %s (%s, principal %s)",
            loan.loan_number,
            loan.customer_id,
            loan.status.value,
            loan.principal,
        )
        return loan

    def _next_loan_number(self) -> str:
        """One past the highest ``L<digits>`` number in use."""
        highest = 0
        for existing in self.loans.values():
            match = LOAN_NUMBER_PATTERN.fullmatch(existing.loan_number)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"L{highest + 1:04d}"

    def update_status(self, loan_id: str, status: LoanStatus, reason: str = "") -> Loan:
        """Move a loan to a new lifecycle status.

        Raises
        ------
        EntityNotFoundError
            If the loan does not exist.
        InvalidEntityStateError
            If the transition is not allowed.
        """
        loan = self.get_loan(loan_id)
        if status not in ALLOWED_TRANSITIONS[loan.status]:
            raise InvalidEntityStateError(
                f"Loan {loan.loan_number} cannot move from {loan.status.value} to {status.value}"
            )

        previous = loan.status
        loan.status = status
        loan.updated_at = datetime.now()
        logger.info(
            "Loan %s status %s -> %s%s",
            loan.loan_number,
            previous.value,
            status.value,
            f" ({reason})" if reason else "",
        )
        return loan

    def record_payment(self, payment: Payment) -> Payment:
        """Record a payment against an ACTIVE loan.

        A loan whose outstanding balance reaches zero becomes COMPLETED.

        Raises
        ------
        EntityNotFoundError
            If the loan does not exist.
        ReferentialIntegrityError
            If the paying customer does not exist.
        InvalidEntityStateError
            If the loan is not ACTIVE or the amount is not positive.
        """
        loan = self.get_loan(payment.loan_id)
        if payment.customer_id not in self.customers:
            raise ReferentialIntegrityError(f"Customer {payment.customer_id} not found")
        if loan.status != LoanStatus.ACTIVE:
            logger.warning(
                "Payment rejected for loan %s: status is %s", loan.loan_number, loan.status.value
            )
            raise InvalidEntityStateError(
                f"Payments can only be made to ACTIVE loans. Loan {loan.loan_number} is {loan.status.value}."
            )

        amount = quantize_money(payment.amount)
        if amount <= ZERO:
            raise InvalidEntityStateError(f"Payment amount must be positive, got {amount}")
        payment.amount = amount

        self.payments.append(payment)
        loan.payments.append(payment)
        logger.info("Recorded payment of %s on loan %s", payment.amount, loan.loan_number)

        if not loan.is_open_ended and reconcile_loan(loan).is_settled:
            self.update_status(loan.loan_id, LoanStatus.COMPLETED, reason="payment_completed_loan")

        return payment

    def add_fund(self, fund: Fund) -> None:
        """Add invested capital."""
        fund.amount = quantize_money(fund.amount)
        self.funds[fund.fund_id] = fund

    def add_expense(self, expense: Expense) -> None:
        """Add a business expense."""
        expense.amount = quantize_money(expense.amount)
        self.expenses[expense.expense_id] = expense

    # Query methods
    def get_loan(self, loan_id: str) -> Loan:
        """Get a loan by ID."""
        try:
            return self.loans[loan_id]
        except KeyError:
            raise EntityNotFoundError(f"Loan {loan_id} not found") from None

    def get_customer_loans(self, customer_id: str) -> list[Loan]:
        """Get all loans for a customer."""
        loan_ids = self._customer_loans.get(customer_id, [])
        return [self.loans[lid] for lid in loan_ids]

    def get_loan_payments(self, loan_id: str) -> list[Payment]:
        """Get a loan's payments, oldest first."""
        return sorted(self.get_loan(loan_id).payments, key=lambda p: p.paid_at)

    def loans_by_status(self, *statuses: LoanStatus) -> list[Loan]:
        """Get loans in any of the given statuses."""
        return [l for l in self.loans.values() if l.status in statuses]

    def active_loans(self) -> list[Loan]:
        return self.loans_by_status(LoanStatus.ACTIVE)

    def total_invested(self) -> Decimal:
        """Sum of all invested funds."""
        return sum_money(f.amount for f in self.funds.values())

    def total_expenses(self, claimed: bool | None = None) -> Decimal:
        """Sum of expenses, optionally only claimed or unclaimed ones."""
        return sum_money(
            e.amount
            for e in self.expenses.values()
            if claimed is None or e.claimed == claimed
        )

    def pending_deposit_total(self) -> Decimal:
        """Collected cash not yet deposited to a bank account."""
        return sum_money(p.amount for p in self.payments if not p.banked)

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "customers": len(self.customers),
            "loans": len(self.loans),
            "payments": len(self.payments),
            "funds": len(self.funds),
            "expenses": len(self.expenses),
        }
