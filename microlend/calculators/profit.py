"""Business-level profit from outstanding balances, funds and expenses."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from microlend.calculators.ledger import reconcile_loan
from microlend.calculators.schedule import interest_only_payment
from microlend.models.enums import LoanStatus
from microlend.models.loan import Loan
from microlend.money import ZERO, quantize_money, sum_money


@dataclass(frozen=True)
class ProfitSummary:
    """Outstanding balance minus invested capital and expenses."""

    total_outstanding: Decimal
    total_invested: Decimal
    total_expenses: Decimal
    profit: Decimal


def aggregate_profit(
    outstandings: Iterable[Decimal],
    total_invested: Decimal = ZERO,
    total_expenses: Decimal = ZERO,
) -> ProfitSummary:
    """Reduce per-loan outstanding balances into a profit figure.

    Only positive balances count; a loan in credit adds nothing.
    """
    outstanding = sum_money(o for o in outstandings if o > 0)
    invested = quantize_money(total_invested)
    expenses = quantize_money(total_expenses)
    return ProfitSummary(
        total_outstanding=outstanding,
        total_invested=invested,
        total_expenses=expenses,
        profit=outstanding - invested - expenses,
    )


def loan_outstanding(loan: Loan) -> Decimal:
    """Amount still to collect on a loan.

    Scheduled loans use the ledger. An open-ended loan is counted as its
    principal plus one 30-day interest period, less what has been paid.
    """
    if not loan.is_open_ended:
        return reconcile_loan(loan).outstanding
    expected = quantize_money(loan.principal) + interest_only_payment(loan.terms)
    return expected - sum_money(quantize_money(p.amount) for p in loan.payments)


def profit_for_loans(
    loans: Iterable[Loan],
    total_invested: Decimal = ZERO,
    total_expenses: Decimal = ZERO,
) -> ProfitSummary:
    """Aggregate profit over the outstanding balances of ACTIVE loans."""
    outstandings = (
        loan_outstanding(loan) for loan in loans if loan.status == LoanStatus.ACTIVE
    )
    return aggregate_profit(outstandings, total_invested, total_expenses)
