"""Collection list of loans with money still to receive."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable

from microlend.calculators.ledger import LedgerSummary, reconcile_loan
from microlend.models.enums import Frequency, LoanStatus
from microlend.models.loan import Loan
from microlend.money import quantize_money


@dataclass(frozen=True)
class DuePayment:
    """One row of the due-payments listing."""

    loan_id: str
    loan_number: str
    customer_name: str
    customer_phone: str
    principal: Decimal
    total_due: Decimal
    installment_amount: Decimal
    remaining_installments: int
    is_due_today: bool
    overdue_count: int
    frequency: Frequency


def due_payment_for(loan: Loan, ledger: LedgerSummary, as_of: date) -> DuePayment:
    """Build the listing row for a reconciled loan."""
    applicant = loan.applicant
    return DuePayment(
        loan_id=loan.loan_id,
        loan_number=loan.loan_number,
        customer_name=applicant.full_name if applicant else "Unknown",
        customer_phone=applicant.mobile_phone if applicant else "",
        principal=quantize_money(loan.principal),
        total_due=ledger.outstanding,
        installment_amount=ledger.installment_amount,
        remaining_installments=ledger.remaining_installment_count,
        is_due_today=ledger.is_due_today(as_of),
        overdue_count=ledger.overdue_count(as_of),
        frequency=loan.frequency,
    )


def due_payment_sort_key(row: DuePayment) -> tuple[int, bool, Decimal]:
    """Most overdue first, then due today, then the largest balance."""
    return (-row.overdue_count, not row.is_due_today, -row.total_due)


def list_due_payments(loans: Iterable[Loan], as_of: date) -> list[DuePayment]:
    """List ACTIVE loans that still have an outstanding balance.

    Open-ended loans have no schedule to be due against and are left out.

    Parameters
    ----------
    loans : Iterable[Loan]
        Loans with their payments attached.
    as_of : date
        The day the listing is computed for.

    Returns
    -------
    list[DuePayment]
        Rows in collection priority order.
    """
    rows = []
    for loan in loans:
        if loan.status != LoanStatus.ACTIVE or loan.is_open_ended:
            continue
        ledger = reconcile_loan(loan)
        if ledger.outstanding > 0:
            rows.append(due_payment_for(loan, ledger, as_of))

    rows.sort(key=due_payment_sort_key)
    return rows
