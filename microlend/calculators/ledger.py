"""Reconcile recorded payments against a repayment schedule.

Payments are a running balance: they are not matched to particular due
dates. The number of installments considered paid is the total paid divided
by the flat installment amount (floor division). A borrower who overpays
early and underpays later can therefore look current while individual
installments were missed.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Protocol

from microlend.calculators.schedule import Schedule, as_date, build_schedule
from microlend.exceptions import NoScheduleAvailableError
from microlend.models.enums import InstallmentStatus
from microlend.models.loan import Installment, Loan
from microlend.money import ZERO, sum_money, to_decimal


class PaymentLike(Protocol):
    amount: Decimal
    paid_at: datetime


@dataclass(frozen=True)
class InstallmentState:
    """How much of one installment the running balance has covered."""

    installment: Installment
    status: InstallmentStatus
    amount_paid: Decimal
    settled_at: datetime | None  # paid_at of the payment that completed it


@dataclass(frozen=True)
class LedgerSummary:
    """Reconciliation of one loan's payments against its schedule."""

    schedule: Schedule
    payments: tuple[PaymentLike, ...]  # ascending paid_at
    total_paid: Decimal
    outstanding: Decimal
    paid_installment_count: int
    remaining_installment_count: int

    @property
    def total_expected(self) -> Decimal:
        return self.schedule.total_amount

    @property
    def installment_amount(self) -> Decimal:
        return self.schedule.installment_amount

    @property
    def schedule_count(self) -> int:
        return self.schedule.count

    @property
    def is_settled(self) -> bool:
        """Nothing left to collect; a negative outstanding is a credit."""
        return self.outstanding <= ZERO

    def periods_since_start(self, as_of: date) -> int:
        """Whole payment periods elapsed between the start date and ``as_of``."""
        days = (as_date(as_of) - self.schedule.start_date).days
        return days // self.schedule.spacing_days

    def is_due_today(self, as_of: date) -> bool:
        """Whether a payment is expected on ``as_of``."""
        if self.is_settled:
            return False
        return self.periods_since_start(as_of) >= self.paid_installment_count

    def overdue_count(self, as_of: date) -> int:
        """Installment periods elapsed without payment, excluding the current one."""
        if self.is_settled:
            return 0
        periods = self.periods_since_start(as_of)
        return max(0, periods - self.paid_installment_count - 1)

    def installment_states(self, as_of: date) -> list[InstallmentState]:
        """Apply payments in ``paid_at`` order to each installment in turn.

        An installment is PAID once fully covered. Otherwise it is OVERDUE
        when its due date has passed, DUE on its due date, PARTIALLY_PAID
        when a future installment is partly covered, and UPCOMING otherwise.
        Amounts paid beyond the schedule total are not allocated.
        """
        as_of = as_date(as_of)
        pending = [(to_decimal(p.amount), p.paid_at) for p in self.payments]
        cursor = 0
        states = []

        for inst in self.schedule:
            covered = ZERO
            settled_at = None
            while covered < inst.expected_amount and cursor < len(pending):
                available, paid_at = pending[cursor]
                take = min(available, inst.expected_amount - covered)
                covered += take
                available -= take
                if available > ZERO:
                    pending[cursor] = (available, paid_at)
                else:
                    cursor += 1
                if covered == inst.expected_amount:
                    settled_at = paid_at

            if covered >= inst.expected_amount:
                status = InstallmentStatus.PAID
            elif inst.due_date < as_of:
                status = InstallmentStatus.OVERDUE
            elif inst.due_date == as_of:
                status = InstallmentStatus.DUE
            elif covered > ZERO:
                status = InstallmentStatus.PARTIALLY_PAID
            else:
                status = InstallmentStatus.UPCOMING

            states.append(
                InstallmentState(
                    installment=inst,
                    status=status,
                    amount_paid=covered,
                    settled_at=settled_at,
                )
            )

        return states


def reconcile(schedule: Schedule, payments: Iterable[PaymentLike]) -> LedgerSummary:
    """Reconcile payments against a schedule.

    Parameters
    ----------
    schedule : Schedule
        Output of :func:`build_schedule`.
    payments : Iterable[PaymentLike]
        Recorded payments, each with ``amount`` and ``paid_at``.

    Returns
    -------
    LedgerSummary
        Totals, outstanding balance and installment counts.

    Raises
    ------
    NoScheduleAvailableError
        If the schedule has no installments (open-ended loan).
    """
    if schedule.count == 0:
        raise NoScheduleAvailableError(
            "Loan has no installment schedule; reconciliation is undefined"
        )

    ordered = tuple(sorted(payments, key=lambda p: p.paid_at))
    total_paid = sum_money(to_decimal(p.amount) for p in ordered)
    outstanding = schedule.total_amount - total_paid

    if outstanding <= ZERO:
        paid_count = schedule.count
    else:
        paid_count = min(
            schedule.count, max(0, int(total_paid // schedule.installment_amount))
        )

    return LedgerSummary(
        schedule=schedule,
        payments=ordered,
        total_paid=total_paid,
        outstanding=outstanding,
        paid_installment_count=paid_count,
        remaining_installment_count=max(0, schedule.count - paid_count),
    )


def reconcile_loan(loan: Loan) -> LedgerSummary:
    """Build the loan's schedule and reconcile its recorded payments."""
    return reconcile(build_schedule(loan.terms), loan.payments)

