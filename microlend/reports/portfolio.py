"""Portfolio reports computed from a lending store snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from typing import Any

from microlend.calculators import (
    DuePayment,
    InstallmentState,
    PredictionResult,
    ProfitSummary,
    build_schedule,
    calculate_overdue_penalty,
    is_past_maturity,
    list_due_payments,
    maturity_date,
    predict,
    profit_for_loans,
    reconcile,
)
from microlend.calculators.schedule import as_date
from microlend.config import LendingConfig
from microlend.models import Frequency, LoanStatus
from microlend.money import ZERO, quantize_money
from microlend.store import LendingDataStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentPlan:
    """Schedule of one loan with what has been paid against it."""

    loan_id: str
    loan_number: str
    customer_name: str
    principal: Decimal
    interest_rate: Decimal
    frequency: Frequency
    total_interest: Decimal
    total_amount: Decimal
    installment_amount: Decimal
    total_paid: Decimal
    outstanding: Decimal
    maturity_date: date
    overdue_penalty: Decimal
    installments: list[InstallmentState]


@dataclass(frozen=True)
class DashboardStats:
    """Headline figures for the back office."""

    active_loans: int
    completed_loans: int
    customers: int
    overdue_loans: int  # ACTIVE loans past their maturity date
    pending_deposit: Decimal
    total_to_be_collected: Decimal


class PortfolioReport:
    """Reports over the loans, payments, funds and expenses in a store.

    Every figure comes from the calculators; nothing here recomputes
    schedule or balance arithmetic.
    """

    def __init__(self, store: LendingDataStore, config: LendingConfig | None = None) -> None:
        """Initialize portfolio report.

        Parameters
        ----------
        store : LendingDataStore
            Snapshot of the lending data.
        config : LendingConfig | None
            Penalty and report settings; defaults when omitted.
        """
        self.store = store
        self.config = config or LendingConfig()

    def due_payments(self, as_of: date) -> list[DuePayment]:
        """Loans with money to collect, most urgent first."""
        rows = list_due_payments(self.store.active_loans(), as_of)
        logger.info(
            "Due payments as of %s: %d loans, %d overdue",
            as_of,
            len(rows),
            sum(1 for r in rows if r.overdue_count > 0),
        )
        return rows

    def payment_plan(self, loan_id: str, as_of: date) -> PaymentPlan:
        """Installment-by-installment plan for one loan.

        A penalty accrues once the final installment is past due and a
        balance remains.

        Raises
        ------
        EntityNotFoundError
            If the loan does not exist.
        NoScheduleAvailableError
            If the loan is open-ended.
        """
        as_of = as_date(as_of)
        loan = self.store.get_loan(loan_id)
        schedule = build_schedule(loan.terms)
        ledger = reconcile(schedule, loan.payments)

        penalty = ZERO
        final_due = schedule.final_due_date
        if ledger.outstanding > 0 and final_due is not None and as_of > final_due:
            penalty = calculate_overdue_penalty(
                ledger.outstanding,
                (as_of - final_due).days,
                grace_period_days=self.config.penalty.grace_period_days,
                annual_rate=self.config.penalty.annual_rate,
            )

        return PaymentPlan(
            loan_id=loan.loan_id,
            loan_number=loan.loan_number,
            customer_name=loan.applicant.full_name if loan.applicant else "Unknown",
            principal=quantize_money(schedule.terms.principal),
            interest_rate=loan.interest_rate,
            frequency=loan.frequency,
            total_interest=schedule.total_interest,
            total_amount=schedule.total_amount,
            installment_amount=schedule.installment_amount,
            total_paid=ledger.total_paid,
            outstanding=ledger.outstanding,
            maturity_date=maturity_date(loan.terms),
            overdue_penalty=penalty,
            installments=ledger.installment_states(as_of),
        )

    def predict(self, start_date: date, end_date: date) -> PredictionResult:
        """Installments of active loans expected within the window."""
        result = predict(self.store.active_loans(), start_date, end_date)
        logger.info(
            "Predicted %d installments totalling %s between %s and %s",
            result.count,
            result.total_predicted_amount,
            start_date,
            end_date,
        )
        return result

    def business_overview(self) -> ProfitSummary:
        """Outstanding balances against invested funds and expenses."""
        return profit_for_loans(
            self.store.active_loans(),
            total_invested=self.store.total_invested(),
            total_expenses=self.store.total_expenses(),
        )

    def dashboard_stats(self, as_of: date) -> DashboardStats:
        """Counts and totals for the dashboard."""
        active = self.store.active_loans()
        overview = profit_for_loans(active)
        return DashboardStats(
            active_loans=len(active),
            completed_loans=len(self.store.loans_by_status(LoanStatus.COMPLETED)),
            customers=sum(1 for c in self.store.customers.values() if c.active),
            overdue_loans=sum(1 for l in active if is_past_maturity(l.terms, as_of)),
            pending_deposit=self.store.pending_deposit_total(),
            total_to_be_collected=overview.total_outstanding,
        )

    def export(self, sinks: list[Any], as_of: date) -> None:
        """Export all reports to sinks.

        Parameters
        ----------
        sinks : list[Any]
            Sink instances exposing ``write_batch`` and ``write_document``.
        as_of : date
            Reporting date; predictions cover the configured window from it.
        """
        window_end = as_of + timedelta(days=self.config.report.prediction_window_days)
        due = self.due_payments(as_of)
        prediction = self.predict(as_of, window_end)
        overview = self.business_overview()
        stats = self.dashboard_stats(as_of)

        for sink in sinks:
            sink.write_batch("due_payments", due)
            sink.write_batch("predictions", prediction.predictions)
            sink.write_document(
                "prediction_summary",
                {
                    "start_date": prediction.start_date,
                    "end_date": prediction.end_date,
                    "count": prediction.count,
                    "total_predicted_amount": prediction.total_predicted_amount,
                },
            )
            sink.write_document("business_overview", overview)
            sink.write_document("dashboard", stats)

        logger.info("Exported portfolio reports to %d sinks", len(sinks))
