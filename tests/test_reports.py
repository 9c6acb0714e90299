"""Tests for portfolio reports."""

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from microlend.config import LendingConfig, PenaltyConfig
from microlend.exceptions import EntityNotFoundError, NoScheduleAvailableError
from microlend.models import Expense, Frequency, Fund, InstallmentStatus, LoanStatus
from microlend.reports import PortfolioReport
from microlend.sinks import JsonFileSink
from microlend.store import LendingDataStore

AS_OF = date(2025, 2, 15)


@pytest.fixture
def store(make_customer, make_loan, make_payment) -> LendingDataStore:
    """Store with one weekly, one completed and one open-ended loan."""
    store = LendingDataStore()
    for i in range(1, 5):
        store.add_customer(make_customer(f"cust-00{i}", active=i != 4))

    def disburse(loan):
        store.add_loan(loan)
        store.update_status(loan.loan_id, LoanStatus.ACTIVE)
        return loan

    disburse(make_loan("weekly", "cust-001", status=LoanStatus.APPROVED))
    for day, banked in ((1, True), (8, False), (15, False)):
        store.record_payment(
            make_payment("6666.67", date(2025, 1, day), "weekly", "cust-001", banked=banked)
        )

    disburse(
        make_loan(
            "short",
            "cust-002",
            status=LoanStatus.APPROVED,
            principal=Decimal("1000"),
            frequency=Frequency.MONTHLY,
            duration_months=1,
        )
    )
    store.record_payment(make_payment("1100", date(2025, 1, 1), "short", "cust-002"))

    disburse(
        make_loan(
            "open",
            "cust-003",
            status=LoanStatus.APPROVED,
            principal=Decimal("20000"),
            frequency=Frequency.MONTHLY,
            duration_months=None,
        )
    )

    store.add_fund(Fund("fund-1", Decimal("50000"), datetime(2024, 12, 1)))
    store.add_expense(Expense("exp-1", Decimal("1000"), "Fuel", datetime(2025, 1, 3), claimed=True))
    store.add_expense(Expense("exp-2", Decimal("500"), "Stationery", datetime(2025, 1, 4)))
    return store


class TestPortfolioReport:
    """Tests for report figures."""

    def test_due_payments(self, store: LendingDataStore) -> None:
        rows = PortfolioReport(store).due_payments(AS_OF)

        assert [r.loan_id for r in rows] == ["weekly"]
        assert rows[0].loan_number == "L0001"
        assert rows[0].total_due == Decimal("39999.99")

    def test_business_overview(self, store: LendingDataStore) -> None:
        overview = PortfolioReport(store).business_overview()

        assert overview.total_outstanding == Decimal("61999.99")
        assert overview.total_invested == Decimal("50000.00")
        assert overview.total_expenses == Decimal("1500.00")
        assert overview.profit == Decimal("10499.99")

    def test_dashboard_stats(self, store: LendingDataStore) -> None:
        stats = PortfolioReport(store).dashboard_stats(AS_OF)

        assert stats.active_loans == 2
        assert stats.completed_loans == 1
        assert stats.customers == 3
        assert stats.overdue_loans == 1  # open-ended loan matured on 2025-02-01
        assert stats.pending_deposit == Decimal("14433.34")
        assert stats.total_to_be_collected == Decimal("61999.99")

    def test_predict(self, store: LendingDataStore) -> None:
        result = PortfolioReport(store).predict(AS_OF, date(2025, 3, 17))

        assert [r.expected_date for r in result.predictions] == [
            date(2025, 2, 19),
            date(2025, 2, 26),
        ]
        assert result.total_predicted_amount == Decimal("13333.31")


class TestPaymentPlan:
    """Tests for the per-loan payment plan."""

    def test_plan(self, store: LendingDataStore) -> None:
        plan = PortfolioReport(store).payment_plan("weekly", date(2025, 1, 20))

        assert plan.loan_number == "L0001"
        assert plan.customer_name == "Customer cust-001"
        assert plan.total_interest == Decimal("10000.00")
        assert plan.total_paid == Decimal("20000.01")
        assert plan.outstanding == Decimal("39999.99")
        assert plan.maturity_date == date(2025, 3, 1)
        assert plan.overdue_penalty == Decimal("0.00")
        assert [s.status for s in plan.installments[:4]] == [
            InstallmentStatus.PAID,
            InstallmentStatus.PAID,
            InstallmentStatus.PAID,
            InstallmentStatus.UPCOMING,
        ]

    def test_penalty_after_final_due_date(self, make_customer, make_loan) -> None:
        store = LendingDataStore()
        store.add_customer(make_customer())
        store.add_loan(
            make_loan(principal=Decimal("1000"), frequency=Frequency.MONTHLY, duration_months=1)
        )
        report = PortfolioReport(store)

        # Single installment due 2025-01-01; 30 days late, 20 past grace
        assert report.payment_plan("loan-001", date(2025, 1, 31)).overdue_penalty == Decimal("7.23")
        assert report.payment_plan("loan-001", date(2025, 1, 11)).overdue_penalty == Decimal("0.00")

    def test_penalty_uses_config(self, make_customer, make_loan) -> None:
        store = LendingDataStore()
        store.add_customer(make_customer())
        store.add_loan(
            make_loan(principal=Decimal("1000"), frequency=Frequency.MONTHLY, duration_months=1)
        )
        config = LendingConfig(penalty=PenaltyConfig(grace_period_days=0))

        plan = PortfolioReport(store, config).payment_plan("loan-001", date(2025, 1, 31))
        assert plan.overdue_penalty == Decimal("10.85")

    def test_datetime_as_of(self, make_customer, make_loan) -> None:
        store = LendingDataStore()
        store.add_customer(make_customer())
        store.add_loan(
            make_loan(principal=Decimal("1000"), frequency=Frequency.MONTHLY, duration_months=1)
        )
        report = PortfolioReport(store)

        plan = report.payment_plan("loan-001", datetime(2025, 1, 31, 10, 0))

        assert plan.overdue_penalty == Decimal("7.23")
        assert plan.installments[0].status == InstallmentStatus.OVERDUE

    def test_principal_is_quantized(self, make_customer, make_loan) -> None:
        store = LendingDataStore()
        store.add_customer(make_customer())
        store.add_loan(make_loan(principal=Decimal("100.005")))

        plan = PortfolioReport(store).payment_plan("loan-001", date(2025, 1, 1))

        assert str(plan.principal) == "100.01"
        assert plan.total_amount == plan.principal + plan.total_interest

    def test_open_ended_has_no_plan(self, store: LendingDataStore) -> None:
        with pytest.raises(NoScheduleAvailableError):
            PortfolioReport(store).payment_plan("open", AS_OF)

    def test_unknown_loan(self, store: LendingDataStore) -> None:
        with pytest.raises(EntityNotFoundError):
            PortfolioReport(store).payment_plan("missing", AS_OF)


class TestExport:
    """Tests for exporting reports through sinks."""

    def test_export_json(self, store: LendingDataStore, tmp_path: Path) -> None:
        sink = JsonFileSink(tmp_path)
        PortfolioReport(store).export([sink], AS_OF)

        assert sink.counts == {
            "due_payments": 1,
            "predictions": 2,
            "prediction_summary": 1,
            "business_overview": 1,
            "dashboard": 1,
        }

        dashboard = json.loads((tmp_path / "dashboard.json").read_text())
        assert dashboard["total_to_be_collected"] == "61999.99"
        assert dashboard["active_loans"] == 2

        summary = json.loads((tmp_path / "prediction_summary.json").read_text())
        assert summary == {
            "start_date": "2025-02-15",
            "end_date": "2025-03-17",
            "count": 2,
            "total_predicted_amount": "13333.31",
        }

        due = json.loads((tmp_path / "due_payments.json").read_text())
        assert due[0]["frequency"] == "WEEKLY"
        assert due[0]["is_due_today"] is True
