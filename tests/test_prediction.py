"""Tests for installment prediction over a date window."""

from datetime import date
from decimal import Decimal

import pytest

from microlend.calculators.prediction import predict
from microlend.exceptions import InvalidDateRangeError
from microlend.models import Frequency, LoanStatus


class TestPredictWindow:
    """Window boundaries."""

    def test_start_after_end(self) -> None:
        with pytest.raises(InvalidDateRangeError):
            predict([], date(2025, 3, 1), date(2025, 2, 1))

    def test_single_day_window(self, make_loan) -> None:
        result = predict([make_loan(loan_number="L0001")], date(2025, 1, 8), date(2025, 1, 8))

        assert result.count == 1
        assert result.predictions[0].installment_number == 2

    def test_both_ends_inclusive(self, make_loan) -> None:
        result = predict([make_loan(loan_number="L0001")], date(2025, 1, 8), date(2025, 1, 15))
        assert [r.installment_number for r in result.predictions] == [2, 3]

    def test_day_after_end_excluded(self, make_loan) -> None:
        result = predict([make_loan(loan_number="L0001")], date(2025, 1, 8), date(2025, 1, 14))
        assert [r.installment_number for r in result.predictions] == [2]

    def test_window_between_due_dates(self, make_loan) -> None:
        result = predict([make_loan()], date(2025, 1, 16), date(2025, 1, 21))

        assert result.count == 0
        assert result.total_predicted_amount == Decimal("0.00")

    def test_window_after_schedule(self, make_loan) -> None:
        assert predict([make_loan()], date(2025, 6, 1), date(2025, 6, 30)).count == 0


class TestPredictLoans:
    """Which loans contribute and in what order."""

    def test_sorted_across_loans(self, make_loan, make_customer) -> None:
        weekly = make_loan("w", loan_number="L0001")
        monthly = make_loan(
            "m",
            customer_id="cust-002",
            loan_number="L0002",
            principal=Decimal("10000"),
            interest_rate=Decimal("5"),
            frequency=Frequency.MONTHLY,
            start_date=date(2025, 1, 8),
            duration_months=3,
        )
        monthly.applicant = make_customer("cust-002", full_name="Nimal Silva")

        result = predict([monthly, weekly], date(2025, 1, 1), date(2025, 1, 31))

        assert [(r.expected_date.day, r.loan_number) for r in result.predictions] == [
            (1, "L0001"),
            (8, "L0001"),
            (8, "L0002"),
            (15, "L0001"),
            (22, "L0001"),
            (29, "L0001"),
        ]
        assert result.total_predicted_amount == Decimal("37166.68")
        assert result.predictions[2].customer_name == "Nimal Silva"
        assert result.predictions[2].total_installments == 3
        assert result.predictions[0].customer_name == "Unknown"

    def test_by_date(self, make_loan) -> None:
        a = make_loan("a", loan_number="L0001")
        b = make_loan("b", customer_id="cust-002", loan_number="L0002")

        grouped = predict([a, b], date(2025, 1, 1), date(2025, 1, 8)).by_date()

        assert list(grouped) == [date(2025, 1, 1), date(2025, 1, 8)]
        assert [r.loan_id for r in grouped[date(2025, 1, 8)]] == ["a", "b"]

    def test_ignores_payments(self, make_loan, make_payment) -> None:
        unpaid = make_loan()
        paid = make_loan()
        paid.payments.append(make_payment("20000.01", date(2025, 1, 2)))

        window = (date(2025, 1, 1), date(2025, 1, 31))
        assert predict([paid], *window).predictions == predict([unpaid], *window).predictions

    def test_skips_inactive_and_open_ended(self, make_loan) -> None:
        loans = [
            make_loan("approved", status=LoanStatus.APPROVED),
            make_loan("completed", status=LoanStatus.COMPLETED),
            make_loan("defaulted", status=LoanStatus.DEFAULTED),
            make_loan("open", frequency=Frequency.MONTHLY, duration_months=None),
        ]
        assert predict(loans, date(2025, 1, 1), date(2025, 12, 31)).count == 0

    def test_expected_amounts_follow_schedule(self, make_loan) -> None:
        result = predict([make_loan()], date(2025, 1, 1), date(2025, 3, 31))

        assert result.count == 9
        assert result.predictions[-1].expected_amount == Decimal("6666.64")
        assert result.total_predicted_amount == Decimal("60000.00")
