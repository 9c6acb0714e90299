"""Tests for lending models."""

from datetime import date
from decimal import Decimal

from microlend.models import Frequency, LoanStatus, LoanTerms


class TestLoan:
    """Tests for Loan."""

    def test_terms(self, make_loan) -> None:
        loan = make_loan(duration_months=None, duration_days=45)

        assert loan.terms == LoanTerms(
            principal=Decimal("50000"),
            interest_rate=Decimal("10"),
            frequency=Frequency.WEEKLY,
            start_date=date(2025, 1, 1),
            duration_days=45,
        )
        assert not loan.is_open_ended

    def test_open_ended(self, make_loan) -> None:
        loan = make_loan(duration_months=None)

        assert loan.is_open_ended
        assert loan.terms.is_open_ended

    def test_defaults(self, make_loan) -> None:
        loan = make_loan()

        assert loan.loan_number == ""
        assert loan.payments == []
        assert loan.guarantor_ids == []
        assert loan.applicant is None


class TestEnums:
    """Tests for enumeration values."""

    def test_string_values(self) -> None:
        assert Frequency("MONTHLY") is Frequency.MONTHLY
        assert LoanStatus.ACTIVE == "ACTIVE"
        assert [f.value for f in Frequency] == ["DAILY", "WEEKLY", "MONTHLY"]
