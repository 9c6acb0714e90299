"""Pytest configuration and fixtures."""

from datetime import date, datetime, time
from decimal import Decimal

import pytest

from microlend.models import Customer, Frequency, Loan, LoanStatus, LoanTerms, Payment


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def start_date() -> date:
    """Start date shared by the reference loans."""
    return date(2025, 1, 1)


@pytest.fixture
def weekly_terms(start_date: date) -> LoanTerms:
    """50 000 at 10% per 30 days over two months, paid weekly."""
    return LoanTerms(
        principal=Decimal("50000"),
        interest_rate=Decimal("10"),
        frequency=Frequency.WEEKLY,
        start_date=start_date,
        duration_months=2,
    )


@pytest.fixture
def make_customer():
    """Factory for customers with predictable IDs."""

    def _make(customer_id: str = "cust-001", **overrides) -> Customer:
        values = {
            "customer_id": customer_id,
            "full_name": f"Customer {customer_id}",
            "mobile_phone": "0771234567",
            "national_id": "901234567V",
            "created_at": datetime(2024, 12, 1),
        }
        values.update(overrides)
        return Customer(**values)

    return _make


@pytest.fixture
def make_loan(start_date: date):
    """Factory for loans; defaults to the weekly reference loan."""

    def _make(loan_id: str = "loan-001", customer_id: str = "cust-001", **overrides) -> Loan:
        values = {
            "loan_id": loan_id,
            "customer_id": customer_id,
            "principal": Decimal("50000"),
            "interest_rate": Decimal("10"),
            "frequency": Frequency.WEEKLY,
            "start_date": start_date,
            "status": LoanStatus.ACTIVE,
            "duration_months": 2,
        }
        values.update(overrides)
        return Loan(**values)

    return _make


@pytest.fixture
def make_payment():
    """Factory for payments dated at noon on a given day."""
    counter = {"n": 0}

    def _make(
        amount: str,
        paid_on: date,
        loan_id: str = "loan-001",
        customer_id: str = "cust-001",
        banked: bool = False,
    ) -> Payment:
        counter["n"] += 1
        return Payment(
            payment_id=f"pay-{counter['n']:03d}",
            loan_id=loan_id,
            customer_id=customer_id,
            amount=Decimal(amount),
            paid_at=datetime.combine(paid_on, time(12, 0)),
            banked=banked,
        )

    return _make
