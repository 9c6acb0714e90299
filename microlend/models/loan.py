"""Loan models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from microlend.models.customer import Customer
from microlend.models.enums import Frequency, LoanStatus


@dataclass(frozen=True)
class LoanTerms:
    """The inputs of the repayment schedule.

    ``interest_rate`` is a flat percentage charged per 30 days on the
    original principal (e.g. ``Decimal("10")`` for 10%). Exactly one of
    ``duration_months`` and ``duration_days`` is set; neither set means an
    open-ended loan.
    """

    principal: Decimal
    interest_rate: Decimal
    frequency: Frequency
    start_date: date
    duration_months: int | None = None
    duration_days: int | None = None

    @property
    def is_open_ended(self) -> bool:
        return self.duration_months is None and self.duration_days is None


@dataclass
class Payment:
    """Cash received against a loan."""

    payment_id: str
    loan_id: str
    customer_id: str
    amount: Decimal
    paid_at: datetime
    note: str = ""
    banked: bool = False  # Deposited to a bank account


@dataclass
class Loan:
    """Lending agreement with its recorded payments."""

    loan_id: str
    customer_id: str
    principal: Decimal
    interest_rate: Decimal  # Percent per 30 days, flat
    frequency: Frequency
    start_date: date
    status: LoanStatus
    duration_months: int | None = None
    duration_days: int | None = None
    loan_number: str = ""  # L0001, L0002, ...
    guarantor_ids: list[str] = field(default_factory=list)
    payments: list[Payment] = field(default_factory=list)
    applicant: Customer | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.principal,
            interest_rate=self.interest_rate,
            frequency=self.frequency,
            start_date=self.start_date,
            duration_months=self.duration_months,
            duration_days=self.duration_days,
        )

    @property
    def is_open_ended(self) -> bool:
        return self.terms.is_open_ended


@dataclass(frozen=True)
class Installment:
    """One scheduled payment obligation (derived, never stored)."""

    index: int  # 1, 2, 3, ...
    due_date: date
    expected_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_after: Decimal
