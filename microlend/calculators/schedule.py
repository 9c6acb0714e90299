"""Flat-interest amortization schedule.

Interest is charged once on the original principal for the whole term
(``principal × rate × months / 100``) and spread evenly over equal
installments. There is no declining-balance recalculation. Rounding residue
from the per-installment division lands in the final installment so the
schedule always sums to the loan's total amount to the cent.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterator

from microlend.exceptions import InvalidLoanTermsError
from microlend.models.enums import Frequency
from microlend.models.loan import Installment, LoanTerms
from microlend.money import ZERO, quantize_money, to_decimal

DAYS_PER_PERIOD = 30  # Interest rates are quoted per 30 days

SPACING_DAYS = {
    Frequency.DAILY: 1,
    Frequency.WEEKLY: 7,
    Frequency.MONTHLY: DAYS_PER_PERIOD,
}


@dataclass(frozen=True)
class Schedule:
    """Ordered installments of a loan plus the totals they were derived from.

    Iterating a schedule is restartable; an open-ended loan has an empty
    schedule.
    """

    terms: LoanTerms
    installments: tuple[Installment, ...]
    total_interest: Decimal
    total_amount: Decimal
    installment_amount: Decimal
    spacing_days: int

    def __iter__(self) -> Iterator[Installment]:
        return iter(self.installments)

    def __len__(self) -> int:
        return len(self.installments)

    def __getitem__(self, index: int) -> Installment:
        return self.installments[index]

    @property
    def count(self) -> int:
        return len(self.installments)

    @property
    def start_date(self) -> date:
        return as_date(self.terms.start_date)

    @property
    def final_due_date(self) -> date | None:
        return self.installments[-1].due_date if self.installments else None


def duration_in_months(terms: LoanTerms) -> int:
    """Loan length in 30-day periods; day durations round up."""
    if terms.duration_months is not None:
        return terms.duration_months
    if terms.duration_days is not None:
        return -(-terms.duration_days // DAYS_PER_PERIOD)
    raise InvalidLoanTermsError("Open-ended loan has no duration")


def installment_count(frequency: Frequency, months: int) -> int:
    """Number of installments for a term of ``months`` 30-day periods."""
    if frequency == Frequency.MONTHLY:
        return months
    if frequency == Frequency.WEEKLY:
        return -(-(months * DAYS_PER_PERIOD) // SPACING_DAYS[Frequency.WEEKLY])
    return months * DAYS_PER_PERIOD


def total_interest(terms: LoanTerms) -> Decimal:
    """Flat interest over the full term.

    Raises
    ------
    InvalidLoanTermsError
        If the terms are malformed or carry no duration.
    """
    principal, rate, _, _ = _validate_common(terms)
    _validate_duration(terms)
    months = duration_in_months(terms)
    return quantize_money(principal * rate * months / 100)


def interest_only_payment(terms: LoanTerms) -> Decimal:
    """Interest due per 30 days on an open-ended loan.

    Open-ended loans carry no amortization; the borrower pays interest each
    period and the principal stays outstanding until settlement.
    """
    principal, rate, _, _ = _validate_common(terms)
    return quantize_money(principal * rate / 100)


def build_schedule(terms: LoanTerms) -> Schedule:
    """Build the repayment schedule for a set of loan terms.

    Parameters
    ----------
    terms : LoanTerms
        Principal, flat rate per 30 days, duration, frequency and start.

    Returns
    -------
    Schedule
        Installments with their totals. Empty for open-ended terms.

    Raises
    ------
    InvalidLoanTermsError
        If any term is malformed.
    """
    principal, rate, frequency, start = _validate_common(terms)
    spacing = SPACING_DAYS[frequency]

    if terms.is_open_ended:
        return Schedule(
            terms=terms,
            installments=(),
            total_interest=ZERO,
            total_amount=principal,
            installment_amount=ZERO,
            spacing_days=spacing,
        )

    interest = total_interest(terms)
    months = duration_in_months(terms)
    total = principal + interest
    count = installment_count(frequency, months)

    per_installment = quantize_money(total / count)
    if per_installment <= ZERO:
        raise InvalidLoanTermsError(
            f"Total {total} is too small to split into {count} installments"
        )

    installments = tuple(
        _amortize(
            start=start,
            spacing=spacing,
            count=count,
            principal=principal,
            interest=interest,
            per_installment=per_installment,
            per_principal=quantize_money(principal / count),
        )
    )

    return Schedule(
        terms=terms,
        installments=installments,
        total_interest=interest,
        total_amount=total,
        installment_amount=per_installment,
        spacing_days=spacing,
    )


def generate_schedule(terms: LoanTerms) -> list[Installment]:
    """Return the installments for a loan with a fixed duration.

    Raises
    ------
    InvalidLoanTermsError
        If the terms are malformed or carry no duration.
    """
    if terms.is_open_ended:
        raise InvalidLoanTermsError(
            "Exactly one of duration_months or duration_days is required"
        )
    return list(build_schedule(terms))


def _amortize(
    start: date,
    spacing: int,
    count: int,
    principal: Decimal,
    interest: Decimal,
    per_installment: Decimal,
    per_principal: Decimal,
) -> Iterator[Installment]:
    """Yield equal installments; the last one absorbs rounding residue."""
    remaining_total = principal + interest
    remaining_principal = principal
    remaining_interest = interest

    for i in range(count):
        if i == count - 1:
            expected = remaining_total
            principal_part = remaining_principal
        else:
            expected = min(per_installment, remaining_total)
            principal_part = min(per_principal, expected, remaining_principal)

        interest_part = expected - principal_part
        if interest_part > remaining_interest:
            interest_part = remaining_interest
            principal_part = expected - interest_part

        remaining_total -= expected
        remaining_principal -= principal_part
        remaining_interest -= interest_part

        yield Installment(
            index=i + 1,
            due_date=start + timedelta(days=i * spacing),
            expected_amount=expected,
            principal_portion=principal_part,
            interest_portion=interest_part,
            remaining_after=max(ZERO, remaining_total),
        )


def _validate_common(terms: LoanTerms) -> tuple[Decimal, Decimal, Frequency, date]:
    try:
        principal = to_decimal(terms.principal)
        rate = to_decimal(terms.interest_rate)
    except (TypeError, ValueError) as e:
        raise InvalidLoanTermsError(str(e)) from e

    if principal <= 0:
        raise InvalidLoanTermsError(f"Principal must be positive, got {principal}")
    if rate < 0:
        raise InvalidLoanTermsError(f"Interest rate cannot be negative, got {rate}")

    try:
        frequency = Frequency(terms.frequency)
    except ValueError:
        raise InvalidLoanTermsError(f"Unsupported frequency: {terms.frequency}") from None

    if not isinstance(terms.start_date, date):
        raise InvalidLoanTermsError(f"Invalid start date: {terms.start_date!r}")

    return quantize_money(principal), rate, frequency, as_date(terms.start_date)


def _validate_duration(terms: LoanTerms) -> None:
    if terms.duration_months is not None and terms.duration_days is not None:
        raise InvalidLoanTermsError(
            "duration_months and duration_days are mutually exclusive"
        )
    for name in ("duration_months", "duration_days"):
        value = getattr(terms, name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidLoanTermsError(f"{name} must be a positive integer, got {value!r}")


def as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value
