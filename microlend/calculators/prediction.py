"""Forecast contractually due installments inside a date window."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable

from microlend.calculators.schedule import as_date, build_schedule
from microlend.exceptions import InvalidDateRangeError
from microlend.models.enums import Frequency, LoanStatus
from microlend.models.loan import Loan
from microlend.money import ZERO, sum_money


@dataclass(frozen=True)
class PredictionRecord:
    """An installment expected inside the prediction window."""

    loan_id: str
    loan_number: str
    customer_id: str
    customer_name: str
    customer_phone: str
    installment_number: int
    total_installments: int
    expected_amount: Decimal
    expected_date: date
    frequency: Frequency


@dataclass(frozen=True)
class PredictionResult:
    """Predicted installments sorted by expected date."""

    start_date: date
    end_date: date
    predictions: list[PredictionRecord] = field(default_factory=list)
    total_predicted_amount: Decimal = ZERO

    @property
    def count(self) -> int:
        return len(self.predictions)

    def by_date(self) -> dict[date, list[PredictionRecord]]:
        """Group records per expected date, keeping their order."""
        grouped: dict[date, list[PredictionRecord]] = {}
        for record in self.predictions:
            grouped.setdefault(record.expected_date, []).append(record)
        return grouped


def predict(loans: Iterable[Loan], start_date: date, end_date: date) -> PredictionResult:
    """Enumerate installments of ACTIVE loans due within ``[start_date, end_date]``.

    Payment history is ignored: the result answers what is contractually
    due in the window, not what remains unpaid. Open-ended loans have no
    installments and contribute nothing.

    Parameters
    ----------
    loans : Iterable[Loan]
        Candidate loans; anything not ACTIVE is skipped.
    start_date : date
        First day of the window (inclusive).
    end_date : date
        Last day of the window (inclusive).

    Returns
    -------
    PredictionResult
        Records ordered by date, loan number and installment number.

    Raises
    ------
    InvalidDateRangeError
        If ``start_date`` is after ``end_date``.
    """
    start_date = as_date(start_date)
    end_date = as_date(end_date)
    if start_date > end_date:
        raise InvalidDateRangeError(
            f"Start date {start_date} must be on or before end date {end_date}"
        )

    records = []
    for loan in loans:
        if loan.status != LoanStatus.ACTIVE or loan.is_open_ended:
            continue

        schedule = build_schedule(loan.terms)
        applicant = loan.applicant
        for inst in schedule:
            if inst.due_date > end_date:
                break
            if inst.due_date < start_date:
                continue
            records.append(
                PredictionRecord(
                    loan_id=loan.loan_id,
                    loan_number=loan.loan_number,
                    customer_id=loan.customer_id,
                    customer_name=applicant.full_name if applicant else "Unknown",
                    customer_phone=applicant.mobile_phone if applicant else "",
                    installment_number=inst.index,
                    total_installments=schedule.count,
                    expected_amount=inst.expected_amount,
                    expected_date=inst.due_date,
                    frequency=loan.frequency,
                )
            )

    records.sort(key=lambda r: (r.expected_date, r.loan_number, r.loan_id, r.installment_number))

    return PredictionResult(
        start_date=start_date,
        end_date=end_date,
        predictions=records,
        total_predicted_amount=sum_money(r.expected_amount for r in records),
    )
