"""Loan maturity and late-payment penalty."""

from datetime import date, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from microlend.calculators.schedule import as_date
from microlend.models.loan import LoanTerms
from microlend.money import ZERO, quantize_money, to_decimal

DEFAULT_GRACE_PERIOD_DAYS = 10
DEFAULT_PENALTY_ANNUAL_RATE = Decimal("0.12")
DAYS_PER_YEAR = 365


def maturity_date(terms: LoanTerms) -> date:
    """Date the loan is expected to be repaid in full.

    Day durations add days; month durations add calendar months. Open-ended
    loans are expected back one calendar month after the start.
    """
    start = as_date(terms.start_date)
    if terms.duration_days is not None:
        return start + timedelta(days=terms.duration_days)
    return start + relativedelta(months=terms.duration_months or 1)


def is_past_maturity(terms: LoanTerms, as_of: date) -> bool:
    return as_date(as_of) > maturity_date(terms)


def calculate_overdue_penalty(
    overdue_amount: Decimal,
    overdue_days: int,
    grace_period_days: int = DEFAULT_GRACE_PERIOD_DAYS,
    annual_rate: Decimal = DEFAULT_PENALTY_ANNUAL_RATE,
) -> Decimal:
    """Penalty interest on an overdue amount past the grace period.

    Parameters
    ----------
    overdue_amount : Decimal
        Amount still unpaid after the loan period ended.
    overdue_days : int
        Days past due.
    grace_period_days : int
        Days charged nothing.
    annual_rate : Decimal
        Penalty rate per annum, pro-rated daily (``0.12`` for 12%).

    Returns
    -------
    Decimal
        Quantized penalty; zero within the grace period.
    """
    if overdue_days <= grace_period_days:
        return ZERO
    amount = to_decimal(overdue_amount)
    if amount <= 0:
        return ZERO
    days_charged = overdue_days - grace_period_days
    return quantize_money(amount * to_decimal(annual_rate) * days_charged / DAYS_PER_YEAR)
