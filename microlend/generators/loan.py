"""Loan and payment generators."""

from __future__ import annotations

import random
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from microlend.calculators.schedule import build_schedule, interest_only_payment
from microlend.generators.base import BaseGenerator
from microlend.models import Frequency, Loan, LoanStatus, Payment
from microlend.money import quantize_money


class LoanGenerator(BaseGenerator):
    """Generate synthetic microloans."""

    FREQUENCIES = list(Frequency)
    FREQUENCY_WEIGHTS = [0.35, 0.40, 0.25]

    # Flat percent per 30 days
    INTEREST_RATES = [Decimal("5"), Decimal("8"), Decimal("10"), Decimal("12"), Decimal("15")]

    DURATION_MONTHS = [1, 2, 3, 4, 6]
    DURATION_DAYS = [30, 45, 60, 75, 90]

    def generate(
        self,
        customer_id: str,
        as_of: date,
        status: LoanStatus = LoanStatus.APPROVED,
        guarantor_ids: list[str] | None = None,
        open_ended_rate: float = 0.05,
    ) -> Loan:
        """Generate a loan that started within the four months before ``as_of``.

        Parameters
        ----------
        customer_id : str
            Applicant's customer ID.
        as_of : date
            Reference date of the portfolio.
        status : LoanStatus
            Initial status.
        guarantor_ids : list[str] | None
            Guarantors' customer IDs.
        open_ended_rate : float
            Probability of a monthly loan with no fixed duration.

        Returns
        -------
        Loan
            Generated loan without a loan number.
        """
        frequency = random.choices(self.FREQUENCIES, weights=self.FREQUENCY_WEIGHTS, k=1)[0]

        duration_months = None
        duration_days = None
        if frequency == Frequency.MONTHLY and random.random() < open_ended_rate:
            pass  # open-ended
        elif random.random() < 0.6:
            duration_months = random.choice(self.DURATION_MONTHS)
        else:
            duration_days = random.choice(self.DURATION_DAYS)

        start_date = as_of - timedelta(days=random.randint(0, 120))

        return Loan(
            loan_id=self.fake.uuid4(),
            customer_id=customer_id,
            principal=Decimal(random.randint(10, 200) * 1000),
            interest_rate=random.choice(self.INTEREST_RATES),
            frequency=frequency,
            start_date=start_date,
            status=status,
            duration_months=duration_months,
            duration_days=duration_days,
            guarantor_ids=list(guarantor_ids or []),
            created_at=datetime.combine(start_date, time(9, 0)) - timedelta(days=random.randint(1, 7)),
        )


class PaymentBehavior(BaseGenerator):
    """Simulate how borrowers pay against their schedule."""

    BEHAVIORS = ["good", "late", "partial", "defaulter"]

    def generate_payments(
        self,
        loan: Loan,
        as_of: date,
        weights: tuple[float, float, float, float] = (0.60, 0.20, 0.12, 0.08),
    ) -> list[Payment]:
        """Generate the payments a borrower made up to ``as_of``.

        Parameters
        ----------
        loan : Loan
            Loan to pay against.
        as_of : date
            No payment is dated after this day.
        weights : tuple[float, float, float, float]
            Relative odds of good, late, partial and defaulting borrowers.

        Returns
        -------
        list[Payment]
            Payments in date order.
        """
        behavior = random.choices(self.BEHAVIORS, weights=weights, k=1)[0]

        if loan.is_open_ended:
            return self._interest_only_payments(loan, as_of, behavior)

        schedule = build_schedule(loan.terms)
        stop_after = random.randint(1, max(1, schedule.count // 2))
        payments = []

        for inst in schedule:
            if inst.due_date > as_of:
                break
            if behavior == "defaulter" and inst.index > stop_after:
                break

            amount = inst.expected_amount
            lag = random.randint(0, 1)
            if behavior == "late":
                lag = random.randint(2, schedule.spacing_days * 2 + 3)
            elif behavior == "partial":
                amount = quantize_money(amount * Decimal(str(round(random.uniform(0.4, 1.0), 2))))

            paid_on = inst.due_date + timedelta(days=lag)
            if paid_on > as_of or amount <= 0:
                continue
            payments.append(self._payment(loan, amount, paid_on))

        payments.sort(key=lambda p: p.paid_at)
        return payments

    def _interest_only_payments(self, loan: Loan, as_of: date, behavior: str) -> list[Payment]:
        amount = interest_only_payment(loan.terms)
        payments = []
        due = loan.start_date + timedelta(days=30)
        while due <= as_of and behavior != "defaulter":
            payments.append(self._payment(loan, amount, due))
            due += timedelta(days=30)
        return payments

    def _payment(self, loan: Loan, amount: Decimal, paid_on: date) -> Payment:
        return Payment(
            payment_id=self.fake.uuid4(),
            loan_id=loan.loan_id,
            customer_id=loan.customer_id,
            amount=amount,
            paid_at=datetime.combine(paid_on, time(random.randint(8, 18), random.randint(0, 59))),
            banked=random.random() < 0.7,
        )
