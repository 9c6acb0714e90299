"""Sample portfolio scenario for demos and manual validation."""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Any

from microlend.calculators.ledger import reconcile_loan
from microlend.config import ScenarioConfig
from microlend.generators import (
    CustomerGenerator,
    ExpenseGenerator,
    FundGenerator,
    LoanGenerator,
    PaymentBehavior,
)
from microlend.models import Loan, LoanStatus
from microlend.store import LendingDataStore

logger = logging.getLogger(__name__)


class SamplePortfolioScenario:
    """Generate a small lending business with realistic repayment behavior.

    This scenario creates:
    - Customers, some of them guarantors for others
    - Loans across daily, weekly and monthly frequencies, a few open-ended
    - Payments following good, late, partial and defaulting borrowers,
      recorded through the store so finished loans complete themselves
    - Invested funds and operating expenses
    """

    # Loans this many installments behind are written off as DEFAULTED
    DEFAULT_THRESHOLD = 8

    def __init__(
        self,
        num_customers: int = 50,
        loan_penetration: float = 0.70,
        num_funds: int = 3,
        num_expenses: int = 10,
        as_of: date | None = None,
        seed: int | None = None,
        *,
        config: ScenarioConfig | None = None,
    ) -> None:
        """Initialize sample portfolio scenario.

        Parameters
        ----------
        num_customers : int
            Number of customers to generate.
        loan_penetration : float
            Share of customers holding a loan (0.0 to 1.0).
        num_funds : int
            Number of fund injections.
        num_expenses : int
            Number of expenses.
        as_of : date | None
            Reporting date; today when omitted.
        seed : int | None
            Random seed for reproducibility.
        config : ScenarioConfig | None
            Optional scenario configuration. If provided, overrides the
            sizing arguments.
        """
        if config is not None:
            num_customers = config.num_customers
            loan_penetration = config.loan_penetration
            num_funds = config.num_funds
            num_expenses = config.num_expenses
            as_of = config.as_of or as_of

        self.num_customers = num_customers
        self.loan_penetration = loan_penetration
        self.num_funds = num_funds
        self.num_expenses = num_expenses
        self.as_of = as_of or date.today()
        self.seed = seed
        self.config = config

        if seed is not None:
            random.seed(seed)

        self.store = LendingDataStore()
        self._customer_gen = CustomerGenerator(seed=seed)
        self._loan_gen = LoanGenerator(seed=seed)
        self._payment_behavior = PaymentBehavior(seed=seed)
        self._fund_gen = FundGenerator(seed=seed)
        self._expense_gen = ExpenseGenerator(seed=seed)

    def generate(self) -> LendingDataStore:
        """Generate all data for the scenario.

        Returns
        -------
        LendingDataStore
            Store containing all generated data.
        """
        logger.info(
            "Starting sample portfolio scenario: %d customers, %.0f%% with loans, as of %s",
            self.num_customers,
            self.loan_penetration * 100,
            self.as_of,
        )

        for customer in self._customer_gen.generate_batch(self.num_customers):
            self.store.add_customer(customer)

        customers = list(self.store.customers.values())
        borrowers = customers[: int(len(customers) * self.loan_penetration)]

        for borrower in borrowers:
            others = [c for c in customers if c.customer_id != borrower.customer_id]
            guarantors = [random.choice(others).customer_id] if others else []
            loan = self._loan_gen.generate(
                borrower.customer_id, self.as_of, guarantor_ids=guarantors
            )
            self.store.add_loan(loan)
            self.store.update_status(loan.loan_id, LoanStatus.ACTIVE, reason="disbursed")

            for payment in self._payment_behavior.generate_payments(loan, self.as_of):
                if loan.status != LoanStatus.ACTIVE:
                    break
                self.store.record_payment(payment)

            self._maybe_default(loan)

        for _ in range(self.num_funds):
            self.store.add_fund(self._fund_gen.generate())
        for _ in range(self.num_expenses):
            self.store.add_expense(self._expense_gen.generate())

        logger.info("Generated %s", self.store.summary())
        return self.store

    def _maybe_default(self, loan: Loan) -> None:
        if loan.status != LoanStatus.ACTIVE or loan.is_open_ended:
            return
        if reconcile_loan(loan).overdue_count(self.as_of) >= self.DEFAULT_THRESHOLD:
            self.store.update_status(loan.loan_id, LoanStatus.DEFAULTED, reason="missed_installments")

    def get_portfolio_summary(self) -> dict[str, Any]:
        """Get summary statistics for the portfolio.

        Returns
        -------
        dict[str, Any]
            Portfolio summary statistics.
        """
        loans = list(self.store.loans.values())
        if not loans:
            return {}

        status_counts: dict[str, int] = {}
        for loan in loans:
            status_counts[loan.status.value] = status_counts.get(loan.status.value, 0) + 1

        return {
            "total_loans": len(loans),
            "total_principal": sum(l.principal for l in loans),
            "total_collected": sum(p.amount for p in self.store.payments),
            "loan_status_distribution": status_counts,
            "open_ended_loans": sum(1 for l in loans if l.is_open_ended),
        }
