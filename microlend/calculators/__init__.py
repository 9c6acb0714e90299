"""Pure loan calculations: schedule, reconciliation, prediction and profit."""

from microlend.calculators.due_payments import DuePayment, list_due_payments
from microlend.calculators.ledger import (
    InstallmentState,
    LedgerSummary,
    reconcile,
    reconcile_loan,
)
from microlend.calculators.penalty import (
    calculate_overdue_penalty,
    is_past_maturity,
    maturity_date,
)
from microlend.calculators.prediction import PredictionRecord, PredictionResult, predict
from microlend.calculators.profit import (
    ProfitSummary,
    aggregate_profit,
    loan_outstanding,
    profit_for_loans,
)
from microlend.calculators.schedule import (
    Schedule,
    build_schedule,
    generate_schedule,
    interest_only_payment,
)

__all__ = [
    "DuePayment",
    "InstallmentState",
    "LedgerSummary",
    "PredictionRecord",
    "PredictionResult",
    "ProfitSummary",
    "Schedule",
    "aggregate_profit",
    "build_schedule",
    "calculate_overdue_penalty",
    "generate_schedule",
    "interest_only_payment",
    "is_past_maturity",
    "list_due_payments",
    "loan_outstanding",
    "maturity_date",
    "predict",
    "profit_for_loans",
    "reconcile",
    "reconcile_loan",
]
