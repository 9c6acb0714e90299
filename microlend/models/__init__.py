"""Domain models for the lending business."""

from microlend.models.customer import Customer
from microlend.models.enums import Frequency, InstallmentStatus, LoanStatus
from microlend.models.funds import Expense, Fund
from microlend.models.loan import Installment, Loan, LoanTerms, Payment

__all__ = [
    "Customer",
    "Expense",
    "Frequency",
    "Fund",
    "Installment",
    "InstallmentStatus",
    "Loan",
    "LoanStatus",
    "LoanTerms",
    "Payment",
]
