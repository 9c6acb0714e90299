"""Sample data generators for the lending business."""

from microlend.generators.customer import CustomerGenerator
from microlend.generators.funds import ExpenseGenerator, FundGenerator
from microlend.generators.loan import LoanGenerator, PaymentBehavior

__all__ = [
    "CustomerGenerator",
    "ExpenseGenerator",
    "FundGenerator",
    "LoanGenerator",
    "PaymentBehavior",
]
