"""Invested funds and business expenses."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Fund:
    """Capital invested into the lending business."""

    fund_id: str
    amount: Decimal
    created_at: datetime
    note: str = ""


@dataclass
class Expense:
    """Operating expense paid out of collections."""

    expense_id: str
    amount: Decimal
    description: str
    created_at: datetime
    claimed: bool = False  # Reimbursed from a bank deposit
