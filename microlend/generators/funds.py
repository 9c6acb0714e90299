"""Invested fund and expense generators."""

import random
from datetime import datetime, timedelta
from decimal import Decimal

from microlend.generators.base import BaseGenerator
from microlend.models import Expense, Fund


class FundGenerator(BaseGenerator):
    """Generate capital injections into the business."""

    def generate(self) -> Fund:
        return Fund(
            fund_id=self.fake.uuid4(),
            amount=Decimal(random.randint(50, 500) * 1000),
            created_at=datetime.now() - timedelta(days=random.randint(30, 365)),
            note=random.choice(["Owner capital", "Partner investment", "Reinvested profit"]),
        )


class ExpenseGenerator(BaseGenerator):
    """Generate operating expenses."""

    DESCRIPTIONS = [
        "Fuel",
        "Mobile reload",
        "Stationery",
        "Collector allowance",
        "Vehicle repair",
        "Office rent",
    ]

    def generate(self) -> Expense:
        return Expense(
            expense_id=self.fake.uuid4(),
            amount=Decimal(str(round(random.uniform(200, 15000), 2))),
            description=random.choice(self.DESCRIPTIONS),
            created_at=datetime.now() - timedelta(days=random.randint(0, 120)),
            claimed=random.random() < 0.5,
        )
