"""Customer generator."""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from typing import Iterator

from microlend.generators.base import BaseGenerator
from microlend.models import Customer


class CustomerGenerator(BaseGenerator):
    """Generate synthetic borrowers and guarantors."""

    def generate(self) -> Customer:
        """Generate a single customer.

        Returns
        -------
        Customer
            Generated customer.
        """
        days_ago = random.randint(30, 3 * 365)
        return Customer(
            customer_id=self.fake.uuid4(),
            full_name=self.fake.name(),
            mobile_phone=self.fake.numerify("07########"),
            national_id=self.fake.numerify("#########V"),
            created_at=datetime.now() - timedelta(days=days_ago),
            home_phone=self.fake.numerify("0##-#######") if random.random() < 0.4 else "",
        )

    def generate_batch(self, count: int) -> Iterator[Customer]:
        """Generate multiple customers.

        Parameters
        ----------
        count : int
            Number of customers to generate.

        Yields
        ------
        Customer
            Generated customers.
        """
        for _ in range(count):
            yield self.generate()
