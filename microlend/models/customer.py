"""Customer model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Customer:
    """Borrower or guarantor."""

    customer_id: str
    full_name: str
    mobile_phone: str
    national_id: str
    created_at: datetime
    home_phone: str = ""
    active: bool = True
    updated_at: datetime | None = None
