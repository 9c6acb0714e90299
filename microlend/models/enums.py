"""Enumeration types for lending entities."""

from enum import Enum


class Frequency(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"


class LoanStatus(str, Enum):
    APPLIED = "APPLIED"
    APPROVED = "APPROVED"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    SETTLED = "SETTLED"
    RENEWED = "RENEWED"
    DEFAULTED = "DEFAULTED"


class InstallmentStatus(str, Enum):
    PAID = "PAID"
    PARTIALLY_PAID = "PARTIALLY_PAID"
    OVERDUE = "OVERDUE"
    DUE = "DUE"
    UPCOMING = "UPCOMING"
