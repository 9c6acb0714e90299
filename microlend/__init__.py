"""Loan schedule, reconciliation and forecasting for a microcredit business."""

from microlend.calculators import generate_schedule, predict, reconcile

__version__ = "0.1.0"

__all__ = ["generate_schedule", "predict", "reconcile"]
