"""Portfolio reports built on the loan calculators."""

from microlend.reports.portfolio import DashboardStats, PaymentPlan, PortfolioReport

__all__ = ["DashboardStats", "PaymentPlan", "PortfolioReport"]
