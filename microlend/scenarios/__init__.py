"""Scenarios for generating sample lending portfolios."""

from microlend.scenarios.sample_portfolio import SamplePortfolioScenario

__all__ = ["SamplePortfolioScenario"]
