"""Configuration management for microlend."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from microlend.exceptions import ConfigurationError


@dataclass
class PenaltyConfig:
    """Late-payment penalty policy."""

    grace_period_days: int = 10
    annual_rate: Decimal = Decimal("0.12")


@dataclass
class ReportConfig:
    """Report output configuration."""

    output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False
    prediction_window_days: int = 30


@dataclass
class ScenarioConfig:
    """Configuration for sample portfolio generation."""

    name: str
    num_customers: int = 50
    loan_penetration: float = 0.70
    num_funds: int = 3
    num_expenses: int = 10
    as_of: date | None = None
    labels: dict[str, Any] = field(default_factory=dict)


@dataclass
class LendingConfig:
    """Main configuration for microlend."""

    penalty: PenaltyConfig = field(default_factory=PenaltyConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    scenario: ScenarioConfig | None = None
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"
    currency_symbol: str = "Rs."

    @classmethod
    def from_env(cls) -> "LendingConfig":
        """Create config from ``MICROLEND_*`` environment variables."""
        import os

        penalty = PenaltyConfig(
            grace_period_days=_parse(
                int, "MICROLEND_PENALTY_GRACE_DAYS", os.getenv("MICROLEND_PENALTY_GRACE_DAYS", "10")
            ),
            annual_rate=_parse(
                Decimal, "MICROLEND_PENALTY_RATE", os.getenv("MICROLEND_PENALTY_RATE", "0.12")
            ),
        )

        report = ReportConfig(
            output_dir=Path(os.getenv("MICROLEND_OUTPUT_DIR", "output")),
            pretty_json=os.getenv("MICROLEND_PRETTY_JSON", "false").lower() == "true",
            prediction_window_days=_parse(
                int, "MICROLEND_PREDICTION_DAYS", os.getenv("MICROLEND_PREDICTION_DAYS", "30")
            ),
        )

        seed = os.getenv("MICROLEND_SEED")

        return cls(
            penalty=penalty,
            report=report,
            seed=_parse(int, "MICROLEND_SEED", seed) if seed else None,
            log_level=os.getenv("MICROLEND_LOG_LEVEL", "INFO"),
            log_format=os.getenv("MICROLEND_LOG_FORMAT", "standard"),
            currency_symbol=os.getenv("MICROLEND_CURRENCY_SYMBOL", "Rs."),
        )


def _parse(kind: type, name: str, raw: str) -> Any:
    try:
        return kind(raw)
    except (ValueError, InvalidOperation):
        raise ConfigurationError(f"{name} has invalid value {raw!r}") from None
