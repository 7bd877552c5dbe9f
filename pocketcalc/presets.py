from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DISCLAIMER = (
    "These calculators give rough estimates from the figures you enter. "
    "Lenders apply their own qualification rules, rates and fees; "
    "use the results as a starting point, not as an offer of credit."
)

MONTHS_PER_YEAR = 12

# Pay periods per year for each supported frequency.
PERIODS_PER_YEAR = {"weekly": 52, "biweekly": 26, "monthly": 12, "annually": 1}

# Accelerated bi-weekly mortgages use the ordinary bi-weekly factor.
ACCELERATED_BIWEEKLY_PERIODS = PERIODS_PER_YEAR["biweekly"]

FREQUENCY_LABELS = {
    "weekly": "Weekly",
    "biweekly": "Bi-weekly",
    "monthly": "Monthly",
    "annually": "Annually",
}

MORTGAGE_FREQUENCY_LABELS = {
    "weekly": "Weekly",
    "biweekly": "Bi-weekly",
    "monthly": "Monthly",
    "accelerated-biweekly": "Accelerated Bi-weekly",
}

DEBT_TYPE_LABELS = {
    "fixed-loan": "Fixed Term Loan",
    "credit-card": "Credit Card",
    "revolving-credit": "Revolving Credit",
    "mortgage": "Mortgage",
}

LOAN_TYPE_LABELS = {"personal": "Personal Loan", "mortgage": "Mortgage", "heloc": "HELOC"}

ASSET_TYPES = ["Cash", "Investments", "Property", "Vehicle", "Other"]
LIABILITY_TYPES = ["Credit Card", "Mortgage", "Loan", "Other"]


class PolicySettings(BaseSettings):
    """Lending policy values, overridable through ``POCKETCALC_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="POCKETCALC_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Total debt service ratio ceiling, percent of gross monthly income
    tdsr_ceiling_pct: Decimal = Decimal("40")
    min_down_payment_pct: Decimal = Decimal("5")
    # Reproduce min(max_loan, max_loan - down_payment) when sizing the schedule
    legacy_down_payment_formula: bool = False
    log_level: str = "INFO"


@lru_cache()
def get_policy() -> PolicySettings:
    """Return the process-wide policy settings."""
    return PolicySettings()
