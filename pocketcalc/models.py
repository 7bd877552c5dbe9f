from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from pocketcalc.errors import InvalidDebtVariant


class Frequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ANNUALLY = "annually"


class MortgagePaymentFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ACCELERATED_BIWEEKLY = "accelerated-biweekly"


class Record(BaseModel):
    """Base for user-entered records.

    Field names are snake_case; the camelCase names used by the browser
    forms (``minPayment``, ``downPayment`` ...) are accepted as aliases.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )


class IncomeRecord(Record):
    source: str = ""
    amount: Decimal = Decimal("0")
    frequency: Frequency = Frequency.MONTHLY


class ExpenseRecord(Record):
    category: str = ""
    amount: Decimal = Decimal("0")
    type: Literal["fixed", "variable"] = "fixed"
    frequency: Frequency = Frequency.MONTHLY


class AssetRecord(Record):
    type: str = "Cash"
    value: Decimal = Decimal("0")
    description: str = ""


class LiabilityRecord(Record):
    type: str = "Credit Card"
    value: Decimal = Decimal("0")
    description: str = ""


class FixedLoanDebt(Record):
    type: Literal["fixed-loan"] = "fixed-loan"
    description: str = ""
    remaining_term: int = Field(0, description="Remaining term in months")
    interest_rate: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    payment_amount: Decimal = Decimal("0")


class CreditCardDebt(Record):
    type: Literal["credit-card"] = "credit-card"
    description: str = ""
    credit_limit: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    min_payment: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")


class RevolvingCreditDebt(Record):
    type: Literal["revolving-credit"] = "revolving-credit"
    description: str = ""
    credit_limit: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    min_payment: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")
    payment_type: Literal["interest-only", "interest-and-principal"] = "interest-and-principal"


class MortgageDebt(Record):
    type: Literal["mortgage"] = "mortgage"
    description: str = ""
    remaining_amortization: int = Field(0, description="Remaining amortization in months")
    remaining_term: int = Field(0, description="Remaining term in months")
    interest_rate: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")
    payment_amount: Decimal = Decimal("0")
    payment_frequency: MortgagePaymentFrequency = MortgagePaymentFrequency.MONTHLY


DebtRecord = Annotated[
    Union[FixedLoanDebt, CreditCardDebt, RevolvingCreditDebt, MortgageDebt],
    Field(discriminator="type"),
]

DEBT_MODELS = {
    "fixed-loan": FixedLoanDebt,
    "credit-card": CreditCardDebt,
    "revolving-credit": RevolvingCreditDebt,
    "mortgage": MortgageDebt,
}

_debt_adapter = TypeAdapter(DebtRecord)


def parse_debt(data) -> Union[FixedLoanDebt, CreditCardDebt, RevolvingCreditDebt, MortgageDebt]:
    """Build a debt record from a plain mapping, dispatching on ``type``.

    Raises ``InvalidDebtVariant`` for an unknown tag and pydantic's
    ``ValidationError`` when the fields do not fit the tagged shape.
    """

    if isinstance(data, tuple(DEBT_MODELS.values())):
        return data
    tag = data.get("type") if isinstance(data, dict) else None
    if tag not in DEBT_MODELS:
        raise InvalidDebtVariant(tag)
    return _debt_adapter.validate_python(data)


def blank_debt(debt_type: str):
    """Return an empty debt record of the requested shape."""
    try:
        return DEBT_MODELS[debt_type]()
    except KeyError:
        raise InvalidDebtVariant(debt_type) from None


def _check_debt_tags(debts):
    for entry in debts or ():
        if isinstance(entry, dict) and entry.get("type") not in DEBT_MODELS:
            raise InvalidDebtVariant(entry.get("type"))


class LoanApplication(Record):
    """Snapshot of the loan form.

    Debt entries given as mappings with an unknown ``type`` raise
    ``InvalidDebtVariant`` before field validation runs, so they are not
    folded into pydantic's ``ValidationError``.
    """

    type: Literal["personal", "mortgage", "heloc"] = "personal"
    incomes: List[IncomeRecord] = Field(default_factory=list)
    debts: List[DebtRecord] = Field(default_factory=list)
    down_payment: Optional[Decimal] = None
    term: int = Field(5, description="Loan term in years")
    interest_rate: Decimal = Decimal("5")

    def __init__(self, **data):
        _check_debt_tags(data.get("debts"))
        super().__init__(**data)

    @classmethod
    def model_validate(cls, obj, **kwargs):
        if isinstance(obj, dict):
            _check_debt_tags(obj.get("debts"))
        return super().model_validate(obj, **kwargs)


class BudgetData(Record):
    income: List[IncomeRecord] = Field(default_factory=list)
    expenses: List[ExpenseRecord] = Field(default_factory=list)


class NetWorthData(Record):
    assets: List[AssetRecord] = Field(default_factory=list)
    liabilities: List[LiabilityRecord] = Field(default_factory=list)


def default_budget() -> BudgetData:
    return BudgetData(
        income=[IncomeRecord(source="Salary", amount=0, frequency=Frequency.MONTHLY)],
        expenses=[
            ExpenseRecord(category="Housing", amount=0, type="fixed", frequency=Frequency.MONTHLY)
        ],
    )


def default_net_worth() -> NetWorthData:
    return NetWorthData(
        assets=[AssetRecord(type="Cash", value=0)],
        liabilities=[LiabilityRecord(type="Credit Card", value=0)],
    )


def default_application() -> LoanApplication:
    return LoanApplication(
        type="personal",
        incomes=[IncomeRecord(source="Primary Employment", amount=0, frequency=Frequency.MONTHLY)],
        debts=[],
        down_payment=Decimal("0"),
        term=5,
        interest_rate=Decimal("5"),
    )


# Output models


class CategoryShare(Record):
    key: str
    amount: Decimal
    percentage: Optional[Decimal] = None


class AmortizationPoint(Record):
    year: int
    balance: Decimal
    total_paid: Decimal


class BudgetSummary(Record):
    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    by_category: List[CategoryShare] = Field(default_factory=list)
    fixed_expenses: Decimal = Decimal("0")
    variable_expenses: Decimal = Decimal("0")


class NetWorthSummary(Record):
    total_assets: Decimal
    total_liabilities: Decimal
    net_worth: Decimal
    chart: List[CategoryShare] = Field(default_factory=list)
    assets_by_type: List[CategoryShare] = Field(default_factory=list)
    liabilities_by_type: List[CategoryShare] = Field(default_factory=list)


class LoanQualification(Record):
    loan_type: Literal["personal", "mortgage", "heloc"]
    total_monthly_income: Decimal
    total_monthly_debt: Decimal
    tdsr: Optional[Decimal] = Field(None, description="None when income is zero")
    tdsr_ceiling: Decimal
    tdsr_exceeds_limit: bool = False
    max_monthly_payment: Decimal
    max_loan: Decimal
    down_payment: Decimal = Decimal("0")
    required_down_payment: Optional[Decimal] = None
    principal: Decimal
    monthly_payment: Decimal
    schedule: List[AmortizationPoint] = Field(default_factory=list)


__all__ = [
    "AmortizationPoint",
    "AssetRecord",
    "BudgetData",
    "BudgetSummary",
    "CategoryShare",
    "CreditCardDebt",
    "DEBT_MODELS",
    "DebtRecord",
    "ExpenseRecord",
    "FixedLoanDebt",
    "Frequency",
    "IncomeRecord",
    "LiabilityRecord",
    "LoanApplication",
    "LoanQualification",
    "MortgageDebt",
    "MortgagePaymentFrequency",
    "NetWorthData",
    "NetWorthSummary",
    "RevolvingCreditDebt",
    "blank_debt",
    "default_application",
    "default_budget",
    "default_net_worth",
    "parse_debt",
]
