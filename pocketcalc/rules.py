from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from pocketcalc.models import BudgetSummary, LoanQualification


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(q: LoanQualification) -> List[RuleResult]:
    res: List[RuleResult] = []

    if q.total_monthly_income <= 0:
        res.append(
            RuleResult(
                code="NO_INCOME",
                severity="critical",
                message="No income entered; TDSR is undefined.",
            )
        )
    elif q.max_loan <= 0:
        res.append(
            RuleResult(
                code="NO_CAPACITY",
                severity="warn",
                message="Existing debt payments leave no room for a new loan.",
                context={"max_monthly_payment": float(q.max_monthly_payment)},
            )
        )

    if q.tdsr_exceeds_limit:
        res.append(
            RuleResult(
                code="TDSR_OVER_LIMIT",
                severity="warn",
                message=f"Total debt service ratio exceeds {q.tdsr_ceiling}% maximum.",
                context={"actual": float(q.tdsr), "limit": float(q.tdsr_ceiling)},
            )
        )

    if q.loan_type == "mortgage" and q.required_down_payment is not None:
        if q.max_loan > 0 and q.down_payment < q.required_down_payment:
            res.append(
                RuleResult(
                    code="DOWN_PAYMENT_BELOW_MINIMUM",
                    severity="warn",
                    message="Down payment is below the required minimum.",
                    context={
                        "down_payment": float(q.down_payment),
                        "required": float(q.required_down_payment),
                    },
                )
            )
        if q.max_loan > 0 and q.principal <= 0:
            res.append(
                RuleResult(
                    code="DOWN_PAYMENT_EXCEEDS_LOAN",
                    severity="info",
                    message="Down payment covers the whole loan amount; nothing left to finance.",
                )
            )

    return res


def budget_rules(summary: BudgetSummary) -> List[RuleResult]:
    res: List[RuleResult] = []
    if summary.balance < 0:
        res.append(
            RuleResult(
                code="BUDGET_DEFICIT",
                severity="warn",
                message="Monthly expenses exceed monthly income.",
                context={"balance": float(summary.balance)},
            )
        )
    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
