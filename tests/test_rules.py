from decimal import Decimal

from pocketcalc.calculators import budget_summary, qualify
from pocketcalc.models import BudgetData, CreditCardDebt, ExpenseRecord, IncomeRecord, LoanApplication
from pocketcalc.presets import PolicySettings
from pocketcalc.rules import budget_rules, evaluate_rules, has_blocking


def _codes(**kw):
    app = LoanApplication(**kw)
    return {r.code for r in evaluate_rules(qualify(app, PolicySettings()))}


def _income(amount):
    return [IncomeRecord(source="Job", amount=amount)]


def test_no_income_is_blocking():
    app = LoanApplication(incomes=[], debts=[CreditCardDebt(min_payment=100)])
    res = evaluate_rules(qualify(app, PolicySettings()))
    assert "NO_INCOME" in {r.code for r in res}
    assert has_blocking(res)


def test_tdsr_over_limit_and_no_capacity():
    codes = _codes(incomes=_income(1000), debts=[CreditCardDebt(min_payment=500)])
    assert "TDSR_OVER_LIMIT" in codes
    assert "NO_CAPACITY" in codes


def test_healthy_personal_loan_has_no_findings():
    assert _codes(incomes=_income(8000), debts=[CreditCardDebt(min_payment=100)]) == set()


def test_mortgage_down_payment_below_minimum():
    codes = _codes(type="mortgage", incomes=_income(10000), down_payment=0, term=25)
    assert "DOWN_PAYMENT_BELOW_MINIMUM" in codes


def test_mortgage_down_payment_exceeds_loan():
    codes = _codes(type="mortgage", incomes=_income(10000), down_payment=Decimal("1e9"), term=25)
    assert "DOWN_PAYMENT_EXCEEDS_LOAN" in codes
    assert "DOWN_PAYMENT_BELOW_MINIMUM" not in codes


def test_budget_deficit():
    data = BudgetData(
        income=_income(1000),
        expenses=[ExpenseRecord(category="Rent", amount=1200)],
    )
    res = budget_rules(budget_summary(data))
    assert [r.code for r in res] == ["BUDGET_DEFICIT"]
    assert not has_blocking(res)
