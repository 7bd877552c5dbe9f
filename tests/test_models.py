from decimal import Decimal

import pytest
from pydantic import ValidationError

from pocketcalc.errors import InvalidDebtVariant
from pocketcalc.models import (
    CreditCardDebt,
    IncomeRecord,
    LoanApplication,
    MortgageDebt,
    MortgagePaymentFrequency,
    RevolvingCreditDebt,
    blank_debt,
    default_application,
    default_budget,
    default_net_worth,
    parse_debt,
)


def test_parse_debt_accepts_form_field_names():
    debt = parse_debt({"type": "credit-card", "creditLimit": 5000, "minPayment": 50, "balance": 1200})
    assert isinstance(debt, CreditCardDebt)
    assert debt.min_payment == Decimal("50")
    assert debt.credit_limit == Decimal("5000")


def test_parse_debt_accepts_snake_case():
    debt = parse_debt({"type": "revolving-credit", "payment_type": "interest-only", "balance": 100})
    assert isinstance(debt, RevolvingCreditDebt)
    assert debt.payment_type == "interest-only"


def test_parse_debt_unknown_tag():
    with pytest.raises(InvalidDebtVariant) as exc:
        parse_debt({"type": "payday-loan", "balance": 100})
    assert exc.value.variant == "payday-loan"
    with pytest.raises(InvalidDebtVariant):
        parse_debt({"balance": 100})


def test_parse_debt_rejects_fields_from_other_shapes():
    with pytest.raises(ValidationError):
        parse_debt({"type": "credit-card", "paymentAmount": 100})


def test_parse_debt_passes_records_through():
    debt = MortgageDebt(payment_amount=1500)
    assert parse_debt(debt) is debt


def test_blank_debt():
    assert blank_debt("mortgage").payment_frequency is MortgagePaymentFrequency.MONTHLY
    with pytest.raises(InvalidDebtVariant):
        blank_debt("loan-shark")


def test_loan_application_from_form_snapshot():
    app = LoanApplication.model_validate(
        {
            "type": "mortgage",
            "incomes": [{"source": "Job", "amount": 85000, "frequency": "annually"}],
            "debts": [
                {"type": "mortgage", "paymentAmount": 900, "paymentFrequency": "accelerated-biweekly"},
                {"type": "fixed-loan", "remainingTerm": 36, "paymentAmount": 350},
            ],
            "downPayment": 25000,
            "term": 25,
            "interestRate": 5.5,
        }
    )
    assert isinstance(app.debts[0], MortgageDebt)
    assert app.debts[1].remaining_term == 36
    assert app.down_payment == Decimal("25000")


def test_invalid_frequency_rejected_at_construction():
    with pytest.raises(ValidationError):
        IncomeRecord(source="Job", amount=100, frequency="fortnightly")


def test_records_are_frozen():
    rec = IncomeRecord(source="Job", amount=100)
    with pytest.raises(ValidationError):
        rec.amount = Decimal("200")


def test_defaults_match_form_defaults():
    app = default_application()
    assert app.type == "personal"
    assert app.term == 5
    assert app.interest_rate == 5
    assert app.incomes[0].source == "Primary Employment"
    assert default_budget().expenses[0].category == "Housing"
    nw = default_net_worth()
    assert nw.assets[0].type == "Cash"
    assert nw.liabilities[0].type == "Credit Card"


def test_loan_application_unknown_debt_tag():
    with pytest.raises(InvalidDebtVariant) as exc:
        LoanApplication.model_validate({"debts": [{"type": "payday", "balance": 1}]})
    assert exc.value.variant == "payday"
    with pytest.raises(InvalidDebtVariant):
        LoanApplication(debts=[{"type": "payday", "balance": 1}])
    # A known tag with the wrong fields is still a validation error.
    with pytest.raises(ValidationError):
        LoanApplication.model_validate({"debts": [{"type": "credit-card", "paymentAmount": 1}]})
