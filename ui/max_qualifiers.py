import streamlit as st
from pydantic import ValidationError

from pocketcalc.calculators import qualify, schedule_frame
from pocketcalc.errors import CalculatorError
from pocketcalc.models import IncomeRecord, LoanApplication, default_application
from pocketcalc.presets import LOAN_TYPE_LABELS, get_policy
from pocketcalc.rules import evaluate_rules
from ui.cards_debts import render_debt_cards
from ui.components import fmt_money, fmt_pct, new_card, render_periodic_rows, render_rule_results


def _init_loan():
    d = default_application()
    st.session_state.setdefault("loan_incomes", [new_card(r) for r in d.incomes])
    st.session_state.setdefault("debt_cards", [])
    st.session_state.setdefault(
        "loan_terms",
        {
            "type": d.type,
            "down_payment": float(d.down_payment),
            "term": d.term,
            "interest_rate": float(d.interest_rate),
        },
    )


def render_max_qualifiers_view():
    """Render the loan qualification calculator."""
    _init_loan()
    st.header("Loan Qualification Calculator")
    terms = st.session_state["loan_terms"]
    left, right = st.columns(2)
    with left:
        st.subheader("Income Sources")
        incomes = render_periodic_rows(
            "loan_incomes", "source", "Income Source", "Add Income Source", IncomeRecord
        )
        st.subheader("Existing Debts")
        debts = render_debt_cards()
    with right:
        st.subheader("New Loan Details")
        types = list(LOAN_TYPE_LABELS.keys())
        terms["type"] = st.selectbox(
            "Loan Type", types, index=types.index(terms["type"]), format_func=LOAN_TYPE_LABELS.get
        )
        if terms["type"] == "mortgage":
            terms["down_payment"] = st.number_input(
                "Down Payment", value=float(terms["down_payment"]), min_value=0.0, step=1000.0
            )
        terms["term"] = st.number_input("Loan Term (years)", value=int(terms["term"]), min_value=1, step=1)
        terms["interest_rate"] = st.number_input(
            "Interest Rate (%)", value=float(terms["interest_rate"]), min_value=0.0, step=0.1
        )

    try:
        application = LoanApplication(incomes=incomes, debts=debts, **terms)
        q = qualify(application)
    except (ValidationError, CalculatorError) as e:
        st.error(f"Could not compute qualification: {e}")
        return None

    st.subheader("Loan Qualification Summary")
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Monthly Income", fmt_money(q.total_monthly_income))
    c2.metric("Total Monthly Debt Payments", fmt_money(q.total_monthly_debt))
    c3.metric("TDSR Ratio", fmt_pct(q.tdsr))
    c4.metric("Maximum Loan Amount", fmt_money(q.max_loan))
    if q.tdsr is None:
        st.caption("TDSR is undefined without income.")
    elif q.tdsr_exceeds_limit:
        st.caption(f"Exceeds {get_policy().tdsr_ceiling_pct}% maximum")
    if q.required_down_payment is not None:
        st.caption(
            f"Required Down Payment: {fmt_money(q.required_down_payment)} "
            f"({get_policy().min_down_payment_pct}% minimum)"
        )
    st.caption(f"Financed Principal: {fmt_money(q.principal)} • Monthly Payment: {fmt_money(q.monthly_payment)}")
    render_rule_results(evaluate_rules(q))

    if q.schedule:
        st.subheader("Amortization Schedule")
        st.line_chart(schedule_frame(q.schedule))
    return q
