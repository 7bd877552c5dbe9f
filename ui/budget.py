import streamlit as st
from pydantic import ValidationError

from pocketcalc.calculators import breakdown_frame, budget_summary
from pocketcalc.errors import CalculatorError
from pocketcalc.models import BudgetData, ExpenseRecord, IncomeRecord, default_budget
from pocketcalc.rules import budget_rules
from ui.components import fmt_money, fmt_pct, new_card, render_periodic_rows, render_rule_results


def _init_budget():
    if "budget_income" not in st.session_state or "budget_expenses" not in st.session_state:
        d = default_budget()
        st.session_state.setdefault("budget_income", [new_card(r) for r in d.income])
        st.session_state.setdefault("budget_expenses", [new_card(r) for r in d.expenses])


def render_budget_view():
    """Monthly budget: income sources against categorized expenses."""
    _init_budget()
    st.header("Budget Calculator")
    left, right = st.columns(2)
    with left:
        st.subheader("Income")
        income = render_periodic_rows("budget_income", "source", "Source", "Add Income", IncomeRecord)
    with right:
        st.subheader("Expenses")
        expenses = render_periodic_rows(
            "budget_expenses", "category", "Category", "Add Expense", ExpenseRecord, kinds=["fixed", "variable"]
        )

    try:
        summary = budget_summary(BudgetData(income=income, expenses=expenses))
    except (ValidationError, CalculatorError) as e:
        st.error(f"Could not compute budget: {e}")
        return None

    st.subheader("Monthly Summary")
    cols = st.columns(3)
    cols[0].metric("Monthly Income", fmt_money(summary.total_income))
    cols[1].metric("Monthly Expenses", fmt_money(summary.total_expenses))
    cols[2].metric("Monthly Balance", fmt_money(summary.balance))
    st.caption(
        f"Fixed: {fmt_money(summary.fixed_expenses)} • Variable: {fmt_money(summary.variable_expenses)}"
    )
    render_rule_results(budget_rules(summary))

    if summary.by_category:
        frame = breakdown_frame(summary.by_category)
        st.bar_chart(frame.set_index("Category")["Amount"])
        for share in summary.by_category:
            st.markdown(f"**{share.key}:** {fmt_money(share.amount)} ({fmt_pct(share.percentage)})")
    return summary
