import streamlit as st
from pydantic import ValidationError

from pocketcalc.calculators import monthly_debt_payment
from pocketcalc.errors import CalculatorError
from pocketcalc.models import DEBT_MODELS, blank_debt, parse_debt
from pocketcalc.presets import DEBT_TYPE_LABELS, MORTGAGE_FREQUENCY_LABELS
from ui.components import fmt_money, new_card, widget_payload

FIELD_LABELS = {
    "description": "Description",
    "remaining_term": "Remaining Term (months)",
    "remaining_amortization": "Remaining Amortization (months)",
    "interest_rate": "Interest Rate (%)",
    "balance": "Current Balance",
    "payment_amount": "Payment Amount",
    "credit_limit": "Credit Limit",
    "min_payment": "Minimum Payment",
    "payment_type": "Payment Type",
    "payment_frequency": "Payment Frequency",
}

CHOICES = {
    "payment_type": {
        "interest-only": "Interest Only",
        "interest-and-principal": "Interest and Principal",
    },
    "payment_frequency": MORTGAGE_FREQUENCY_LABELS,
}


def _render_field(cid, field, value):
    label = FIELD_LABELS.get(field, field.replace("_", " ").title())
    key = f"debt_{cid}_{field}"
    if field in CHOICES:
        options = list(CHOICES[field].keys())
        return st.selectbox(
            label, options, index=options.index(value), format_func=CHOICES[field].get, key=key
        )
    if isinstance(value, int):
        return st.number_input(label, value=value, min_value=0, step=1, key=key)
    if isinstance(value, float):
        return st.number_input(label, value=value, min_value=0.0, key=key)
    return st.text_input(label, value=value, key=key)


def render_debt_cards() -> list:
    """Render one card per existing debt and return the parsed debt records."""
    st.session_state.setdefault("debt_cards", [])
    cards = st.session_state.debt_cards
    debts = []
    for idx, card in enumerate(list(cards)):
        cid = card["id"]
        label = DEBT_TYPE_LABELS.get(card["type"], card["type"])
        with st.expander(f"Debt #{idx+1} — {label}", expanded=True):
            types = list(DEBT_MODELS.keys())
            sel = st.selectbox(
                "Type",
                types,
                index=types.index(card["type"]),
                format_func=DEBT_TYPE_LABELS.get,
                key=f"debt_type_{cid}",
            )
            if sel != card["type"]:
                card["type"] = sel
                card["payload"] = widget_payload(blank_debt(sel))
            payload = card["payload"]
            fields = [f for f in payload if f != "type"]
            for i in range(0, len(fields), 2):
                cols = st.columns(2)
                for col_idx, f in enumerate(fields[i : i + 2]):
                    with cols[col_idx]:
                        payload[f] = _render_field(cid, f, payload[f])
            try:
                debt = parse_debt({**payload, "type": card["type"]})
            except (ValidationError, CalculatorError) as e:
                st.error(f"Debt #{idx+1} is incomplete: {e}")
                debt = None
            if debt is not None:
                debts.append(debt)
                st.caption(f"Monthly Payment: {fmt_money(monthly_debt_payment(debt))}")
            if st.button("Remove", key=f"debt_remove_{cid}"):
                cards.pop(idx)
                st.rerun()
    if st.button("Add Debt", key="add_debt_card"):
        cards.append(new_card(blank_debt("fixed-loan"), type="fixed-loan"))
        st.rerun()
    return debts
