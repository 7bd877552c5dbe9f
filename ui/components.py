from decimal import Decimal
from enum import Enum
from itertools import count

import streamlit as st

from pocketcalc.presets import FREQUENCY_LABELS

_ids = count(1)


def fmt_money(x) -> str:
    x = Decimal(str(x))
    sign = "-" if x < 0 else ""
    return f"{sign}${abs(x):,.2f}"


def fmt_pct(x) -> str:
    if x is None:
        return "Undefined"
    return f"{Decimal(str(x)):.1f}%"


def widget_payload(model) -> dict:
    """Flatten a record into widget-friendly values (floats, plain strings)."""
    out = {}
    for k, v in model.model_dump().items():
        if isinstance(v, Decimal):
            v = float(v)
        elif isinstance(v, Enum):
            v = v.value
        out[k] = v
    return out


def new_card(model, **extra) -> dict:
    """Wrap a record in a session card with a stable widget id."""
    return {"id": next(_ids), "payload": widget_payload(model), **extra}


def render_rule_results(results):
    for r in results:
        if r.severity == "critical":
            st.error(f"[{r.code}] {r.message}")
        elif r.severity == "warn":
            st.warning(f"[{r.code}] {r.message}")
        else:
            st.info(f"[{r.code}] {r.message}")


def render_periodic_rows(state_key: str, label_field: str, label: str, add_label: str, blank, kinds=None):
    """Editable rows of ``label / amount / frequency`` with add and remove.

    ``kinds`` adds a fixed/variable selector used by expense rows.
    """
    st.session_state.setdefault(state_key, [])
    cards = st.session_state[state_key]
    freq_keys = list(FREQUENCY_LABELS.keys())
    for idx, card in enumerate(list(cards)):
        p = card["payload"]
        cid = card["id"]
        cols = st.columns([3, 2, 2, 2, 1] if kinds else [3, 2, 2, 1])
        p[label_field] = cols[0].text_input(label, value=p[label_field], key=f"{state_key}_{cid}_label")
        p["amount"] = cols[1].number_input(
            "Amount", value=float(p["amount"]), min_value=0.0, step=50.0, key=f"{state_key}_{cid}_amount"
        )
        c = 2
        if kinds:
            p["type"] = cols[c].selectbox(
                "Type",
                kinds,
                index=kinds.index(p["type"]),
                format_func=str.title,
                key=f"{state_key}_{cid}_type",
            )
            c += 1
        p["frequency"] = cols[c].selectbox(
            "Frequency",
            freq_keys,
            index=freq_keys.index(p["frequency"]),
            format_func=FREQUENCY_LABELS.get,
            key=f"{state_key}_{cid}_freq",
        )
        if cols[c + 1].button("Remove", key=f"{state_key}_{cid}_remove"):
            cards.pop(idx)
            st.rerun()
    if st.button(add_label, key=f"add_{state_key}"):
        cards.append(new_card(blank()))
        st.rerun()
    return [card["payload"] for card in cards]
