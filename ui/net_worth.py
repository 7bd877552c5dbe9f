import streamlit as st
from pydantic import ValidationError

from pocketcalc.calculators import breakdown_frame, net_worth_summary
from pocketcalc.models import AssetRecord, LiabilityRecord, NetWorthData, default_net_worth
from pocketcalc.presets import ASSET_TYPES, LIABILITY_TYPES
from ui.components import fmt_money, new_card


def _render_value_rows(state_key: str, types: list, add_label: str, blank):
    cards = st.session_state[state_key]
    for idx, card in enumerate(list(cards)):
        p = card["payload"]
        cid = card["id"]
        c1, c2, c3, c4 = st.columns([2, 2, 3, 1])
        p["type"] = c1.selectbox(
            "Type", types, index=types.index(p["type"]) if p["type"] in types else len(types) - 1,
            key=f"{state_key}_{cid}_type",
        )
        p["value"] = c2.number_input(
            "Value", value=float(p["value"]), min_value=0.0, step=100.0, key=f"{state_key}_{cid}_value"
        )
        p["description"] = c3.text_input("Description", value=p["description"], key=f"{state_key}_{cid}_desc")
        if c4.button("Remove", key=f"{state_key}_{cid}_remove"):
            cards.pop(idx)
            st.rerun()
    if st.button(add_label, key=f"add_{state_key}"):
        cards.append(new_card(blank()))
        st.rerun()
    return [card["payload"] for card in cards]


def render_net_worth_view():
    """Assets less liabilities at a point in time."""
    if "nw_assets" not in st.session_state or "nw_liabilities" not in st.session_state:
        d = default_net_worth()
        st.session_state.setdefault("nw_assets", [new_card(r) for r in d.assets])
        st.session_state.setdefault("nw_liabilities", [new_card(r) for r in d.liabilities])

    st.header("Net Worth Calculator")
    left, right = st.columns(2)
    with left:
        st.subheader("Assets")
        assets = _render_value_rows("nw_assets", ASSET_TYPES, "Add Asset", AssetRecord)
    with right:
        st.subheader("Liabilities")
        liabilities = _render_value_rows("nw_liabilities", LIABILITY_TYPES, "Add Liability", LiabilityRecord)

    try:
        summary = net_worth_summary(NetWorthData(assets=assets, liabilities=liabilities))
    except ValidationError as e:
        st.error(f"Could not compute net worth: {e}")
        return None

    cols = st.columns(3)
    cols[0].metric("Total Assets", fmt_money(summary.total_assets))
    cols[1].metric("Total Liabilities", fmt_money(summary.total_liabilities))
    cols[2].metric("Net Worth", fmt_money(summary.net_worth))
    st.bar_chart(breakdown_frame(summary.chart, label="Name").set_index("Name")["Amount"])
    return summary
