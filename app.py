import streamlit as st

from pocketcalc import __version__
from pocketcalc.logging_config import setup_logging
from pocketcalc.presets import DISCLAIMER, get_policy
from ui.budget import render_budget_view
from ui.max_qualifiers import render_max_qualifiers_view
from ui.net_worth import render_net_worth_view

VIEWS = {
    "Net Worth": render_net_worth_view,
    "Budget": render_budget_view,
    "Loan Qualification": render_max_qualifiers_view,
}


def main():
    setup_logging(get_policy().log_level)
    st.set_page_config(page_title="PocketCalc", layout="wide")
    st.sidebar.markdown(f"**POCKETCALC v{__version__}**")
    nav = st.sidebar.radio("Calculator", list(VIEWS.keys()), key="nav")
    VIEWS[nav]()
    st.caption(DISCLAIMER)


if __name__ == "__main__":
    main()
