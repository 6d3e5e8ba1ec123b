import logging

import streamlit as st

from core import analysis as analysis_client
from core.models import InvestmentAnalysis
from core.presets import ANALYSIS_STEPS
from core.state import load_state, save_state
from ui.payment import render_payment_breakdown
from ui.progress import render_progress
from ui.property_form import render_property_form
from ui.results import render_results
from ui.sidebar import render_settings_sidebar
from ui.topbar import render_topbar

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("propertyiq")

st.set_page_config(page_title="PropertyIQ – Investment Analysis", layout="wide")


def init_state():
    ss = st.session_state
    load_state()
    ss.setdefault("analysis_step", "idle")
    ss.setdefault("last_analysis", None)
    ss.setdefault("last_property_input", None)


def run_analysis(property_input, settings):
    """Drive the progress steps and call the analysis endpoint once."""
    payment = None
    if st.session_state.get("payment_model") is not None:
        payment = st.session_state["payment_model"].get_snapshot()
    progress = st.empty()
    st.session_state["last_analysis"] = None
    try:
        for step, _ in ANALYSIS_STEPS:
            st.session_state["analysis_step"] = step
            with progress.container():
                render_progress(step)
        result = analysis_client.request_analysis(property_input, payment, settings)
    except analysis_client.AnalysisError as exc:
        logger.error("Analysis error: %s", exc)
        st.session_state["analysis_step"] = "error"
        progress.empty()
        st.error(f"Analysis Failed: {exc}")
        return None
    st.session_state["analysis_step"] = "complete"
    st.session_state["last_analysis"] = result.model_dump(by_alias=True)
    st.session_state["last_property_input"] = property_input
    progress.empty()
    st.success(f"Analysis Complete • Investment score: {result.overall_score:.0f}% - {result.verdict}")
    return result


init_state()
render_topbar()
settings = render_settings_sidebar()

left, right = st.columns([1.2, 1], gap="large")
with left:
    terms, property_input = render_property_form()
with right:
    if terms is not None:
        render_payment_breakdown(terms)
    else:
        st.info("Enter a purchase price and down payment to see the monthly payment breakdown.")

if property_input is not None:
    run_analysis(property_input, settings)

if st.session_state.get("last_analysis"):
    render_results(
        InvestmentAnalysis.model_validate(st.session_state["last_analysis"]),
        st.session_state.get("last_property_input"),
    )
    if st.button("New Analysis", key="reset_analysis"):
        st.session_state["last_analysis"] = None
        st.session_state["last_property_input"] = None
        st.session_state["analysis_step"] = "idle"
        st.rerun()

save_state()
