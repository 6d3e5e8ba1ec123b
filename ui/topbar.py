import streamlit as st
from core.utils import format_currency
from core.version import __version__


def render_topbar():
    """Sticky page header with the latest score and monthly total, if any."""
    st.markdown(
        """
        <style>
        .piq-topbar {position:sticky; top:0; background-color:white; z-index:100; padding:4px 8px; border-bottom:1px solid #ddd;}
        .piq-topbar div[data-testid="stHorizontalBlock"] {align-items:center;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    report = st.session_state.get("last_analysis") or {}
    payment = st.session_state.get("monthly_payment") or {}
    with st.container():
        st.markdown('<div class="piq-topbar">', unsafe_allow_html=True)
        left, center, right = st.columns([2, 2, 1])
        with left:
            st.markdown("### PropertyIQ")
            st.caption("Investment Analysis Engine")
        with center:
            if report:
                st.markdown(f"**{report.get('overallScore', 0):.0f}%** • {report.get('verdict', '')}")
            if payment:
                st.caption(f"Monthly: {format_currency(payment.get('total', 0.0))}")
        with right:
            st.markdown(f"**v{__version__}**")
        st.markdown("</div>", unsafe_allow_html=True)
