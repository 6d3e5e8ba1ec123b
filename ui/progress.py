import streamlit as st
from core.presets import ANALYSIS_STEPS


def step_markers(current_step: str) -> list:
    """Return ``(label, status)`` pairs where status is done, current or pending."""
    keys = [k for k, _ in ANALYSIS_STEPS]
    current = keys.index(current_step) if current_step in keys else -1
    out = []
    for i, (key, label) in enumerate(ANALYSIS_STEPS):
        if current_step == "complete" or current > i:
            out.append((label, "done"))
        elif current == i:
            out.append((label, "current"))
        else:
            out.append((label, "pending"))
    return out


def render_progress(current_step: str):
    icons = {"done": "✅", "current": "⏳", "pending": "○"}
    st.markdown("#### Analyzing Your Property")
    for label, status in step_markers(current_step):
        st.markdown(f"{icons[status]} {label}")
