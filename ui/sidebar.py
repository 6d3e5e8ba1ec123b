import streamlit as st
from core.config import Settings


def render_settings_sidebar() -> Settings:
    """Sidebar with the analysis gateway settings.

    Environment variables provide the defaults; a key typed here applies to
    the current session only and is never persisted.
    """
    settings = Settings.from_env()
    st.session_state.setdefault("gateway_model", settings.model)

    st.sidebar.header("Analysis Gateway")
    model = st.sidebar.text_input("Model", value=st.session_state["gateway_model"])
    api_key = st.sidebar.text_input(
        "API Key",
        type="password",
        help="Leave blank to use PROPERTYIQ_API_KEY from the environment.",
    )
    if model.strip():
        st.session_state["gateway_model"] = model.strip()
    update = {"model": st.session_state["gateway_model"]}
    if api_key:
        update["api_key"] = api_key
    settings = settings.model_copy(update=update)
    if not settings.api_key:
        st.sidebar.warning("No API key configured.")
    return settings
