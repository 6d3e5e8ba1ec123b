import streamlit as st

from core.calculators import percent_of_value_annually
from core.models import LoanTerms, MonthlyPayment
from core.payment_model import PaymentModel
from core.presets import LINE_ITEM_KEYS, LINE_ITEM_LABELS
from core.utils import format_currency


def _store_snapshot(payment: MonthlyPayment) -> None:
    st.session_state["monthly_payment"] = payment.model_dump()


def get_payment_model(terms: LoanTerms) -> PaymentModel:
    """Return the session's payment model, re-initializing it for new terms."""
    model = st.session_state.get("payment_model")
    if not isinstance(model, PaymentModel):
        model = PaymentModel(observer=_store_snapshot)
        st.session_state["payment_model"] = model
    if model.terms != terms:
        model.initialize(terms)
    return model


def _confirm(model: PaymentModel, key: str) -> None:
    model.update_pending(st.session_state.get(f"pending_{key}", model.pending_text))
    if not model.confirm():
        st.session_state["payment_edit_error"] = key


def render_payment_breakdown(terms: LoanTerms) -> MonthlyPayment:
    """Editable monthly payment table driven by :class:`PaymentModel`."""
    model = get_payment_model(terms)
    # the observer closes over session state, so rebind it on every run
    model.subscribe(_store_snapshot)

    st.subheader("Monthly Payment Breakdown")
    for key in LINE_ITEM_KEYS:
        cols = st.columns([3, 2, 1, 1])
        cols[0].markdown(LINE_ITEM_LABELS[key])
        if model.editing_key == key:
            cols[1].text_input(
                LINE_ITEM_LABELS[key],
                value=model.pending_text,
                key=f"pending_{key}",
                label_visibility="collapsed",
            )
            cols[2].button("Save", key=f"confirm_{key}", on_click=_confirm, args=(model, key))
            cols[3].button("Cancel", key=f"cancel_{key}", on_click=model.cancel)
            if st.session_state.get("payment_edit_error") == key:
                st.warning("Enter a number to save this amount.")
        else:
            cols[1].markdown(format_currency(model.value(key)))
            cols[2].button("Edit", key=f"edit_{key}", on_click=model.begin_edit, args=(key,))
    if st.session_state.get("payment_edit_error") != model.editing_key:
        st.session_state.pop("payment_edit_error", None)

    payment = model.get_snapshot()
    _store_snapshot(payment)
    st.markdown(f"**Total Monthly Payment: {format_currency(payment.total)}**")
    pct = percent_of_value_annually(payment.total, terms.purchase_price)
    st.caption(f"{pct:.1f}% of property value annually")
    return payment
