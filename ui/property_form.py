import streamlit as st
from pydantic import ValidationError

from core.models import LoanTerms, PropertyInput
from core.presets import (
    BATHROOMS,
    BEDROOMS,
    DEFAULT_DOWN_PAYMENT_PCT,
    DEFAULT_RATE_PCT,
    PROPERTY_TYPES,
    US_STATES,
)
from core.rules import evaluate_rules, has_blocking
from core.utils import parse_count
from ui.payment import get_payment_model

PLACEHOLDER = "Select..."


def _select(label, options, current, key):
    opts = [PLACEHOLDER] + list(options)
    index = opts.index(current) if current in opts else 0
    choice = st.selectbox(label, opts, index=index, key=key)
    return "" if choice == PLACEHOLDER else choice


def build_loan_terms(form: dict):
    """Build ``LoanTerms`` from raw form values, or ``None`` if incomplete.

    The down payment is entered either as a percentage or an amount; the
    other representation is always derived from the resulting terms.
    """
    price = float(form.get("purchase_price") or 0.0)
    if price <= 0:
        return None
    try:
        if form.get("down_payment_mode", "percentage") == "percentage":
            return LoanTerms.from_percent(
                price,
                float(form.get("down_payment_pct") or 0.0),
                annual_interest_rate_pct=form.get("rate_pct"),
            )
        return LoanTerms.from_amount(
            price,
            float(form.get("down_payment_amt") or 0.0),
            annual_interest_rate_pct=form.get("rate_pct"),
        )
    except ValidationError:
        return None


def missing_fields(form: dict) -> list:
    required = {
        "state": "State",
        "listing_url": "Listing URL",
        "purchase_price": "Purchase Price",
        "yearly_income": "Yearly Income",
        "property_type": "Property Type",
        "bedrooms": "Bedrooms",
        "bathrooms": "Bathrooms",
    }
    return [label for key, label in required.items() if not form.get(key)]


def render_rule_results(results):
    """Show rule results by severity: critical as errors, warn and info below."""
    show = {"critical": st.error, "warn": st.warning, "info": st.info}
    for r in results:
        show[r.severity](f"[{r.code}] {r.message}")


def render_property_form():
    """Property and financing inputs.

    Returns ``(terms, property_input)``.  ``terms`` is rebuilt on every run so
    the payment breakdown can follow the inputs live; ``property_input`` is
    only returned on the run where the user submits a valid form.
    """
    st.session_state.setdefault(
        "property_form",
        {
            "down_payment_mode": "percentage",
            "down_payment_pct": DEFAULT_DOWN_PAYMENT_PCT,
            "rate_pct": DEFAULT_RATE_PCT,
        },
    )
    f = st.session_state["property_form"]

    with st.expander("Property Details", expanded=True):
        c1, c2 = st.columns(2)
        with c1:
            f["state"] = _select("State", US_STATES, f.get("state"), "form_state")
        with c2:
            f["listing_url"] = st.text_input(
                "Listing URL",
                value=f.get("listing_url", ""),
                placeholder="https://zillow.com/...",
            )
        f["property_type"] = _select("Property Type", PROPERTY_TYPES, f.get("property_type"), "form_property_type")
        c1, c2 = st.columns(2)
        with c1:
            f["bedrooms"] = _select("Bedrooms", BEDROOMS, f.get("bedrooms"), "form_bedrooms")
        with c2:
            f["bathrooms"] = _select("Bathrooms", BATHROOMS, f.get("bathrooms"), "form_bathrooms")

    with st.expander("Financing", expanded=True):
        f["purchase_price"] = st.number_input(
            "Purchase Price", min_value=0.0, value=float(f.get("purchase_price", 0.0)), step=1000.0
        )
        f["yearly_income"] = st.number_input(
            "Yearly Income", min_value=0.0, value=float(f.get("yearly_income", 0.0)), step=1000.0
        )
        f["rate_pct"] = st.number_input(
            "Interest Rate %", min_value=0.0, value=float(f.get("rate_pct", DEFAULT_RATE_PCT)), step=0.125
        )
        modes = ["percentage", "amount"]
        f["down_payment_mode"] = st.radio(
            "Down Payment Mode",
            modes,
            index=modes.index(f.get("down_payment_mode", "percentage")),
            horizontal=True,
        )
        if f["down_payment_mode"] == "percentage":
            f["down_payment_pct"] = st.number_input(
                "Down Payment %",
                min_value=0.0,
                max_value=100.0,
                value=float(f.get("down_payment_pct", DEFAULT_DOWN_PAYMENT_PCT)),
            )
        else:
            f["down_payment_amt"] = st.number_input(
                "Down Payment $", min_value=0.0, value=float(f.get("down_payment_amt", 0.0)), step=1000.0
            )

    terms = build_loan_terms(f)
    if terms is not None:
        # only the representation the user is not typing into follows the terms
        if f["down_payment_mode"] == "percentage":
            f["down_payment_amt"] = terms.down_payment
        else:
            f["down_payment_pct"] = terms.down_payment_pct
        st.caption(f"Down Payment: ${terms.down_payment:,.0f} ({terms.down_payment_pct:.1f}%)")
    st.session_state["property_form"] = f

    submitted = st.button("Analyze Property", key="analyze_property", type="primary")
    if not submitted:
        return terms, None

    missing = missing_fields(f)
    if missing:
        st.error("Missing: " + ", ".join(missing))
        return terms, None
    if terms is not None:
        price, down = terms.purchase_price, terms.down_payment
        monthly_total = get_payment_model(terms).get_snapshot().total
    else:
        # terms were rejected; report the entered amount against the price
        price = float(f.get("purchase_price") or 0.0)
        if f.get("down_payment_mode") == "percentage":
            down = price * float(f.get("down_payment_pct") or 0.0) / 100
        else:
            down = float(f.get("down_payment_amt") or 0.0)
        monthly_total = 0.0
    results = evaluate_rules(
        {
            "yearly_income": f.get("yearly_income"),
            "purchase_price": price,
            "down_payment": down,
            "monthly_total": monthly_total,
        }
    )
    render_rule_results(results)
    if has_blocking(results) or terms is None:
        return terms, None

    property_input = PropertyInput(
        state=f["state"],
        listing_url=f["listing_url"],
        property_type=f["property_type"],
        bedrooms=parse_count(f["bedrooms"]),
        bathrooms=parse_count(f["bathrooms"]),
        yearly_income=float(f["yearly_income"]),
        terms=terms,
    )
    return terms, property_input
