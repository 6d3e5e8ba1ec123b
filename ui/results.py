import pandas as pd
import streamlit as st

from core.analysis import verdict_for_score
from core.models import InvestmentAnalysis, PropertyInput
from core.presets import DISCLAIMER, LINE_ITEM_LABELS
from core.utils import format_currency
from export.pdf_export import build_report_pdf


def category_table(analysis: InvestmentAnalysis) -> pd.DataFrame:
    """Category breakdown as a DataFrame, weights shown as percentages."""
    rows = [
        {
            "Category": c.name,
            "Weight %": round(c.weight * 100, 1),
            "Score": round(c.score, 1),
            "Weighted": round(c.weighted_score, 2),
            "Reasoning": c.reasoning,
        }
        for c in analysis.category_scores
    ]
    return pd.DataFrame(rows, columns=["Category", "Weight %", "Score", "Weighted", "Reasoning"])


def payment_table(analysis: InvestmentAnalysis) -> pd.DataFrame:
    payment = analysis.monthly_payment
    rows = [{"Item": LINE_ITEM_LABELS[k], "Monthly": v} for k, v in payment.line_items().items()]
    rows.append({"Item": "Total", "Monthly": payment.total})
    return pd.DataFrame(rows)


def render_results(analysis: InvestmentAnalysis, property_input: PropertyInput = None):
    """Render the investment report returned by the analysis endpoint."""
    st.header("Investment Report")
    cols = st.columns(3)
    cols[0].metric("Investment Score", f"{analysis.overall_score:.0f}%")
    cols[1].metric("Verdict", analysis.verdict)
    cols[2].metric("Monthly Payment", format_currency(analysis.monthly_payment.total))
    expected = verdict_for_score(analysis.overall_score)
    if expected != analysis.verdict:
        st.caption(f"Score band suggests: {expected}")

    st.subheader("Category Breakdown")
    st.dataframe(category_table(analysis), hide_index=True)

    left, right = st.columns(2)
    with left:
        st.markdown("**Strengths**")
        for s in analysis.strengths:
            st.markdown(f"- {s}")
    with right:
        st.markdown("**Risks**")
        for r in analysis.risks:
            st.markdown(f"- {r}")
    if analysis.explanation:
        st.info(analysis.explanation)

    with st.expander("Listing Details"):
        ld = analysis.listing_data
        st.write(
            {
                "Address": ld.address,
                "Listing Price": format_currency(ld.listing_price),
                "Property Type": ld.property_type,
                "Square Footage": f"{ld.square_footage:,.0f}",
                "HOA Fees": format_currency(ld.hoa_fees),
                "Property Tax Estimate": format_currency(ld.property_tax_estimate),
                "GreatSchools Rating": ld.great_schools_rating if ld.great_schools_rating is not None else "N/A",
                "Year Built": ld.year_built if ld.year_built is not None else "N/A",
                "Lot Size": ld.lot_size or "N/A",
            }
        )
    if analysis.safety_data is not None:
        with st.expander(f"Safety • {analysis.safety_data.classification}"):
            sd = analysis.safety_data
            st.caption(f"{sd.incident_count} incidents in the last {sd.recency}")
            st.write(", ".join(sd.crime_types))
    if analysis.demographics_data is not None:
        with st.expander("Demographics"):
            dd = analysis.demographics_data
            c = st.columns(3)
            c[0].metric("Median Household Income", format_currency(dd.median_household_income))
            c[1].metric("Homeownership", f"{dd.homeownership_ratio:.0%}")
            c[2].metric("Employment", f"{dd.employment_rate:.0%}")
            st.caption(
                f"Median home value {format_currency(dd.median_home_value)} • "
                f"{dd.population_density:,.0f} people per sq mi"
            )

    st.subheader("Monthly Payment")
    st.dataframe(payment_table(analysis), hide_index=True)

    st.download_button(
        "Download PDF Report",
        data=build_report_pdf(analysis, property_input),
        file_name="property_report.pdf",
        mime="application/pdf",
        key="download_report",
    )
    st.caption(DISCLAIMER)
