from __future__ import annotations
import math

from core.presets import (
    AMORTIZATION_YEARS,
    DEFAULT_TAX_RATE,
    DEFAULT_UTILITIES,
    HOI_RATE,
    PMI_RATE,
    PMI_WAIVED_AT_PCT,
)


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Form widgets and JSON payloads hand back ``None``, blank strings or
    ``NaN`` for untouched fields.  This helper mirrors the spreadsheet
    ``NZ()`` function and keeps later math from breaking when a value is
    missing.
    """

    try:
        if x is None or (isinstance(x, float) and math.isnan(x)):
            return default
        return float(x)
    except (TypeError, ValueError):
        return default


def monthly_payment(principal, annual_rate_pct, term_years=AMORTIZATION_YEARS):
    """Calculate the fully amortizing monthly payment for a loan.

    Standard fixed-rate amortization::

        M = L * r(1+r)^n / ((1+r)^n - 1)

    where ``r`` is the annual rate divided by 12 and ``n`` is the number of
    monthly payments.  A zero rate falls back to straight-line repayment
    ``L / n`` so the result is never NaN or infinite.
    """

    L = nz(principal)
    r = nz(annual_rate_pct) / 100 / 12
    n = int(nz(term_years) * 12)
    if n <= 0:
        return 0.0
    if r == 0:
        return L / n
    growth = (1 + r) ** n
    return L * (r * growth) / (growth - 1)


def down_payment_pct(purchase_price, down_payment):
    """Down payment as a percentage of price.

    Rounded to 9 places so a percentage converted to an amount and back
    (20% of $103,333 gives 19.999999999999996) lands on the value entered.
    """

    price = nz(purchase_price)
    if price <= 0:
        return 0.0
    return round(nz(down_payment) / price * 100, 9)


def mortgage_insurance_monthly(loan_amount, down_payment_pct):
    """Private mortgage insurance, waived once equity reaches 20%."""

    if nz(down_payment_pct) < PMI_WAIVED_AT_PCT:
        return nz(loan_amount) * PMI_RATE / 12
    return 0.0


def property_taxes_monthly(purchase_price, tax_rate_annual=None):
    """Monthly property tax from an annual rate expressed as a fraction of price."""

    rate = DEFAULT_TAX_RATE if tax_rate_annual is None else nz(tax_rate_annual)
    return nz(purchase_price) * rate / 12


def homeowners_insurance_monthly(purchase_price):
    return nz(purchase_price) * HOI_RATE / 12


def default_line_items(
    purchase_price,
    down_payment,
    annual_rate_pct,
    tax_rate_annual=None,
    utilities_estimate=None,
) -> dict:
    """Default monthly cost for each of the six payment line items."""

    price = nz(purchase_price)
    loan_amount = price - nz(down_payment)
    dp_pct = down_payment_pct(price, down_payment)
    return {
        "principal_and_interest": monthly_payment(loan_amount, annual_rate_pct, AMORTIZATION_YEARS),
        "mortgage_insurance": mortgage_insurance_monthly(loan_amount, dp_pct),
        "property_taxes": property_taxes_monthly(price, tax_rate_annual),
        "homeowners_insurance": homeowners_insurance_monthly(price),
        "hoa_fees": 0.0,
        "utilities": DEFAULT_UTILITIES if utilities_estimate is None else nz(utilities_estimate),
    }


def housing_ratio_pct(monthly_total, yearly_income):
    """Annual housing cost as a percentage of yearly income."""

    inc = nz(yearly_income)
    if inc <= 0:
        return 0.0
    return nz(monthly_total) * 12 / inc * 100


def percent_of_value_annually(monthly_total, purchase_price):
    """Monthly total relative to one month of the purchase price, in percent."""

    price = nz(purchase_price)
    if price <= 0:
        return 0.0
    return nz(monthly_total) / (price / 12) * 100
