import math

from core.calculators import (
    default_line_items,
    down_payment_pct,
    homeowners_insurance_monthly,
    housing_ratio_pct,
    monthly_payment,
    mortgage_insurance_monthly,
    nz,
    percent_of_value_annually,
    property_taxes_monthly,
)


def test_amortization_known_payment():
    pmt = monthly_payment(400000, 7.0, 30)
    assert abs(pmt - 2661.21) < 0.5


def test_zero_rate_is_straight_line():
    pmt = monthly_payment(360000, 0, 30)
    assert pmt == 360000 / 360
    assert math.isfinite(pmt)


def test_pmi_boundary():
    assert mortgage_insurance_monthly(400000, 19.999) > 0
    assert mortgage_insurance_monthly(400000, 20.0) == 0
    assert mortgage_insurance_monthly(400000, 35.0) == 0
    assert abs(mortgage_insurance_monthly(450000, 10) - 450000 * 0.005 / 12) < 1e-9


def test_property_tax_default_and_override():
    assert property_taxes_monthly(500000) == 500000 * 0.012 / 12
    assert property_taxes_monthly(500000, 0.02) == 500000 * 0.02 / 12


def test_default_line_items_end_to_end():
    items = default_line_items(500000, 100000, 7.0)
    assert items["mortgage_insurance"] == 0
    assert abs(items["property_taxes"] - 500) < 1e-9
    assert abs(items["homeowners_insurance"] - 125) < 1e-9
    assert items["hoa_fees"] == 0
    assert items["utilities"] == 200
    assert abs(items["principal_and_interest"] - monthly_payment(400000, 7.0, 30)) < 1e-9


def test_default_line_items_overrides():
    items = default_line_items(300000, 15000, 6.0, tax_rate_annual=0.02, utilities_estimate=325)
    assert items["utilities"] == 325
    assert abs(items["property_taxes"] - 500) < 1e-9
    assert items["mortgage_insurance"] > 0


def test_ratios():
    assert round(housing_ratio_pct(2500, 100000), 1) == 30.0
    assert housing_ratio_pct(2500, 0) == 0.0
    assert round(percent_of_value_annually(3000, 360000), 1) == 10.0


def test_nz_handles_blanks():
    assert nz(None) == 0.0
    assert nz(float("nan"), 5.0) == 5.0
    assert nz("12.5") == 12.5
    assert nz("abc") == 0.0


def test_homeowners_insurance_rate():
    assert abs(homeowners_insurance_monthly(480000) - 120) < 1e-9


def test_down_payment_pct_round_trip():
    price = 103333
    assert down_payment_pct(price, price * 20.0 / 100) == 20.0
    assert down_payment_pct(100000, 19999) < 20
    assert down_payment_pct(0, 100) == 0.0
    items = default_line_items(price, price * 20.0 / 100, 7.0)
    assert items["mortgage_insurance"] == 0
