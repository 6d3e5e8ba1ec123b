"""Assorted utility helpers."""


def format_currency(value, decimals=0):
    """Format a dollar amount the way the payment breakdown displays it."""
    try:
        v = float(value)
    except (TypeError, ValueError):
        v = 0.0
    sign = "-" if v < 0 else ""
    return f"{sign}${abs(v):,.{decimals}f}"


def parse_count(label):
    """Map a bedroom/bathroom option such as ``"6+"`` or ``"2.5"`` to a number."""
    try:
        return float(str(label).rstrip("+"))
    except (TypeError, ValueError):
        return 0.0
