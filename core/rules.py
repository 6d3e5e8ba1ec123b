from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from core.calculators import down_payment_pct, housing_ratio_pct, nz
from core.presets import MAX_HOUSING_RATIO_PCT, PMI_WAIVED_AT_PCT


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(state: dict) -> List[RuleResult]:
    res: List[RuleResult] = []

    yearly_income = nz(state.get("yearly_income"))
    purchase_price = nz(state.get("purchase_price"))
    down_payment = nz(state.get("down_payment"))
    monthly_total = nz(state.get("monthly_total"))
    max_ratio = nz(state.get("max_housing_ratio_pct"), MAX_HOUSING_RATIO_PCT)

    if yearly_income <= 0:
        res.append(
            RuleResult(
                code="NO_INCOME",
                severity="critical",
                message="No yearly income entered; housing ratio is not meaningful.",
            )
        )

    if purchase_price > 0 and down_payment >= purchase_price:
        res.append(
            RuleResult(
                code="DOWN_PAYMENT_INVALID",
                severity="critical",
                message="Down payment must be less than the purchase price.",
                context={"down_payment": down_payment, "purchase_price": purchase_price},
            )
        )

    if yearly_income > 0 and monthly_total > 0:
        ratio = housing_ratio_pct(monthly_total, yearly_income)
        if ratio > max_ratio:
            res.append(
                RuleResult(
                    code="HOUSING_RATIO_OVER_LIMIT",
                    severity="warn",
                    message=f"Monthly payment exceeds recommended {max_ratio:.0f}% housing ratio.",
                    context={"actual": ratio, "limit": max_ratio},
                )
            )

    if purchase_price > 0 and down_payment < purchase_price:
        dp_pct = down_payment_pct(purchase_price, down_payment)
        if dp_pct < PMI_WAIVED_AT_PCT:
            res.append(
                RuleResult(
                    code="PMI_REQUIRED",
                    severity="info",
                    message="Consider increasing down payment to eliminate PMI.",
                    context={"down_payment_pct": dp_pct},
                )
            )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
