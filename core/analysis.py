"""Client for the remote AI investment analysis endpoint.

The gateway speaks the OpenAI-compatible chat completions protocol.  One
request is sent per submission, forcing a single ``investment_analysis``
function call whose arguments carry the structured report.  There is no
retry; failures surface as :class:`AnalysisError` subclasses.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests
from pydantic import ValidationError

from core.calculators import housing_ratio_pct
from core.config import Settings
from core.models import InvestmentAnalysis, MonthlyPayment, PropertyInput
from core.presets import (
    CATEGORY_FOCUS,
    CATEGORY_WEIGHTS,
    PMI_WAIVED_AT_PCT,
    VERDICT_BANDS,
)

logger = logging.getLogger(__name__)

TOOL_NAME = "investment_analysis"


class AnalysisError(Exception):
    """Base class for failures talking to the analysis endpoint."""


class ConfigurationError(AnalysisError):
    pass


class RateLimitError(AnalysisError):
    pass


class CreditsExhaustedError(AnalysisError):
    pass


class GatewayError(AnalysisError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseError(AnalysisError):
    pass


def verdict_for_score(score: float) -> str:
    for threshold, verdict in VERDICT_BANDS:
        if score >= threshold:
            return verdict
    return VERDICT_BANDS[-1][1]


def _system_prompt() -> str:
    categories = "\n".join(
        f"{i}. {name} ({weight:.0%} weight): {CATEGORY_FOCUS[name]}"
        for i, (name, weight) in enumerate(CATEGORY_WEIGHTS.items(), start=1)
    )
    bands = []
    upper = 100
    for threshold, verdict in VERDICT_BANDS:
        if threshold > 0:
            bands.append(f"- {threshold}-{upper}%: {verdict}")
        else:
            bands.append(f"- Below {upper + 1}%: {verdict}")
        upper = threshold - 1
    return (
        "You are an expert real estate investment analyst. You analyze properties using a "
        f"weighted scoring framework across {len(CATEGORY_WEIGHTS)} categories:\n\n"
        f"{categories}\n\n"
        "Score each category from 1-10, then calculate the final percentage score.\n\n"
        "Score Interpretation:\n"
        + "\n".join(bands)
        + "\n\nYou must respond with valid JSON only, no markdown or code blocks."
    )


def _money(value: float) -> str:
    return f"${value:,.2f}"


def build_analysis_prompt(property_input: PropertyInput, payment: Optional[MonthlyPayment]) -> str:
    """Render the user prompt describing the property and its financing."""

    dp_pct = property_input.down_payment_percentage
    if payment is not None:
        payment_info = (
            "\nMonthly Payment Breakdown:\n"
            f"- Principal & Interest: {_money(payment.principal_and_interest)}\n"
            f"- Mortgage Insurance (PMI): {_money(payment.mortgage_insurance)}\n"
            f"- Property Taxes: {_money(payment.property_taxes)}\n"
            f"- Homeowners Insurance: {_money(payment.homeowners_insurance)}\n"
            f"- HOA Fees: {_money(payment.hoa_fees)}\n"
            f"- Utilities: {_money(payment.utilities)}\n"
            f"- Total Monthly: {_money(payment.total)}\n"
        )
        ratio = f"{housing_ratio_pct(payment.total, property_input.yearly_income):.1f}%"
    else:
        payment_info = ""
        ratio = "N/A"

    return (
        "Analyze this residential property investment:\n\n"
        "Property Details:\n"
        f"- State: {property_input.state}\n"
        f"- Listing URL: {property_input.listing_url}\n"
        f"- Property Type: {property_input.property_type}\n"
        f"- Bedrooms: {property_input.bedrooms:g}\n"
        f"- Bathrooms: {property_input.bathrooms:g}\n"
        f"- Purchase Price: {_money(property_input.purchase_price)}\n\n"
        "Financial Details:\n"
        f"- Buyer's Yearly Income: {_money(property_input.yearly_income)}\n"
        f"- Down Payment: {_money(property_input.down_payment_amount)} ({dp_pct:.1f}%)\n"
        f"- Loan Amount: {_money(property_input.terms.loan_amount)}\n"
        f"{payment_info}\n"
        "Key Metrics:\n"
        f"- Housing Cost to Income Ratio: {ratio}\n"
        f"- Down Payment Percentage: {dp_pct:.1f}%\n"
        f"- PMI Required: {'Yes' if dp_pct < PMI_WAIVED_AT_PCT else 'No'}\n\n"
        f"Based on typical data for {property_input.state}, provide a comprehensive investment "
        "analysis. Generate realistic estimates for:\n"
        "1. Property details (square footage, year built, etc. based on the property type and price point)\n"
        "2. Safety data (typical crime statistics for the area)\n"
        "3. Demographics data (income levels, homeownership rates, etc.)\n\n"
        f"Score each of the {len(CATEGORY_WEIGHTS)} categories and calculate the overall investment score."
    )


ANALYSIS_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": TOOL_NAME,
        "description": "Return a comprehensive real estate investment analysis",
        "parameters": {
            "type": "object",
            "properties": {
                "overallScore": {"type": "number", "description": "Overall investment score as percentage (0-100)"},
                "verdict": {"type": "string", "enum": [v for _, v in VERDICT_BANDS]},
                "categoryScores": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "name": {"type": "string"},
                            "score": {"type": "number", "description": "Score from 1-10"},
                            "weight": {"type": "number"},
                            "weightedScore": {"type": "number"},
                            "reasoning": {"type": "string"},
                        },
                        "required": ["name", "score", "weight", "weightedScore", "reasoning"],
                    },
                },
                "strengths": {"type": "array", "items": {"type": "string"}, "description": "3-4 key investment strengths"},
                "risks": {"type": "array", "items": {"type": "string"}, "description": "3-4 key risks or red flags"},
                "explanation": {"type": "string", "description": "Plain-language summary of the analysis"},
                "listingData": {
                    "type": "object",
                    "properties": {
                        "address": {"type": "string"},
                        "listingPrice": {"type": "number"},
                        "propertyType": {"type": "string"},
                        "squareFootage": {"type": "number"},
                        "hoaFees": {"type": "number"},
                        "propertyTaxEstimate": {"type": "number"},
                        "greatSchoolsRating": {"type": "number", "nullable": True},
                        "yearBuilt": {"type": "number", "nullable": True},
                        "lotSize": {"type": "string", "nullable": True},
                    },
                    "required": ["address", "listingPrice", "propertyType", "squareFootage", "hoaFees", "propertyTaxEstimate"],
                },
                "safetyData": {
                    "type": "object",
                    "properties": {
                        "incidentCount": {"type": "number"},
                        "crimeTypes": {"type": "array", "items": {"type": "string"}},
                        "recency": {"type": "string"},
                        "classification": {"type": "string", "enum": ["Safe", "Moderately Safe", "High Risk"]},
                    },
                    "required": ["incidentCount", "crimeTypes", "recency", "classification"],
                },
                "demographicsData": {
                    "type": "object",
                    "properties": {
                        "medianHouseholdIncome": {"type": "number"},
                        "populationDensity": {"type": "number"},
                        "homeownershipRatio": {"type": "number"},
                        "medianHomeValue": {"type": "number"},
                        "employmentRate": {"type": "number"},
                    },
                    "required": ["medianHouseholdIncome", "populationDensity", "homeownershipRatio", "medianHomeValue", "employmentRate"],
                },
            },
            "required": [
                "overallScore", "verdict", "categoryScores", "strengths", "risks",
                "explanation", "listingData", "safetyData", "demographicsData",
            ],
        },
    },
}


def build_request_payload(
    property_input: PropertyInput,
    payment: Optional[MonthlyPayment],
    model: str,
) -> Dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": _system_prompt()},
            {"role": "user", "content": build_analysis_prompt(property_input, payment)},
        ],
        "tools": [ANALYSIS_TOOL],
        "tool_choice": {"type": "function", "function": {"name": TOOL_NAME}},
    }


def parse_analysis_response(data: Dict[str, Any], payment: Optional[MonthlyPayment]) -> InvestmentAnalysis:
    """Extract the forced tool call from a chat completion body."""

    try:
        tool_call = data["choices"][0]["message"]["tool_calls"][0]
        function = tool_call["function"]
    except (KeyError, IndexError, TypeError) as exc:
        raise InvalidResponseError("Invalid AI response format") from exc
    if function.get("name") != TOOL_NAME:
        raise InvalidResponseError("Invalid AI response format")

    arguments = function.get("arguments")
    try:
        report = json.loads(arguments) if isinstance(arguments, str) else dict(arguments)
    except (TypeError, ValueError) as exc:
        raise InvalidResponseError("AI response arguments are not valid JSON") from exc

    report["monthlyPayment"] = (payment or MonthlyPayment()).model_dump(by_alias=True)
    try:
        return InvestmentAnalysis.model_validate(report)
    except ValidationError as exc:
        raise InvalidResponseError(f"AI response did not match the report schema: {exc}") from exc


def request_analysis(
    property_input: PropertyInput,
    payment: Optional[MonthlyPayment],
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> InvestmentAnalysis:
    """Send one analysis request and return the parsed report."""

    settings = settings or Settings.from_env()
    if not settings.api_key:
        raise ConfigurationError("Analysis API key is not configured")

    logger.info("Analyzing property: %s %s", property_input.state, property_input.property_type)
    payload = build_request_payload(property_input, payment, settings.model)
    headers = {
        "Authorization": f"Bearer {settings.api_key}",
        "Content-Type": "application/json",
    }
    post = session.post if session is not None else requests.post
    try:
        resp = post(settings.gateway_url, headers=headers, json=payload, timeout=settings.timeout)
    except requests.RequestException as exc:
        logger.error("Analysis request failed: %s", exc)
        raise GatewayError(f"Analysis request failed: {exc}") from exc

    if resp.status_code == 429:
        logger.error("AI gateway error: %s %s", resp.status_code, resp.text)
        raise RateLimitError("Rate limit exceeded. Please try again in a moment.")
    if resp.status_code == 402:
        logger.error("AI gateway error: %s %s", resp.status_code, resp.text)
        raise CreditsExhaustedError("AI credits exhausted. Please add credits to continue.")
    if not resp.ok:
        logger.error("AI gateway error: %s %s", resp.status_code, resp.text)
        raise GatewayError(f"AI gateway error: {resp.status_code}", status_code=resp.status_code)

    try:
        data = resp.json()
    except ValueError as exc:
        raise InvalidResponseError("AI response body is not JSON") from exc
    logger.info("AI response received")

    analysis = parse_analysis_response(data, payment)
    logger.info("Analysis complete, score: %s", analysis.overall_score)
    return analysis
