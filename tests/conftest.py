import pathlib
import sys

import pytest

sys.path.insert(0, str(pathlib.Path(__file__).resolve().parents[1]))

from core.models import LoanTerms, PropertyInput


@pytest.fixture
def terms():
    return LoanTerms.from_amount(500000.0, 100000.0)


@pytest.fixture
def property_input(terms):
    return PropertyInput(
        state="Texas",
        listing_url="https://zillow.com/homedetails/123",
        property_type="Single-family",
        bedrooms=3,
        bathrooms=2,
        yearly_income=150000.0,
        terms=terms,
    )


@pytest.fixture
def sample_report():
    return {
        "overallScore": 78,
        "verdict": "Good Opportunity",
        "categoryScores": [
            {"name": "Deal Economics", "score": 7.5, "weight": 0.35, "weightedScore": 2.625, "reasoning": "Payment is 27% of income."},
            {"name": "Location", "score": 8.0, "weight": 0.25, "weightedScore": 2.0, "reasoning": "Stable demand."},
            {"name": "Market", "score": 7.0, "weight": 0.15, "weightedScore": 1.05, "reasoning": "Moderate appreciation."},
            {"name": "Condition", "score": 8.0, "weight": 0.15, "weightedScore": 1.2, "reasoning": "Newer build."},
            {"name": "Exit", "score": 9.0, "weight": 0.10, "weightedScore": 0.9, "reasoning": "Broad buyer pool."},
        ],
        "strengths": ["Favorable debt-to-income ratio", "No PMI"],
        "risks": ["Rising interest rates may impact refinancing options"],
        "explanation": "The fundamentals support a positive investment thesis.",
        "listingData": {
            "address": "123 Main Street, Texas",
            "listingPrice": 500000,
            "propertyType": "Single-family",
            "squareFootage": 2100,
            "hoaFees": 0,
            "propertyTaxEstimate": 500,
            "greatSchoolsRating": 7,
            "yearBuilt": 2004,
            "lotSize": "0.25 acres",
        },
        "safetyData": {
            "incidentCount": 12,
            "crimeTypes": ["Property Crime", "Vandalism"],
            "recency": "90 days",
            "classification": "Safe",
        },
        "demographicsData": {
            "medianHouseholdIncome": 82000,
            "populationDensity": 3100,
            "homeownershipRatio": 0.64,
            "medianHomeValue": 455000,
            "employmentRate": 0.95,
        },
    }


@pytest.fixture
def completion_body(sample_report):
    import json

    return {
        "choices": [
            {
                "message": {
                    "tool_calls": [
                        {
                            "type": "function",
                            "function": {
                                "name": "investment_analysis",
                                "arguments": json.dumps(sample_report),
                            },
                        }
                    ]
                }
            }
        ]
    }
