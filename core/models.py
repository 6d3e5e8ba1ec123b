from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator
from pydantic.alias_generators import to_camel

from core.calculators import down_payment_pct
from core.presets import (
    AMORTIZATION_YEARS,
    DEFAULT_RATE_PCT,
    DEFAULT_TAX_RATE,
    DEFAULT_UTILITIES,
    LINE_ITEM_KEYS,
)

LineItemKey = Literal[
    "principal_and_interest",
    "mortgage_insurance",
    "property_taxes",
    "homeowners_insurance",
    "hoa_fees",
    "utilities",
]
Verdict = Literal["Strong Buy", "Good Opportunity", "Proceed Carefully", "Do Not Invest"]


class _CamelModel(BaseModel):
    """Base for models exchanged with the analysis endpoint in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LoanTerms(BaseModel):
    """Financing inputs for one payment session.

    The down payment is stored once as an amount; the percentage is always
    derived from it so the two can never drift apart.  Build a new instance
    for every input change instead of mutating one.
    """

    model_config = ConfigDict(frozen=True)

    purchase_price: float = Field(gt=0)
    down_payment: float = Field(default=0.0, ge=0)
    annual_interest_rate_pct: float = Field(default=DEFAULT_RATE_PCT, ge=0)
    amortization_years: Literal[30] = AMORTIZATION_YEARS
    property_tax_rate_annual: float = Field(default=DEFAULT_TAX_RATE, ge=0)
    base_utilities_estimate: float = Field(default=DEFAULT_UTILITIES, ge=0)

    @model_validator(mode="after")
    def _down_payment_below_price(self) -> "LoanTerms":
        if self.down_payment >= self.purchase_price:
            raise ValueError("down_payment must be less than purchase_price")
        return self

    @property
    def loan_amount(self) -> float:
        return self.purchase_price - self.down_payment

    @property
    def down_payment_pct(self) -> float:
        return down_payment_pct(self.purchase_price, self.down_payment)

    @classmethod
    def from_amount(
        cls,
        purchase_price: float,
        down_payment: float,
        annual_interest_rate_pct: Optional[float] = None,
        property_tax_rate_annual: Optional[float] = None,
        base_utilities_estimate: Optional[float] = None,
    ) -> "LoanTerms":
        """Build terms from a dollar down payment; ``None`` keeps the default."""
        overrides = {
            "annual_interest_rate_pct": annual_interest_rate_pct,
            "property_tax_rate_annual": property_tax_rate_annual,
            "base_utilities_estimate": base_utilities_estimate,
        }
        return cls(
            purchase_price=purchase_price,
            down_payment=down_payment,
            **{k: v for k, v in overrides.items() if v is not None},
        )

    @classmethod
    def from_percent(
        cls,
        purchase_price: float,
        down_payment_pct: float,
        annual_interest_rate_pct: Optional[float] = None,
        property_tax_rate_annual: Optional[float] = None,
        base_utilities_estimate: Optional[float] = None,
    ) -> "LoanTerms":
        """Build terms from a down payment given as a percentage of price."""
        return cls.from_amount(
            purchase_price,
            purchase_price * down_payment_pct / 100,
            annual_interest_rate_pct,
            property_tax_rate_annual,
            base_utilities_estimate,
        )


class MonthlyPayment(_CamelModel):
    model_config = ConfigDict(frozen=True)

    principal_and_interest: float = 0.0
    mortgage_insurance: float = 0.0
    property_taxes: float = 0.0
    homeowners_insurance: float = 0.0
    hoa_fees: float = 0.0
    utilities: float = 0.0

    @computed_field
    @property
    def total(self) -> float:
        return sum(getattr(self, key) for key in LINE_ITEM_KEYS)

    def line_items(self) -> dict:
        return {key: getattr(self, key) for key in LINE_ITEM_KEYS}


class PropertyInput(BaseModel):
    state: str = Field(min_length=1)
    listing_url: str = Field(min_length=1)
    property_type: str = Field(min_length=1)
    bedrooms: float = Field(gt=0)
    bathrooms: float = Field(gt=0)
    yearly_income: float = Field(gt=0)
    terms: LoanTerms

    @property
    def purchase_price(self) -> float:
        return self.terms.purchase_price

    @property
    def down_payment_amount(self) -> float:
        return self.terms.down_payment

    @property
    def down_payment_percentage(self) -> float:
        return self.terms.down_payment_pct

    def to_payload(self) -> dict:
        """Request body shape expected by the analysis endpoint."""
        return {
            "state": self.state,
            "listingUrl": self.listing_url,
            "purchasePrice": self.purchase_price,
            "yearlyIncome": self.yearly_income,
            "propertyType": self.property_type,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "downPaymentAmount": self.down_payment_amount,
            "downPaymentPercentage": self.down_payment_percentage,
        }


class CategoryScore(_CamelModel):
    name: str
    score: float = Field(ge=0, le=10)
    weight: float
    weighted_score: float
    reasoning: str = ""


class ListingData(_CamelModel):
    address: str = ""
    listing_price: float = 0.0
    property_type: str = ""
    square_footage: float = 0.0
    hoa_fees: float = 0.0
    property_tax_estimate: float = 0.0
    great_schools_rating: Optional[float] = None
    year_built: Optional[int] = None
    lot_size: Optional[str] = None


class SafetyData(_CamelModel):
    incident_count: int = 0
    crime_types: List[str] = Field(default_factory=list)
    recency: str = ""
    classification: Literal["Safe", "Moderately Safe", "High Risk"]


class DemographicsData(_CamelModel):
    median_household_income: float = 0.0
    population_density: float = 0.0
    homeownership_ratio: float = 0.0
    median_home_value: float = 0.0
    employment_rate: float = 0.0


class InvestmentAnalysis(_CamelModel):
    overall_score: float = Field(ge=0, le=100)
    verdict: Verdict
    category_scores: List[CategoryScore]
    strengths: List[str] = Field(default_factory=list)
    risks: List[str] = Field(default_factory=list)
    explanation: str = ""
    monthly_payment: MonthlyPayment = Field(default_factory=MonthlyPayment)
    listing_data: ListingData = Field(default_factory=ListingData)
    safety_data: Optional[SafetyData] = None
    demographics_data: Optional[DemographicsData] = None
