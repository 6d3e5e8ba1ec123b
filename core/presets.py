
DISCLAIMER = ("This report combines standard fixed-rate mortgage arithmetic with an AI-generated investment "
"assessment. Listing, safety and demographic figures are model estimates for the selected state, not verified "
"records. It does not replace an appraisal, inspection, lender disclosure or professional advice.")

# Payment defaults. The tax rate is a flat national-average placeholder and
# should be treated as a rough starting point, not a local figure.
DEFAULT_RATE_PCT = 7.0
AMORTIZATION_YEARS = 30
DEFAULT_TAX_RATE = 0.012
HOI_RATE = 0.003
PMI_RATE = 0.005
PMI_WAIVED_AT_PCT = 20.0
DEFAULT_UTILITIES = 200.0
DEFAULT_DOWN_PAYMENT_PCT = 20.0
MAX_HOUSING_RATIO_PCT = 28.0

LINE_ITEM_KEYS = (
    "principal_and_interest",
    "mortgage_insurance",
    "property_taxes",
    "homeowners_insurance",
    "hoa_fees",
    "utilities",
)
LINE_ITEM_LABELS = {
    "principal_and_interest": "Principal & Interest",
    "mortgage_insurance": "PMI",
    "property_taxes": "Property Taxes",
    "homeowners_insurance": "Homeowners Insurance",
    "hoa_fees": "HOA Fees",
    "utilities": "Utilities",
}

# Weighted scoring framework sent to the analysis endpoint.
CATEGORY_WEIGHTS = {"Deal Economics":0.35,"Location":0.25,"Market":0.15,"Condition":0.15,"Exit":0.10}
CATEGORY_FOCUS = {
    "Deal Economics": "Affordability, cash burden, leverage, monthly payment ratio",
    "Location": "Safety, desirability, amenities, school ratings",
    "Market": "Demand, income levels, stability, appreciation potential",
    "Condition": "Property quality, age, maintenance risk",
    "Exit": "Resale or rental flexibility, buyer/renter appeal",
}
VERDICT_BANDS = [(85, "Strong Buy"), (70, "Good Opportunity"), (55, "Proceed Carefully"), (0, "Do Not Invest")]

ANALYSIS_STEPS = [
    ("fetching-listing", "Fetching listing data"),
    ("analyzing-safety", "Analyzing neighborhood safety"),
    ("analyzing-demographics", "Gathering demographics"),
    ("calculating-score", "Calculating investment score"),
]

DEFAULT_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash"
DEFAULT_TIMEOUT_S = 60.0

US_STATES = [
    "Alabama", "Alaska", "Arizona", "Arkansas", "California", "Colorado", "Connecticut",
    "Delaware", "Florida", "Georgia", "Hawaii", "Idaho", "Illinois", "Indiana", "Iowa",
    "Kansas", "Kentucky", "Louisiana", "Maine", "Maryland", "Massachusetts", "Michigan",
    "Minnesota", "Mississippi", "Missouri", "Montana", "Nebraska", "Nevada", "New Hampshire",
    "New Jersey", "New Mexico", "New York", "North Carolina", "North Dakota", "Ohio",
    "Oklahoma", "Oregon", "Pennsylvania", "Rhode Island", "South Carolina", "South Dakota",
    "Tennessee", "Texas", "Utah", "Vermont", "Virginia", "Washington", "West Virginia",
    "Wisconsin", "Wyoming",
]
PROPERTY_TYPES = ["Single-family", "Condo", "Multi-family", "Townhome", "Duplex", "Triplex", "Fourplex"]
BEDROOMS = ["1", "2", "3", "4", "5", "6+"]
BATHROOMS = ["1", "1.5", "2", "2.5", "3", "3.5", "4", "4.5", "5+"]
