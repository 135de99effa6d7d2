"""Heating system subtype.

Heat is the one subtype with a fully annotated onboarding flow. The heating
source is asked first; the fuel question is hidden for heat pumps, which
have no fuel of their own.
"""

from pydantic import StrictFloat, StrictStr

from homekeep.onboarding import with_onboarding
from homekeep.schema import (
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    Condition,
    MaintainableType,
    SubtypeSchemaEntry,
    at_least,
    choice,
    field,
    max_chars,
)

HEAT_SOURCES = ("furnace", "heat-pump", "boiler", "radiant", "mini-split", "other")
FUELS = ("natural-gas", "propane", "oil", "electric", "wood", "heat-pump")
AGES = ("new", "recent", "older", "very-old", "unknown")
MAINTENANCE_FREQUENCIES = ("annually", "biannually", "as-needed", "unknown")
ESTIMATED_COSTS = ("3k-5k", "5k-8k", "8k-12k", "12k-plus", "unknown")


HEAT_METADATA_SCHEMA = MAINTAINABLE_METADATA_BASE_SCHEMA.extend(
    "HeatMetadata",
    heatSource=with_onboarding(
        field(choice(HEAT_SOURCES), default=None),
        {
            "order": 1,
            "required": True,
            "question": "What type of heating system is this?",
            "options": [
                {"value": "furnace", "label": "Furnace"},
                {"value": "heat-pump", "label": "Heat Pump"},
                {"value": "boiler", "label": "Boiler"},
                {"value": "radiant", "label": "Radiant Heat"},
                {"value": "mini-split", "label": "Mini-Split"},
                {"value": "other", "label": "Other"},
            ],
        },
    ),
    fuel=with_onboarding(
        field(choice(FUELS), default=None),
        {
            "order": 2,
            "required": True,
            "question": "What fuel does this system use?",
            "options": [
                {"value": "natural-gas", "label": "Natural Gas"},
                {"value": "propane", "label": "Propane"},
                {"value": "oil", "label": "Oil"},
                {"value": "electric", "label": "Electric"},
                {"value": "wood", "label": "Wood"},
                {"value": "heat-pump", "label": "Heat Pump (no fuel)"},
            ],
            "conditional": {
                "dependsOn": "metadata.heatSource",
                "values": ["heat-pump"],
                "negate": True,
            },
        },
    ),
    age=with_onboarding(
        field(choice(AGES), default=None),
        {
            "order": 5,
            "required": False,
            "skipable": True,
            "question": "How old is this system?",
            "options": [
                {"value": "new", "label": "New (0-2 years)"},
                {"value": "recent", "label": "Recent (3-7 years)"},
                {"value": "older", "label": "Older (8-15 years)"},
                {"value": "very-old", "label": "Very old (15+ years)"},
                {"value": "unknown", "label": "Don't know"},
            ],
            "helpText": "This helps determine maintenance needs and replacement timeline",
        },
    ),
    maintenanceFrequency=with_onboarding(
        field(choice(MAINTENANCE_FREQUENCIES), default=None),
        {
            "order": 6,
            "required": True,
            "question": "How often should this be maintained?",
            "options": [
                {"value": "annually", "label": "Annually"},
                {"value": "biannually", "label": "Every 2 years"},
                {"value": "as-needed", "label": "As needed"},
                {"value": "unknown", "label": "Don't know"},
            ],
            "defaultValue": "annually",
            "helpText": "Most heating systems need annual maintenance",
        },
    ),
    estimatedCost=with_onboarding(
        field(choice(ESTIMATED_COSTS), default=None),
        {
            "order": 7,
            "required": False,
            "skipable": True,
            "question": "What's the estimated replacement cost?",
            "options": [
                {"value": "3k-5k", "label": "$3,000 - $5,000"},
                {"value": "5k-8k", "label": "$5,000 - $8,000"},
                {"value": "8k-12k", "label": "$8,000 - $12,000"},
                {"value": "12k-plus", "label": "$12,000+"},
                {"value": "unknown", "label": "Don't know"},
            ],
            "helpText": "This helps with budgeting and insurance purposes",
        },
    ),
    # Not asked during onboarding
    brand=field(StrictStr, default=None),
    btu=field(StrictFloat, at_least(0, "BTU rating cannot be negative"), default=None),
    efficiency=field(
        StrictFloat,
        at_least(0, "Efficiency cannot be negative"),
        default=None,
        description="AFUE or HSPF rating",
    ),
)


ENTRY = SubtypeSchemaEntry(
    type=MaintainableType.SYSTEM,
    subtype="heat",
    metadata_schema=HEAT_METADATA_SCHEMA,
    fields={
        "subtype": with_onboarding(
            field(choice(["heat"])),
            {
                "order": 0,
                "required": True,
                "skip": True,
                "question": "System type",
            },
        ),
        "condition": with_onboarding(
            field(choice(Condition), default=None),
            {
                "order": 3,
                "required": True,
                "question": "How would you rate this system's condition?",
                "options": [
                    {"value": "good", "label": "Good", "description": "Works well"},
                    {"value": "fair", "label": "Fair", "description": "Some issues"},
                    {"value": "poor", "label": "Poor", "description": "Needs attention"},
                    {"value": "critical", "label": "Critical", "description": "Broken"},
                ],
                "defaultValue": "good",
            },
        ),
        "location": with_onboarding(
            field(
                StrictStr,
                max_chars(100, "Location must be less than 100 characters"),
                default=None,
            ),
            {
                "order": 4,
                "required": False,
                "skipable": True,
                "question": "Where is this system located?",
                "placeholder": "e.g., Basement, Utility Room, Garage",
                "helpText": "This helps with maintenance scheduling and cost estimates",
            },
        ),
    },
)
