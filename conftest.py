"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Fresh registry fixtures
- Sample payloads shared by the validation, onboarding and CLI tests
"""

import copy

import pytest
from dotenv import load_dotenv

from homekeep.registry import MaintainableRegistry

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Registries
# =============================================================================


@pytest.fixture
def registry(monkeypatch) -> MaintainableRegistry:
    """A registry loaded with the built-in subtypes only."""
    monkeypatch.delenv("HOMEKEEP_SUBTYPE_MODULES", raising=False)
    return MaintainableRegistry()


@pytest.fixture
def empty_registry() -> MaintainableRegistry:
    """A registry with no subtypes."""
    return MaintainableRegistry(loader=lambda: [])


# =============================================================================
# Sample Payloads
# =============================================================================

_DISHWASHER = {
    "type": "appliance",
    "subtype": "dishwasher",
    "label": "Dishwasher",
    "condition": "good",
    "location": "kitchen",
    "metadata": {"brand": "Samsung"},
}

_REFRIGERATOR = {
    "type": "appliance",
    "subtype": "refrigerator",
    "label": "Kitchen Fridge",
    "condition": "fair",
    "tags": ["kitchen", "energy-star"],
    "metadata": {
        "brand": "LG",
        "capacity": 25.5,
        "style": "french-door",
        "hasIceMaker": True,
        "purchasePrice": 2100,
    },
}

_HEAT = {
    "type": "system",
    "subtype": "heat",
    "label": "Heat System",
    "condition": "good",
    "location": "Basement",
    "metadata": {
        "heatSource": "furnace",
        "fuel": "natural-gas",
        "maintenanceFrequency": "annually",
        "btu": 80000,
    },
}

_PROPERTY = {
    "name": "Maple Street House",
    "address": "123 Maple Street, Springfield",
    "yearBuilt": 1995,
    "squareFootage": 2500,
    "lotSize": 8000,
    "homeType": "single-family",
    "bedrooms": 4,
    "bathrooms": 2.5,
    "stories": 2,
    "garages": 2,
    "notes": "Corner lot",
}


@pytest.fixture
def dishwasher_data() -> dict:
    return copy.deepcopy(_DISHWASHER)


@pytest.fixture
def refrigerator_data() -> dict:
    return copy.deepcopy(_REFRIGERATOR)


@pytest.fixture
def heat_data() -> dict:
    return copy.deepcopy(_HEAT)


@pytest.fixture
def property_data() -> dict:
    return copy.deepcopy(_PROPERTY)


# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests with no I/O")
