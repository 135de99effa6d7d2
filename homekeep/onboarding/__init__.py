"""Onboarding module - question annotations and progressive data entry.

This module provides:
- `OnboardingMetadata` and the identity-keyed side-table that stores it
- `extract_questions()` to turn an annotated schema into ordered questions
- `OnboardingFlow`, a headless question-by-question state machine

Example usage:
    >>> from homekeep.onboarding import extract_questions
    >>> from homekeep.registry import get_registry
    >>> questions = extract_questions(get_registry().resolve("heat"))
    >>> [q.field for q in questions][:2]
    ['metadata.heatSource', 'metadata.fuel']
"""

from .lib import (
    KNOWN_LABELS,
    ConditionalRule,
    InvalidOnboardingMetadataError,
    OnboardingFlow,
    OnboardingFlowError,
    OnboardingMetadata,
    OnboardingOption,
    OnboardingQuestion,
    OnboardingRegistry,
    Priority,
    default_label,
    extract_questions,
    get_onboarding,
    get_side_table,
    with_onboarding,
)

__all__ = [
    # Errors
    "InvalidOnboardingMetadataError",
    "OnboardingFlowError",
    # Metadata
    "Priority",
    "OnboardingOption",
    "ConditionalRule",
    "OnboardingMetadata",
    # Side-table
    "OnboardingRegistry",
    "get_side_table",
    "with_onboarding",
    "get_onboarding",
    # Extraction
    "OnboardingQuestion",
    "extract_questions",
    # Labels
    "KNOWN_LABELS",
    "default_label",
    # Flow
    "OnboardingFlow",
]
