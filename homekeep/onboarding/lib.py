"""Onboarding annotations, question extraction and the progressive flow.

Field definitions carry no UI information themselves. Instead, onboarding
metadata (question text, order, options...) lives in a side-table keyed by
the identity of the field definition. Because `ObjectSchema.extend()` reuses
definitions by identity, an annotation attached once is visible through every
schema composed from that definition.

The flow turns the ordered questions for a subtype into a headless state
machine: answer, skip, go back, and finally submit the merged answers to
typed validation.
"""

import logging
from collections.abc import Mapping
from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    JsonValue,
    StrictBool,
    StrictInt,
    StrictStr,
    ValidationError,
)
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo

from homekeep.registry import MaintainableRegistry, UnknownSubtypeError, get_registry
from homekeep.schema import ObjectSchema
from homekeep.validation import ValidationResult, validate_typed

logger = logging.getLogger(__name__)


# === ERRORS ===


class InvalidOnboardingMetadataError(ValueError):
    """Raised when onboarding metadata attached to a field is malformed."""


class OnboardingFlowError(RuntimeError):
    """Raised on an illegal transition of an onboarding flow."""


# === METADATA MODELS ===


class Priority(str, Enum):
    """How prominently a question should be presented."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class OnboardingOption(_CamelModel):
    """One selectable answer of a choice question."""

    value: StrictStr
    label: StrictStr
    description: StrictStr | None = None


class ConditionalRule(_CamelModel):
    """Visibility rule for a question.

    The question is shown while the value at ``depends_on`` (a dotted path
    into the answers) is one of ``values``, or is not one of them when
    ``negate`` is set.
    """

    depends_on: StrictStr
    values: list[JsonValue] = Field(min_length=1)
    negate: StrictBool = False

    def is_met(self, answers: Mapping[str, Any]) -> bool:
        matched = _get_path(answers, self.depends_on) in self.values
        return not matched if self.negate else matched


class OnboardingMetadata(_CamelModel):
    """UI annotations for a single field.

    ``order``, ``required`` and ``question`` are mandatory. Unknown keys are
    kept so callers can carry presentation hints of their own.
    """

    model_config = ConfigDict(extra="allow")

    order: StrictInt
    required: StrictBool
    question: StrictStr = Field(min_length=1)
    skipable: StrictBool = False
    skip: StrictBool = False
    priority: Priority | None = None
    placeholder: StrictStr | None = None
    help_text: StrictStr | None = None
    options: list[OnboardingOption] | None = None
    conditional: ConditionalRule | None = None
    default_value: JsonValue = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a camelCase dictionary without unset values."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# === SIDE-TABLE ===


class OnboardingRegistry:
    """Side-table mapping field definitions to onboarding metadata.

    Entries are keyed by object identity; the definition itself is kept
    alongside its metadata so the key stays valid for the table's lifetime.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Any, OnboardingMetadata]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, definition: object) -> bool:
        return self.lookup(definition) is not None

    def attach(
        self,
        definition: FieldInfo,
        metadata: OnboardingMetadata | Mapping[str, Any],
    ) -> FieldInfo:
        """Attach metadata to a field definition.

        Args:
            definition: Field definition to annotate.
            metadata: Metadata model or a mapping (camelCase or snake_case).

        Returns:
            The same definition, unchanged.

        Raises:
            InvalidOnboardingMetadataError: If the metadata does not validate.
        """
        if not isinstance(metadata, OnboardingMetadata):
            try:
                metadata = OnboardingMetadata.model_validate(metadata)
            except ValidationError as exc:
                raise InvalidOnboardingMetadataError(
                    f"Invalid onboarding metadata: {exc}"
                ) from exc
        self._entries[id(definition)] = (definition, metadata)
        return definition

    def lookup(self, definition: object) -> OnboardingMetadata | None:
        """Return the metadata attached to ``definition``, if any."""
        entry = self._entries.get(id(definition))
        if entry is None or entry[0] is not definition:
            return None
        return entry[1]


_default_side_table = OnboardingRegistry()


def get_side_table() -> OnboardingRegistry:
    """Return the process-wide onboarding side-table."""
    return _default_side_table


def with_onboarding(
    definition: FieldInfo, metadata: OnboardingMetadata | Mapping[str, Any]
) -> FieldInfo:
    """Attach metadata to ``definition`` in the default side-table."""
    return _default_side_table.attach(definition, metadata)


def get_onboarding(definition: object) -> OnboardingMetadata | None:
    """Look up metadata for ``definition`` in the default side-table."""
    return _default_side_table.lookup(definition)


# === EXTRACTION ===


@dataclass(frozen=True)
class OnboardingQuestion:
    """A question derived from an annotated field.

    Attributes:
        field: Dotted path of the field, e.g. ``"metadata.fuel"``.
        schema: The field definition, for per-answer validation.
        metadata: Attached onboarding metadata.
    """

    field: str
    schema: FieldInfo
    metadata: OnboardingMetadata

    @property
    def input_kind(self) -> str:
        if self.metadata.options:
            return "choice"
        if self.metadata.help_text and len(self.metadata.help_text) > 100:
            return "textarea"
        return "text"

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "inputKind": self.input_kind,
            **self.metadata.to_dict(),
        }


def extract_questions(
    schema: ObjectSchema, side_table: OnboardingRegistry | None = None
) -> list[OnboardingQuestion]:
    """Collect the ordered onboarding questions of a schema.

    Top-level fields are visited first, then the fields of the nested
    ``metadata`` object. Fields without metadata or marked ``skip`` are left
    out. Questions are sorted by ``order``; ties keep declaration order.

    Args:
        schema: Full subtype schema (see `SubtypeSchemaEntry.schema`).
        side_table: Side-table to read from; defaults to the process-wide one.

    Returns:
        Questions in presentation order.
    """
    table = side_table if side_table is not None else _default_side_table
    candidates: list[tuple[str, Any]] = [
        (name, definition) for name, definition in schema.shape.items()
    ]
    metadata_schema = schema.nested("metadata")
    if metadata_schema is not None:
        candidates.extend(
            (f"metadata.{name}", definition)
            for name, definition in metadata_schema.shape.items()
        )

    questions = []
    for path, definition in candidates:
        if not isinstance(definition, FieldInfo):
            continue
        metadata = table.lookup(definition)
        if metadata is None or metadata.skip:
            continue
        questions.append(OnboardingQuestion(path, definition, metadata))
    questions.sort(key=lambda question: question.metadata.order)
    return questions


# === LABELS ===


KNOWN_LABELS: dict[str, str] = {
    "heat": "Heat System",
    "cooling": "Cooling System",
    "refrigerator": "Refrigerator",
    "dishwasher": "Dishwasher",
    "washing-machine": "Washing Machine",
    "dryer": "Dryer",
    "oven": "Oven",
    "microwave": "Microwave",
    "roof": "Roof",
    "foundation": "Foundation",
    "electrical": "Electrical System",
    "plumbing": "Plumbing System",
}


def default_label(subtype: str, registry: MaintainableRegistry | None = None) -> str:
    """Default display label for a new item of ``subtype``."""
    registry = registry if registry is not None else get_registry()
    entry = registry.get(subtype)
    if entry is not None and entry.label:
        return entry.label
    if subtype in KNOWN_LABELS:
        return KNOWN_LABELS[subtype]
    return subtype[:1].upper() + subtype[1:].replace("-", " ")


# === PATH HELPERS ===


_MISSING = object()


def _get_path(data: Mapping[str, Any], path: str) -> Any:
    current: Any = data
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _set_path(data: dict[str, Any], path: str, value: Any) -> None:
    *parents, leaf = path.split(".")
    current = data
    for key in parents:
        child = current.get(key)
        if not isinstance(child, dict):
            child = current[key] = {}
        current = child
    current[leaf] = value


def _delete_path(data: dict[str, Any], path: str) -> None:
    *parents, leaf = path.split(".")
    current: Any = data
    for key in parents:
        current = current.get(key)
        if not isinstance(current, dict):
            return
    current.pop(leaf, None)


def _has_value(value: Any) -> bool:
    return value is not _MISSING and value not in (None, "", [], {})


# === FLOW ===


class OnboardingFlow:
    """Progressive question-by-question onboarding for one subtype.

    Example:
        >>> flow = OnboardingFlow("heat")
        >>> flow.current.field
        'metadata.heatSource'
        >>> flow.answer("furnace")
        >>> flow.current.field
        'metadata.fuel'
    """

    def __init__(
        self,
        subtype: str,
        registry: MaintainableRegistry | None = None,
        side_table: OnboardingRegistry | None = None,
    ) -> None:
        self._registry = registry if registry is not None else get_registry()
        entry = self._registry.get(subtype)
        if entry is None:
            raise UnknownSubtypeError(subtype)
        self.entry = entry
        self.questions = extract_questions(entry.schema, side_table)
        self.answers: dict[str, Any] = {
            "type": entry.type.value,
            "subtype": entry.subtype,
            "label": default_label(subtype, self._registry),
        }
        for question in self.questions:
            if question.metadata.default_value is not None:
                _set_path(
                    self.answers,
                    question.field,
                    deepcopy(question.metadata.default_value),
                )
        self.skipped: set[str] = set()
        self._cursor = 0
        self._settle_forward()

    # --- state ---

    def _is_visible(self, question: OnboardingQuestion) -> bool:
        rule = question.metadata.conditional
        return rule is None or rule.is_met(self.answers)

    def _settle_forward(self) -> None:
        while self._cursor < len(self.questions) and not self._is_visible(
            self.questions[self._cursor]
        ):
            self._cursor += 1

    @property
    def visible_questions(self) -> list[OnboardingQuestion]:
        return [q for q in self.questions if self._is_visible(q)]

    @property
    def current(self) -> OnboardingQuestion | None:
        if self._cursor >= len(self.questions):
            return None
        return self.questions[self._cursor]

    @property
    def position(self) -> int:
        """Zero-based index of the current question among visible ones."""
        return sum(
            1 for q in self.questions[: self._cursor] if self._is_visible(q)
        )

    @property
    def is_complete(self) -> bool:
        return self.current is None

    def value_of(self, question: OnboardingQuestion) -> Any:
        value = _get_path(self.answers, question.field)
        return None if value is _MISSING else value

    # --- transitions ---

    def _require_current(self) -> OnboardingQuestion:
        question = self.current
        if question is None:
            raise OnboardingFlowError("Onboarding is already complete")
        return question

    def answer(self, value: Any) -> None:
        """Record an answer for the current question and advance."""
        question = self._require_current()
        options = question.metadata.options
        if options and value not in [option.value for option in options]:
            allowed = ", ".join(option.value for option in options)
            raise OnboardingFlowError(
                f"'{value}' is not an option for {question.field} (expected one of {allowed})"
            )
        _set_path(self.answers, question.field, value)
        self.skipped.discard(question.field)
        self.advance()

    def advance(self) -> None:
        """Move to the next visible question.

        Raises:
            OnboardingFlowError: If the current question is required, not
                skipable and unanswered.
        """
        question = self._require_current()
        metadata = question.metadata
        if (
            metadata.required
            and not metadata.skipable
            and not _has_value(_get_path(self.answers, question.field))
        ):
            raise OnboardingFlowError(f"Question {question.field} requires an answer")
        self._cursor += 1
        self._settle_forward()

    def skip(self) -> None:
        """Skip the current question, clearing any answer it had."""
        question = self._require_current()
        if not question.metadata.skipable:
            raise OnboardingFlowError(f"Question {question.field} cannot be skipped")
        _delete_path(self.answers, question.field)
        self.skipped.add(question.field)
        logger.debug(f"Skipped onboarding question {question.field}")
        self._cursor += 1
        self._settle_forward()

    def back(self) -> None:
        """Return to the previous visible question."""
        cursor = self._cursor - 1
        while cursor >= 0 and not self._is_visible(self.questions[cursor]):
            cursor -= 1
        if cursor < 0:
            raise OnboardingFlowError("Already at the first question")
        self._cursor = cursor

    def submit(self) -> ValidationResult:
        """Validate the collected answers against the subtype schema.

        Answers to questions hidden by their conditional rule are dropped.

        Raises:
            OnboardingFlowError: If questions remain.
        """
        if not self.is_complete:
            raise OnboardingFlowError(
                f"Onboarding incomplete: {self._require_current().field} is pending"
            )
        answers = deepcopy(self.answers)
        for question in self.questions:
            if not self._is_visible(question):
                _delete_path(answers, question.field)
        return validate_typed(answers, self.entry.subtype, registry=self._registry)


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
