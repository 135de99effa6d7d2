"""Unit tests for the Onboarding module."""

import pytest
from pydantic import StrictStr

from homekeep.onboarding import (
    ConditionalRule,
    InvalidOnboardingMetadataError,
    OnboardingFlow,
    OnboardingFlowError,
    OnboardingMetadata,
    OnboardingRegistry,
    default_label,
    extract_questions,
    get_onboarding,
    with_onboarding,
)
from homekeep.registry import UnknownSubtypeError
from homekeep.schema import (
    MAINTAINABLE_DATA_SCHEMA,
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    ObjectSchema,
    SubtypeSchemaEntry,
    field,
)
from homekeep.subtypes.system.heat import HEAT_METADATA_SCHEMA

HEAT_QUESTION_ORDER = [
    "metadata.heatSource",
    "metadata.fuel",
    "condition",
    "location",
    "metadata.age",
    "metadata.maintenanceFrequency",
    "metadata.estimatedCost",
]


class TestOnboardingMetadata:
    """Tests for the OnboardingMetadata model."""

    @pytest.mark.unit
    def test_camel_and_snake_case(self):
        """Both key styles are accepted."""
        camel = OnboardingMetadata.model_validate(
            {"order": 1, "required": True, "question": "Q?", "helpText": "Help"}
        )
        snake = OnboardingMetadata.model_validate(
            {"order": 1, "required": True, "question": "Q?", "help_text": "Help"}
        )
        assert camel.help_text == snake.help_text == "Help"

    @pytest.mark.unit
    def test_unknown_keys_kept(self):
        """Extra presentation hints pass through."""
        metadata = OnboardingMetadata.model_validate(
            {"order": 1, "required": False, "question": "Q?", "icon": "flame"}
        )
        assert metadata.to_dict()["icon"] == "flame"

    @pytest.mark.unit
    def test_to_dict_uses_camel_case(self):
        """Serialised metadata uses camelCase keys."""
        metadata = OnboardingMetadata(
            order=2, required=True, question="Q?", default_value="good"
        )
        assert metadata.to_dict()["defaultValue"] == "good"

    @pytest.mark.unit
    def test_conditional_rule(self):
        """Rules match and negate on dotted paths."""
        rule = ConditionalRule(depends_on="metadata.kind", values=["a"])
        assert rule.is_met({"metadata": {"kind": "a"}})
        assert not rule.is_met({"metadata": {"kind": "b"}})
        assert not rule.is_met({})

        negated = ConditionalRule(depends_on="metadata.kind", values=["a"], negate=True)
        assert not negated.is_met({"metadata": {"kind": "a"}})
        assert negated.is_met({})


class TestSideTable:
    """Tests for attaching and looking up metadata."""

    @pytest.mark.unit
    def test_attach_returns_same_definition(self):
        """attach() hands back the definition it was given."""
        table = OnboardingRegistry()
        definition = field(StrictStr, default=None)
        result = table.attach(definition, {"order": 1, "required": False, "question": "Q?"})
        assert result is definition
        assert table.lookup(definition).question == "Q?"
        assert definition in table

    @pytest.mark.unit
    def test_lookup_unannotated(self):
        """Unannotated definitions have no metadata."""
        assert OnboardingRegistry().lookup(field(StrictStr)) is None

    @pytest.mark.unit
    def test_identity_not_equality(self):
        """Equal but distinct definitions do not share metadata."""
        table = OnboardingRegistry()
        first = field(StrictStr, default=None)
        second = field(StrictStr, default=None)
        table.attach(first, {"order": 1, "required": False, "question": "Q?"})
        assert table.lookup(second) is None

    @pytest.mark.unit
    def test_reattach_replaces(self):
        """The latest attachment wins."""
        table = OnboardingRegistry()
        definition = field(StrictStr, default=None)
        table.attach(definition, {"order": 1, "required": False, "question": "Old?"})
        table.attach(definition, {"order": 1, "required": False, "question": "New?"})
        assert table.lookup(definition).question == "New?"
        assert len(table) == 1

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "metadata",
        [
            {"required": True, "question": "Q?"},
            {"order": 1, "question": "Q?"},
            {"order": 1, "required": True},
            {"order": "first", "required": True, "question": "Q?"},
        ],
    )
    def test_invalid_metadata_raises(self, metadata):
        """order, required and question are mandatory."""
        with pytest.raises(InvalidOnboardingMetadataError) as exc_info:
            OnboardingRegistry().attach(field(StrictStr), metadata)
        assert str(exc_info.value).startswith("Invalid onboarding metadata")
        assert isinstance(exc_info.value, ValueError)

    @pytest.mark.unit
    def test_annotation_survives_extension(self):
        """Metadata follows a definition into extended schemas."""
        fuel = HEAT_METADATA_SCHEMA.shape["fuel"]
        extended = HEAT_METADATA_SCHEMA.extend("CustomHeat", rating=field(StrictStr))
        assert get_onboarding(extended.shape["fuel"]) is get_onboarding(fuel)

    @pytest.mark.unit
    def test_base_schema_is_unannotated(self):
        """Attaching to one subtype never annotates the base schema."""
        for definition in MAINTAINABLE_DATA_SCHEMA.shape.values():
            assert get_onboarding(definition) is None


class TestExtractQuestions:
    """Tests for question extraction."""

    @pytest.fixture
    def table(self):
        return OnboardingRegistry()

    @pytest.mark.unit
    def test_heat_questions(self, registry):
        """Heat yields seven ordered questions and hides subtype."""
        questions = extract_questions(registry.resolve("heat"))
        assert [q.field for q in questions] == HEAT_QUESTION_ORDER
        assert "subtype" not in [q.field for q in questions]

    @pytest.mark.unit
    def test_heat_subtype_is_annotated_but_skipped(self, registry):
        """The subtype field carries metadata with skip set."""
        metadata = get_onboarding(registry.resolve("heat").shape["subtype"])
        assert metadata.skip is True
        assert metadata.order == 0

    @pytest.mark.unit
    def test_deterministic(self, registry):
        """Repeated extraction gives the same result."""
        schema = registry.resolve("heat")
        first = [q.field for q in extract_questions(schema)]
        second = [q.field for q in extract_questions(schema)]
        assert first == second

    @pytest.mark.unit
    def test_unannotated_subtype_has_no_questions(self, registry):
        """Subtypes without annotations produce an empty list."""
        assert extract_questions(registry.resolve("dishwasher")) == []

    @pytest.mark.unit
    def test_ties_keep_declaration_order(self, table):
        """Equal orders keep top-level fields before metadata fields."""
        top = field(StrictStr, default=None)
        nested = field(StrictStr, default=None)
        later = field(StrictStr, default=None)
        table.attach(top, {"order": 1, "required": False, "question": "Top?"})
        table.attach(nested, {"order": 1, "required": False, "question": "Nested?"})
        table.attach(later, {"order": 0, "required": False, "question": "First?"})
        schema = ObjectSchema(
            "Tied",
            {
                "top": top,
                "metadata": ObjectSchema("TiedMeta", {"nested": nested}),
                "later": later,
            },
        )
        assert [q.field for q in extract_questions(schema, table)] == [
            "later",
            "top",
            "metadata.nested",
        ]

    @pytest.mark.unit
    def test_only_one_level_of_metadata(self, table):
        """Objects nested inside metadata are not searched."""
        deep = field(StrictStr, default=None)
        table.attach(deep, {"order": 1, "required": False, "question": "Deep?"})
        schema = ObjectSchema(
            "Deep",
            {
                "metadata": ObjectSchema(
                    "DeepMeta", {"inner": ObjectSchema("Inner", {"deep": deep})}
                )
            },
        )
        assert extract_questions(schema, table) == []

    @pytest.mark.unit
    def test_input_kind(self, table):
        """Options make a choice; long help text makes a textarea."""
        choice_field = field(StrictStr, default=None)
        long_field = field(StrictStr, default=None)
        short_field = field(StrictStr, default=None)
        table.attach(
            choice_field,
            {
                "order": 1,
                "required": False,
                "question": "Pick?",
                "options": [{"value": "a", "label": "A"}],
            },
        )
        table.attach(
            long_field,
            {"order": 2, "required": False, "question": "Long?", "helpText": "h" * 101},
        )
        table.attach(
            short_field,
            {"order": 3, "required": False, "question": "Short?", "helpText": "h" * 100},
        )
        schema = ObjectSchema(
            "Kinds", {"a": choice_field, "b": long_field, "c": short_field}
        )
        kinds = [q.input_kind for q in extract_questions(schema, table)]
        assert kinds == ["choice", "textarea", "text"]

    @pytest.mark.unit
    def test_question_to_dict(self, registry):
        """Questions serialise with their field path."""
        question = extract_questions(registry.resolve("heat"))[0]
        data = question.to_dict()
        assert data["field"] == "metadata.heatSource"
        assert data["inputKind"] == "choice"
        assert data["order"] == 1


class TestDefaultLabel:
    """Tests for default display labels."""

    @pytest.mark.unit
    def test_known_labels(self, registry):
        """Known subtypes use the curated labels."""
        assert default_label("heat", registry) == "Heat System"
        assert default_label("washing-machine", registry) == "Washing Machine"

    @pytest.mark.unit
    def test_fallback(self, empty_registry):
        """Unknown subtypes are capitalised with dashes as spaces."""
        assert default_label("water-softener", empty_registry) == "Water softener"

    @pytest.mark.unit
    def test_entry_label_wins(self, empty_registry):
        """An entry's own label takes precedence."""
        empty_registry.register(
            SubtypeSchemaEntry(
                type="structure",
                subtype="roof",
                metadata_schema=MAINTAINABLE_METADATA_BASE_SCHEMA,
                label="Main Roof",
            )
        )
        assert default_label("roof", empty_registry) == "Main Roof"


class TestOnboardingFlow:
    """Tests for the progressive onboarding flow."""

    @pytest.fixture
    def flow(self, registry):
        return OnboardingFlow("heat", registry=registry)

    @pytest.mark.unit
    def test_initial_state(self, flow):
        """The flow starts at the first question with defaults filled in."""
        assert flow.current.field == "metadata.heatSource"
        assert flow.position == 0
        assert len(flow.visible_questions) == 7
        assert flow.answers == {
            "type": "system",
            "subtype": "heat",
            "label": "Heat System",
            "condition": "good",
            "metadata": {"maintenanceFrequency": "annually"},
        }

    @pytest.mark.unit
    def test_required_blocks_advance(self, flow):
        """Unanswered required questions cannot be passed."""
        with pytest.raises(OnboardingFlowError):
            flow.advance()
        with pytest.raises(OnboardingFlowError):
            flow.skip()
        assert flow.current.field == "metadata.heatSource"

    @pytest.mark.unit
    def test_answer_must_be_an_option(self, flow):
        """Choice questions only accept their options."""
        with pytest.raises(OnboardingFlowError):
            flow.answer("fireplace")

    @pytest.mark.unit
    def test_conditional_question_hidden(self, flow):
        """Heat pumps skip the fuel question."""
        flow.answer("heat-pump")
        assert flow.current.field == "condition"
        assert "metadata.fuel" not in [q.field for q in flow.visible_questions]
        assert flow.position == 1

    @pytest.mark.unit
    def test_back(self, flow):
        """back() returns to the previous visible question."""
        with pytest.raises(OnboardingFlowError):
            flow.back()
        flow.answer("furnace")
        assert flow.current.field == "metadata.fuel"
        flow.back()
        assert flow.current.field == "metadata.heatSource"

    @pytest.mark.unit
    def test_full_run(self, flow):
        """Answering, skipping and defaults combine into valid data."""
        flow.answer("heat-pump")
        flow.advance()  # condition keeps its default
        flow.skip()  # location
        flow.answer("recent")
        flow.advance()  # maintenanceFrequency keeps its default
        flow.skip()  # estimatedCost
        assert flow.is_complete
        assert flow.skipped == {"location", "metadata.estimatedCost"}

        result = flow.submit()
        assert result.success, result.errors
        assert result.data == {
            "type": "system",
            "subtype": "heat",
            "label": "Heat System",
            "condition": "good",
            "metadata": {
                "heatSource": "heat-pump",
                "age": "recent",
                "maintenanceFrequency": "annually",
            },
        }

    @pytest.mark.unit
    def test_hidden_answers_dropped_on_submit(self, flow):
        """Answers to questions that became hidden are not submitted."""
        flow.answer("furnace")
        flow.answer("oil")
        flow.back()
        flow.back()
        flow.answer("heat-pump")
        assert flow.current.field == "condition"
        while not flow.is_complete:
            if flow.current.metadata.skipable:
                flow.skip()
            else:
                flow.advance()
        result = flow.submit()
        assert result.success
        assert "fuel" not in result.data["metadata"]

    @pytest.mark.unit
    def test_submit_requires_completion(self, flow):
        """Submitting early is an error."""
        with pytest.raises(OnboardingFlowError):
            flow.submit()

    @pytest.mark.unit
    def test_complete_flow_rejects_transitions(self, registry):
        """A subtype without questions is complete immediately."""
        flow = OnboardingFlow("dishwasher", registry=registry)
        assert flow.is_complete
        with pytest.raises(OnboardingFlowError):
            flow.advance()
        assert flow.submit().data == {
            "type": "appliance",
            "subtype": "dishwasher",
            "label": "Dishwasher",
        }

    @pytest.mark.unit
    def test_unknown_subtype(self, registry):
        """Flows need a registered subtype."""
        with pytest.raises(UnknownSubtypeError):
            OnboardingFlow("toaster", registry=registry)


class TestWithOnboarding:
    """Tests for the default side-table helpers."""

    @pytest.mark.unit
    def test_round_trip(self):
        """with_onboarding and get_onboarding share the default table."""
        definition = with_onboarding(
            field(StrictStr, default=None),
            {"order": 9, "required": False, "question": "Anything else?"},
        )
        assert get_onboarding(definition).order == 9
