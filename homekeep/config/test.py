"""Tests for configuration management."""

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    _convert_value,
    get_environment,
    get_environment_info,
    get_subtype_modules,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("HOMEKEEP_JSON_INDENT", raising=False)
        assert get_environment(EnvVar.HOMEKEEP_JSON_INDENT) == 2

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("HOMEKEEP_JSON_INDENT", "8")
        assert get_environment(EnvVar.HOMEKEEP_JSON_INDENT, override=4) == 4

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("HOMEKEEP_JSON_INDENT", "4")
        result = get_environment(EnvVar.HOMEKEEP_JSON_INDENT)
        assert result == 4
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_returns_default(self, monkeypatch):
        """Invalid integer value returns default."""
        monkeypatch.setenv("HOMEKEEP_JSON_INDENT", "wide")
        assert get_environment(EnvVar.HOMEKEEP_JSON_INDENT) == 2

    @pytest.mark.unit
    def test_string_type(self, monkeypatch):
        """String type returns as-is."""
        monkeypatch.setenv("HOMEKEEP_LOG_LEVEL", "DEBUG")
        assert get_environment(EnvVar.HOMEKEEP_LOG_LEVEL) == "DEBUG"

    @pytest.mark.unit
    def test_none_default(self, monkeypatch):
        """Unset optional variables resolve to None."""
        monkeypatch.delenv("HOMEKEEP_SUBTYPE_MODULES", raising=False)
        assert get_environment(EnvVar.HOMEKEEP_SUBTYPE_MODULES) is None


class TestConvertValue:
    """Tests for raw string conversion."""

    @pytest.mark.unit
    def test_int_conversion(self):
        """Integer values are parsed."""
        assert _convert_value("4", int, 2) == 4

    @pytest.mark.unit
    def test_int_unparseable_returns_default(self):
        """Unparseable integers fall back to the default."""
        assert _convert_value("wide", int, 2) == 2

    @pytest.mark.unit
    def test_str_passthrough(self):
        """String values are returned unchanged."""
        assert _convert_value("DEBUG", str, "INFO") == "DEBUG"

    @pytest.mark.unit
    def test_none_returns_default(self):
        """Missing value returns the default."""
        assert _convert_value(None, int, 7) == 7


class TestGetEnvironmentInfo:
    """Tests for environment variable metadata."""

    @pytest.mark.unit
    def test_returns_env_config(self):
        """Returns EnvConfig dataclass."""
        info = get_environment_info(EnvVar.HOMEKEEP_JSON_INDENT)
        assert isinstance(info, EnvConfig)
        assert info.name == "HOMEKEEP_JSON_INDENT"
        assert info.default == 2
        assert info.var_type is int
        assert info.category == "cli"

    @pytest.mark.unit
    def test_names_match_members(self):
        """Every member's config name equals the member name."""
        for var in EnvVar:
            assert var.value.name == var.name


class TestListEnvironmentVariables:
    """Tests for listing environment variables."""

    @pytest.mark.unit
    def test_list_all(self):
        """No category returns every variable."""
        assert list_environment_variables() == list(EnvVar)

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Category filter keeps matching variables only."""
        registry_vars = list_environment_variables("registry")
        assert registry_vars == [EnvVar.HOMEKEEP_SUBTYPE_MODULES]

    @pytest.mark.unit
    def test_unknown_category_empty(self):
        """Unknown category yields nothing."""
        assert list_environment_variables("nope") == []


class TestGetSubtypeModules:
    """Tests for extra subtype module parsing."""

    @pytest.mark.unit
    def test_empty_when_unset(self, monkeypatch):
        """No variable means no extra modules."""
        monkeypatch.delenv("HOMEKEEP_SUBTYPE_MODULES", raising=False)
        assert get_subtype_modules() == []

    @pytest.mark.unit
    def test_splits_and_strips(self, monkeypatch):
        """Comma-separated paths are split, stripped and filtered."""
        monkeypatch.setenv(
            "HOMEKEEP_SUBTYPE_MODULES", " acme.sauna , ,acme.pool_pump "
        )
        assert get_subtype_modules() == ["acme.sauna", "acme.pool_pump"]

    @pytest.mark.unit
    def test_override(self, monkeypatch):
        """Override bypasses the environment."""
        monkeypatch.setenv("HOMEKEEP_SUBTYPE_MODULES", "acme.sauna")
        assert get_subtype_modules(override="acme.kiln") == ["acme.kiln"]
