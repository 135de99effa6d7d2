"""Unit tests for the Registry module."""

import logging
import sys
import threading
import types

import pytest

from homekeep.registry import (
    MaintainableRegistry,
    UnknownSubtypeError,
    get_registry,
    list_type_names,
    load_builtin_entries,
)
from homekeep.schema import (
    MAINTAINABLE_METADATA_BASE_SCHEMA,
    MaintainableType,
    SubtypeSchemaEntry,
)
from homekeep.subtypes import SUBTYPE_ENTRIES


def _entry(subtype: str, type: str = "other") -> SubtypeSchemaEntry:
    return SubtypeSchemaEntry(
        type=type, subtype=subtype, metadata_schema=MAINTAINABLE_METADATA_BASE_SCHEMA
    )


class TestInitialization:
    """Tests for lazy, one-time initialization."""

    @pytest.mark.unit
    def test_loader_not_called_on_construction(self):
        """Nothing is loaded until first use."""
        calls = []
        registry = MaintainableRegistry(loader=lambda: calls.append(1) or [])
        assert calls == []
        registry.list_all()
        assert calls == [1]

    @pytest.mark.unit
    def test_loader_called_once(self):
        """Repeated operations never reload."""
        calls = []
        registry = MaintainableRegistry(loader=lambda: calls.append(1) or [_entry("shed")])
        registry.initialize()
        registry.list_all()
        registry.get("shed")
        assert "shed" in registry
        assert len(registry) == 1
        assert calls == [1]

    @pytest.mark.unit
    def test_concurrent_first_use(self):
        """Concurrent first use loads exactly once."""
        calls = []
        started = threading.Event()

        def slow_loader():
            calls.append(1)
            started.wait(0.05)
            return [_entry("shed")]

        registry = MaintainableRegistry(loader=slow_loader)
        results = []
        threads = [
            threading.Thread(target=lambda: results.append(len(registry)))
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert calls == [1]
        assert results == [1] * 8

    @pytest.mark.unit
    def test_failed_load_can_retry(self):
        """A loader error propagates and leaves the registry uninitialized."""
        attempts = []

        def flaky_loader():
            attempts.append(1)
            if len(attempts) == 1:
                raise ImportError("boom")
            return [_entry("shed")]

        registry = MaintainableRegistry(loader=flaky_loader)
        with pytest.raises(ImportError):
            registry.list_all()
        assert registry.list_subtype_names() == ["shed"]


class TestRegistration:
    """Tests for register()."""

    @pytest.mark.unit
    def test_register_new(self, empty_registry):
        """New subtypes are added."""
        assert empty_registry.register(_entry("shed")) is True
        assert empty_registry.list_subtype_names() == ["shed"]

    @pytest.mark.unit
    def test_first_registration_wins(self, empty_registry, caplog):
        """Duplicates are ignored with a warning."""
        original = _entry("shed")
        duplicate = _entry("shed", type="structure")
        empty_registry.register(original)
        with caplog.at_level(logging.WARNING, logger="homekeep.registry.lib"):
            assert empty_registry.register(duplicate) is False
        assert empty_registry.get("shed") is original
        assert "already registered" in caplog.text

    @pytest.mark.unit
    def test_same_entry_twice(self, empty_registry):
        """Registering the same entry again is a no-op."""
        entry = _entry("shed")
        empty_registry.register(entry)
        empty_registry.register(entry)
        assert empty_registry.list_all() == [entry]

    @pytest.mark.unit
    def test_register_rejects_other_objects(self, empty_registry):
        """Only SubtypeSchemaEntry instances can be registered."""
        with pytest.raises(TypeError):
            empty_registry.register({"subtype": "shed"})


class TestLookup:
    """Tests for resolving and listing."""

    @pytest.mark.unit
    def test_resolve_returns_full_schema(self, registry):
        """resolve() returns the entry's composed schema."""
        schema = registry.resolve("refrigerator")
        assert schema is registry.get("refrigerator").schema
        assert "capacity" in schema.nested("metadata").shape

    @pytest.mark.unit
    def test_resolve_every_builtin(self, registry):
        """Every built-in subtype, including annotated ones, resolves."""
        for name in registry.list_subtype_names():
            schema = registry.resolve(name)
            assert schema.model.model_validate(
                {"type": registry.get(name).type.value, "subtype": name}
            )

    @pytest.mark.unit
    def test_resolve_unknown(self, registry):
        """Unknown subtypes raise a LookupError."""
        with pytest.raises(UnknownSubtypeError) as exc_info:
            registry.resolve("toaster")
        assert isinstance(exc_info.value, LookupError)
        assert exc_info.value.subtype == "toaster"
        assert "Unknown subtype: toaster" in str(exc_info.value)

    @pytest.mark.unit
    def test_get_unknown(self, registry):
        """get() returns None for unknown subtypes."""
        assert registry.get("toaster") is None
        assert "toaster" not in registry

    @pytest.mark.unit
    def test_list_all_in_registration_order(self, registry):
        """Entries come back in the order they were loaded."""
        assert registry.list_all() == SUBTYPE_ENTRIES

    @pytest.mark.unit
    def test_list_by_type(self, registry):
        """Entries can be filtered by type."""
        assert registry.list_subtype_names("appliance") == [
            "dishwasher",
            "refrigerator",
            "washing-machine",
        ]
        assert registry.list_subtype_names(MaintainableType.SYSTEM) == ["heat", "cooling"]
        assert registry.list_by_type("vehicle") == []

    @pytest.mark.unit
    def test_list_by_invalid_type(self, registry):
        """Unknown types are a programming error."""
        with pytest.raises(ValueError):
            registry.list_by_type("spaceship")

    @pytest.mark.unit
    def test_subtypes_are_unique(self, registry):
        """No subtype name appears twice."""
        names = registry.list_subtype_names()
        assert len(names) == len(set(names))

    @pytest.mark.unit
    def test_list_type_names(self):
        """All eight types are listed."""
        assert list_type_names()[0] == "appliance"
        assert len(list_type_names()) == 8


class TestLoading:
    """Tests for built-in and configured entry loading."""

    @pytest.fixture
    def extra_module(self):
        module = types.ModuleType("homekeep_test_extra_subtypes")
        module.ENTRY = _entry("hot-tub", type="landscape")
        sys.modules[module.__name__] = module
        yield module
        del sys.modules[module.__name__]

    @pytest.mark.unit
    def test_builtin_entries(self, monkeypatch):
        """Without configuration only built-in entries load."""
        monkeypatch.delenv("HOMEKEEP_SUBTYPE_MODULES", raising=False)
        assert load_builtin_entries() == SUBTYPE_ENTRIES

    @pytest.mark.unit
    def test_extra_module(self, monkeypatch, extra_module):
        """Modules named in HOMEKEEP_SUBTYPE_MODULES are appended."""
        monkeypatch.setenv("HOMEKEEP_SUBTYPE_MODULES", extra_module.__name__)
        registry = MaintainableRegistry()
        assert registry.list_subtype_names()[-1] == "hot-tub"

    @pytest.mark.unit
    def test_extra_module_without_entries(self, monkeypatch, extra_module):
        """A module exporting nothing is a configuration error."""
        del extra_module.ENTRY
        monkeypatch.setenv("HOMEKEEP_SUBTYPE_MODULES", extra_module.__name__)
        with pytest.raises(ImportError):
            MaintainableRegistry().initialize()

    @pytest.mark.unit
    def test_default_registry_is_shared(self):
        """get_registry() returns one instance."""
        assert get_registry() is get_registry()
