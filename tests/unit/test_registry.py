"""Tests for registration, lookup and health tracking."""

import threading

import pytest
from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure, Success

from repo_lens.doctrine import (
    ComponentSpec,
    ComponentType,
    DoctrineRegistry,
    HealthStatus,
    HierarchyCycleError,
)


class TestGenerateId:
    """Barton number generation."""

    def test_uses_blueprint(self, registry):
        number = registry.generate_id(1, 2, 3)
        assert number.blueprint_id == 39
        assert str(number) == "39.01.02.03"

    def test_no_range_check_at_construction(self, registry):
        number = registry.generate_id(100, 0, 1)
        assert str(number) == "39.100.00.01"
        assert not number.validate()

    def test_custom_blueprint(self):
        registry = DoctrineRegistry(blueprint_id=12)
        number = registry.generate_id(1, 1, 1)
        assert str(number) == "12.01.01.01"
        assert number.validate()


class TestRegistration:
    """Component registration."""

    def test_valid_component_is_green(self, registry):
        component = registry.register_component("A", "Alpha", "module", 1, 1, 1, "First")

        assert str(component.barton_number) == "39.01.01.01"
        assert component.health_status == HealthStatus.GREEN
        assert component.type == ComponentType.MODULE
        assert component.children == []
        assert component.parent_id is None
        assert component.last_updated.tzinfo is not None

    def test_out_of_range_component_is_red(self, registry):
        registry.register_component("A", "Alpha", "module", 1, 1, 1, "First")
        component = registry.register_component("B", "Beta", "module", 100, 1, 1, "Broken")

        assert component.health_status == HealthStatus.RED

        summary = registry.validate_all_components()
        assert summary.invalid >= 1
        assert any("Beta" in error for error in summary.errors)

    def test_unknown_type_rejected(self, registry):
        with pytest.raises(ValueError):
            registry.register_component("A", "Alpha", "widget", 1, 1, 1, "")

    def test_reregistration_last_write_wins(self, registry):
        registry.register_component("A", "Alpha", "module", 1, 1, 1, "First")
        registry.register_component("A", "Alpha v2", "page", 2, 2, 2, "Second")

        components = registry.get_all_components()
        assert len(components) == 1
        assert components[0].name == "Alpha v2"
        assert components[0].type == ComponentType.PAGE
        assert str(components[0].barton_number) == "39.02.02.02"
        assert components[0].description == "Second"

    def test_reregistration_keeps_position_and_children(self, registry):
        registry.register_component("A", "Alpha", "module", 1, 1, 1)
        registry.register_component("B", "Beta", "module", 2, 1, 1)
        registry.register_component("C", "Child", "file", 1, 1, 2, parent_id="A")
        registry.register_component("A", "Alpha v2", "module", 1, 1, 1)

        assert [c.id for c in registry.get_all_components()] == ["A", "B", "C"]
        assert registry.get_component("A").children == ["C"]

    def test_child_appended_to_parent_once(self, registry):
        registry.register_component("P", "Parent", "module", 1, 1, 1)
        registry.register_component("C", "Child", "file", 1, 1, 2, parent_id="P")
        registry.register_component("C", "Child", "file", 1, 1, 2, parent_id="P")

        assert registry.get_component("P").children == ["C"]

    def test_reparenting_moves_child(self, registry):
        registry.register_component("P1", "Parent 1", "module", 1, 1, 1)
        registry.register_component("P2", "Parent 2", "module", 2, 1, 1)
        registry.register_component("C", "Child", "file", 1, 1, 2, parent_id="P1")
        registry.register_component("C", "Child", "file", 1, 1, 2, parent_id="P2")

        assert registry.get_component("P1").children == []
        assert registry.get_component("P2").children == ["C"]
        assert registry.get_component("C").parent_id == "P2"

    def test_dangling_parent_registers_as_root(self, registry):
        component = registry.register_component("C", "Child", "file", 1, 1, 2, parent_id="missing")

        assert registry.get_component("C") is component
        assert component.parent_id is None
        assert "C" in registry.get_hierarchy()

    def test_cycle_rejected(self, family_registry):
        with pytest.raises(HierarchyCycleError):
            family_registry.register_component("root", "Root", "module", 1, 1, 1, parent_id="leaf")

        # Registry unchanged
        assert family_registry.get_component("root").parent_id is None
        assert "root" not in family_registry.get_component("leaf").children

    def test_self_parent_rejected_on_reregistration(self, registry):
        registry.register_component("A", "Alpha", "module", 1, 1, 1)
        with pytest.raises(HierarchyCycleError):
            registry.register_component("A", "Alpha", "module", 1, 1, 1, parent_id="A")

    def test_register_spec(self, registry):
        spec = ComponentSpec(id="A", name="Alpha", type="page", module=1, submodule=1, file=3)
        component = registry.register_spec(spec)
        assert component.type == ComponentType.PAGE
        assert str(component.barton_number) == "39.01.01.03"

    def test_spec_is_frozen(self):
        spec = ComponentSpec(id="A", name="Alpha", type="page", module=1, submodule=1, file=3)
        with pytest.raises(PydanticValidationError):
            spec.name = "Other"


class TestTryRegister:
    """Strict registration with Result values."""

    def test_success(self, registry):
        result = registry.try_register("A", "Alpha", "module", 1, 1, 1, "First")
        assert isinstance(result, Success)
        assert result.unwrap().id == "A"

    def test_unknown_parent_refused(self, registry):
        result = registry.try_register("C", "Child", "file", 1, 1, 2, "", parent_id="missing")

        assert isinstance(result, Failure)
        assert result.failure().parent_id == "missing"
        assert "C" not in registry

    def test_cycle_refused(self, family_registry):
        result = family_registry.try_register("root", "Root", "module", 1, 1, 1, "", parent_id="mid")

        assert isinstance(result, Failure)
        assert result.failure().component_id == "root"


class TestLookup:
    """Lookup operations."""

    def test_get_component_missing(self, registry):
        assert registry.get_component("nope") is None

    def test_by_barton_number_first_match(self, registry):
        registry.register_component("first", "First", "module", 1, 1, 1)
        registry.register_component("second", "Second", "page", 1, 1, 1)

        assert registry.get_component_by_barton_number("39.01.01.01").id == "first"
        assert registry.get_component_by_barton_number("39.09.09.09") is None

    def test_by_type(self, family_registry):
        modules = family_registry.get_components_by_type(ComponentType.MODULE)
        assert {c.id for c in modules} == {"root", "other"}
        assert [c.id for c in family_registry.get_components_by_type("file")] == ["leaf"]

    def test_len_and_contains(self, family_registry):
        assert len(family_registry) == 5
        assert "leaf" in family_registry
        assert "ghost" not in family_registry


class TestHealth:
    """Health mutation."""

    def test_update_health(self, registry):
        component = registry.register_component("A", "Alpha", "module", 1, 1, 1)
        before = component.last_updated

        assert registry.update_component_health("A", "yellow") is True
        updated = registry.get_component("A")
        assert updated.health_status == HealthStatus.YELLOW
        assert updated.last_updated >= before

    def test_update_unknown_is_noop(self, registry):
        assert registry.update_component_health("nope", HealthStatus.RED) is False
        assert len(registry) == 0

    def test_update_rejects_unknown_status(self, registry):
        registry.register_component("A", "Alpha", "module", 1, 1, 1)
        with pytest.raises(ValueError):
            registry.update_component_health("A", "purple")

    def test_health_override_does_not_change_validity(self, registry):
        registry.register_component("B", "Beta", "module", 100, 1, 1)
        registry.update_component_health("B", "green")

        assert registry.get_component("B").health_status == HealthStatus.GREEN
        assert registry.validate_all_components().invalid == 1

    def test_presentation_helpers(self, registry):
        assert registry.get_health_icon("green") == "🟢"
        assert "red" in registry.get_health_color(HealthStatus.RED)


class TestUnregister:
    """Removal."""

    def test_unregister_detaches_and_orphans(self, family_registry):
        removed = family_registry.unregister_component("mid")

        assert removed.id == "mid"
        assert "mid" not in family_registry
        assert family_registry.get_component("root").children == ["sibling"]
        assert family_registry.get_component("leaf").parent_id is None
        assert set(family_registry.get_hierarchy()) == {"root", "other", "leaf"}

    def test_unregister_unknown(self, registry):
        assert registry.unregister_component("nope") is None


def test_concurrent_registration(registry):
    """Parallel registrations under one parent all land exactly once."""
    registry.register_component("P", "Parent", "module", 1, 1, 1)

    def worker(start):
        for i in range(start, start + 50):
            registry.register_component(f"c{i}", f"Child {i}", "file", 1, 1, i % 99 + 1, parent_id="P")

    threads = [threading.Thread(target=worker, args=(n * 50,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    children = registry.get_component("P").children
    assert len(children) == 200
    assert len(set(children)) == 200
    assert len(registry) == 201


def test_stats(family_registry):
    stats = family_registry.get_stats()

    assert stats["total_components"] == 5
    assert stats["roots"] == 2
    assert stats["types"]["module"] == 2
    assert stats["health"] == {"green": 5}
