"""Tests for the constraint registry."""

import pytest

from tagcheck.registry import ConstraintRegistry
from tagcheck.types import ConfigurationError, ConstraintError


def always_ok(value, param):
    return None


class TestConstraintRegistry:
    def test_with_builtins(self):
        registry = ConstraintRegistry.with_builtins()
        for name in ("nonzero", "nonnil", "len", "min", "max", "regexp"):
            assert registry.is_registered(name)
        assert len(registry) == 6

    def test_empty_registry(self):
        registry = ConstraintRegistry()
        assert registry.list_registered() == []
        assert registry.get("nonzero") is None

    def test_register_and_get(self):
        registry = ConstraintRegistry()
        registry.register("ok", always_ok)
        assert registry.get("ok") is always_ok
        assert "ok" in registry

    def test_register_replaces(self):
        registry = ConstraintRegistry.with_builtins()

        def strict(value, param):
            return ConstraintError(message="nope")

        registry.register("nonzero", strict)
        assert registry.get("nonzero") is strict

    def test_empty_name_rejected(self):
        registry = ConstraintRegistry()
        with pytest.raises(ConfigurationError):
            registry.register("", always_ok)

    def test_missing_function_rejected(self):
        registry = ConstraintRegistry()
        with pytest.raises(ConfigurationError):
            registry.register("thing", None)
        with pytest.raises(ConfigurationError):
            registry.register("thing", "not callable")
        assert not registry.is_registered("thing")

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            ConstraintRegistry().register("", always_ok)

    def test_copy_is_independent(self):
        original = ConstraintRegistry.with_builtins()
        clone = original.copy()

        clone.register("custom", always_ok)
        assert clone.is_registered("custom")
        assert not original.is_registered("custom")

        original.register("other", always_ok)
        assert not clone.is_registered("other")

    def test_list_registered_is_sorted(self):
        registry = ConstraintRegistry()
        registry.register("b", always_ok)
        registry.register("a", always_ok)
        assert registry.list_registered() == ["a", "b"]
