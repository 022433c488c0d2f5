"""Shared fixtures for tagcheck tests."""

import pytest

import tagcheck


@pytest.fixture(autouse=True)
def fresh_default_validator(monkeypatch):
    """Isolate the shared default Validator and its environment per test."""
    for name in ("TAGCHECK_METADATA_KEY", "TAGCHECK_ALIAS_NAMING", "TAGCHECK_ALIAS_KEY"):
        monkeypatch.delenv(name, raising=False)
    tagcheck.reset_default_validator()
    yield
    tagcheck.reset_default_validator()
