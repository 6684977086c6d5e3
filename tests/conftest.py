"""Shared fixtures for bundledeps tests."""

import json

import pytest

from bundledeps.models import BundleModule


@pytest.fixture
def make_module():
    """Factory for bundle modules; ``base`` is the base module by default."""
    def _make(name, *uses_splits, on_demand=False, split_id=None, is_base=None):
        return BundleModule(
            name=name,
            is_base=(name == "base") if is_base is None else is_base,
            on_demand=on_demand,
            split_id=split_id,
            uses_splits=uses_splits,
        )
    return _make


@pytest.fixture
def write_descriptor(tmp_path):
    """Write a bundle descriptor JSON file and return its path."""
    def _write(modules, bundle="app", name="bundle.json"):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"bundle": bundle, "modules": modules}, f, indent=2)
        return path
    return _write
