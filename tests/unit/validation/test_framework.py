"""Tests for validation framework core functionality."""

import pytest

from bundledeps.config import BundleDepsConfig, ValidationConfig
from bundledeps.exceptions import SelfDependencyError
from bundledeps.validation.framework import (
    ValidationContext,
    ValidationFramework,
    ValidationIssue,
    ValidationResult,
    ValidationRule,
    ValidationStatus,
)


@pytest.fixture
def sample_config():
    """Sample configuration for testing."""
    return BundleDepsConfig()


@pytest.fixture
def framework(sample_config):
    framework = ValidationFramework(sample_config)
    framework.create_default_rules()
    return framework


class RecordingRule(ValidationRule):
    """Rule that records being run."""

    def __init__(self, rule_name, calls):
        self._name = rule_name
        self.calls = calls

    @property
    def name(self) -> str:
        return self._name

    def check(self, context: ValidationContext) -> None:
        self.calls.append(self._name)


class FailingRule(RecordingRule):
    """Rule that records being run, then fails."""

    def check(self, context: ValidationContext) -> None:
        super().check(context)
        raise SelfDependencyError("Module 'x' depends on itself via <uses-split>.", "x")


class TestValidationIssue:
    """Test ValidationIssue class."""

    def test_string_representation(self):
        issue = ValidationIssue(
            rule="cycle_detection",
            severity=ValidationStatus.FAIL,
            message="Found cyclic dependency between modules: [a, b]",
            kind="CyclicDependency",
        )

        expected = "[FAIL] cycle_detection (CyclicDependency): Found cyclic dependency between modules: [a, b]"
        assert str(issue) == expected


class TestValidationResult:
    """Test ValidationResult class."""

    def test_initial_status(self):
        result = ValidationResult(status=ValidationStatus.PASS)
        assert result.status == ValidationStatus.PASS
        assert result.exit_code == 0
        assert len(result.issues) == 0
        assert len(result.counters) == 0

    def test_add_fail_issue(self):
        result = ValidationResult(status=ValidationStatus.PASS)

        result.add_issue("test", ValidationStatus.FAIL, "Error message", kind="SelfDependency")

        assert result.status == ValidationStatus.FAIL
        assert result.exit_code == 1

    def test_increment_counter(self):
        result = ValidationResult(status=ValidationStatus.PASS)

        result.increment_counter("test_counter")
        result.increment_counter("test_counter", 5)

        assert result.counters["test_counter"] == 6

    def test_to_dict(self):
        result = ValidationResult(status=ValidationStatus.PASS)
        result.increment_counter("modules_checked", 2)
        result.add_issue("delivery_ordering", ValidationStatus.FAIL, "Bad ordering",
                         kind="InvalidDeliveryOrdering", modules=("a", "b"))

        assert result.to_dict() == {
            "status": "fail",
            "exit_code": 1,
            "counters": {"modules_checked": 2},
            "issues": [
                {
                    "rule": "delivery_ordering",
                    "severity": "fail",
                    "kind": "InvalidDeliveryOrdering",
                    "message": "Bad ordering",
                    "modules": ["a", "b"],
                }
            ],
        }


class TestValidationContext:
    """Test ValidationContext class."""

    def test_dependencies_before_build(self):
        context = ValidationContext(modules=())

        with pytest.raises(RuntimeError):
            context.dependencies


class TestValidationFramework:
    """Test ValidationFramework class."""

    def test_valid_bundle(self, framework, make_module):
        result = framework.validate([
            make_module("base"),
            make_module("a", "b"),
            make_module("b"),
            make_module("c", "a", on_demand=True),
        ])

        assert result.status == ValidationStatus.PASS
        assert result.issues == []
        assert result.counters == {
            "modules_checked": 4,
            "dependencies_checked": 2,
            "on_demand_modules": 1,
        }

    def test_failure_recorded_as_issue(self, framework, make_module):
        result = framework.validate([make_module("base"), make_module("a", "b"), make_module("b", on_demand=True)])

        assert result.status == ValidationStatus.FAIL
        assert result.exit_code == 1
        assert len(result.issues) == 1

        issue = result.issues[0]
        assert issue.rule == "delivery_ordering"
        assert issue.kind == "InvalidDeliveryOrdering"
        assert issue.modules == ("a", "b")
        assert issue.message == "Install-time module 'a' declares dependency on on-demand module 'b'."

    def test_cycle_issue(self, framework, make_module):
        result = framework.validate([
            make_module("base"),
            make_module("a", "b"),
            make_module("b", "c"),
            make_module("c", "a"),
        ])

        assert result.issues[0].rule == "cycle_detection"
        assert result.issues[0].modules == ("a", "b", "c")

    def test_missing_base_uses_configured_name(self, make_module):
        config = BundleDepsConfig(validation=ValidationConfig(base_module_name="main"))
        framework = ValidationFramework(config)
        framework.create_default_rules()

        result = framework.validate([make_module("feature")])

        assert result.issues[0].kind == "MissingRootModule"
        assert result.issues[0].message == "Mandatory 'main' module is missing."

    def test_stops_at_first_failure(self, sample_config):
        calls = []
        framework = ValidationFramework(sample_config)
        framework.add_rule(RecordingRule("first", calls))
        framework.add_rule(FailingRule("second", calls))
        framework.add_rule(RecordingRule("third", calls))

        result = framework.validate([])

        assert calls == ["first", "second"]
        assert [issue.rule for issue in result.issues] == ["second"]

    def test_unexpected_errors_propagate(self, sample_config):
        class BrokenRule(ValidationRule):
            @property
            def name(self) -> str:
                return "broken"

            def check(self, context: ValidationContext) -> None:
                context.dependencies

        framework = ValidationFramework(sample_config)
        framework.add_rule(BrokenRule())

        with pytest.raises(RuntimeError):
            framework.validate([])

    def test_repeated_runs_are_independent(self, framework, make_module):
        modules = [make_module("base"), make_module("a", "a")]

        first = framework.validate(modules)
        second = framework.validate(modules)

        assert first.to_dict() == second.to_dict()
