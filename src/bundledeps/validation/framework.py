"""Core validation framework for bundle module dependencies.

Runs the dependency checks as an ordered list of pluggable rules and reports
the outcome as a ValidationResult for CI pipeline integration. Checks fail
fast, so a result carries at most one issue.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from ..config import BundleDepsConfig
from ..exceptions import ModuleValidationError
from ..graph.adjacency import DependencyMap
from ..models.module import BASE_MODULE_NAME, BundleModule

logger = logging.getLogger(__name__)


class ValidationStatus(str, Enum):
    """Validation status."""
    PASS = "pass"
    FAIL = "fail"


@dataclass
class ValidationIssue:
    """A single validation issue found during validation."""
    rule: str
    severity: ValidationStatus
    message: str
    kind: str | None = None
    modules: tuple[str, ...] = ()

    def __str__(self) -> str:
        kind = f" ({self.kind})" if self.kind else ""
        return f"[{self.severity.value.upper()}] {self.rule}{kind}: {self.message}"


@dataclass
class ValidationResult:
    """Results of a validation run."""
    status: ValidationStatus
    issues: list[ValidationIssue] = field(default_factory=list)
    counters: dict[str, int] = field(default_factory=dict)

    @property
    def exit_code(self) -> int:
        """Exit code for CI: 0 = pass, 1 = fail."""
        return 0 if self.status != ValidationStatus.FAIL else 1

    def add_issue(self, rule: str, severity: ValidationStatus, message: str,
                  kind: str | None = None, modules: tuple[str, ...] = ()) -> None:
        """Add a validation issue."""
        self.issues.append(ValidationIssue(rule, severity, message, kind, modules))

        if severity == ValidationStatus.FAIL:
            self.status = ValidationStatus.FAIL

    def increment_counter(self, name: str, value: int = 1) -> None:
        """Increment a counter."""
        self.counters[name] = self.counters.get(name, 0) + value

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON output."""
        return {
            "status": self.status.value,
            "exit_code": self.exit_code,
            "counters": self.counters,
            "issues": [
                {
                    "rule": issue.rule,
                    "severity": issue.severity.value,
                    "kind": issue.kind,
                    "message": issue.message,
                    "modules": list(issue.modules),
                }
                for issue in self.issues
            ]
        }


@dataclass
class ValidationContext:
    """Working state of a single validation run.

    Created fresh for every run. The dependency map is filled in by the
    dependency map rule and read by the rules that follow it.
    """
    modules: tuple[BundleModule, ...]
    base_module_name: str = BASE_MODULE_NAME
    dependency_map: DependencyMap | None = None

    @property
    def dependencies(self) -> DependencyMap:
        if self.dependency_map is None:
            raise RuntimeError("Dependency map has not been built yet")
        return self.dependency_map


class ValidationRule(ABC):
    """Base class for validation rules."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Rule name for identification."""
        pass

    @abstractmethod
    def check(self, context: ValidationContext) -> None:
        """Execute validation rule.

        Args:
            context: Working state of the current run

        Raises:
            ModuleValidationError: On the first violation found
        """
        pass


class ValidationFramework:
    """Main validation framework."""

    def __init__(self, config: BundleDepsConfig):
        self.config = config
        self.rules: list[ValidationRule] = []

    def add_rule(self, rule: ValidationRule) -> None:
        """Add a validation rule."""
        self.rules.append(rule)

    def validate(self, modules: Iterable[BundleModule]) -> ValidationResult:
        """Run validation on bundle modules.

        Args:
            modules: Modules of the bundle

        Returns:
            ValidationResult with status, issues, and counters
        """
        result = ValidationResult(status=ValidationStatus.PASS)
        context = ValidationContext(
            modules=tuple(modules),
            base_module_name=self.config.validation.base_module_name,
        )

        result.increment_counter("modules_checked", len(context.modules))
        result.increment_counter(
            "dependencies_checked", sum(len(module.uses_splits) for module in context.modules)
        )
        result.increment_counter(
            "on_demand_modules", sum(1 for module in context.modules if module.on_demand)
        )

        logger.info(f"Starting validation of {len(context.modules)} modules")
        logger.info(f"Running {len(self.rules)} validation rules")

        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            try:
                rule.check(context)
            except ModuleValidationError as e:
                logger.info(f"Rule {rule.name} failed: {e}")
                result.add_issue(
                    rule.name,
                    ValidationStatus.FAIL,
                    e.message,
                    kind=e.kind.value,
                    modules=e.modules,
                )
                break

        logger.info(f"Validation completed with status: {result.status.value}")
        return result

    def create_default_rules(self) -> None:
        """Add the default rules in their fixed order."""
        from .rules import default_rules

        for rule in default_rules():
            self.add_rule(rule)
