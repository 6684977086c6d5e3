"""Module dependency validation rules.

Rules run in the order returned by ``default_rules``: the module-level checks
first, then the dependency map is built, then the checks that read it.
"""

from ..graph.adjacency import build_dependency_map
from ..graph.cycles import check_no_cycles
from .checks import (
    check_has_base_module,
    check_modules_have_unique_dependencies,
    check_no_install_time_to_on_demand_dependencies,
    check_no_reflexive_dependencies,
    check_referenced_modules_exist,
    check_split_ids,
)
from .framework import ValidationContext, ValidationRule


class BaseModulePresenceRule(ValidationRule):
    """Require a base module."""

    @property
    def name(self) -> str:
        return "base_module_presence"

    def check(self, context: ValidationContext) -> None:
        check_has_base_module(context.modules, context.base_module_name)


class SplitIdRule(ValidationRule):
    """Validate split IDs declared in module manifests."""

    @property
    def name(self) -> str:
        return "split_ids"

    def check(self, context: ValidationContext) -> None:
        check_split_ids(context.modules)


class DependencyMapRule(ValidationRule):
    """Build the dependency map, rejecting duplicate modules and explicit base dependencies."""

    @property
    def name(self) -> str:
        return "dependency_map"

    def check(self, context: ValidationContext) -> None:
        context.dependency_map = build_dependency_map(context.modules)


class ReflexiveDependencyRule(ValidationRule):
    """Reject modules depending on themselves."""

    @property
    def name(self) -> str:
        return "reflexive_dependencies"

    def check(self, context: ValidationContext) -> None:
        check_no_reflexive_dependencies(context.dependencies)


class UniqueDependencyRule(ValidationRule):
    """Reject dependencies declared more than once."""

    @property
    def name(self) -> str:
        return "unique_dependencies"

    def check(self, context: ValidationContext) -> None:
        check_modules_have_unique_dependencies(context.dependencies)


class ReferencedModulesExistRule(ValidationRule):
    """Reject dependencies on modules missing from the bundle."""

    @property
    def name(self) -> str:
        return "referenced_modules"

    def check(self, context: ValidationContext) -> None:
        check_referenced_modules_exist(context.dependencies)


class CycleDetectionRule(ValidationRule):
    """Detect cycles in the module dependency graph."""

    @property
    def name(self) -> str:
        return "cycle_detection"

    def check(self, context: ValidationContext) -> None:
        check_no_cycles(context.dependencies)


class DeliveryOrderingRule(ValidationRule):
    """Reject install-time modules depending on on-demand modules."""

    @property
    def name(self) -> str:
        return "delivery_ordering"

    def check(self, context: ValidationContext) -> None:
        check_no_install_time_to_on_demand_dependencies(context.modules, context.dependencies)


def default_rules() -> list[ValidationRule]:
    """Create the default rules in their fixed order."""
    return [
        BaseModulePresenceRule(),
        SplitIdRule(),
        DependencyMapRule(),
        ReflexiveDependencyRule(),
        UniqueDependencyRule(),
        ReferencedModulesExistRule(),
        CycleDetectionRule(),
        DeliveryOrderingRule(),
    ]
