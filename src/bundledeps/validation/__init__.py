"""Validation layer for bundle module dependencies."""

from ..graph.adjacency import DependencyMap, build_dependency_map
from .dependencies import ModuleDependencyValidator, validate_modules
from .framework import (
    ValidationContext,
    ValidationFramework,
    ValidationIssue,
    ValidationResult,
    ValidationRule,
    ValidationStatus,
)
from .rules import (
    BaseModulePresenceRule,
    CycleDetectionRule,
    DeliveryOrderingRule,
    DependencyMapRule,
    ReferencedModulesExistRule,
    ReflexiveDependencyRule,
    SplitIdRule,
    UniqueDependencyRule,
    default_rules,
)

__all__ = [
    "DependencyMap",
    "build_dependency_map",
    "ModuleDependencyValidator",
    "validate_modules",
    "ValidationContext",
    "ValidationFramework",
    "ValidationIssue",
    "ValidationResult",
    "ValidationRule",
    "ValidationStatus",
    "BaseModulePresenceRule",
    "SplitIdRule",
    "DependencyMapRule",
    "ReflexiveDependencyRule",
    "UniqueDependencyRule",
    "ReferencedModulesExistRule",
    "CycleDetectionRule",
    "DeliveryOrderingRule",
    "default_rules",
]
