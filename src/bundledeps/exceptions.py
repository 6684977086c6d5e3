"""Exception hierarchy for bundle dependency validation.

Every validation failure is terminal: checks raise on the first violation they
find and the caller reports the message and stops the build.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Kinds of module dependency validation failures."""
    MISSING_ROOT_MODULE = "MissingRootModule"
    ON_DEMAND_ROOT_MODULE = "OnDemandRootModule"
    IDENTIFIER_MISMATCH = "IdentifierMismatch"
    DUPLICATE_MODULE_ENTRY = "DuplicateModuleEntry"
    EXPLICIT_ROOT_DEPENDENCY = "ExplicitRootDependency"
    SELF_DEPENDENCY = "SelfDependency"
    DUPLICATE_DEPENDENCY_DECLARATION = "DuplicateDependencyDeclaration"
    UNKNOWN_MODULE_REFERENCE = "UnknownModuleReference"
    CYCLIC_DEPENDENCY = "CyclicDependency"
    INVALID_DELIVERY_ORDERING = "InvalidDeliveryOrdering"


class BundleDepsError(Exception):
    """Base exception for bundledeps errors."""
    pass


class BundleLoadError(BundleDepsError):
    """Raised when a bundle descriptor cannot be read or parsed."""
    pass


class ModuleValidationError(BundleDepsError):
    """Raised when the module dependency graph is not well-formed."""

    kind: FailureKind

    def __init__(self, message: str, *modules: str):
        super().__init__(message)
        self.message = message
        self.modules = modules

    def __str__(self) -> str:
        return self.message


class MissingRootModuleError(ModuleValidationError):
    """Raised when no module is flagged as the base module."""
    kind = FailureKind.MISSING_ROOT_MODULE


class OnDemandRootModuleError(ModuleValidationError):
    """Raised when the base module is declared on-demand."""
    kind = FailureKind.ON_DEMAND_ROOT_MODULE


class IdentifierMismatchError(ModuleValidationError):
    """Raised when a declared split ID does not match the module name."""
    kind = FailureKind.IDENTIFIER_MISMATCH


class DuplicateModuleEntryError(ModuleValidationError, ValueError):
    """Raised when the same module is passed in more than once.

    This is a caller contract violation rather than a property of the bundle,
    hence it is also a ``ValueError``.
    """
    kind = FailureKind.DUPLICATE_MODULE_ENTRY


class ExplicitRootDependencyError(ModuleValidationError):
    """Raised when a module declares the implicit base dependency."""
    kind = FailureKind.EXPLICIT_ROOT_DEPENDENCY


class SelfDependencyError(ModuleValidationError):
    """Raised when a module depends on itself."""
    kind = FailureKind.SELF_DEPENDENCY


class DuplicateDependencyDeclarationError(ModuleValidationError):
    """Raised when a module declares the same dependency more than once."""
    kind = FailureKind.DUPLICATE_DEPENDENCY_DECLARATION


class UnknownModuleReferenceError(ModuleValidationError):
    """Raised when a dependency refers to a module that does not exist."""
    kind = FailureKind.UNKNOWN_MODULE_REFERENCE


class CyclicDependencyError(ModuleValidationError):
    """Raised when the dependency graph contains a cycle."""
    kind = FailureKind.CYCLIC_DEPENDENCY

    def __init__(self, message: str, cycle: list[str]):
        super().__init__(message, *cycle)
        self.cycle = list(cycle)


class InvalidDeliveryOrderingError(ModuleValidationError):
    """Raised when an install-time module depends on an on-demand module."""
    kind = FailureKind.INVALID_DELIVERY_ORDERING
