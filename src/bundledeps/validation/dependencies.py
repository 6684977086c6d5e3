"""Entry point for validating dependencies between bundle modules.

The dependency graph is inferred from module names and the dependencies each
module declares in its manifest. Every module implicitly depends on the base
module.
"""

import logging
from collections.abc import Iterable

from ..models.module import BASE_MODULE_NAME, BundleModule
from .framework import ValidationContext, ValidationRule
from .rules import default_rules

logger = logging.getLogger(__name__)


class ModuleDependencyValidator:
    """Validates dependencies between bundle modules, raising on the first failure."""

    def __init__(self, base_module_name: str = BASE_MODULE_NAME,
                 rules: list[ValidationRule] | None = None):
        self.base_module_name = base_module_name
        self.rules = rules if rules is not None else default_rules()

    def validate_all_modules(self, modules: Iterable[BundleModule]) -> None:
        """Validate the bundle's module dependency graph.

        Raises:
            ModuleValidationError: The first violation found
        """
        context = ValidationContext(tuple(modules), self.base_module_name)
        for rule in self.rules:
            logger.debug(f"Executing rule: {rule.name}")
            rule.check(context)


def validate_modules(modules: Iterable[BundleModule],
                     base_module_name: str = BASE_MODULE_NAME) -> None:
    """Validate the module dependency graph of a bundle.

    Args:
        modules: All modules of the bundle, base module included
        base_module_name: Name used to report a missing base module

    Raises:
        ModuleValidationError: The first violation found, of the subclass
            matching its FailureKind
    """
    ModuleDependencyValidator(base_module_name).validate_all_modules(modules)
