"""Module dependency checks.

Each check raises the matching ModuleValidationError on the first violation
it finds and returns None otherwise.
"""

from collections.abc import Sequence

from ..exceptions import (
    DuplicateDependencyDeclarationError,
    IdentifierMismatchError,
    InvalidDeliveryOrderingError,
    MissingRootModuleError,
    OnDemandRootModuleError,
    SelfDependencyError,
    UnknownModuleReferenceError,
)
from ..graph.adjacency import DependencyMap
from ..models.module import BASE_MODULE_NAME, BundleModule


def check_has_base_module(
    modules: Sequence[BundleModule], base_module_name: str = BASE_MODULE_NAME
) -> None:
    """Check that there is a base module and that it is delivered at install time.

    The base module is never on-demand.
    """
    base_modules = [module for module in modules if module.is_base]
    if not base_modules:
        raise MissingRootModuleError(f"Mandatory '{base_module_name}' module is missing.")

    for module in base_modules:
        if module.on_demand:
            raise OnDemandRootModuleError(
                f"The base module '{module.name}' must be delivered at install time, "
                f"but it is declared on-demand.",
                module.name,
            )


def check_split_ids(modules: Sequence[BundleModule]) -> None:
    """Check declared split IDs against module names.

    The base split has an empty split ID, so the base module must not declare
    one. Any other module may either omit it or declare its own name.
    """
    for module in modules:
        split_id = module.split_id

        if module.is_base:
            if split_id is not None:
                raise IdentifierMismatchError(
                    f"The base module should not declare split ID in the manifest, "
                    f"but it is set to '{split_id}'.",
                    module.name,
                )
        elif split_id is not None and split_id != module.name:
            raise IdentifierMismatchError(
                f"Module '{module.name}' declares in its manifest that the split ID is "
                f"'{split_id}'. It needs to be either absent or equal to the module name.",
                module.name,
            )


def check_no_reflexive_dependencies(dependency_map: DependencyMap) -> None:
    """Check that a module doesn't depend on itself."""
    for module_name in dependency_map:
        # The base module is the only one with a self-loop in the map.
        if module_name == dependency_map.base_module_name:
            continue
        if dependency_map.contains_entry(module_name, module_name):
            raise SelfDependencyError(
                f"Module '{module_name}' depends on itself via <uses-split>.", module_name
            )


def check_modules_have_unique_dependencies(dependency_map: DependencyMap) -> None:
    """Check that a module doesn't declare dependency on another module more than once."""
    for module_name, module_deps in dependency_map.items():
        already_referenced: set[str] = set()
        for module_dep in module_deps:
            if module_dep in already_referenced:
                raise DuplicateDependencyDeclarationError(
                    f"Module '{module_name}' declares dependency on module '{module_dep}' "
                    f"multiple times.",
                    module_name,
                    module_dep,
                )
            already_referenced.add(module_dep)


def check_referenced_modules_exist(dependency_map: DependencyMap) -> None:
    for referenced_module in dependency_map.targets():
        if referenced_module not in dependency_map:
            raise UnknownModuleReferenceError(
                f"Module '{referenced_module}' is referenced by <uses-split> but does not exist.",
                referenced_module,
            )


def check_no_install_time_to_on_demand_dependencies(
    modules: Sequence[BundleModule], dependency_map: DependencyMap
) -> None:
    """Check that an install-time module does not depend on an on-demand module."""
    modules_by_name = {module.name: module for module in modules}

    for module_name, module_dep in dependency_map.entries():
        if modules_by_name[module_name].is_install_time and modules_by_name[module_dep].on_demand:
            raise InvalidDeliveryOrderingError(
                f"Install-time module '{module_name}' declares dependency on "
                f"on-demand module '{module_dep}'.",
                module_name,
                module_dep,
            )
