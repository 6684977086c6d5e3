"""Module dependency map construction."""

import logging
from collections.abc import Iterator, Mapping, Sequence

from ..exceptions import DuplicateModuleEntryError, ExplicitRootDependencyError
from ..models.module import BundleModule

logger = logging.getLogger(__name__)


class DependencyMap(Mapping[str, tuple[str, ...]]):
    """Read-only ordered multimap from module name to its dependencies.

    Keys keep module order and each value keeps declaration order, so that
    diagnostics are reproducible. The same dependency may appear more than
    once for a module; detecting that is left to the checks.
    """

    def __init__(self, base_module_name: str, dependencies: Mapping[str, Sequence[str]]):
        self.base_module_name = base_module_name
        self._dependencies: dict[str, tuple[str, ...]] = {
            name: tuple(deps) for name, deps in dependencies.items()
        }

    def __getitem__(self, module_name: str) -> tuple[str, ...]:
        return self._dependencies[module_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._dependencies)

    def __len__(self) -> int:
        return len(self._dependencies)

    def __repr__(self) -> str:
        return f"DependencyMap({self._dependencies!r})"

    def get(self, module_name: str, default: tuple[str, ...] = ()) -> tuple[str, ...]:
        return self._dependencies.get(module_name, default)

    def contains_entry(self, module_name: str, dependency: str) -> bool:
        """Check if ``module_name`` has an edge to ``dependency``."""
        return dependency in self._dependencies.get(module_name, ())

    def entries(self) -> Iterator[tuple[str, str]]:
        """Iterate all (module, dependency) edges in order."""
        for module_name, deps in self._dependencies.items():
            for dep in deps:
                yield module_name, dep

    def targets(self) -> Iterator[str]:
        """Iterate the dependency side of every edge."""
        for _, dep in self.entries():
            yield dep

    @property
    def edge_count(self) -> int:
        return sum(len(deps) for deps in self._dependencies.values())


def find_base_module_name(modules: Sequence[BundleModule]) -> str | None:
    """Return the name of the first module flagged as base, if any."""
    for module in modules:
        if module.is_base:
            return module.name
    return None


def build_dependency_map(modules: Sequence[BundleModule]) -> DependencyMap:
    """Build the map of module dependencies.

    If module "a" declares a dependency on "b", the map contains the entry
    ("a", "b"). Every module implicitly depends on the base module, so the map
    also contains ("a", "base") for every module, including ("base", "base").

    Args:
        modules: Modules of the bundle, base module included

    Returns:
        DependencyMap: Frozen dependency map with a key for every module

    Raises:
        DuplicateModuleEntryError: If a module is passed in more than once
        ExplicitRootDependencyError: If a module declares the base dependency
        ValueError: If there is no base module
    """
    base_module_name = find_base_module_name(modules)
    if base_module_name is None:
        raise ValueError("Cannot build a dependency map without a base module.")

    dependencies: dict[str, list[str]] = {}

    for module in modules:
        if module.name in dependencies:
            raise DuplicateModuleEntryError(
                f"Module named '{module.name}' was passed in multiple times.", module.name
            )

        module_deps = list(module.uses_splits)
        if base_module_name in module_deps:
            raise ExplicitRootDependencyError(
                f"Module '{module.name}' declares dependency on the '{base_module_name}' "
                f"module, which is implicit.",
                module.name,
            )

        # Also guarantees every module has a key in the map.
        module_deps.append(base_module_name)
        dependencies[module.name] = module_deps

    dependency_map = DependencyMap(base_module_name, dependencies)
    logger.debug(
        f"Built dependency map with {len(dependency_map)} modules "
        f"and {dependency_map.edge_count} edges"
    )
    return dependency_map
