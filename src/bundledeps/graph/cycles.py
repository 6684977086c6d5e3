"""Cycle detection over the module dependency map."""

import logging
from collections.abc import Iterator

from ..exceptions import CyclicDependencyError
from .adjacency import DependencyMap

logger = logging.getLogger(__name__)


def check_no_cycles(dependency_map: DependencyMap) -> None:
    """Validate that the module dependency graph contains no cycles.

    Uses two sets of nodes for better time complexity:

    - "safe" holds modules already known not to take part in any dependency
      cycle. Such nodes are never examined again.
    - "visited" holds modules reached from a single start module. When that
      traversal does not raise, the visited nodes are added to "safe".

    The base module's implicit self-dependency is not a cycle.

    Raises:
        CyclicDependencyError: With the dependency path that led back to a
            module already on it
    """
    safe: set[str] = set()

    for module_name in dependency_map:
        if module_name in safe:
            continue

        visited: set[str] = set()
        _check_no_cycles_from(module_name, dependency_map, visited, safe)
        safe |= visited

    logger.debug(f"No dependency cycles among {len(safe)} modules")


def _check_no_cycles_from(
    start: str,
    dependency_map: DependencyMap,
    visited: set[str],
    safe: set[str],
) -> None:
    """Depth-first traversal from ``start`` using an explicit stack of frames.

    Each frame is the module on the current path plus an iterator over its
    dependencies still to be followed. ``processing`` is the current path;
    a dict keeps it ordered for the error message.
    """
    processing: dict[str, None] = {start: None}
    visited.add(start)
    stack: list[tuple[str, Iterator[str]]] = [(start, iter(dependency_map.get(start)))]

    while stack:
        module_name, remaining = stack[-1]

        for referenced_module in remaining:
            # Skip reflexive dependency (base, base).
            if referenced_module == module_name or referenced_module in safe:
                continue
            if referenced_module in processing:
                path = list(processing)
                raise CyclicDependencyError(
                    f"Found cyclic dependency between modules: [{', '.join(path)}]", path
                )
            # Fully explored earlier in this traversal without finding a cycle.
            if referenced_module in visited:
                continue

            visited.add(referenced_module)
            processing[referenced_module] = None
            stack.append((referenced_module, iter(dependency_map.get(referenced_module))))
            break
        else:
            stack.pop()
            del processing[module_name]
