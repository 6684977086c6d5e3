"""Module dependency graph: construction, cycle detection and rendering."""

from .adjacency import DependencyMap, build_dependency_map, find_base_module_name
from .cycles import check_no_cycles
from .mermaid import MermaidRenderer

__all__ = [
    "DependencyMap",
    "build_dependency_map",
    "find_base_module_name",
    "check_no_cycles",
    "MermaidRenderer",
]
