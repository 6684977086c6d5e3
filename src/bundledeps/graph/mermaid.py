"""Mermaid diagram renderer for module dependency maps."""

import logging
import re
from collections.abc import Sequence

from ..models.module import BundleModule
from .adjacency import DependencyMap

logger = logging.getLogger(__name__)


class MermaidRenderer:
    """Render a dependency map as a Mermaid flowchart.

    The base module is drawn as a hexagon and on-demand modules as stadiums.
    Declared dependencies are solid arrows, implicit base dependencies dotted.
    """

    def render(
        self,
        dependency_map: DependencyMap,
        modules: Sequence[BundleModule],
        title: str | None = None,
    ) -> str:
        """Render the dependency map as a Mermaid flowchart."""
        modules_by_name = {module.name: module for module in modules}
        node_ids = self._assign_node_ids(dependency_map)
        base = dependency_map.base_module_name
        lines = []

        lines.append("flowchart TD")
        if title:
            lines.append(f"    %% {title}")
        lines.append("")

        lines.append("    %% Modules")
        for module_name in dependency_map:
            node = self._render_node(node_ids[module_name], module_name,
                                     modules_by_name.get(module_name), base)
            lines.append(f"    {node}")
        lines.append("")

        edge_lines = []
        for module_name, dep in dependency_map.entries():
            if module_name == dep:
                continue
            arrow = "-.->" if dep == base else "-->"
            edge_lines.append(f"    {node_ids[module_name]} {arrow} {node_ids[dep]}")

        if edge_lines:
            lines.append("    %% Dependencies")
            lines.extend(edge_lines)
            lines.append("")

        lines.extend(self._render_styling(dependency_map, modules_by_name, node_ids))

        logger.debug(f"Rendered {len(edge_lines)} edges as Mermaid")
        return "\n".join(lines).rstrip() + "\n"

    def _assign_node_ids(self, dependency_map: DependencyMap) -> dict[str, str]:
        """Map every module name, dangling references included, to a distinct node ID.

        Names that sanitize to the same ID get a numeric suffix in map order.
        """
        node_ids: dict[str, str] = {}
        taken: set[str] = set()

        for module_name in [*dependency_map, *dependency_map.targets()]:
            if module_name in node_ids:
                continue
            node_id = self._safe_id(module_name)
            suffix = 2
            while node_id in taken:
                node_id = f"{self._safe_id(module_name)}_{suffix}"
                suffix += 1
            node_ids[module_name] = node_id
            taken.add(node_id)

        return node_ids

    def _render_node(self, node_id: str, module_name: str,
                     module: BundleModule | None, base: str) -> str:
        label = self._escape_label(module_name)

        if module_name == base:
            return f'{node_id}{{{{"{label}"}}}}'
        if module is not None and module.on_demand:
            return f'{node_id}(["{label}"])'
        return f'{node_id}["{label}"]'

    def _render_styling(
        self,
        dependency_map: DependencyMap,
        modules_by_name: dict[str, BundleModule],
        node_ids: dict[str, str],
    ) -> list[str]:
        on_demand = [
            node_ids[name]
            for name in dependency_map
            if name in modules_by_name and modules_by_name[name].on_demand
        ]
        if not on_demand:
            return []
        return [
            "    classDef onDemand stroke-dasharray: 5 5",
            f"    class {','.join(on_demand)} onDemand",
        ]

    @staticmethod
    def _safe_id(module_name: str) -> str:
        """ID safe for diagram rendering (alphanumeric + underscore)."""
        return "m_" + re.sub(r"[^a-zA-Z0-9_]", "_", module_name)

    @staticmethod
    def _escape_label(label: str) -> str:
        return label.replace('"', "#quot;")
