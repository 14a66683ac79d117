"""TypeGraphService: dependency queries over the type reference graph.

Uses :class:`TypeGraph` (lazy NetworkX DiGraph) for reverse lookups and
cycle reporting. Closure semantics for rendering stay in the registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import networkx as nx

from protodocs.domain.text import locale_key
from protodocs.infrastructure.graph import TypeGraph
from protodocs.services.base import BaseService
from protodocs.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from protodocs.registry.daemon import Daemon


class TypeGraphService(BaseService):
    """Handles type graph queries."""

    def __init__(self, daemon: Daemon, graph: TypeGraph | None = None) -> None:
        super().__init__(daemon)
        self._graph = graph or TypeGraph(daemon)

    def _node_items(self, node_ids: set[str]) -> list[dict[str, Any]]:
        g = self._graph.graph
        items: list[dict[str, Any]] = []
        for node_id in sorted(node_ids, key=locale_key):
            attrs = g.nodes[node_id]
            items.append(
                {
                    "full_type": node_id,
                    "kind": str(attrs.get("kind", "")),
                    "package": attrs.get("package", ""),
                }
            )
        return items

    def _missing(self, op: str, full_type: str) -> ServiceResult:
        return self._error(
            op, ErrorCode.NOT_FOUND, f"Type '{full_type}' not found in graph", full_type=full_type
        )

    def dependencies(self, full_type: str) -> ServiceResult:
        """Every type reachable from *full_type* through field references."""
        g = self._graph.graph
        if full_type not in g:
            return self._missing("dependencies", full_type)
        items = self._node_items(nx.descendants(g, full_type))
        return self._listing("dependencies", items, source=full_type)

    def dependents(self, full_type: str) -> ServiceResult:
        """Every message that reaches *full_type* through field references."""
        g = self._graph.graph
        if full_type not in g:
            return self._missing("dependents", full_type)
        items = self._node_items(nx.ancestors(g, full_type))
        return self._listing("dependents", items, target=full_type)

    def cycles(self) -> ServiceResult:
        """Report reference cycles (including self-references)."""
        g = self._graph.graph
        found = [sorted(c, key=locale_key) for c in nx.simple_cycles(g)]
        found.sort(key=lambda c: [locale_key(n) for n in c])
        return self._ok("cycles", {"count": len(found), "cycles": found})
