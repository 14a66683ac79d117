"""TypeGraph: lazy-built NetworkX graph of resolved type references.

Nodes are full-type strings with a ``kind`` attribute (``message`` or
``enum``). An edge ``A -> B`` means a field of message A refers to B; the
edge carries the referring field names. References that do not resolve
are left out. Built on first access, never cached across daemons.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx

from protodocs.domain.types import EntityKind

if TYPE_CHECKING:
    from protodocs.registry.daemon import Daemon

type _Graph = nx.DiGraph


class TypeGraph:
    """Lazy-loading reference graph over a daemon's messages and enums."""

    def __init__(self, daemon: Daemon) -> None:
        self._daemon = daemon
        self._graph: _Graph | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, building it on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def invalidate(self) -> None:
        self._graph = None

    def _build(self) -> _Graph:
        """Add every message and enum as a node, then one edge per resolved reference.

        Nodes go in first so unreferenced types are still visible to the
        algorithms.
        """
        g: _Graph = nx.DiGraph()
        for pkg in self._daemon.packages.values():
            for long_name in pkg.messages:
                g.add_node(f"{pkg.name}.{long_name}", kind=EntityKind.MESSAGE, package=pkg.name)
            for long_name in pkg.enums:
                g.add_node(f"{pkg.name}.{long_name}", kind=EntityKind.ENUM, package=pkg.name)

        for pkg in self._daemon.packages.values():
            for long_name, msg in pkg.messages.items():
                source = f"{pkg.name}.{long_name}"
                for f in msg.fields:
                    if not f.is_reference or not self._resolves(f.full_type):
                        continue
                    if g.has_edge(source, f.full_type):
                        g.edges[source, f.full_type]["fields"].append(f.name)
                    else:
                        g.add_edge(source, f.full_type, fields=[f.name])
        return g

    def _resolves(self, full_type: str) -> bool:
        return self._daemon.lookup_enum(full_type).ok or self._daemon.lookup_message(full_type).ok
