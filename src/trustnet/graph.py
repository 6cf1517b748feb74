"""Directed weighted trust graph.

Built once from a flat assignment list and read-only afterwards. Repeated
(src, dst) pairs resolve last-write-wins: the latest assignment's weight
replaces the earlier one.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import Edge, TrustAssignment


class TrustGraph:
    """Adjacency view over a list of trust assignments."""

    __slots__ = ("_adjacency",)

    def __init__(self, assignments: Iterable[TrustAssignment] = ()):
        adjacency: dict[str, dict[str, float]] = {}
        for a in assignments:
            adjacency.setdefault(a.src, {})[a.dst] = float(a.weight)
            # Register sinks so that nodes() covers every identity
            adjacency.setdefault(a.dst, {})
        self._adjacency = adjacency

    @classmethod
    def build(cls, assignments: Iterable[TrustAssignment]) -> TrustGraph:
        return cls(assignments)

    def out_edges(self, node_id: str) -> list[Edge]:
        """Outgoing edges of a node; empty for unknown nodes and sinks."""
        targets = self._adjacency.get(node_id)
        if not targets:
            return []
        return [Edge(dst=dst, weight=weight) for dst, weight in targets.items()]

    def positive_out_edges(self, node_id: str) -> list[Edge]:
        return [e for e in self.out_edges(node_id) if e.weight > 0]

    def weight(self, src: str, dst: str) -> float | None:
        """Weight of the src -> dst edge, or None if there is no such edge."""
        return self._adjacency.get(src, {}).get(dst)

    def nodes(self) -> list[str]:
        return list(self._adjacency)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._adjacency

    def __iter__(self) -> Iterator[str]:
        return iter(self._adjacency)

    def __len__(self) -> int:
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self._adjacency.values())

    def __repr__(self) -> str:
        return f"TrustGraph(nodes={len(self)}, edges={self.edge_count})"
