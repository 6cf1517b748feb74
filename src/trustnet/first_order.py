"""First-order graph detection.

A trust graph is first order when the root's direct trustees have no
further influence: none of them vouches for anyone except, possibly, the
root itself. Transitive propagation adds nothing in that case and the
direct weights can be used as the ranking.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .graph import TrustGraph
from .models import Edge, TrustAssignment

logger = logging.getLogger(__name__)


def first_order_edges(graph: TrustGraph, root: str) -> list[Edge]:
    """The root's direct edges with a positive weight."""
    return graph.positive_out_edges(root)


def is_first_order_graph(graph: TrustGraph, root: str) -> bool:
    """Return True if no direct trustee of root trusts anyone but root."""
    trustees = [e.dst for e in first_order_edges(graph, root)]
    logger.debug("isFirstOrder: root %s trusts %s", root, trustees)
    for node in trustees:
        for edge in graph.out_edges(node):
            if edge.weight > 0 and edge.dst != root:
                logger.debug("isFirstOrder: %s -> %s makes the graph transitive", node, edge.dst)
                return False
    return True


def is_first_order(root: str, assignments: Iterable[TrustAssignment]) -> bool:
    """Build a graph from assignments and classify it from root's view."""
    return is_first_order_graph(TrustGraph(assignments), str(root))


def edges_to_rankings(edges: Iterable[Edge]) -> dict[str, float]:
    return {e.dst: e.weight for e in edges}


def first_order_rankings(graph: TrustGraph, root: str) -> dict[str, float]:
    """Rank root's direct trustees by their direct weight.

    The root itself is left out even if it vouches for itself.
    """
    return {dst: w for dst, w in edges_to_rankings(first_order_edges(graph, root)).items() if dst != root}
