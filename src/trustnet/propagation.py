"""Spreading-activation trust propagation.

Trust is modelled as energy injected at the root. Every round, each node
holding energy keeps ``1 - decay_factor`` of it as rank and spreads the
remaining ``decay_factor`` share over its positive out-edges in
proportion to their weight. Because every round loses a constant share of
the energy in circulation, the loop terminates on any graph, cyclic or not.

With ``backward_edges`` enabled (the Appleseed trust metric's approach)
every non-root node also has a virtual edge of weight 1.0 back to the
root, so energy reaching a dead end is recycled through the root instead
of piling up at the dead end. Nodes with nowhere to spread fold the
spreadable share into their own rank, so no energy is lost.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from . import defaults
from .graph import TrustGraph

logger = logging.getLogger(__name__)


@dataclass
class PropagationResult:
    """Outcome of one propagation run.

    ``rankings`` covers every node of the graph except the root, which is
    the origin of trust rather than a target of it. ``root_rank`` holds
    what the root accumulated, for diagnostics.
    """

    root: str
    rankings: dict[str, float] = field(default_factory=dict)
    iterations: int = 0
    residual_energy: float = 0.0
    converged: bool = False
    root_rank: float = 0.0

    def nonzero(self) -> dict[str, float]:
        return {node: rank for node, rank in self.rankings.items() if rank > 0}

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "rankings": dict(self.rankings),
            "iterations": self.iterations,
            "residual_energy": self.residual_energy,
            "converged": self.converged,
            "root_rank": self.root_rank,
        }


def spread_targets(
    graph: TrustGraph,
    node: str,
    root: str,
    backward_edges: bool = defaults.DEFAULT_BACKWARD_EDGES,
) -> dict[str, float]:
    """Where a node's energy goes, as ``{target: weight}``.

    Zero-weight edges are ignored, so a node with only zero-weight edges
    behaves like a sink. The virtual backward edge replaces any explicit
    edge to the root.
    """
    targets = {e.dst: e.weight for e in graph.positive_out_edges(node)}
    if backward_edges and node != root:
        targets[root] = defaults.BACKWARD_EDGE_WEIGHT
    return targets


def propagate(
    graph: TrustGraph,
    root: str,
    decay_factor: float = defaults.DEFAULT_DECAY_FACTOR,
    max_iterations: int = defaults.DEFAULT_MAX_ITERATIONS,
    convergence_epsilon: float = defaults.DEFAULT_CONVERGENCE_EPSILON,
    backward_edges: bool = defaults.DEFAULT_BACKWARD_EDGES,
) -> PropagationResult:
    """Compute a trust ranking over ``graph`` as seen from ``root``.

    Args:
        graph: The trust graph
        root: Node the energy is injected at
        decay_factor: Share of a node's energy spread onwards each round,
            in the open interval (0, 1)
        max_iterations: Upper bound on the number of rounds
        convergence_epsilon: Stop once the energy in circulation sums to
            less than this
        backward_edges: Add a virtual weight 1.0 edge from every non-root
            node back to the root

    Returns:
        PropagationResult with the root excluded from ``rankings``
    """
    if not 0.0 < decay_factor < 1.0:
        raise ValueError(f"decay_factor must be strictly between 0.0 and 1.0, got {decay_factor}")

    rank: dict[str, float] = {node: 0.0 for node in graph}
    rank.setdefault(root, 0.0)
    energy: dict[str, float] = {root: defaults.INJECTED_ENERGY}
    retain = 1.0 - decay_factor
    iterations = 0

    while iterations < max_iterations:
        circulating = sum(energy.values())
        if circulating <= 0.0 or circulating < convergence_epsilon:
            break
        iterations += 1

        incoming: dict[str, float] = {}
        for node, amount in energy.items():
            if amount <= 0.0:
                continue
            rank[node] += amount * retain
            spreadable = amount * decay_factor

            targets = spread_targets(graph, node, root, backward_edges)
            if not targets:
                # Dead end: keep the energy as rank instead of losing it
                rank[node] += spreadable
                continue

            total = sum(targets.values())
            for target, weight in targets.items():
                incoming[target] = incoming.get(target, 0.0) + spreadable * (weight / total)

        energy = incoming

    residual = sum(energy.values())
    converged = residual < convergence_epsilon or residual <= 0.0
    if not converged:
        logger.warning(
            "Propagation from %s stopped at max_iterations=%d with %.6f energy left",
            root,
            max_iterations,
            residual,
        )
    logger.debug("Propagation from %s finished after %d rounds (residual %.6f)", root, iterations, residual)

    root_rank = rank.pop(root)
    return PropagationResult(
        root=root,
        rankings=rank,
        iterations=iterations,
        residual_energy=residual,
        converged=converged,
        root_rank=root_rank,
    )
