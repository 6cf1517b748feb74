"""Trust ranking engine.

``TrustNet`` holds one computed view of a trust graph from a single root:
the filtered graph, the ranking and whether the graph was first order.
``load`` builds that view from scratch and replaces any previous one;
the query methods read from it.

Usage:
    tnet = TrustNet(threshold=0.6)
    tnet.load("alice", [{"src": "alice", "dst": "bob", "weight": 0.8}])
    tnet.get_most_trusted()  # {"bob"}
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .config import DEFAULT_CONFIG, TrustNetConfig
from .exceptions import ValidationException
from .first_order import first_order_edges, first_order_rankings, is_first_order_graph
from .graph import TrustGraph
from .models import Edge, TrustAssignment, coerce_assignments, filter_distrusted
from .propagation import PropagationResult, propagate
from .selection import RankedTrust, select_most_trusted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrustState:
    """Everything one successful ``load`` produced."""

    root_id: str
    graph: TrustGraph
    rankings: Mapping[str, float]
    is_first_order: bool
    propagation: PropagationResult | None = None


class TrustNet:
    """Computes the most trusted peers of a root identity.

    Not safe for concurrent use: ``load`` replaces the whole state, so
    queries must not run while a load on the same instance is in flight.
    Separate instances share nothing.
    """

    def __init__(self, config: TrustNetConfig | None = None, **overrides: Any) -> None:
        if config is None:
            config = TrustNetConfig.from_dict(overrides) if overrides else DEFAULT_CONFIG
        elif overrides:
            config = config.replace(**overrides)
        self.config = config
        self._state: TrustState | None = None

    def __repr__(self) -> str:
        if self._state is None:
            return "TrustNet(unloaded)"
        return f"TrustNet(root={self._state.root_id!r}, first_order={self._state.is_first_order})"

    # -------------------------------------------------------------------------
    # LOADING
    # -------------------------------------------------------------------------

    def load(
        self,
        root_id: Any,
        assignments: Iterable[TrustAssignment | Mapping[str, Any]],
        distrusted: Iterable[Any] = (),
    ) -> TrustState:
        """Compute the trust view of ``root_id``.

        Assignments touching a distrusted id are dropped before the graph is
        built. First-order graphs are ranked by their direct weights; all
        others go through propagation.

        Args:
            root_id: The identity trust is computed from (coerced to str)
            assignments: TrustAssignment instances or src/dst/weight mappings
            distrusted: Identities to exclude from the graph

        Returns:
            The newly installed TrustState

        Raises:
            ValidationException: If root_id is missing or an assignment is
                malformed. The previously loaded state is kept in that case.
        """
        if root_id is None or root_id == "":
            raise ValidationException("root_id is required", field="root_id")
        root = str(root_id)
        if isinstance(distrusted, str):
            distrusted = [distrusted]
        distrusted = list(distrusted)

        trust_assignments = filter_distrusted(coerce_assignments(assignments), distrusted)
        logger.debug("Loading %d assignments for %s (distrusted: %s)", len(trust_assignments), root, distrusted)

        graph = TrustGraph(trust_assignments)
        first_order = is_first_order_graph(graph, root)
        propagation = None
        if first_order:
            logger.debug("Only first order graph, skipping propagation")
            rankings = first_order_rankings(graph, root)
        else:
            propagation = propagate(
                graph,
                root,
                decay_factor=self.config.decay_factor,
                max_iterations=self.config.max_iterations,
                convergence_epsilon=self.config.convergence_epsilon,
                backward_edges=self.config.backward_edges,
            )
            rankings = propagation.rankings

        self._state = TrustState(
            root_id=root,
            graph=graph,
            rankings=MappingProxyType(dict(rankings)),
            is_first_order=first_order,
            propagation=propagation,
        )
        logger.info(
            "Loaded trust view for %s: %d nodes, %d edges, first_order=%s",
            root,
            len(graph),
            graph.edge_count,
            first_order,
        )
        return self._state

    async def aload(
        self,
        root_id: Any,
        assignments: Iterable[TrustAssignment | Mapping[str, Any]],
        distrusted: Iterable[Any] = (),
    ) -> TrustState:
        """Awaitable ``load``. The computation itself never suspends."""
        return self.load(root_id, assignments, distrusted)

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def state(self) -> TrustState | None:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return self._state is not None

    @property
    def root_id(self) -> str | None:
        return self._state.root_id if self._state else None

    @property
    def is_first_order(self) -> bool | None:
        return self._state.is_first_order if self._state else None

    @property
    def graph(self) -> TrustGraph | None:
        return self._state.graph if self._state else None

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def first_order_edges(self) -> list[Edge]:
        """The root's positive direct edges in the filtered graph."""
        if self._state is None:
            return []
        return first_order_edges(self._state.graph, self._state.root_id)

    def most_trusted_rankings(self) -> RankedTrust:
        """Most trusted ids with their scores (None when never ranked)."""
        if self._state is None:
            return {}
        logger.debug("Most trusted for %s", self._state.root_id)
        return select_most_trusted(
            self._state.graph,
            self._state.root_id,
            self._state.rankings,
            self._state.is_first_order,
            threshold=self.config.threshold,
            cluster_count=self.config.cluster_count,
            tolerance=self.config.rank_tolerance,
        )

    def get_most_trusted(self) -> set[str]:
        return set(self.most_trusted_rankings())

    def get_rankings(self) -> dict[str, float]:
        """Every ranked id with a score above zero."""
        if self._state is None:
            return {}
        root = self._state.root_id
        return {node: rank for node, rank in self._state.rankings.items() if rank > 0 and node != root}

    def get_all_trusted(self) -> list[str]:
        """Ids with any trust at all, followed by the root itself."""
        if self._state is None:
            return []
        return [*self.get_rankings(), self._state.root_id]
